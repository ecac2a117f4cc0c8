# hangman_plus/models.py
from typing import Optional
from datetime import datetime, timezone
from enum import Enum
from sqlmodel import SQLModel, Field

from hangman_plus.errors import UnknownCategoryError


class Category(str, Enum):
    """
    Closed set of card categories.
    Anything else is rejected at the repository boundary.
    """
    ORGANS = "ORGANS"
    BONES = "BONES"

    @classmethod
    def parse(cls, value) -> "Category":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise UnknownCategoryError(f"Unknown category: {value!r}")


class Language(str, Enum):
    """Which side of the card is the answer."""
    EN = "EN"
    LAT = "LAT"


class Difficulty(str, Enum):
    EASY = "EASY"
    HARD = "HARD"


class CardStatus(str, Enum):
    APPROVED = "APPROVED"
    PENDING = "PENDING"
    REJECTED = "REJECTED"


# --- 1. STATIC CONTENT (The Card Table) ---

class CardRecord(SQLModel, table=True):
    __tablename__ = "cards"

    id: Optional[int] = Field(default=None, primary_key=True)
    category: Category = Field(index=True)

    english: str
    latin: str
    image_path: str = Field(default="")

    # Only APPROVED cards are dealt into decks
    status: CardStatus = Field(default=CardStatus.APPROVED, index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# --- 2. ATTEMPT LOG (One row per finished card) ---

class AttemptRecord(SQLModel, table=True):
    __tablename__ = "card_attempts"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    card_id: int = Field(index=True)

    is_won: bool

    category: Optional[str] = None
    language: Optional[str] = None
    difficulty: Optional[str] = None
    wrong_count: Optional[int] = None
    max_wrong: Optional[int] = None

    played_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
