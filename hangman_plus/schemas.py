# hangman_plus/schemas.py
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, Generic, List, Optional, TypeVar

from hangman_plus.config import EASY_MAX_WRONG, HARD_MAX_WRONG
from hangman_plus.models import Category, Difficulty, Language

T = TypeVar("T")


# --- CARDS ---

class CardDTO(BaseModel):
    """Read-only snapshot of one approved card, as dealt into a deck."""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    category: Category
    english: str
    latin: str
    image_path: str = ""

    def answer_for(self, language: Language) -> str:
        return self.english if language == Language.EN else self.latin


# --- BOUNDARY PAYLOADS ---

class CommandResult(BaseModel, Generic[T]):
    """
    Envelope returned by every boundary command.
    Failures are carried in error_code/message instead of being raised.
    """
    ok: bool = True
    data: Optional[T] = None
    error_code: Optional[str] = None
    message: str = ""


class StartGameResponse(BaseModel):
    session_id: str
    total: int
    card: Optional[CardDTO] = None
    finished: bool = False
    message: str = ""


class NextCardResponse(BaseModel):
    card: Optional[CardDTO] = None
    finished: bool = False
    remaining: int = 0
    message: str = ""


class LogAttemptRequest(BaseModel):
    """
    One finished card, as forwarded to the attempt log.
    Dumps with camelCase aliases for view layers that expect them.
    """
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")
    card_id: int = Field(alias="cardId")
    is_won: bool = Field(alias="isWon")

    category: Optional[str] = None      # "BONES" | "ORGANS"
    language: Optional[str] = None      # "EN" | "LAT"
    difficulty: Optional[str] = None    # "EASY" | "HARD"

    wrong_count: Optional[int] = Field(default=None, alias="wrongCount")
    max_wrong: Optional[int] = Field(default=None, alias="maxWrong")


# --- CLIENT SETTINGS ---

DEFAULT_MAX_WRONG = {
    Difficulty.EASY: EASY_MAX_WRONG,
    Difficulty.HARD: HARD_MAX_WRONG,
}


class GameSettings(BaseModel):
    """What the player picked on the home menu."""
    user_id: int
    category: Category = Category.BONES
    language: Language = Language.EN
    difficulty: Difficulty = Difficulty.EASY
    max_wrong: Optional[int] = None

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, v: Any):
        return Category.parse(v)

    @model_validator(mode="after")
    def fill_max_wrong(self):
        if self.max_wrong is None:
            self.max_wrong = DEFAULT_MAX_WRONG[self.difficulty]
        if self.max_wrong <= 0:
            raise ValueError("max_wrong must be positive.")
        return self


# --- CARD PACK IMPORT ---

class CardImportDTO(BaseModel):
    category: Category
    english: str
    latin: str
    image_path: Optional[str] = ""

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, v: Any):
        return Category.parse(v)

    @field_validator("english", "latin")
    @classmethod
    def not_blank(cls, v: str):
        if not v or not v.strip():
            raise ValueError("Card terms cannot be blank.")
        return v.strip()


class CardPackImportDTO(BaseModel):
    title: str
    description: Optional[str] = ""
    cards: List[CardImportDTO]

    @field_validator('cards')
    def validate_card_count(cls, v):
        if not v:
            raise ValueError("Card pack must contain at least one card.")
        if len(v) > 500:
            raise ValueError("Max 500 cards per import allowed.")
        return v
