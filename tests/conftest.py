from typing import List

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from hangman_plus.commands import GameCommands
from hangman_plus.database import init_db
from hangman_plus.errors import LogWriteError
from hangman_plus.models import Category
from hangman_plus.schemas import CardDTO
from hangman_plus.services.attempt_service import AttemptLog
from hangman_plus.services.card_service import CardRepository
from hangman_plus.services.game_service import GameSessionEngine


def make_card(card_id: int, english: str, latin: str, category: Category = Category.BONES) -> CardDTO:
    return CardDTO(id=card_id, category=category, english=english, latin=latin, image_path=f"images/{card_id}.png")


FEMUR = make_card(1, "Femur", "Femur")
SKULL = make_card(2, "Skull", "Cranium")


class FakeDeckSource:
    """Serves fixed decks per category, in the given order."""

    def __init__(self, decks=None):
        self.decks = decks if decks is not None else {Category.BONES: [FEMUR, SKULL]}
        self.calls = 0

    def fetch_deck(self, category) -> List[CardDTO]:
        self.calls += 1
        return list(self.decks.get(Category.parse(category), []))


class RecordingAttemptLog:
    """Stands in for AttemptLog; remembers every record call."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.records = []

    def record(self, **kwargs):
        if self.fail:
            raise LogWriteError("database is locked")
        self.records.append(kwargs)
        return kwargs


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def card_repo(db_engine):
    return CardRepository(db_engine, shuffle=False)


@pytest.fixture
def attempt_log(db_engine):
    return AttemptLog(db_engine)


@pytest.fixture
def deck_source():
    return FakeDeckSource()


@pytest.fixture
def session_engine():
    return GameSessionEngine()


@pytest.fixture
def recording_log():
    return RecordingAttemptLog()


@pytest.fixture
def commands(deck_source, recording_log, session_engine):
    return GameCommands(cards=deck_source, attempts=recording_log, engine=session_engine)
