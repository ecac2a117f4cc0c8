# hangman_plus/services/game_service.py
"""
Lifecycle of active play-throughs.

A session owns a fixed deck and a cursor into it. Sessions are keyed by an
opaque id handed back to the caller, which passes it into every later call.
All mutations of one session run under that session's lock; different
sessions never wait on each other beyond the registry lookup.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Protocol, Sequence, Tuple
import threading
import uuid

from hangman_plus.core.locale_manager import T
from hangman_plus.core.log_manager import logger
from hangman_plus.errors import EmptyDeckError, UnknownSessionError
from hangman_plus.models import Category
from hangman_plus.schemas import CardDTO


class DeckSource(Protocol):
    def fetch_deck(self, category) -> Sequence[CardDTO]:
        ...


class SessionStatus(str, Enum):
    ACTIVE = "ACTIVE"
    FINISHED_DECK = "FINISHED_DECK"
    ENDED = "ENDED"


@dataclass
class GameSession:
    session_id: str
    category: Category
    deck: Tuple[CardDTO, ...]
    cursor: int = 0
    status: SessionStatus = SessionStatus.ACTIVE
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def current_card(self) -> CardDTO:
        return self.deck[self.cursor]

    def check_invariants(self):
        assert 0 <= self.cursor < len(self.deck), f"cursor {self.cursor} outside deck of {len(self.deck)}"


@dataclass(frozen=True)
class SessionHandle:
    session_id: str
    total: int
    card: CardDTO
    message: str = ""


@dataclass(frozen=True)
class AdvanceResult:
    card: Optional[CardDTO]
    finished: bool
    remaining: int
    message: str = ""


class GameSessionEngine:

    def __init__(self):
        self._sessions: Dict[str, GameSession] = {}
        self._registry_lock = threading.Lock()

    # --- SESSION LIFECYCLE ---

    def create_session(self, category, deck_source: DeckSource) -> SessionHandle:
        """
        Deals a deck for the category and registers a new session over it.
        Raises EmptyDeckError when the category has no playable cards.
        """
        category = Category.parse(category)

        # 1. Fetch outside any lock; the repository round trip may be slow
        deck = tuple(deck_source.fetch_deck(category))
        if not deck:
            logger.warning(f"Refusing to start a session: no cards for {category.value}")
            raise EmptyDeckError(T("no_cards_for_category"))

        # 2. Register under a fresh id
        session = GameSession(session_id=uuid.uuid4().hex, category=category, deck=deck)
        with self._registry_lock:
            assert session.session_id not in self._sessions
            self._sessions[session.session_id] = session

        logger.info(f"Started session {session.session_id} with {len(deck)} cards for {category.value}")
        return SessionHandle(
            session_id=session.session_id,
            total=len(deck),
            card=deck[0],
            message=T("game_started"),
        )

    def advance(self, session_id: str) -> AdvanceResult:
        """
        Moves to the next card, or reports the end of the deck.

        The cursor never goes past the last card; once the deck is exhausted
        further calls keep reporting finished until a restart.
        """
        session = self._lookup(session_id)
        with session.lock:
            self._ensure_live(session)

            if session.cursor + 1 < len(session.deck):
                session.cursor += 1
                session.status = SessionStatus.ACTIVE
                session.check_invariants()
                remaining = len(session.deck) - session.cursor - 1
                return AdvanceResult(
                    card=session.current_card,
                    finished=False,
                    remaining=remaining,
                    message=T("new_card"),
                )

            session.status = SessionStatus.FINISHED_DECK
            session.check_invariants()
            logger.info(f"Session {session_id} reached the end of its deck")
            return AdvanceResult(card=None, finished=True, remaining=0, message=T("end_of_deck"))

    def restart(self, session_id: str) -> AdvanceResult:
        """Back to the first card of the same deck, in the same order."""
        session = self._lookup(session_id)
        with session.lock:
            self._ensure_live(session)

            session.cursor = 0
            session.status = SessionStatus.ACTIVE
            session.check_invariants()

            logger.info(f"Session {session_id} restarted its deck")
            return AdvanceResult(
                card=session.current_card,
                finished=False,
                remaining=len(session.deck) - 1,
                message=T("deck_restarted"),
            )

    def end(self, session_id: str) -> None:
        """Disposes the session. Ending an unknown or already ended id does nothing."""
        with self._registry_lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return

        with session.lock:
            session.status = SessionStatus.ENDED
        logger.info(f"Session {session_id} ended")

    # --- LOOKUPS ---

    def get(self, session_id: str) -> GameSession:
        return self._lookup(session_id)

    def active_count(self) -> int:
        with self._registry_lock:
            return len(self._sessions)

    def _lookup(self, session_id: str) -> GameSession:
        with self._registry_lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise UnknownSessionError(T("unknown_session"))
        return session

    @staticmethod
    def _ensure_live(session: GameSession):
        # end() may have won the race between lookup and lock
        if session.status == SessionStatus.ENDED:
            raise UnknownSessionError(T("unknown_session"))
