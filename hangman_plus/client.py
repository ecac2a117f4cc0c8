# hangman_plus/client.py
"""
View-facing half of the game.

SessionClient keeps what a game screen needs between keystrokes: the session
id handed out by start_game, the current card and its CardAttempt, and the
marker of the attempt already sent to the attempt log. Views call its five
actions and read its attributes; they never talk to the commands directly.
"""
from dataclasses import dataclass
from typing import List, Optional

from hangman_plus.commands import GameCommands
from hangman_plus.core.locale_manager import T
from hangman_plus.core.log_manager import logger
from hangman_plus.errors import UnknownCategoryError
from hangman_plus.models import Category
from hangman_plus.schemas import CardDTO, GameSettings, LogAttemptRequest
from hangman_plus.services.guess_service import CardAttempt, Outcome, new_attempt, submit_letter


@dataclass(frozen=True)
class LoggedAttemptMarker:
    """The (card instance, outcome) pair already forwarded to the attempt log."""
    session_id: str
    card_id: int
    outcome: Outcome


class SessionClient:

    def __init__(self, settings: GameSettings, commands: GameCommands):
        self.settings = settings
        self.commands = commands

        self.session_id: Optional[str] = None
        self.card: Optional[CardDTO] = None
        self.attempt: Optional[CardAttempt] = None
        self.logged_marker: Optional[LoggedAttemptMarker] = None

        self.total: int = 0
        self.remaining: int = 0

        self.end_of_deck_open: bool = False
        self.end_of_deck_text: str = ""
        self.message: str = ""
        self.warnings: List[str] = []

    # --- DERIVED STATE ---

    @property
    def answer(self) -> str:
        if not self.card:
            return ""
        return self.card.answer_for(self.settings.language)

    @property
    def outcome(self) -> Optional[Outcome]:
        return self.attempt.outcome if self.attempt else None

    @property
    def can_go_next(self) -> bool:
        return self.attempt is not None and self.attempt.outcome.is_terminal

    @property
    def status_text(self) -> str:
        if self.outcome == Outcome.WON:
            return T("card_won")
        if self.outcome == Outcome.LOST:
            return T("card_lost", answer=self.answer)
        return ""

    # --- ACTIONS ---

    def start_game(self, category=None) -> bool:
        """Starts a fresh session. Any session this client still holds is ended first."""
        if category is not None:
            try:
                parsed = Category.parse(category)
            except UnknownCategoryError:
                self.message = T("unknown_category", category=category)
                return False
            self.settings = self.settings.model_copy(update={"category": parsed})

        if self.session_id:
            self.end_game()

        result = self.commands.start_game(self.settings.category)
        if not result.ok:
            self.message = result.message
            return False

        res = result.data
        self.session_id = res.session_id
        self.total = res.total
        self.remaining = res.total - 1
        self._load_card(res.card)
        self.message = ""
        return True

    def guess_letter(self, letter: str) -> Optional[Outcome]:
        if not self.attempt:
            return None

        before = self.attempt.outcome
        submit_letter(self.attempt, letter)
        if self.attempt.outcome != before:
            self.notify_outcome()
        return self.attempt.outcome

    def notify_outcome(self) -> bool:
        """
        Forwards the current attempt to the attempt log if it is terminal and
        has not been forwarded yet. Returns True when a record was sent.
        """
        if not self.attempt or not self.card or not self.session_id:
            return False
        if not self.attempt.outcome.is_terminal:
            return False

        marker = LoggedAttemptMarker(self.session_id, self.card.id, self.attempt.outcome)
        if self.logged_marker == marker:
            return False
        # Set before the write so a re-entrant notification cannot log twice
        self.logged_marker = marker

        req = LogAttemptRequest(
            user_id=self.settings.user_id,
            card_id=self.card.id,
            is_won=self.attempt.outcome == Outcome.WON,
            category=self.settings.category.value,
            language=self.settings.language.value,
            difficulty=self.settings.difficulty.value,
            wrong_count=self.attempt.wrong_count,
            max_wrong=self.attempt.max_wrong,
        )
        result = self.commands.log_card_attempt(req)
        if not result.ok:
            logger.warning(f"Attempt for card {self.card.id} was not logged: {result.message}")
            self.warnings.append(result.message)
            self.message = result.message
        return True

    def next_card(self) -> bool:
        if not self.session_id:
            self.message = T("no_active_game")
            return False
        if not self.can_go_next:
            self.message = T("finish_card_first")
            return False

        self.message = ""
        result = self.commands.next_card(self.session_id)
        if not result.ok:
            self.message = result.message
            return False

        res = result.data
        if res.finished:
            self.end_of_deck_text = res.message or T("end_of_deck")
            self.end_of_deck_open = True
            return False

        self.remaining = res.remaining
        self._load_card(res.card)
        return True

    def reset_deck(self) -> bool:
        if not self.session_id:
            self.message = T("no_active_game")
            return False

        self.message = ""
        result = self.commands.reset_game(self.session_id)
        if not result.ok:
            self.message = result.message
            return False

        self.remaining = result.data.remaining
        self._load_card(result.data.card)
        return True

    def end_game(self):
        if self.session_id:
            self.commands.end_game(self.session_id)
        self.session_id = None
        self.card = None
        self.attempt = None
        self.logged_marker = None
        self.end_of_deck_open = False
        self.end_of_deck_text = ""

    # --- HELPERS ---

    def _load_card(self, card: CardDTO):
        self.card = card
        self.attempt = new_attempt(card.id, card.answer_for(self.settings.language), self.settings.max_wrong)
        self.logged_marker = None
        self.end_of_deck_open = False
        self.end_of_deck_text = ""
