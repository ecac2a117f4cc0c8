# hangman_plus/services/guess_service.py
"""
Letter-guess rules for one card.

Everything here is pure: the functions take a CardAttempt, mutate only that
attempt, and never touch the database or the session engine. The client
adapter owns the attempt for the current card and drives it through
`submit_letter`.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set
import unicodedata

from hangman_plus.errors import InvalidGuessInput

BLANK = "_"


class Outcome(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    WON = "WON"
    LOST = "LOST"

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.IN_PROGRESS


@dataclass
class CardAttempt:
    """Guess state for exactly one card within one session."""
    card_id: int
    answer: str
    max_wrong: int
    guessed_letters: Set[str] = field(default_factory=set)
    wrong_count: int = 0
    outcome: Outcome = Outcome.IN_PROGRESS

    @property
    def normalized_answer(self) -> str:
        return normalize(self.answer)


def normalize(text: str) -> str:
    """
    Lowercases and strips diacritics so accented terms match plain keystrokes.
    Spaces and punctuation are kept as they are.
    """
    decomposed = unicodedata.normalize("NFD", text or "")
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).lower()


def is_letter(ch: str) -> bool:
    return len(ch) == 1 and "a" <= ch <= "z"


def new_attempt(card_id: int, answer: str, max_wrong: int) -> CardAttempt:
    if max_wrong <= 0:
        raise ValueError("max_wrong must be positive.")
    return CardAttempt(card_id=card_id, answer=answer, max_wrong=max_wrong)


def _parse_letter(attempt: CardAttempt, raw_input: str) -> str:
    letter = normalize(raw_input or "").strip()
    if not is_letter(letter):
        raise InvalidGuessInput(f"Not a single letter: {raw_input!r}")
    if letter in attempt.guessed_letters:
        raise InvalidGuessInput(f"Letter already guessed: {letter!r}")
    return letter


def evaluate(attempt: CardAttempt) -> Outcome:
    """WON is checked before LOST."""
    answer = attempt.normalized_answer
    if answer and all(ch in attempt.guessed_letters for ch in answer if is_letter(ch)):
        return Outcome.WON
    if attempt.wrong_count >= attempt.max_wrong:
        return Outcome.LOST
    return Outcome.IN_PROGRESS


def submit_letter(attempt: CardAttempt, raw_input: str) -> CardAttempt:
    """
    Applies one keystroke to the attempt.

    Terminal attempts are frozen. Input that is not exactly one letter, or a
    letter already tried, is ignored.
    """
    if attempt.outcome.is_terminal:
        return attempt

    try:
        letter = _parse_letter(attempt, raw_input)
    except InvalidGuessInput:
        return attempt

    attempt.guessed_letters.add(letter)
    if letter not in attempt.normalized_answer:
        attempt.wrong_count += 1

    attempt.outcome = evaluate(attempt)
    return attempt


def reveal(attempt: CardAttempt, answer: Optional[str] = None) -> List[str]:
    """One entry per character of the normalized answer; unguessed letters are BLANK."""
    normalized = normalize(attempt.answer if answer is None else answer)
    return [ch if not is_letter(ch) or ch in attempt.guessed_letters else BLANK for ch in normalized]


def mistakes_left(attempt: CardAttempt) -> int:
    return attempt.max_wrong - attempt.wrong_count


def display_word(attempt: CardAttempt) -> str:
    return "".join(reveal(attempt)).upper()
