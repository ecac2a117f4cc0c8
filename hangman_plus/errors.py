# hangman_plus/errors.py


class HangmanError(Exception):
    """Base class for failures that are reported to callers as typed results."""
    code = "HANGMAN_ERROR"


class EmptyDeckError(HangmanError):
    """The selected category has no playable cards. No session is created."""
    code = "EMPTY_DECK"


class UnknownSessionError(HangmanError):
    """The session id is absent or was already ended."""
    code = "UNKNOWN_SESSION"


class UnknownCategoryError(HangmanError, ValueError):
    """A category string outside the closed set reached the repository."""
    code = "UNKNOWN_CATEGORY"


class LogWriteError(HangmanError):
    """The attempt log rejected the write. Non-fatal for the game."""
    code = "LOG_WRITE_FAILED"


class InvalidGuessInput(HangmanError):
    """Malformed letter input. Swallowed by the evaluator, never surfaced."""
    code = "INVALID_GUESS"


class StorageUnavailableError(HangmanError):
    """The card store could not be read."""
    code = "STORAGE_UNAVAILABLE"
