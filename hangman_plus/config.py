# hangman_plus/config.py
import os
import dotenv

dotenv.load_dotenv("hangman.env")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


DB_FILE = "db/hangman.db"
DATABASE_URL = os.getenv("HANGMAN_DATABASE_URL", f"sqlite:///{DB_FILE}")

DEFAULT_LOCALE = os.getenv("HANGMAN_LOCALE", "en")

LOG_LEVEL = os.getenv("HANGMAN_LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("HANGMAN_LOG_DIR") or None

# Decks are shuffled once per session; restart keeps that order.
SHUFFLE_DECKS = _env_bool("HANGMAN_SHUFFLE_DECKS", True)

EASY_MAX_WRONG = _env_int("HANGMAN_EASY_MAX_WRONG", 6)
HARD_MAX_WRONG = _env_int("HANGMAN_HARD_MAX_WRONG", 3)
