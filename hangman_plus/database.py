# hangman_plus/database.py
import os
from sqlalchemy.engine import Engine, make_url
from sqlmodel import SQLModel, create_engine

from hangman_plus.config import DATABASE_URL
from hangman_plus.core.log_manager import logger

# check_same_thread=False is needed because sessions are served from several threads
engine = create_engine(DATABASE_URL, echo=False, connect_args={"check_same_thread": False})


def _ensure_sqlite_dir(db_engine: Engine) -> None:
    """SQLite cannot create the parent folder of its file on its own."""
    url = make_url(str(db_engine.url))
    if url.get_backend_name() != "sqlite":
        return
    database = url.database
    if not database or database == ":memory:":
        return
    parent = os.path.dirname(database)
    if parent:
        os.makedirs(parent, exist_ok=True)


def init_db(db_engine: Engine = None) -> Engine:
    """
    Creates the database tables based on the models.
    Should be called on app startup.
    """
    from hangman_plus.models import CardRecord, AttemptRecord  # Import to register models

    db_engine = db_engine or engine
    _ensure_sqlite_dir(db_engine)
    SQLModel.metadata.create_all(db_engine)
    logger.info(f"Database initialized at {db_engine.url}")
    return db_engine
