# hangman_plus/services/attempt_service.py
from typing import List, Optional
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, col

from hangman_plus import database
from hangman_plus.core.log_manager import logger
from hangman_plus.errors import LogWriteError
from hangman_plus.models import AttemptRecord


class AttemptLog:
    """
    Durable per-user, per-card outcomes.
    The game only appends; statistics read it elsewhere.
    """

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine or database.engine

    def record(
        self,
        user_id: int,
        card_id: int,
        won: bool,
        category: Optional[str] = None,
        language: Optional[str] = None,
        difficulty: Optional[str] = None,
        wrong_count: Optional[int] = None,
        max_wrong: Optional[int] = None,
    ) -> AttemptRecord:
        """
        Appends one finished card.
        Raises LogWriteError if the database refuses the row.
        """
        logger.info(f"Recording attempt user_id={user_id} card_id={card_id} is_won={won}")

        attempt = AttemptRecord(
            user_id=user_id,
            card_id=card_id,
            is_won=won,
            category=category,
            language=language,
            difficulty=difficulty,
            wrong_count=wrong_count,
            max_wrong=max_wrong,
        )
        try:
            with Session(self.engine) as session:
                session.add(attempt)
                session.commit()
                session.refresh(attempt)
        except SQLAlchemyError as e:
            logger.error(f"Insert attempt failed: {e}")
            raise LogWriteError(f"Insert attempt failed: {e}") from e
        return attempt

    def list_for_user(self, user_id: int) -> List[AttemptRecord]:
        """All attempts of one user, newest first."""
        with Session(self.engine) as session:
            statement = (
                select(AttemptRecord)
                .where(AttemptRecord.user_id == user_id)
                .order_by(col(AttemptRecord.played_at).desc(), col(AttemptRecord.id).desc())
            )
            return list(session.exec(statement).all())
