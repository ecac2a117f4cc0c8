# hangman_plus/services/card_service.py
from typing import List, Optional
import random
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, func

from hangman_plus import database
from hangman_plus.config import SHUFFLE_DECKS
from hangman_plus.core.locale_manager import T
from hangman_plus.core.log_manager import logger
from hangman_plus.errors import StorageUnavailableError
from hangman_plus.models import CardRecord, CardStatus, Category
from hangman_plus.schemas import CardDTO


class CardRepository:
    """
    Approved flashcards per category, served as decks.
    """

    def __init__(self, engine: Optional[Engine] = None, shuffle: bool = SHUFFLE_DECKS, rng: Optional[random.Random] = None):
        self.engine = engine or database.engine
        self.shuffle = shuffle
        self._rng = rng or random.Random()

    def fetch_deck(self, category, shuffle: Optional[bool] = None) -> List[CardDTO]:
        """
        Returns the playable deck for a category.
        Raises UnknownCategoryError for anything outside the Category enum and
        StorageUnavailableError when the card table cannot be read.
        """
        category = Category.parse(category)
        do_shuffle = self.shuffle if shuffle is None else shuffle

        statement = (
            select(CardRecord)
            .where(CardRecord.category == category)
            .where(CardRecord.status == CardStatus.APPROVED)
            .order_by(CardRecord.id)
        )
        try:
            with Session(self.engine) as session:
                rows = session.exec(statement).all()
                deck = [CardDTO.model_validate(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Fetching deck for {category.value} failed: {e}")
            raise StorageUnavailableError(T("storage_unavailable")) from e

        if do_shuffle:
            self._rng.shuffle(deck)

        logger.info(f"Fetched deck of {len(deck)} cards for {category.value} (shuffle={do_shuffle})")
        return deck

    def add_card(
        self,
        category,
        english: str,
        latin: str,
        image_path: str = "",
        status: CardStatus = CardStatus.APPROVED,
    ) -> CardDTO:
        """Inserts one card and returns its snapshot."""
        card = CardRecord(
            category=Category.parse(category),
            english=english,
            latin=latin,
            image_path=image_path or "",
            status=status,
        )
        with Session(self.engine) as session:
            session.add(card)
            session.commit()
            session.refresh(card)
            return CardDTO.model_validate(card)

    def exists(self, category, english: str, latin: str) -> bool:
        with Session(self.engine) as session:
            statement = select(CardRecord.id).where(
                CardRecord.category == Category.parse(category),
                CardRecord.english == english,
                CardRecord.latin == latin,
            )
            return session.exec(statement).first() is not None

    def count_cards(self, category=None) -> int:
        """Counts approved cards, optionally for one category."""
        with Session(self.engine) as session:
            statement = select(func.count(CardRecord.id)).where(CardRecord.status == CardStatus.APPROVED)
            if category is not None:
                statement = statement.where(CardRecord.category == Category.parse(category))
            return session.exec(statement).one()
