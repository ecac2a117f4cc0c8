# hangman_plus/commands.py
"""
Request/response surface offered to view layers.

Each method is one round trip. Domain failures come back as a CommandResult
with ok=False and a stable error_code; they are never raised to the caller.
"""
from typing import Optional

from hangman_plus.core.locale_manager import T
from hangman_plus.core.log_manager import logger
from hangman_plus.errors import HangmanError, LogWriteError
from hangman_plus.schemas import CommandResult, LogAttemptRequest, NextCardResponse, StartGameResponse
from hangman_plus.services.attempt_service import AttemptLog
from hangman_plus.services.card_service import CardRepository
from hangman_plus.services.game_service import AdvanceResult, GameSessionEngine


def _failure(error: HangmanError) -> CommandResult:
    return CommandResult(ok=False, error_code=error.code, message=str(error))


def _next_card_response(result: AdvanceResult) -> NextCardResponse:
    return NextCardResponse(
        card=result.card,
        finished=result.finished,
        remaining=result.remaining,
        message=result.message,
    )


class GameCommands:

    def __init__(
        self,
        cards: Optional[CardRepository] = None,
        attempts: Optional[AttemptLog] = None,
        engine: Optional[GameSessionEngine] = None,
    ):
        self.cards = cards or CardRepository()
        self.attempts = attempts or AttemptLog()
        self.engine = engine or GameSessionEngine()

    def start_game(self, category) -> CommandResult[StartGameResponse]:
        try:
            handle = self.engine.create_session(category, self.cards)
        except HangmanError as e:
            logger.warning(f"start_game failed for {category!r}: {e}")
            return _failure(e)

        return CommandResult(
            data=StartGameResponse(
                session_id=handle.session_id,
                total=handle.total,
                card=handle.card,
                finished=False,
                message=handle.message,
            ),
            message=handle.message,
        )

    def next_card(self, session_id: str) -> CommandResult[NextCardResponse]:
        try:
            result = self.engine.advance(session_id)
        except HangmanError as e:
            logger.warning(f"next_card failed for {session_id}: {e}")
            return _failure(e)
        return CommandResult(data=_next_card_response(result), message=result.message)

    def reset_game(self, session_id: str) -> CommandResult[NextCardResponse]:
        try:
            result = self.engine.restart(session_id)
        except HangmanError as e:
            logger.warning(f"reset_game failed for {session_id}: {e}")
            return _failure(e)
        return CommandResult(data=_next_card_response(result), message=result.message)

    def end_game(self, session_id: str) -> CommandResult:
        self.engine.end(session_id)
        return CommandResult(message=T("game_ended"))

    def log_card_attempt(self, req: LogAttemptRequest) -> CommandResult:
        try:
            self.attempts.record(
                user_id=req.user_id,
                card_id=req.card_id,
                won=req.is_won,
                category=req.category,
                language=req.language,
                difficulty=req.difficulty,
                wrong_count=req.wrong_count,
                max_wrong=req.max_wrong,
            )
        except LogWriteError as e:
            return CommandResult(ok=False, error_code=e.code, message=T("log_write_failed"))
        return CommandResult()
