# hangman_plus/main.py
import argparse
from collections.abc import Callable
from typing import List, Optional

from hangman_plus.client import SessionClient
from hangman_plus.commands import GameCommands
from hangman_plus.core.locale_manager import T
from hangman_plus.core.log_manager import logger
from hangman_plus.database import init_db
from hangman_plus.models import Category, Difficulty, Language
from hangman_plus.schemas import CardPackImportDTO, GameSettings
from hangman_plus.services.attempt_service import AttemptLog
from hangman_plus.services.card_service import CardRepository
from hangman_plus.services.guess_service import Outcome, display_word, mistakes_left
from hangman_plus.services.import_service import import_card_pack, load_bundled_pack, load_card_pack

InputFn = Callable[[str], str]
PrintFn = Callable[[str], None]

QUIT_COMMANDS = {":quit", ":q", ":exit"}
NEXT_COMMANDS = {":next", ":n"}
RESTART_COMMANDS = {":restart", ":r"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hangman-plus", description="Anatomy vocabulary hangman")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("init", help="Create tables and seed the bundled card pack")

    import_cmd = sub.add_parser("import", help="Import a JSON card pack")
    import_cmd.add_argument("path")

    play = sub.add_parser("play", help="Play in the terminal")
    play.add_argument("--category", default=Category.BONES.value, choices=[c.value for c in Category])
    play.add_argument("--language", default=Language.EN.value, choices=[l.value for l in Language])
    play.add_argument("--difficulty", default=Difficulty.EASY.value, choices=[d.value for d in Difficulty])
    play.add_argument("--user-id", type=int, default=1)
    return parser


def seed_if_empty(repo: CardRepository, pack: Optional[CardPackImportDTO] = None) -> int:
    """Imports the bundled pack, or the given one, when the card table is empty."""
    if repo.count_cards() > 0:
        return 0
    return import_card_pack(repo, pack or load_bundled_pack())


def run(argv: Optional[List[str]] = None, input_fn: InputFn = input, print_fn: PrintFn = print, db_engine=None) -> int:
    args = _build_parser().parse_args(argv)
    command = args.command or "play"

    db_engine = init_db(db_engine)
    repo = CardRepository(db_engine)

    if command == "init":
        pack = load_bundled_pack()
        inserted = seed_if_empty(repo, pack)
        print_fn(T("import_success", count=inserted, title=pack.title))
        return 0

    if command == "import":
        try:
            pack = load_card_pack(args.path)
        except (OSError, ValueError) as e:
            logger.error(f"Card pack import failed: {e}")
            print_fn(str(e))
            return 1
        inserted = import_card_pack(repo, pack)
        print_fn(T("import_success", count=inserted, title=pack.title))
        return 0

    seed_if_empty(repo)
    settings = GameSettings(
        user_id=getattr(args, "user_id", 1),
        category=getattr(args, "category", Category.BONES),
        language=getattr(args, "language", Language.EN),
        difficulty=getattr(args, "difficulty", Difficulty.EASY),
    )
    commands = GameCommands(cards=repo, attempts=AttemptLog(db_engine))
    return play_shell(SessionClient(settings, commands), input_fn, print_fn)


def play_shell(client: SessionClient, input_fn: InputFn = input, print_fn: PrintFn = print) -> int:
    """Plain line-based game loop over the session client."""
    if not client.start_game():
        print_fn(client.message)
        return 1

    played = won = 0
    try:
        while True:
            if client.end_of_deck_open:
                print_fn(client.end_of_deck_text)
                choice = input_fn(T("end_of_deck_prompt")).strip().lower()
                if choice == "r":
                    client.reset_deck()
                    continue
                if choice == "q" or choice in QUIT_COMMANDS:
                    break
                continue

            attempt = client.attempt
            print_fn(f"{display_word(attempt)}   {T('mistakes_left', left=mistakes_left(attempt), max_wrong=attempt.max_wrong)}")

            raw = input_fn(T("play_prompt")).strip()
            if raw.lower() in QUIT_COMMANDS:
                break
            if raw.lower() in NEXT_COMMANDS:
                if not client.next_card() and client.message:
                    print_fn(client.message)
                continue
            if raw.lower() in RESTART_COMMANDS:
                client.reset_deck()
                continue

            before = client.outcome
            outcome = client.guess_letter(raw)
            if outcome != before and outcome is not None and outcome.is_terminal:
                played += 1
                if outcome == Outcome.WON:
                    won += 1
                print_fn(client.status_text)
                if client.warnings and client.message:
                    print_fn(client.message)
    finally:
        client.end_game()

    print_fn(T("session_summary", played=played, won=won, lost=played - won))
    return 0


def main_entry() -> None:
    raise SystemExit(run())
