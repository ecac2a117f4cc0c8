# hangman_plus/services/import_service.py
import json
import bleach
from collections import Counter
import importlib.resources as pkg_resources
from pathlib import Path
from pydantic import ValidationError

from hangman_plus.schemas import CardPackImportDTO
from hangman_plus.services.card_service import CardRepository
from hangman_plus.core.log_manager import logger

BUNDLED_PACK = "anatomy_cards.json"


def sanitize_text(content: str) -> str:
    """Card terms are plain text; any markup is stripped."""
    if not content: return ""
    return bleach.clean(content, tags=set(), strip=True).strip()


def parse_card_pack(file_content: str) -> dict:
    """
    1. Parses JSON.
    2. Validates Schema.
    3. Sanitizes text fields.
    4. Calculates Stats.
    Returns: A dict containing the 'dto' and 'stats'.
    """
    try:
        data = json.loads(file_content)
    except json.JSONDecodeError:
        raise ValueError("Invalid JSON file format.")

    try:
        pack_dto = CardPackImportDTO(**data)
    except ValidationError as e:
        raise ValueError(f"Schema Error: {e}")

    for card in pack_dto.cards:
        card.english = sanitize_text(card.english)
        card.latin = sanitize_text(card.latin)
        card.image_path = sanitize_text(card.image_path or "")

    category_counts = Counter(card.category.value for card in pack_dto.cards)
    stats = {
        "card_count": len(pack_dto.cards),
        "categories": dict(category_counts),
    }

    return {"dto": pack_dto, "stats": stats}


def load_card_pack(path) -> CardPackImportDTO:
    content = Path(path).read_text(encoding="utf-8-sig")
    return parse_card_pack(content)["dto"]


def load_bundled_pack() -> CardPackImportDTO:
    content = pkg_resources.files("hangman_plus.data").joinpath(BUNDLED_PACK).read_text(encoding="utf-8")
    return parse_card_pack(content)["dto"]


def import_card_pack(repo: CardRepository, pack_dto: CardPackImportDTO) -> int:
    """
    Inserts every card of an already validated pack as APPROVED.
    Cards already present (same category and terms) are skipped.
    Returns: number of cards inserted.
    """
    inserted = 0
    for card_dto in pack_dto.cards:
        if not card_dto.english or not card_dto.latin:
            continue
        if repo.exists(card_dto.category, card_dto.english, card_dto.latin):
            continue
        repo.add_card(
            category=card_dto.category,
            english=card_dto.english,
            latin=card_dto.latin,
            image_path=card_dto.image_path or "",
        )
        inserted += 1

    logger.info(f"Import Success: '{pack_dto.title}' added {inserted} of {len(pack_dto.cards)} cards")
    return inserted
