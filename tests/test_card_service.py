import random

import pytest
from pydantic import ValidationError
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from hangman_plus.errors import StorageUnavailableError, UnknownCategoryError
from hangman_plus.models import CardStatus, Category
from hangman_plus.services.card_service import CardRepository


def _seed(repo):
    repo.add_card(Category.BONES, "Femur", "Femur")
    repo.add_card(Category.BONES, "Skull", "Cranium")
    repo.add_card(Category.ORGANS, "Heart", "Cor")
    repo.add_card(Category.BONES, "Kneecap", "Patella", status=CardStatus.PENDING)
    repo.add_card(Category.BONES, "Tailbone", "Coccyx", status=CardStatus.REJECTED)


def test_fetch_deck_returns_approved_cards_of_category(card_repo) -> None:
    _seed(card_repo)

    deck = card_repo.fetch_deck(Category.BONES)

    assert [card.english for card in deck] == ["Femur", "Skull"]
    assert all(card.category == Category.BONES for card in deck)


def test_fetch_deck_accepts_category_strings(card_repo) -> None:
    _seed(card_repo)

    assert [card.latin for card in card_repo.fetch_deck("organs")] == ["Cor"]


def test_fetch_deck_rejects_unknown_category(card_repo) -> None:
    with pytest.raises(UnknownCategoryError):
        card_repo.fetch_deck("MUSCLES")


def test_fetch_deck_empty_category(card_repo) -> None:
    card_repo.add_card(Category.ORGANS, "Liver", "Hepar")

    assert card_repo.fetch_deck(Category.BONES) == []


def test_shuffled_deck_is_a_permutation(db_engine) -> None:
    repo = CardRepository(db_engine, shuffle=True, rng=random.Random(7))
    for i in range(10):
        repo.add_card(Category.BONES, f"Bone{i}", f"Os{i}")

    deck = repo.fetch_deck(Category.BONES)
    stable = repo.fetch_deck(Category.BONES, shuffle=False)

    assert sorted(card.id for card in deck) == [card.id for card in stable]


def test_fetched_cards_are_frozen(card_repo) -> None:
    card = card_repo.add_card(Category.BONES, "Femur", "Femur", image_path="images/femur.png")

    assert card.id is not None
    assert card.image_path == "images/femur.png"
    with pytest.raises(ValidationError):
        card.english = "Tibia"


def test_count_cards_and_exists(card_repo) -> None:
    _seed(card_repo)

    assert card_repo.count_cards() == 3
    assert card_repo.count_cards(Category.BONES) == 2
    assert card_repo.exists(Category.ORGANS, "Heart", "Cor") is True
    assert card_repo.exists(Category.BONES, "Heart", "Cor") is False


def test_fetch_deck_without_tables_raises_storage_error() -> None:
    bare = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    repo = CardRepository(bare, shuffle=False)

    with pytest.raises(StorageUnavailableError) as exc:
        repo.fetch_deck(Category.BONES)

    assert exc.value.code == "STORAGE_UNAVAILABLE"
    bare.dispose()
