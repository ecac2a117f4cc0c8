import pytest

from hangman_plus.services.guess_service import (
    BLANK,
    Outcome,
    display_word,
    mistakes_left,
    new_attempt,
    normalize,
    reveal,
    submit_letter,
)


def _play(attempt, letters):
    for letter in letters:
        submit_letter(attempt, letter)
    return attempt


def test_normalize_strips_diacritics_and_case() -> None:
    assert normalize("Vértebra Ósea") == "vertebra osea"
    assert normalize("Os coxae, pars-I") == "os coxae, pars-i"
    assert normalize("") == ""


def test_femur_is_won_without_mistakes() -> None:
    attempt = _play(new_attempt(1, "Femur", 3), "femur")

    assert attempt.outcome == Outcome.WON
    assert attempt.wrong_count == 0
    assert display_word(attempt) == "FEMUR"
    assert mistakes_left(attempt) == 3


def test_three_misses_lose_and_keep_blanks() -> None:
    attempt = _play(new_attempt(1, "Femur", 3), "xyz")

    assert attempt.outcome == Outcome.LOST
    assert attempt.wrong_count == 3
    assert mistakes_left(attempt) == 0
    assert reveal(attempt) == [BLANK] * 5


def test_repeated_letter_is_not_counted_twice() -> None:
    attempt = _play(new_attempt(1, "Femur", 3), ["x", "x", "X"])

    assert attempt.wrong_count == 1
    assert attempt.guessed_letters == {"x"}


@pytest.mark.parametrize("raw", ["", " ", "1", "ab", "?", "ß", "ø"])
def test_malformed_input_is_ignored(raw) -> None:
    attempt = submit_letter(new_attempt(1, "Femur", 3), raw)

    assert attempt.guessed_letters == set()
    assert attempt.wrong_count == 0
    assert attempt.outcome == Outcome.IN_PROGRESS


def test_accented_keystroke_matches_plain_letter() -> None:
    attempt = submit_letter(new_attempt(1, "Femur", 3), "É")

    assert attempt.guessed_letters == {"e"}
    assert attempt.wrong_count == 0


def test_accented_answer_matches_plain_keystrokes() -> None:
    attempt = _play(new_attempt(1, "Fémur", 3), "femur")

    assert attempt.outcome == Outcome.WON


def test_terminal_attempt_is_frozen() -> None:
    attempt = _play(new_attempt(1, "Femur", 3), "xyz")
    _play(attempt, "femur")

    assert attempt.outcome == Outcome.LOST
    assert attempt.wrong_count == 3
    assert "f" not in attempt.guessed_letters


def test_reveal_passes_spaces_and_punctuation() -> None:
    attempt = new_attempt(9, "Os coxae, l.", 6)
    shown = reveal(attempt)

    assert len(shown) == len(normalize("Os coxae, l."))
    assert shown[2] == " "
    assert shown[8] == ","
    assert shown[-1] == "."
    assert shown[0] == BLANK

    submit_letter(attempt, "o")
    assert reveal(attempt)[:2] == ["o", BLANK]


def test_reveal_with_explicit_answer() -> None:
    attempt = _play(new_attempt(2, "Skull", 3), "s")

    assert reveal(attempt, "Cranium") == [BLANK] * 7
    assert reveal(attempt, "Os") == [BLANK, "s"]


def test_multiword_answer_is_won_without_guessing_space() -> None:
    attempt = _play(new_attempt(3, "Shin bone", 6), "shinboe")

    assert attempt.outcome == Outcome.WON
    assert display_word(attempt) == "SHIN BONE"


def test_last_allowed_mistake_loses() -> None:
    attempt = _play(new_attempt(1, "Cor", 2), "ca")
    assert attempt.outcome == Outcome.IN_PROGRESS

    submit_letter(attempt, "b")
    assert attempt.outcome == Outcome.LOST


def test_max_wrong_must_be_positive() -> None:
    with pytest.raises(ValueError):
        new_attempt(1, "Femur", 0)
