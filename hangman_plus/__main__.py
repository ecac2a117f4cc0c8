"""Module entrypoint for `python -m hangman_plus`."""

from hangman_plus.main import main_entry

if __name__ == "__main__":  # pragma: no cover
    main_entry()
