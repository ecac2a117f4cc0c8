"""Hangman+ anatomy vocabulary game."""

__version__ = "0.1.0"
