"""Big Blast - a pass-the-balloon elimination party game."""

__version__ = "0.1.0"
