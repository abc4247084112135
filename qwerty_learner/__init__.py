"""Qwerty Learner: a word-by-word typing trainer for the desktop."""

__version__ = "0.3.0"
