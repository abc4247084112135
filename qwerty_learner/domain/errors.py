"""Exception types used by the trainer core.

None of these are fatal: the session controller catches them at its
boundary and either ignores the event, clamps the selection or keeps the
previous configuration value.
"""

from __future__ import annotations


class TrainerError(Exception):
    """Base class for all trainer errors."""


class InvalidTransition(TrainerError):
    """An event arrived in a phase that has no handler for it."""


class OutOfRangeSelection(TrainerError):
    """A chapter or dictionary selection lies outside the valid set."""


class ConfigurationRejected(TrainerError):
    """A configuration value lies outside its declared domain."""

    def __init__(self, key: str, value: object, reason: str = "") -> None:
        self.key = key
        self.value = value
        self.reason = reason
        msg = "Rejected {}={!r}".format(key, value)
        if reason:
            msg = "{} ({})".format(msg, reason)
        super().__init__(msg)


class NotFoundError(TrainerError, KeyError):
    """Unknown dictionary id."""


class DictionaryLoadError(TrainerError):
    """A dictionary's word list could not be loaded from its asset file."""
