"""
Controller package exports.

Provides a stable import surface for the session state machine and the
helpers it drives.
"""

from .cooldown_timer import CooldownTimer  # noqa: F401
from .read_only_driver import ReadOnlyDriver  # noqa: F401
from .session_controller import SessionController  # noqa: F401

__all__ = [
    "CooldownTimer",
    "ReadOnlyDriver",
    "SessionController",
]
