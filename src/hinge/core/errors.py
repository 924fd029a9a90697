# src/hinge/core/errors.py
from __future__ import annotations

from typing import Optional

__all__ = [
    "HingeError",
    "ConfigurationError",
    "InvalidRequestError",
    "MISSING_RESOURCE",
    "MISSING_URI",
    "MISSING_CALLBACK",
    "UNSUPPORTED_VERB",
]

MISSING_RESOURCE = "missing resource"
MISSING_URI = "missing URI"
MISSING_CALLBACK = "missing callback"
UNSUPPORTED_VERB = "unsupported verb"


class HingeError(Exception):
    """Base for errors raised by hinge itself (never by a handler)."""

    def __init__(self, reason: str, verb: Optional[str] = None):
        self.reason = reason
        self.verb = verb
        super().__init__(f"{verb} request: {reason}" if verb else reason)


class ConfigurationError(HingeError):
    """Dispatcher could not be built from the given config."""


class InvalidRequestError(HingeError):
    """A verb was called with the wrong argument shape."""
