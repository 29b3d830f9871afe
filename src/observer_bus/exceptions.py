"""Domain exception hierarchy for the observer bus."""

from __future__ import annotations

from typing import Any


class ObserverBusError(RuntimeError):
    """Base class for all domain-level bus errors."""


class InvalidSubscriberError(ObserverBusError, TypeError):
    """Raised when a subscriber does not provide a callable ``react``."""


class ReactionFailedError(ObserverBusError):
    """Raised when an observer's reaction fails under the ``raise`` policy."""

    def __init__(self, message: str, *, event: Any, observer: Any) -> None:
        super().__init__(message)
        self.event = event
        self.observer = observer


class ConfigValidationError(ObserverBusError):
    """Raised when configuration cannot be validated safely."""
