"""Top-level package for observer-bus."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import ensure_config_dir, load_config
    from .events.bus import Event, EventBus, Observer, PublishResult, ReactionFailure
    from .exceptions import (
        ConfigValidationError,
        InvalidSubscriberError,
        ObserverBusError,
        ReactionFailedError,
    )
    from .observers import (
        ContainerObserver,
        EchoObserver,
        RecordingObserver,
        TagFilterObserver,
        VesselObserver,
    )

__all__ = [
    "ConfigValidationError",
    "ContainerObserver",
    "EchoObserver",
    "Event",
    "EventBus",
    "InvalidSubscriberError",
    "Observer",
    "ObserverBusError",
    "PublishResult",
    "ReactionFailedError",
    "ReactionFailure",
    "RecordingObserver",
    "TagFilterObserver",
    "VesselObserver",
    "ensure_config_dir",
    "load_config",
]

_EVENT_NAMES = {"Event", "EventBus", "Observer", "PublishResult", "ReactionFailure"}
_EXCEPTION_NAMES = {
    "ConfigValidationError",
    "InvalidSubscriberError",
    "ObserverBusError",
    "ReactionFailedError",
}
_OBSERVER_NAMES = {
    "ContainerObserver",
    "EchoObserver",
    "RecordingObserver",
    "TagFilterObserver",
    "VesselObserver",
}


def __getattr__(name: str) -> Any:
    """Lazily import symbols so ``import observer_bus`` stays cheap."""
    if name in _EVENT_NAMES:
        from .events import bus

        return getattr(bus, name)
    if name in _EXCEPTION_NAMES:
        from . import exceptions

        return getattr(exceptions, name)
    if name in _OBSERVER_NAMES:
        from . import observers

        return getattr(observers, name)
    if name in {"ensure_config_dir", "load_config"}:
        from . import config

        return getattr(config, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
