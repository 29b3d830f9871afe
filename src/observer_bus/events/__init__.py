"""Event bus components for synchronous observer notification."""

from .bus import Event, EventBus, Observer, PublishResult, ReactionFailure

__all__ = ["Event", "EventBus", "Observer", "PublishResult", "ReactionFailure"]
