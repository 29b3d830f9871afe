"""Synchronous event bus for the observer pattern.

Usage:
    bus = EventBus()

    class Printer:
        def react(self, event):
            print(f"{event.name}: {event.payload}")

    bus.subscribe(Printer())
    bus.publish(Event(name="windowOpen", payload="Vessel:1222"))
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
import random
import threading
import time
from typing import Any, Literal, Protocol, runtime_checkable

from ..exceptions import InvalidSubscriberError, ReactionFailedError

LOGGER = logging.getLogger(__name__)

FailurePolicy = Literal["continue", "raise"]

DEFAULT_DEMO_EVENT_NAME = "windowOpen"
DEFAULT_DEMO_DELAY_SECONDS = 0.015
DEFAULT_STATE_UPPER_BOUND = 10


@dataclass(frozen=True)
class Event:
    """Event data container."""

    name: str
    payload: str

    def tag(self, delimiter: str = ":") -> str:
        """Return the payload prefix before the first ``delimiter``."""
        return self.payload.split(delimiter, 1)[0]


@runtime_checkable
class Observer(Protocol):
    def react(self, event: Event) -> None: ...


@dataclass(frozen=True)
class ReactionFailure:
    """One observer that raised while reacting to an event."""

    observer: Observer
    error: Exception


@dataclass(frozen=True)
class PublishResult:
    """Outcome of a single publish call."""

    event: Event
    delivered: int
    failures: tuple[ReactionFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures


def _ensure_observer(observer: object) -> None:
    if observer is None:
        raise InvalidSubscriberError("Observer must not be None.")
    if not callable(getattr(observer, "react", None)):
        raise InvalidSubscriberError(
            f"{type(observer).__name__} has no callable react(event) method."
        )


class EventBus:
    """Ordered list of observers notified synchronously on publish.

    Delivery happens on the caller's thread, in registration order. The
    subscriber list is guarded by a re-entrant lock so observers may
    subscribe or unsubscribe from inside ``react``; such changes apply to
    the next publish.
    """

    def __init__(
        self,
        *,
        failure_policy: FailurePolicy = "continue",
        demo_event_name: str = DEFAULT_DEMO_EVENT_NAME,
        demo_delay_seconds: float = DEFAULT_DEMO_DELAY_SECONDS,
        state_upper_bound: int = DEFAULT_STATE_UPPER_BOUND,
        rng: random.Random | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if failure_policy not in ("continue", "raise"):
            raise ValueError(f"Unsupported failure policy {failure_policy!r}.")
        if not demo_event_name.strip():
            raise ValueError("demo_event_name must not be empty.")
        if demo_delay_seconds < 0:
            raise ValueError("demo_delay_seconds must not be negative.")
        if state_upper_bound < 1:
            raise ValueError("state_upper_bound must be at least 1.")
        self.state = 0
        self._subscribers: list[Observer] = []
        self._lock = threading.RLock()
        self._failure_policy: FailurePolicy = failure_policy
        self._demo_event_name = demo_event_name
        self._demo_delay_seconds = demo_delay_seconds
        self._state_upper_bound = state_upper_bound
        self._rng = rng or random.Random()
        self._sleep = sleep

    @classmethod
    def from_config(cls, bus_config: dict[str, Any], **overrides: Any) -> EventBus:
        """Build a bus from the ``[bus]`` section of a loaded config."""
        options = {
            "failure_policy": bus_config.get("failure_policy", "continue"),
            "demo_event_name": bus_config.get(
                "demo_event_name", DEFAULT_DEMO_EVENT_NAME
            ),
            "demo_delay_seconds": bus_config.get(
                "demo_delay_seconds", DEFAULT_DEMO_DELAY_SECONDS
            ),
            "state_upper_bound": bus_config.get(
                "state_upper_bound", DEFAULT_STATE_UPPER_BOUND
            ),
        }
        options.update(overrides)
        return cls(**options)

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._failure_policy

    @property
    def subscribers(self) -> tuple[Observer, ...]:
        """Snapshot of the current subscribers in delivery order."""
        with self._lock:
            return tuple(self._subscribers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(self, observer: Observer) -> None:
        """Append an observer; duplicates are delivered once per registration.

        Raises:
            InvalidSubscriberError: ``observer`` is None or lacks ``react``.
        """
        _ensure_observer(observer)
        with self._lock:
            self._subscribers.append(observer)
            count = len(self._subscribers)
        LOGGER.debug(
            "bus.subscribed",
            extra={
                "event": "bus.subscribed",
                "observer": type(observer).__name__,
                "subscriber_count": count,
            },
        )

    def unsubscribe(self, observer: Observer) -> None:
        """Remove the first registration of ``observer`` (by identity).

        Unsubscribing an observer that is not registered is a no-op.
        """
        _ensure_observer(observer)
        with self._lock:
            for index, candidate in enumerate(self._subscribers):
                if candidate is observer:
                    del self._subscribers[index]
                    break
            else:
                LOGGER.debug(
                    "bus.unsubscribe.missing",
                    extra={
                        "event": "bus.unsubscribe.missing",
                        "observer": type(observer).__name__,
                    },
                )
                return
            count = len(self._subscribers)
        LOGGER.debug(
            "bus.unsubscribed",
            extra={
                "event": "bus.unsubscribed",
                "observer": type(observer).__name__,
                "subscriber_count": count,
            },
        )

    def publish(self, event: Event) -> PublishResult:
        """Deliver ``event`` to every current subscriber, in order.

        Under the ``continue`` policy a failing reaction is logged and
        recorded in the result; under ``raise`` it aborts the remaining
        deliveries with ``ReactionFailedError``.
        """
        with self._lock:
            targets = tuple(self._subscribers)
            LOGGER.debug(
                "bus.publish",
                extra={
                    "event": "bus.publish",
                    "event_name": event.name,
                    "subscriber_count": len(targets),
                },
            )

            delivered = 0
            failures: list[ReactionFailure] = []
            for observer in targets:
                try:
                    observer.react(event)
                except Exception as exc:
                    if self._failure_policy == "raise":
                        raise ReactionFailedError(
                            f"{type(observer).__name__} failed to react to "
                            f"{event.name!r}: {exc}",
                            event=event,
                            observer=observer,
                        ) from exc
                    LOGGER.error(
                        "bus.reaction.failed",
                        exc_info=True,
                        extra={
                            "event": "bus.reaction.failed",
                            "event_name": event.name,
                            "observer": type(observer).__name__,
                            "error_type": type(exc).__name__,
                        },
                    )
                    failures.append(ReactionFailure(observer=observer, error=exc))
                else:
                    delivered += 1

        return PublishResult(event=event, delivered=delivered, failures=tuple(failures))

    def trigger_demo_action(self, payload: str) -> PublishResult:
        """Randomize ``state``, simulate some work, then publish a demo event."""
        self.state = self._rng.randrange(0, self._state_upper_bound)
        if self._demo_delay_seconds > 0:
            self._sleep(self._demo_delay_seconds)
        LOGGER.info(
            "bus.demo_action",
            extra={
                "event": "bus.demo_action",
                "state": self.state,
                "payload": payload,
            },
        )
        return self.publish(Event(name=self._demo_event_name, payload=payload))
