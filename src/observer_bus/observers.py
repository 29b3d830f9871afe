"""Concrete observers that react to events published on an ``EventBus``."""

from __future__ import annotations

from collections.abc import Callable
import logging

from .events.bus import Event

LOGGER = logging.getLogger(__name__)

Sink = Callable[[str], None]


def _log_sink(line: str) -> None:
    LOGGER.info("observer.reacted", extra={"event": "observer.reacted", "line": line})


def format_reaction(label: str, event: Event) -> str:
    return f"{label}: Reacted to the event. Event Name: {event.name} Event: {event.payload}"


class EchoObserver:
    """React to every event by writing one line to the sink."""

    def __init__(self, label: str | None = None, sink: Sink | None = None) -> None:
        self.label = label or type(self).__name__
        self._sink = sink or _log_sink

    def react(self, event: Event) -> None:
        self._sink(format_reaction(self.label, event))


class TagFilterObserver(EchoObserver):
    """React only to events whose payload prefix matches ``tag``.

    The payload is split on ``delimiter`` (``"Vessel:1222"`` has tag
    ``Vessel``). Matching ignores case; other events are skipped silently.
    """

    tag = ""

    def __init__(
        self,
        tag: str | None = None,
        *,
        delimiter: str = ":",
        label: str | None = None,
        sink: Sink | None = None,
    ) -> None:
        super().__init__(label=label, sink=sink)
        self.tag = (self.tag if tag is None else tag).strip()
        if not self.tag:
            raise ValueError("TagFilterObserver requires a non-empty tag.")
        if not delimiter:
            raise ValueError("delimiter must not be empty.")
        self.delimiter = delimiter

    def matches(self, event: Event) -> bool:
        return event.tag(self.delimiter).strip().casefold() == self.tag.casefold()

    def react(self, event: Event) -> None:
        if not self.matches(event):
            return
        super().react(event)


class VesselObserver(TagFilterObserver):
    tag = "Vessel"


class ContainerObserver(TagFilterObserver):
    tag = "Container"


class RecordingObserver:
    """Keep every delivered event in memory."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def react(self, event: Event) -> None:
        self.events.append(event)

    def clear(self) -> None:
        self.events.clear()
