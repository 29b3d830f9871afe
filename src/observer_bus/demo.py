"""Demo scenarios that exercise the subscribe/publish/unsubscribe path."""

from __future__ import annotations

from collections.abc import Callable

from rich.console import Console

from .events.bus import EventBus
from .observers import ContainerObserver, EchoObserver, Sink, VesselObserver

SCENARIOS = ("classic", "tags")


def console_sink(console: Console) -> Sink:
    def _write(line: str) -> None:
        console.print(line, style="green", highlight=False)

    return _write


def run_classic(bus: EventBus, console: Console) -> None:
    """Two unconditional observers; the second leaves before the last action."""
    sink = console_sink(console)
    observer_a = EchoObserver("ObserverA", sink=sink)
    observer_b = EchoObserver("ObserverB", sink=sink)

    bus.subscribe(observer_a)
    console.print("Bus: Attached an observer.", style="dim")
    bus.subscribe(observer_b)
    console.print("Bus: Attached an observer.", style="dim")

    for _ in range(2):
        console.print("Bus: Notifying observers...", style="dim")
        bus.trigger_demo_action("vessel:1122")
        console.print(f"Bus: state is now {bus.state}", style="dim")

    bus.unsubscribe(observer_b)
    console.print("Bus: Detached an observer.", style="dim")

    console.print("Bus: Notifying observers...", style="dim")
    bus.trigger_demo_action("vessel:1122")
    console.print(f"Bus: state is now {bus.state}", style="dim")


def run_tags(bus: EventBus, console: Console) -> None:
    """Vessel and Container observers filtering on the payload prefix."""
    sink = console_sink(console)
    vessel = VesselObserver(sink=sink)
    container = ContainerObserver(sink=sink)
    bus.subscribe(vessel)
    bus.subscribe(container)

    for payload in ("Vessel:1222", "Container:1344"):
        console.print(f"Bus: publishing {payload}", style="dim")
        bus.trigger_demo_action(payload)

    bus.unsubscribe(container)
    console.print("Bus: publishing Vessel:4554", style="dim")
    bus.trigger_demo_action("Vessel:4554")


RUNNERS: dict[str, Callable[[EventBus, Console], None]] = {
    "classic": run_classic,
    "tags": run_tags,
}


def run_scenario(name: str, bus: EventBus, console: Console | None = None) -> None:
    if name not in RUNNERS:
        raise ValueError(f"Unknown scenario {name!r}; expected one of {SCENARIOS}.")
    RUNNERS[name](bus, console or Console())
