from __future__ import annotations

import logging
from typing import Iterable

from tilematch.events.bus import EventBus

logger = logging.getLogger(__name__)


class EventTrace:
    """Logs payloads of selected bus events at DEBUG level.

    Keeps every payload in ``records`` as well, which makes it handy for
    inspecting the order of events in a test or a debugging session.
    """

    def __init__(self, event_bus: EventBus, names: Iterable[str]):
        self.records: list[tuple[str, dict]] = []
        for name in names:
            event_bus.subscribe(name, self._make_handler(name))

    def _make_handler(self, name: str):
        def handler(sender, **payload):
            self.records.append((name, payload))
            logger.debug("%s %s", name, payload)
        return handler

    def names(self) -> list[str]:
        return [name for name, _ in self.records]

    def clear(self) -> None:
        self.records.clear()
