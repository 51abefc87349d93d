from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Literal

logger = logging.getLogger(__name__)

TrackerEvent = Literal["error"]

type ErrorPayload = int | str
type ErrorListener = Callable[[ErrorPayload], None | Awaitable[None]]


@dataclass(slots=True, kw_only=True)
class ErrorListeners:
    _listeners: list[ErrorListener] = field(default_factory=list)

    def add(self, listener: ErrorListener) -> None:
        self._listeners.append(listener)

    def remove(self, listener: ErrorListener) -> None:
        # first matching registration only
        try:
            self._listeners.remove(listener)
        except ValueError:
            return

    def snapshot(self) -> list[ErrorListener]:
        return list(self._listeners)

    def __len__(self) -> int:
        return len(self._listeners)

    async def emit(self, payload: ErrorPayload) -> bool:
        """Broadcast ``payload`` to the listeners registered right now.

        Returns ``False`` without doing anything when nobody is listening.
        """
        listeners = self.snapshot()
        if not listeners:
            return False

        for listener in listeners:
            result = listener(payload)
            if inspect.isawaitable(result):
                await result

        logger.debug("Dispatched tracking error %r to %d listener(s)", payload, len(listeners))
        return True
