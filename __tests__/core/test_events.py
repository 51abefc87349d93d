import asyncio

import pytest

from matomo_sdk.core.events import ErrorListeners


@pytest.mark.asyncio
async def test_emit_without_listeners_returns_false() -> None:
    listeners = ErrorListeners()

    assert await listeners.emit(404) is False


@pytest.mark.asyncio
async def test_emit_calls_sync_and_async_listeners_in_order() -> None:
    events: list[str] = []

    def sync_listener(payload: int | str) -> None:
        events.append(f"sync:{payload}")

    async def async_listener(payload: int | str) -> None:
        await asyncio.sleep(0)
        events.append(f"async:{payload}")

    listeners = ErrorListeners()
    listeners.add(sync_listener)
    listeners.add(async_listener)

    assert await listeners.emit(500) is True
    assert events == ["sync:500", "async:500"]


@pytest.mark.asyncio
async def test_removed_listener_is_not_called() -> None:
    events: list[int | str] = []
    listeners = ErrorListeners()
    listeners.add(events.append)
    listeners.remove(events.append)

    assert len(listeners) == 0
    assert await listeners.emit("boom") is False
    assert events == []


def test_remove_unknown_listener_is_noop() -> None:
    listeners = ErrorListeners()

    listeners.remove(print)

    assert len(listeners) == 0


def test_snapshot_is_a_copy() -> None:
    listeners = ErrorListeners()
    listeners.add(print)

    snapshot = listeners.snapshot()
    snapshot.clear()

    assert len(listeners) == 1
