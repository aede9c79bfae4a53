"""Tests for the Tk after()-based timer host, using a fake root."""

from typing import Callable

import pytest

from freeflow.gui.host import TkTimerHost


class FakeRoot:
    """Records after() calls and fires them on demand."""

    def __init__(self) -> None:
        self.scheduled: dict[str, tuple[int, Callable[[], None]]] = {}
        self.cancelled: list[str] = []
        self._next = 0

    def after(self, ms: int, func: Callable[[], None]) -> str:
        self._next += 1
        after_id = f"after#{self._next}"
        self.scheduled[after_id] = (ms, func)
        return after_id

    def after_cancel(self, after_id: str) -> None:
        self.cancelled.append(after_id)
        self.scheduled.pop(after_id, None)

    def fire_all(self) -> None:
        for after_id in list(self.scheduled):
            _, func = self.scheduled.pop(after_id)
            func()


@pytest.fixture
def root() -> FakeRoot:
    return FakeRoot()


class TestTkTimerHost:
    def test_delay_converted_to_ms(self, root: FakeRoot) -> None:
        host = TkTimerHost(root)
        host.call_later(1.5, lambda: None)
        ((ms, _),) = root.scheduled.values()
        assert ms == 1500

    def test_zero_delay_uses_one_ms(self, root: FakeRoot) -> None:
        host = TkTimerHost(root)
        host.call_later(0, lambda: None)
        ((ms, _),) = root.scheduled.values()
        assert ms == 1

    def test_time_scale_shortens_wait(self, root: FakeRoot) -> None:
        host = TkTimerHost(root, time_scale=10.0)
        host.call_later(5.0, lambda: None)
        ((ms, _),) = root.scheduled.values()
        assert ms == 500

    def test_callback_runs(self, root: FakeRoot) -> None:
        host = TkTimerHost(root)
        fired: list[bool] = []
        handle = host.call_later(0.1, lambda: fired.append(True))
        root.fire_all()
        assert fired == [True]
        assert handle.fired

    def test_cancel_releases_after(self, root: FakeRoot) -> None:
        host = TkTimerHost(root)
        fired: list[bool] = []
        handle = host.call_later(0.1, lambda: fired.append(True))
        assert handle.cancel() is True
        assert root.cancelled == ["after#1"]
        root.fire_all()
        assert fired == []

    def test_invalid_time_scale(self, root: FakeRoot) -> None:
        with pytest.raises(ValueError):
            TkTimerHost(root, time_scale=0)
