from __future__ import annotations

from openform.player.navigation import KeyPressed, ValueChanged, WheelGate, WheelScrolled


def _tick(delta: float, at: float) -> WheelScrolled:
    return WheelScrolled(delta_y=delta, timestamp_ms=at)


class TestWheelGate:
    def test_first_large_tick_passes(self) -> None:
        assert WheelGate().allow(_tick(60, 0))

    def test_threshold_is_inclusive(self) -> None:
        gate = WheelGate()
        assert gate.allow(_tick(-50, 0))

    def test_below_threshold(self) -> None:
        assert not WheelGate().allow(_tick(49.9, 0))

    def test_cooldown_measured_from_last_accepted_tick(self) -> None:
        gate = WheelGate(cooldown_ms=500)
        assert gate.allow(_tick(100, 1000))
        assert not gate.allow(_tick(100, 1300))
        assert not gate.allow(_tick(100, 1499))
        assert gate.allow(_tick(100, 1500))

    def test_rejected_ticks_do_not_extend_cooldown(self) -> None:
        gate = WheelGate(cooldown_ms=500)
        gate.allow(_tick(100, 0))
        for t in range(100, 500, 100):
            gate.allow(_tick(100, t))
        assert gate.allow(_tick(100, 500))


def test_wheel_timestamp_defaults_to_clock() -> None:
    first = WheelScrolled(delta_y=1)
    second = WheelScrolled(delta_y=1)
    assert second.timestamp_ms >= first.timestamp_ms


def test_event_defaults() -> None:
    key = KeyPressed(key="Enter")
    assert (key.shift, key.ctrl, key.meta) == (False, False, False)
    assert ValueChanged().value is None
