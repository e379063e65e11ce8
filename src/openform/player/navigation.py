from __future__ import annotations

import time
from typing import Any, Union

from pydantic import BaseModel, Field


def _now_ms() -> float:
    return time.monotonic() * 1000


class ValueChanged(BaseModel):
    """The respondent edited the current question's control."""

    value: Any = None


class ContinuePressed(BaseModel):
    pass


class BackPressed(BaseModel):
    pass


class KeyPressed(BaseModel):
    key: str
    shift: bool = False
    ctrl: bool = False
    meta: bool = False


class WheelScrolled(BaseModel):
    delta_y: float
    timestamp_ms: float = Field(default_factory=_now_ms)
    over_text_area: bool = False


NavigationEvent = Union[ValueChanged, ContinuePressed, BackPressed, KeyPressed, WheelScrolled]


class WheelGate:
    """Turns a stream of wheel ticks into at most one navigation per gesture.

    A tick is dropped if it arrives within ``cooldown_ms`` of the last accepted
    tick or if its magnitude is below ``delta_threshold``.
    """

    def __init__(self, cooldown_ms: float = 500, delta_threshold: float = 50) -> None:
        self._cooldown_ms = cooldown_ms
        self._delta_threshold = delta_threshold
        self._last_accepted_ms: float | None = None

    def allow(self, event: WheelScrolled) -> bool:
        if self._last_accepted_ms is not None and event.timestamp_ms - self._last_accepted_ms < self._cooldown_ms:
            return False
        if abs(event.delta_y) < self._delta_threshold:
            return False
        self._last_accepted_ms = event.timestamp_ms
        return True
