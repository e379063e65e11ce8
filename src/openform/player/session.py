from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from openform.player.store import AnswerStore


class PlayerPhase(str, Enum):
    EMPTY = "empty"
    ANSWERING = "answering"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


@dataclass
class SessionState:
    answers: AnswerStore
    current_index: int = 0
    errors: dict[str, str] = field(default_factory=dict)
    direction: int = 0
    phase: PlayerPhase = PlayerPhase.ANSWERING
    notice: str | None = None  # transient, e.g. a failed submission

    @property
    def submitted(self) -> bool:
        return self.phase == PlayerPhase.SUBMITTED
