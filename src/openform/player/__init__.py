from openform.player.controller import NavigationController
from openform.player.navigation import (
    BackPressed,
    ContinuePressed,
    KeyPressed,
    NavigationEvent,
    ValueChanged,
    WheelGate,
    WheelScrolled,
)
from openform.player.session import PlayerPhase, SessionState
from openform.player.store import AnswerShapeError, AnswerStore
from openform.player.surfaces import SurfaceInputError, surface_for
from openform.player.upload import FileUploadSurface, UploadFile, UploadState

__all__ = [
    "AnswerShapeError",
    "AnswerStore",
    "BackPressed",
    "ContinuePressed",
    "FileUploadSurface",
    "KeyPressed",
    "NavigationController",
    "NavigationEvent",
    "PlayerPhase",
    "SessionState",
    "SurfaceInputError",
    "UploadFile",
    "UploadState",
    "ValueChanged",
    "WheelGate",
    "WheelScrolled",
    "surface_for",
]
