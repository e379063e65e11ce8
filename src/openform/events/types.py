from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class Event(BaseModel):
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    event_type: str


class SessionStarted(Event):
    event_type: str = "SessionStarted"
    form_id: str
    question_count: int = 0


class QuestionChanged(Event):
    event_type: str = "QuestionChanged"
    form_id: str
    question_id: str
    index: int
    direction: int = 0


class AnswerRecorded(Event):
    event_type: str = "AnswerRecorded"
    question_id: str
    question_type: str = ""
    cleared: bool = False


class ValidationFailed(Event):
    event_type: str = "ValidationFailed"
    question_id: str
    message: str = ""


class SubmissionStarted(Event):
    event_type: str = "SubmissionStarted"
    form_id: str
    answer_count: int = 0


class SubmissionCompleted(Event):
    event_type: str = "SubmissionCompleted"
    form_id: str


class SubmissionFailed(Event):
    event_type: str = "SubmissionFailed"
    form_id: str
    error: str = ""


class UploadFailed(Event):
    event_type: str = "UploadFailed"
    question_id: str
    error: str = ""


EVENT_TYPE_MAP: dict[str, type[Event]] = {
    "SessionStarted": SessionStarted,
    "QuestionChanged": QuestionChanged,
    "AnswerRecorded": AnswerRecorded,
    "ValidationFailed": ValidationFailed,
    "SubmissionStarted": SubmissionStarted,
    "SubmissionCompleted": SubmissionCompleted,
    "SubmissionFailed": SubmissionFailed,
    "UploadFailed": UploadFailed,
}
