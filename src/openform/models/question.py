from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field


class QuestionType(str, Enum):
    SHORT_TEXT = "short_text"
    LONG_TEXT = "long_text"
    DROPDOWN = "dropdown"
    CHECKBOXES = "checkboxes"
    EMAIL = "email"
    PHONE = "phone"
    NUMBER = "number"
    DATE = "date"
    RATING = "rating"
    OPINION_SCALE = "opinion_scale"
    YES_NO = "yes_no"
    FILE_UPLOAD = "file_upload"
    URL = "url"


class FileReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: str = ""
    size: int = 0
    url: str


class QuestionDefinition(BaseModel):
    """A single question of a form, immutable once a respondent starts."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    type: QuestionType
    title: str = ""
    description: str = ""
    required: bool = False
    options: list[str] = Field(default_factory=list)
    min_value: int | None = Field(default=None, alias="minValue")
    max_value: int | None = Field(default=None, alias="maxValue")
    allowed_file_types: list[str] = Field(default_factory=list, alias="allowedFileTypes")
    max_file_size: int | None = Field(default=None, alias="maxFileSize")
    placeholder: str = ""


AnswerValue = Union[str, int, float, bool, list[str], FileReference]


def dump_answers(answers: dict[str, AnswerValue]) -> dict[str, Any]:
    """Convert answers to plain JSON-compatible data."""
    result: dict[str, Any] = {}
    for question_id, value in answers.items():
        if isinstance(value, FileReference):
            result[question_id] = value.model_dump()
        elif isinstance(value, list):
            result[question_id] = list(value)
        else:
            result[question_id] = value
    return result
