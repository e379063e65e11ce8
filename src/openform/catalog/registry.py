from __future__ import annotations

import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from openform.models.question import QuestionDefinition, QuestionType


class ValueShape(str, Enum):
    """Shape of the answer value a question type produces."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    CHOICE = "choice"
    MULTI_CHOICE = "multi_choice"
    INTEGER = "integer"
    FILE = "file"


class QuestionTypeInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: QuestionType
    label: str
    description: str
    shape: ValueShape
    commits_on_change: bool = False
    default_config: dict[str, Any] = Field(default_factory=dict)


_TEXT_PLACEHOLDER = "Type your answer here..."
_DEFAULT_OPTIONS = ["Option 1", "Option 2", "Option 3"]

QUESTION_TYPES: dict[QuestionType, QuestionTypeInfo] = {
    info.type: info
    for info in [
        QuestionTypeInfo(
            type=QuestionType.SHORT_TEXT,
            label="Short Text",
            description="A single line text input",
            shape=ValueShape.TEXT,
            default_config={"placeholder": _TEXT_PLACEHOLDER},
        ),
        QuestionTypeInfo(
            type=QuestionType.LONG_TEXT,
            label="Long Text",
            description="A multi-line text area",
            shape=ValueShape.TEXT,
            default_config={"placeholder": _TEXT_PLACEHOLDER},
        ),
        QuestionTypeInfo(
            type=QuestionType.DROPDOWN,
            label="Dropdown",
            description="Select one option from a list",
            shape=ValueShape.CHOICE,
            commits_on_change=True,
            default_config={"options": _DEFAULT_OPTIONS},
        ),
        QuestionTypeInfo(
            type=QuestionType.CHECKBOXES,
            label="Checkboxes",
            description="Select multiple options from a list",
            shape=ValueShape.MULTI_CHOICE,
            default_config={"options": _DEFAULT_OPTIONS},
        ),
        QuestionTypeInfo(
            type=QuestionType.EMAIL,
            label="Email",
            description="An email address input",
            shape=ValueShape.TEXT,
            default_config={"placeholder": "name@example.com"},
        ),
        QuestionTypeInfo(
            type=QuestionType.PHONE,
            label="Phone",
            description="A phone number input",
            shape=ValueShape.TEXT,
            default_config={"placeholder": "+1 (555) 000-0000"},
        ),
        QuestionTypeInfo(
            type=QuestionType.NUMBER,
            label="Number",
            description="A numeric input",
            shape=ValueShape.NUMBER,
            default_config={"placeholder": "0"},
        ),
        QuestionTypeInfo(
            type=QuestionType.DATE,
            label="Date",
            description="A date picker",
            shape=ValueShape.DATE,
        ),
        QuestionTypeInfo(
            type=QuestionType.RATING,
            label="Rating",
            description="A star rating (1-5)",
            shape=ValueShape.INTEGER,
            default_config={"min_value": 1, "max_value": 5},
        ),
        QuestionTypeInfo(
            type=QuestionType.OPINION_SCALE,
            label="Opinion Scale",
            description="A numeric scale (1-10)",
            shape=ValueShape.INTEGER,
            commits_on_change=True,
            default_config={"min_value": 1, "max_value": 10},
        ),
        QuestionTypeInfo(
            type=QuestionType.YES_NO,
            label="Yes / No",
            description="A simple yes or no choice",
            shape=ValueShape.CHOICE,
            commits_on_change=True,
        ),
        QuestionTypeInfo(
            type=QuestionType.FILE_UPLOAD,
            label="File Upload",
            description="Upload images or PDFs",
            shape=ValueShape.FILE,
            default_config={
                "allowed_file_types": ["image/*", "application/pdf"],
                "max_file_size": 10,
            },
        ),
        QuestionTypeInfo(
            type=QuestionType.URL,
            label="Website URL",
            description="A URL input",
            shape=ValueShape.TEXT,
            default_config={"placeholder": "https://example.com"},
        ),
    ]
}


def get_question_type_info(question_type: QuestionType | str) -> QuestionTypeInfo:
    return QUESTION_TYPES[QuestionType(question_type)]


def commits_on_change(question_type: QuestionType | str) -> bool:
    return get_question_type_info(question_type).commits_on_change


def create_default_question(question_type: QuestionType | str) -> QuestionDefinition:
    """Build a blank question of the given type with its catalog defaults."""
    info = get_question_type_info(question_type)
    config = {key: list(value) if isinstance(value, list) else value for key, value in info.default_config.items()}
    return QuestionDefinition(
        id=str(uuid.uuid4()),
        type=info.type,
        title="",
        description="",
        required=False,
        **config,
    )
