from __future__ import annotations

from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from openform.models.question import QuestionDefinition


class FormStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    CLOSED = "closed"


class FormDefinition(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    description: str = ""
    slug: str = ""
    status: FormStatus = FormStatus.DRAFT
    theme: str = "minimal"
    questions: list[QuestionDefinition] = Field(default_factory=list)
    thank_you_message: str = "Thank you!"

    @property
    def is_published(self) -> bool:
        return self.status == FormStatus.PUBLISHED


class FormFileError(Exception):
    pass


def load_form_file(path: Path) -> FormDefinition:
    """Load a form definition from a YAML or JSON file."""
    try:
        raw = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise FormFileError(f"Cannot parse {path}: {e}") from e
    if not isinstance(raw, dict):
        raise FormFileError(f"Expected a mapping at the top of {path}")
    raw.setdefault("id", path.stem)
    raw.setdefault("slug", path.stem)
    try:
        return FormDefinition.model_validate(raw)
    except ValidationError as e:
        raise FormFileError(f"Invalid form definition in {path}:\n{e}") from e
