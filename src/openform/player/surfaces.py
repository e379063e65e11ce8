from __future__ import annotations

import datetime
from typing import Any

from openform.models.question import AnswerValue, FileReference, QuestionDefinition, QuestionType

DEFAULT_RATING_MAX = 5
DEFAULT_SCALE_MIN = 1
DEFAULT_SCALE_MAX = 10
YES_NO_CHOICES = ["Yes", "No"]


class SurfaceInputError(ValueError):
    """Raised for input a surface cannot turn into a value for its question."""


class InputSurface:
    """Normalises raw interaction into an answer value for one question.

    ``accept`` returns the value to store; ``None`` means "clear the answer".
    Surfaces never decide whether to advance: that is the catalog's
    ``commits_on_change`` flag, applied by the controller.
    """

    def __init__(self, question: QuestionDefinition) -> None:
        self.question = question

    def accept(self, raw: Any, current: AnswerValue | None) -> AnswerValue | None:
        raise NotImplementedError

    def choices(self) -> list[str]:
        return []


class TextSurface(InputSurface):
    def accept(self, raw: Any, current: AnswerValue | None) -> AnswerValue | None:
        if raw is None:
            return None
        if not isinstance(raw, str):
            raise SurfaceInputError(f"Expected text, got {type(raw).__name__}")
        return raw


class NumberSurface(InputSurface):
    def accept(self, raw: Any, current: AnswerValue | None) -> AnswerValue | None:
        if raw is None:
            return None
        if isinstance(raw, bool):
            raise SurfaceInputError("Expected a number")
        if isinstance(raw, (int, float)):
            return raw
        if not isinstance(raw, str):
            raise SurfaceInputError(f"Expected a number, got {type(raw).__name__}")
        text = raw.strip()
        if text == "":
            return ""
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise SurfaceInputError(f"Not a number: {raw!r}") from None
        if number != number or number in (float("inf"), float("-inf")):
            raise SurfaceInputError(f"Not a finite number: {raw!r}")
        return number


class DateSurface(InputSurface):
    def accept(self, raw: Any, current: AnswerValue | None) -> AnswerValue | None:
        if raw is None:
            return None
        if isinstance(raw, datetime.datetime):
            return raw.date().isoformat()
        if isinstance(raw, datetime.date):
            return raw.isoformat()
        if not isinstance(raw, str):
            raise SurfaceInputError(f"Expected a date, got {type(raw).__name__}")
        if raw == "":
            return ""
        try:
            return datetime.date.fromisoformat(raw.strip()).isoformat()
        except ValueError:
            raise SurfaceInputError(f"Not a date (YYYY-MM-DD): {raw!r}") from None


class DropdownSurface(InputSurface):
    def accept(self, raw: Any, current: AnswerValue | None) -> AnswerValue | None:
        if raw is None:
            return None
        if raw not in self.question.options:
            raise SurfaceInputError(f"{raw!r} is not one of the options")
        return raw

    def choices(self) -> list[str]:
        return list(self.question.options)


class CheckboxesSurface(InputSurface):
    """A single option toggles it; a list replaces the whole selection."""

    def accept(self, raw: Any, current: AnswerValue | None) -> AnswerValue | None:
        if raw is None:
            return None
        selected = list(current) if isinstance(current, list) else []
        if isinstance(raw, str):
            self._check(raw)
            if raw in selected:
                selected.remove(raw)
            else:
                selected.append(raw)
            return selected
        if isinstance(raw, (list, tuple)):
            result: list[str] = []
            for option in raw:
                self._check(option)
                if option not in result:
                    result.append(option)
            return result
        raise SurfaceInputError(f"Expected an option or a list of options, got {type(raw).__name__}")

    def _check(self, option: Any) -> None:
        if option not in self.question.options:
            raise SurfaceInputError(f"{option!r} is not one of the options")

    def choices(self) -> list[str]:
        return list(self.question.options)


class YesNoSurface(InputSurface):
    def accept(self, raw: Any, current: AnswerValue | None) -> AnswerValue | None:
        if raw is None:
            return None
        if isinstance(raw, bool):
            return "Yes" if raw else "No"
        if raw not in YES_NO_CHOICES:
            raise SurfaceInputError(f"Expected 'Yes' or 'No', got {raw!r}")
        return raw

    def choices(self) -> list[str]:
        return list(YES_NO_CHOICES)


class _IntegerRangeSurface(InputSurface):
    def bounds(self) -> tuple[int, int]:
        raise NotImplementedError

    def accept(self, raw: Any, current: AnswerValue | None) -> AnswerValue | None:
        if raw is None:
            return None
        if isinstance(raw, str):
            try:
                raw = int(raw.strip())
            except ValueError:
                raise SurfaceInputError(f"Expected a whole number, got {raw!r}") from None
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise SurfaceInputError(f"Expected a whole number, got {raw!r}")
        low, high = self.bounds()
        if not low <= raw <= high:
            raise SurfaceInputError(f"{raw} is outside {low}-{high}")
        return raw

    def choices(self) -> list[str]:
        low, high = self.bounds()
        return [str(n) for n in range(low, high + 1)]


class RatingSurface(_IntegerRangeSurface):
    def bounds(self) -> tuple[int, int]:
        high = self.question.max_value if self.question.max_value is not None else DEFAULT_RATING_MAX
        return (1, high)


class OpinionScaleSurface(_IntegerRangeSurface):
    def bounds(self) -> tuple[int, int]:
        low = self.question.min_value if self.question.min_value is not None else DEFAULT_SCALE_MIN
        high = self.question.max_value if self.question.max_value is not None else DEFAULT_SCALE_MAX
        return (low, high)


class FileValueSurface(InputSurface):
    """Accepts finished file references; uploading lives in FileUploadSurface."""

    def accept(self, raw: Any, current: AnswerValue | None) -> AnswerValue | None:
        if raw is None:
            return None
        if isinstance(raw, FileReference):
            return raw
        if isinstance(raw, dict):
            try:
                return FileReference.model_validate(raw)
            except ValueError as e:
                raise SurfaceInputError(f"Invalid file reference: {e}") from e
        raise SurfaceInputError(f"Expected a file reference, got {type(raw).__name__}")


SURFACE_TYPES: dict[QuestionType, type[InputSurface]] = {
    QuestionType.SHORT_TEXT: TextSurface,
    QuestionType.LONG_TEXT: TextSurface,
    QuestionType.EMAIL: TextSurface,
    QuestionType.PHONE: TextSurface,
    QuestionType.URL: TextSurface,
    QuestionType.NUMBER: NumberSurface,
    QuestionType.DATE: DateSurface,
    QuestionType.DROPDOWN: DropdownSurface,
    QuestionType.CHECKBOXES: CheckboxesSurface,
    QuestionType.YES_NO: YesNoSurface,
    QuestionType.RATING: RatingSurface,
    QuestionType.OPINION_SCALE: OpinionScaleSurface,
    QuestionType.FILE_UPLOAD: FileValueSurface,
}


def surface_for(question: QuestionDefinition) -> InputSurface:
    surface_cls = SURFACE_TYPES.get(question.type)
    if surface_cls is None:
        raise SurfaceInputError(f"Unsupported question type: {question.type}")
    return surface_cls(question)
