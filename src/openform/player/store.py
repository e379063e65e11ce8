from __future__ import annotations

from typing import Iterator

from openform.catalog.registry import ValueShape, get_question_type_info
from openform.models.question import AnswerValue, FileReference, QuestionDefinition


class AnswerShapeError(TypeError):
    pass


def _matches_shape(shape: ValueShape, value: AnswerValue) -> bool:
    if shape in (ValueShape.TEXT, ValueShape.DATE, ValueShape.CHOICE):
        return isinstance(value, str)
    if shape == ValueShape.NUMBER:
        if isinstance(value, bool):
            return False
        return isinstance(value, (int, float)) or value == ""
    if shape == ValueShape.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if shape == ValueShape.MULTI_CHOICE:
        return isinstance(value, list) and all(isinstance(v, str) for v in value)
    if shape == ValueShape.FILE:
        return isinstance(value, FileReference)
    raise AnswerShapeError(f"Unhandled value shape: {shape}")


class AnswerStore:
    """Answers of one form-filling session, keyed by question id.

    Only ids of the session's questions are accepted, and each value must have
    the shape the owning question's type produces. A missing key means the
    question is unanswered; that is distinct from an empty string.
    """

    def __init__(self, questions: list[QuestionDefinition]) -> None:
        self._questions = {q.id: q for q in questions}
        self._values: dict[str, AnswerValue] = {}

    def set(self, question_id: str, value: AnswerValue) -> None:
        question = self._questions.get(question_id)
        if question is None:
            raise AnswerShapeError(f"Unknown question id: {question_id!r}")
        shape = get_question_type_info(question.type).shape
        if not _matches_shape(shape, value):
            raise AnswerShapeError(
                f"Question {question_id!r} ({question.type.value}) cannot hold {type(value).__name__} value {value!r}"
            )
        self._values[question_id] = list(value) if isinstance(value, list) else value

    def get(self, question_id: str) -> AnswerValue | None:
        value = self._values.get(question_id)
        if isinstance(value, list):
            return list(value)
        return value

    def clear(self, question_id: str) -> None:
        self._values.pop(question_id, None)

    def snapshot(self) -> dict[str, AnswerValue]:
        return {k: list(v) if isinstance(v, list) else v for k, v in self._values.items()}

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)
