from __future__ import annotations

from collections import Counter

from openform.models.diagnostics import Diagnostic, Severity
from openform.models.form import FormDefinition
from openform.models.question import QuestionType

_CHOICE_TYPES = (QuestionType.DROPDOWN, QuestionType.CHECKBOXES)
_SCALE_TYPES = (QuestionType.RATING, QuestionType.OPINION_SCALE)


def has_questions(form: FormDefinition) -> list[Diagnostic]:
    if form.questions:
        return []
    return [
        Diagnostic(
            rule="has_questions",
            severity=Severity.ERROR,
            message="Form has no questions",
            suggestion="Add at least one question before publishing",
        )
    ]


def unique_ids(form: FormDefinition) -> list[Diagnostic]:
    counts = Counter(q.id for q in form.questions)
    return [
        Diagnostic(
            rule="unique_ids",
            severity=Severity.ERROR,
            message=f"Question id '{qid}' is used {count} times",
            question_id=qid,
            suggestion="Give every question its own id",
        )
        for qid, count in sorted(counts.items())
        if count > 1
    ]


def choice_options(form: FormDefinition) -> list[Diagnostic]:
    diagnostics = []
    for question in form.questions:
        if question.type not in _CHOICE_TYPES:
            continue
        if not question.options:
            diagnostics.append(
                Diagnostic(
                    rule="choice_options",
                    severity=Severity.ERROR,
                    message=f"{question.type.value} question has no options",
                    question_id=question.id,
                    suggestion="Add at least one option",
                )
            )
        elif len(set(question.options)) != len(question.options):
            diagnostics.append(
                Diagnostic(
                    rule="choice_options",
                    severity=Severity.WARNING,
                    message="Duplicate options cannot be told apart in answers",
                    question_id=question.id,
                )
            )
    return diagnostics


def scale_bounds(form: FormDefinition) -> list[Diagnostic]:
    diagnostics = []
    for question in form.questions:
        if question.type not in _SCALE_TYPES:
            continue
        high = question.max_value
        if high is None:
            continue
        # Ratings always start at one star.
        low = 1 if question.type == QuestionType.RATING or question.min_value is None else question.min_value
        if high < low:
            diagnostics.append(
                Diagnostic(
                    rule="scale_bounds",
                    severity=Severity.ERROR,
                    message=f"Scale maximum {high} is below minimum {low}",
                    question_id=question.id,
                    suggestion="Swap or fix minValue/maxValue",
                )
            )
    return diagnostics


def titled(form: FormDefinition) -> list[Diagnostic]:
    return [
        Diagnostic(
            rule="titled",
            severity=Severity.WARNING,
            message="Question has no title and will show as 'Untitled question'",
            question_id=question.id,
        )
        for question in form.questions
        if not question.title.strip()
    ]


ALL_RULES = [
    has_questions,
    unique_ids,
    choice_options,
    scale_bounds,
    titled,
]
