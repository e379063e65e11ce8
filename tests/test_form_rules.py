from __future__ import annotations

from pathlib import Path

import pytest

from openform.models.diagnostics import Severity
from openform.models.form import FormDefinition, FormFileError, FormStatus, load_form_file
from openform.models.question import QuestionDefinition, QuestionType
from openform.validation.form_rules import (
    choice_options,
    has_questions,
    scale_bounds,
    titled,
    unique_ids,
)
from openform.validation.validator import FormValidationError, validate_form, validate_form_or_raise

FIXTURES = Path(__file__).parent / "fixtures"


def _form(*questions: QuestionDefinition) -> FormDefinition:
    return FormDefinition(id="f", title="F", questions=list(questions))


class TestLoadFormFile:
    def test_loads_published_form(self) -> None:
        form = load_form_file(FIXTURES / "forms" / "feedback.yaml")
        assert form.id == "form-feedback"
        assert form.slug == "feedback"
        assert form.status == FormStatus.PUBLISHED
        assert form.thank_you_message == "Thanks for the feedback!"
        score = form.questions[3]
        assert (score.min_value, score.max_value) == (0, 10)

    def test_defaults(self) -> None:
        form = load_form_file(FIXTURES / "forms" / "draft.yaml")
        assert form.thank_you_message == "Thank you!"
        assert form.theme == "minimal"
        assert not form.is_published

    def test_explicit_slug_kept(self) -> None:
        assert load_form_file(FIXTURES / "forms" / "renamed-file.yaml").slug == "signup"

    def test_yaml_error(self) -> None:
        with pytest.raises(FormFileError, match="Cannot parse"):
            load_form_file(FIXTURES / "lint" / "not-yaml.yaml")

    def test_unknown_question_type(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("questions:\n  - id: a\n    type: slider\n")
        with pytest.raises(FormFileError, match="Invalid form definition"):
            load_form_file(path)

    def test_non_mapping(self, tmp_path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(FormFileError, match="mapping"):
            load_form_file(path)


def test_has_questions() -> None:
    diagnostics = has_questions(_form())
    assert [d.severity for d in diagnostics] == [Severity.ERROR]
    assert has_questions(_form(QuestionDefinition(id="a", type=QuestionType.DATE, title="A"))) == []


def test_unique_ids() -> None:
    form = _form(
        QuestionDefinition(id="a", type=QuestionType.SHORT_TEXT, title="A"),
        QuestionDefinition(id="a", type=QuestionType.EMAIL, title="B"),
    )
    diagnostics = unique_ids(form)
    assert len(diagnostics) == 1
    assert diagnostics[0].question_id == "a"
    assert "2 times" in diagnostics[0].message


def test_choice_options() -> None:
    form = _form(
        QuestionDefinition(id="empty", type=QuestionType.DROPDOWN, title="E"),
        QuestionDefinition(id="dup", type=QuestionType.CHECKBOXES, title="D", options=["x", "x"]),
        QuestionDefinition(id="ok", type=QuestionType.DROPDOWN, title="O", options=["x"]),
    )
    diagnostics = choice_options(form)
    assert [(d.question_id, d.severity) for d in diagnostics] == [
        ("empty", Severity.ERROR),
        ("dup", Severity.WARNING),
    ]


def test_scale_bounds() -> None:
    form = _form(
        QuestionDefinition(id="r", type=QuestionType.RATING, title="R", min_value=3, max_value=2),
        QuestionDefinition(id="s", type=QuestionType.OPINION_SCALE, title="S", min_value=5, max_value=4),
        QuestionDefinition(id="z", type=QuestionType.OPINION_SCALE, title="Z", min_value=0, max_value=0),
    )
    assert [d.question_id for d in scale_bounds(form)] == ["s"]


def test_titled() -> None:
    form = _form(QuestionDefinition(id="a", type=QuestionType.SHORT_TEXT, title="  "))
    assert [d.severity for d in titled(form)] == [Severity.WARNING]


class TestValidator:
    def test_collects_all_errors(self) -> None:
        form = load_form_file(FIXTURES / "lint" / "broken.yaml")
        collection = validate_form(form)
        assert {d.rule for d in collection.errors} == {"unique_ids", "choice_options", "scale_bounds"}
        assert collection.for_question("pick")

    def test_raise_carries_diagnostics(self) -> None:
        form = load_form_file(FIXTURES / "lint" / "broken.yaml")
        with pytest.raises(FormValidationError) as exc_info:
            validate_form_or_raise(form)
        assert exc_info.value.diagnostics.has_errors
        assert "3 error(s)" in str(exc_info.value)

    def test_warnings_do_not_raise(self) -> None:
        form = load_form_file(FIXTURES / "lint" / "warnings.yaml")
        collection = validate_form_or_raise(form)
        assert not collection.has_errors
        assert {d.rule for d in collection.warnings} == {"choice_options", "titled"}

    def test_diagnostic_format(self) -> None:
        collection = validate_form(_form())
        assert collection.errors[0].format() == "ERROR: [has_questions] Form has no questions"
