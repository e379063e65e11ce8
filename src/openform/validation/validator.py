from __future__ import annotations

from openform.models.diagnostics import DiagnosticCollection
from openform.models.form import FormDefinition
from openform.validation.form_rules import ALL_RULES


class FormValidationError(Exception):
    def __init__(self, diagnostics: DiagnosticCollection) -> None:
        self.diagnostics = diagnostics
        errors = diagnostics.errors
        messages = [f"  [{d.rule}] {d.message}" for d in errors]
        super().__init__(f"Form validation failed with {len(errors)} error(s):\n" + "\n".join(messages))


def validate_form(form: FormDefinition) -> DiagnosticCollection:
    collection = DiagnosticCollection()
    for rule in ALL_RULES:
        collection.extend(rule(form))
    return collection


def validate_form_or_raise(form: FormDefinition) -> DiagnosticCollection:
    collection = validate_form(form)
    if collection.has_errors:
        raise FormValidationError(collection)
    return collection
