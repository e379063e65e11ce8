from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Severity(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"


class Diagnostic(BaseModel):
    rule: str
    severity: Severity
    message: str
    question_id: str | None = None
    suggestion: str = ""

    def format(self) -> str:
        location = f" (question: {self.question_id})" if self.question_id else ""
        return f"{self.severity.value}: [{self.rule}] {self.message}{location}"


class DiagnosticCollection(BaseModel):
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def for_question(self, question_id: str) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.question_id == question_id]

    def extend(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics.extend(diagnostics)
