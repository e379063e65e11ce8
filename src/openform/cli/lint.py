from __future__ import annotations

from pathlib import Path

import typer

from openform.models.form import FormFileError, load_form_file
from openform.validation.validator import FormValidationError, validate_form_or_raise


def lint(form_file: Path) -> None:
    """Check a form definition file before publishing it."""
    if not form_file.exists():
        typer.echo(f"Error: file not found: {form_file}")
        raise typer.Exit(code=1)

    try:
        form = load_form_file(form_file)
    except FormFileError as e:
        typer.echo(f"Parse error: {e}")
        raise typer.Exit(code=1)

    try:
        diagnostics = validate_form_or_raise(form)
    except FormValidationError as e:
        for d in e.diagnostics.diagnostics:
            typer.echo(f"  {d.format()}")
            if d.suggestion:
                typer.echo(f"    Suggestion: {d.suggestion}")
        raise typer.Exit(code=1)

    for d in diagnostics.warnings:
        typer.echo(f"  {d.format()}")

    typer.echo(f"Form: {form.title or form.id} ({form.status.value})")
    typer.echo(f"  Slug: {form.slug}")
    typer.echo(f"  Questions: {len(form.questions)}")
    for index, question in enumerate(form.questions, start=1):
        required = " *" if question.required else ""
        typer.echo(f"    {index}. [{question.type.value}] {question.title or '(untitled)'}{required}")
