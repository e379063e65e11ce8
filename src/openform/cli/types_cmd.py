from __future__ import annotations

import typer

from openform.catalog.registry import QUESTION_TYPES


def types() -> None:
    """List the question types forms can use."""
    width = max(len(t.value) for t in QUESTION_TYPES)
    for info in QUESTION_TYPES.values():
        flags = " (commits on select)" if info.commits_on_change else ""
        typer.echo(f"  {info.type.value:<{width}}  {info.label} - {info.description}{flags}")
