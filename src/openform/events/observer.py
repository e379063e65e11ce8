from __future__ import annotations

import logging
from typing import Protocol

import typer

from openform.events.types import (
    Event,
    SubmissionCompleted,
    SubmissionFailed,
    SubmissionStarted,
    UploadFailed,
    ValidationFailed,
)

logger = logging.getLogger(__name__)


class EventObserver(Protocol):
    def on_event(self, event: Event) -> None: ...


class StdoutObserver:
    """Shows transient notifications (the respondent-facing toasts)."""

    def on_event(self, event: Event) -> None:
        if isinstance(event, SubmissionFailed):
            typer.echo(f"[!] Failed to submit response: {event.error}", err=True)
        elif isinstance(event, UploadFailed):
            typer.echo(f"[!] Upload failed: {event.error}", err=True)
        elif isinstance(event, SubmissionStarted):
            typer.echo("Submitting...")


class LoggingObserver:
    def on_event(self, event: Event) -> None:
        if isinstance(event, SubmissionCompleted):
            logger.info("Response recorded for form %s", event.form_id)
        elif isinstance(event, ValidationFailed):
            logger.debug("Validation failed for %s: %s", event.question_id, event.message)
        else:
            logger.debug("%s", event.event_type)
