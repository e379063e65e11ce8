from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Callable

import typer
from prompt_toolkit import print_formatted_text, prompt as pt_prompt
from prompt_toolkit.formatted_text import FormattedText

from openform.catalog.registry import commits_on_change
from openform.models.question import FileReference, QuestionType
from openform.player.navigation import BackPressed, ContinuePressed, ValueChanged
from openform.player.surfaces import SurfaceInputError
from openform.player.upload import UploadFile
from openform.player.views import CompletedView, EmptyView, QuestionView, render
from openform.themes.presets import get_theme

if TYPE_CHECKING:
    from openform.player.controller import NavigationController
    from openform.player.session import SessionState
    from openform.themes.presets import Theme

Reader = Callable[[str], str | None]

HELP_TEXT = "Enter submits, ':back' goes back, ':clear' clears, ':file PATH' uploads, ':quit' leaves"


def _choice_key(index: int) -> str:
    return chr(ord("A") + index)


class ConsoleHost:
    """Plays a form in the terminal, one prompt per question."""

    def __init__(
        self,
        controller: NavigationController,
        theme: Theme | None = None,
        reader: Reader | None = None,
        writer: Callable[[FormattedText], None] | None = None,
    ) -> None:
        self._controller = controller
        self._theme = theme or get_theme(controller.form.theme)
        self._reader = reader or self._prompt
        self._writer = writer or print_formatted_text

    def run(self) -> SessionState:
        self._say(self._controller.form.title or "Untitled form", bold=True)
        self._say(HELP_TEXT, muted=True)
        while True:
            view = render(self._controller)
            if isinstance(view, CompletedView):
                self._say(view.message, bold=True)
                self._say(view.detail, muted=True)
                return self._controller.state
            if isinstance(view, EmptyView):
                self._say(view.message, muted=True)
                return self._controller.state

            self._show_question(view)
            line = self._reader(f"{view.action_label} > ")
            if line is None or line.strip() == ":quit":
                return self._controller.state
            try:
                self._dispatch(line, view)
            except SurfaceInputError as e:
                self._say(str(e), error=True)

    def _dispatch(self, line: str, view: QuestionView) -> None:
        text = line.strip()
        if text == ":back":
            self._controller.handle(BackPressed())
            return
        if text == ":clear":
            self._controller.handle(ValueChanged(value=None))
            return
        if text.startswith(":file "):
            path = Path(text[6:].strip()).expanduser()
            try:
                file = UploadFile.from_path(path)
            except OSError as e:
                raise SurfaceInputError(f"Failed to read file {path}: {e.strerror or e}") from e
            self._controller.upload_file(file)
            return
        if text == "":
            self._controller.handle(ContinuePressed())
            return

        self._controller.handle(ValueChanged(value=self._parse(text, view)))
        if not commits_on_change(view.type):
            self._controller.handle(ContinuePressed())

    def _parse(self, text: str, view: QuestionView) -> object:
        if view.type == QuestionType.CHECKBOXES:
            return [self._resolve_choice(part.strip(), view.choices) for part in text.split(",") if part.strip()]
        if view.type in (QuestionType.DROPDOWN, QuestionType.YES_NO):
            return self._resolve_choice(text, view.choices)
        if view.type == QuestionType.FILE_UPLOAD:
            raise SurfaceInputError("Use ':file PATH' to attach a file")
        return text

    def _resolve_choice(self, text: str, choices: list[str]) -> str:
        """Map typed text to an option.

        A single letter is the option key shown in brackets, and wins over an
        option that merely starts with that letter. Full option text is
        matched case-insensitively; a first letter is the last resort.
        """
        upper = text.upper()
        for index, choice in enumerate(choices):
            if upper == _choice_key(index) and len(text) == 1:
                return choice
        for choice in choices:
            if upper == choice.upper() or upper == choice[:1].upper():
                return choice
        return text

    def _show_question(self, view: QuestionView) -> None:
        if view.notice:
            self._say(view.notice, error=True)
        marker = " *" if view.required else ""
        self._say(f"{view.number} -> {view.title}{marker}", bold=True)
        if view.description:
            self._say(view.description, muted=True)
        if view.type in (QuestionType.DROPDOWN, QuestionType.CHECKBOXES, QuestionType.YES_NO):
            selected = view.value if isinstance(view.value, list) else [view.value]
            for index, choice in enumerate(view.choices):
                mark = "x" if choice in selected else _choice_key(index)
                self._say(f"  [{mark}] {choice}")
            if view.type == QuestionType.CHECKBOXES:
                self._say("Select all that apply by letter or name (comma separated)", muted=True)
            else:
                self._say("Choose by letter or name", muted=True)
        elif view.type in (QuestionType.RATING, QuestionType.OPINION_SCALE):
            self._say(f"  {view.choices[0]}-{view.choices[-1]}" if view.choices else "")
        elif isinstance(view.value, FileReference):
            self._say(f"  {view.value.name} ({view.value.size / 1024:.1f} KB)")
        elif view.placeholder and view.value in (None, ""):
            self._say(f"  {view.placeholder}", muted=True)
        if view.value not in (None, "") and view.type not in (
            QuestionType.DROPDOWN,
            QuestionType.CHECKBOXES,
            QuestionType.YES_NO,
            QuestionType.FILE_UPLOAD,
        ):
            self._say(f"  current: {view.value}", muted=True)
        if view.upload_error:
            self._say(view.upload_error, error=True)
        if view.error:
            self._say(view.error, error=True)

    def _say(self, text: str, *, bold: bool = False, muted: bool = False, error: bool = False) -> None:
        if error:
            style = "fg:#EF4444"
        elif muted:
            style = f"fg:{self._theme.accent_color}"
        else:
            style = f"fg:{self._theme.primary_color}"
        if bold:
            style += " bold"
        self._writer(FormattedText([(style, text)]))

    def _prompt(self, message: str) -> str | None:
        try:
            if self._controller.current_question is not None and (
                self._controller.current_question.type == QuestionType.LONG_TEXT
            ):
                # Multi-line answers: Esc+Enter submits.
                return pt_prompt(message, multiline=True)
            return pt_prompt(message)
        except (EOFError, KeyboardInterrupt):
            return None


def read_plain_line(message: str) -> str | None:
    try:
        return input(message)
    except (EOFError, KeyboardInterrupt):
        return None


def echo_plain(text: FormattedText) -> None:
    typer.echo("".join(fragment[1] for fragment in text))
