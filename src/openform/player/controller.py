from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from openform.catalog.registry import commits_on_change
from openform.events.dispatcher import EventDispatcher
from openform.gateway.errors import sanitize_error
from openform.gateway.exceptions import GatewayError
from openform.models.question import AnswerValue, QuestionDefinition, QuestionType
from openform.player.navigation import (
    BackPressed,
    ContinuePressed,
    KeyPressed,
    NavigationEvent,
    ValueChanged,
    WheelGate,
    WheelScrolled,
)
from openform.player.session import PlayerPhase, SessionState
from openform.player.store import AnswerStore
from openform.player.surfaces import InputSurface, SurfaceInputError, surface_for
from openform.player.upload import FileUploadSurface, UploadFile
from openform.validation.answers import validate_answer

if TYPE_CHECKING:
    from openform.config.settings import PlayerConfig
    from openform.gateway.protocol import FileStorage, SubmissionGateway
    from openform.models.form import FormDefinition

logger = logging.getLogger(__name__)

SUBMIT_FAILED_NOTICE = "Failed to submit response"


class NavigationController:
    """Walks one respondent through a form, one question at a time.

    All input (value edits, continue/back actions, keys, wheel ticks) goes
    through :meth:`handle`. The controller owns the :class:`SessionState`;
    callers read it through :attr:`state` and never mutate it directly.
    """

    def __init__(
        self,
        form: FormDefinition,
        gateway: SubmissionGateway,
        dispatcher: EventDispatcher | None = None,
        storage: FileStorage | None = None,
        player: PlayerConfig | None = None,
    ) -> None:
        self._form = form
        self._questions: list[QuestionDefinition] = list(form.questions)
        self._gateway = gateway
        self._storage = storage
        self._dispatcher = dispatcher or EventDispatcher()
        if player is not None:
            self._wheel_gate = WheelGate(player.wheel_cooldown_ms, player.wheel_delta_threshold)
        else:
            self._wheel_gate = WheelGate()
        self._surfaces: dict[str, InputSurface] = {}

        phase = PlayerPhase.ANSWERING if self._questions else PlayerPhase.EMPTY
        self._state = SessionState(answers=AnswerStore(self._questions), phase=phase)
        self._dispatcher.emit("SessionStarted", form_id=form.id, question_count=len(self._questions))

    @property
    def form(self) -> FormDefinition:
        return self._form

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def questions(self) -> list[QuestionDefinition]:
        return list(self._questions)

    @property
    def current_question(self) -> QuestionDefinition | None:
        if self._state.phase == PlayerPhase.EMPTY:
            return None
        return self._questions[self._state.current_index]

    @property
    def is_last_question(self) -> bool:
        return self._state.current_index == len(self._questions) - 1

    def handle(self, event: NavigationEvent) -> SessionState:
        if self._state.phase != PlayerPhase.ANSWERING:
            return self._state
        self._state.notice = None

        if isinstance(event, ValueChanged):
            self.set_answer(event.value)
        elif isinstance(event, ContinuePressed):
            self.advance()
        elif isinstance(event, BackPressed):
            self.retreat()
        elif isinstance(event, KeyPressed):
            self._handle_key(event)
        elif isinstance(event, WheelScrolled):
            self._handle_wheel(event)
        return self._state

    def set_answer(self, raw: Any) -> None:
        """Record a value for the current question.

        Types flagged ``commits_on_change`` in the catalog then advance
        immediately, skipping validation.
        """
        question = self.current_question
        if question is None or self._state.phase != PlayerPhase.ANSWERING:
            return
        surface = self.surface(question.id)
        value = surface.accept(raw, self._state.answers.get(question.id))
        self._record(question, value)
        if value is not None and commits_on_change(question.type):
            self.advance(skip_validation=True)

    def advance(self, skip_validation: bool = False) -> None:
        question = self.current_question
        if question is None or self._state.phase != PlayerPhase.ANSWERING:
            return
        if not skip_validation and not self._validate(question):
            return

        if self.is_last_question:
            self._submit()
            return

        self._state.current_index += 1
        self._state.direction = 1
        self._emit_question_changed()

    def retreat(self) -> None:
        if self._state.phase != PlayerPhase.ANSWERING or self._state.current_index == 0:
            return
        self._state.current_index -= 1
        self._state.direction = -1
        self._emit_question_changed()

    def dismiss_notice(self) -> None:
        self._state.notice = None

    def surface(self, question_id: str) -> InputSurface:
        """The input surface of a question, kept for the whole session."""
        surface = self._surfaces.get(question_id)
        if surface is not None:
            return surface
        question = next((q for q in self._questions if q.id == question_id), None)
        if question is None:
            raise KeyError(question_id)
        if question.type == QuestionType.FILE_UPLOAD:
            surface = FileUploadSurface(
                question,
                storage=self._storage,
                on_value=lambda value: self._record(question, value),
                on_error=lambda message: self._dispatcher.emit(
                    "UploadFailed", question_id=question.id, error=message
                ),
            )
        else:
            surface = surface_for(question)
        self._surfaces[question_id] = surface
        return surface

    def upload_file(self, file: UploadFile) -> None:
        question = self.current_question
        if question is None or self._state.phase != PlayerPhase.ANSWERING:
            return
        surface = self.surface(question.id)
        if not isinstance(surface, FileUploadSurface):
            raise SurfaceInputError(f"Question {question.id!r} does not accept files")
        surface.select(file)

    def _record(self, question: QuestionDefinition, value: AnswerValue | None) -> None:
        if self._state.phase in (PlayerPhase.SUBMITTING, PlayerPhase.SUBMITTED):
            return
        if value is None:
            self._state.answers.clear(question.id)
        else:
            self._state.answers.set(question.id, value)
        self._state.errors.pop(question.id, None)
        self._dispatcher.emit(
            "AnswerRecorded",
            question_id=question.id,
            question_type=question.type.value,
            cleared=value is None,
        )

    def _validate(self, question: QuestionDefinition) -> bool:
        message = validate_answer(question, self._state.answers.get(question.id))
        if message is not None:
            self._state.errors[question.id] = message
            self._dispatcher.emit("ValidationFailed", question_id=question.id, message=message)
            return False
        self._state.errors.pop(question.id, None)
        return True

    def _submit(self) -> None:
        self._state.phase = PlayerPhase.SUBMITTING
        answers = self._state.answers.snapshot()
        self._dispatcher.emit("SubmissionStarted", form_id=self._form.id, answer_count=len(answers))
        submitted = False
        try:
            self._gateway.submit(self._form.id, answers)
            submitted = True
        except GatewayError as e:
            error = sanitize_error(str(e))
            logger.warning("Submission for form %s failed: %s", self._form.id, error)
        finally:
            # Unexpected errors still propagate, but never leave the session stuck.
            self._state.phase = PlayerPhase.SUBMITTED if submitted else PlayerPhase.ANSWERING

        if not submitted:
            self._state.notice = SUBMIT_FAILED_NOTICE
            self._dispatcher.emit("SubmissionFailed", form_id=self._form.id, error=error)
            return
        logger.info("Submitted %d answer(s) for form %s", len(answers), self._form.id)
        self._dispatcher.emit("SubmissionCompleted", form_id=self._form.id)

    def _handle_key(self, event: KeyPressed) -> None:
        question = self.current_question
        if event.key == "Enter" and not event.shift:
            # Plain Enter belongs to the text area on long answers.
            if question is not None and question.type == QuestionType.LONG_TEXT:
                if event.ctrl or event.meta:
                    self.advance()
                return
            self.advance()
        elif event.key == "ArrowUp" or (event.key == "Tab" and event.shift):
            self.retreat()
        elif event.key == "ArrowDown":
            self.advance()

    def _handle_wheel(self, event: WheelScrolled) -> None:
        if event.over_text_area:
            return
        if not self._wheel_gate.allow(event):
            return
        if event.delta_y > 0:
            self.advance()
        else:
            self.retreat()

    def _emit_question_changed(self) -> None:
        question = self._questions[self._state.current_index]
        self._dispatcher.emit(
            "QuestionChanged",
            form_id=self._form.id,
            question_id=question.id,
            index=self._state.current_index,
            direction=self._state.direction,
        )
