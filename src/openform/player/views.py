from __future__ import annotations

from typing import TYPE_CHECKING, Any, Union

from pydantic import BaseModel, Field

from openform.models.question import QuestionType
from openform.player.session import PlayerPhase
from openform.player.upload import FileUploadSurface, UploadState

if TYPE_CHECKING:
    from openform.player.controller import NavigationController

UNTITLED_QUESTION = "Untitled question"
EMPTY_FORM_MESSAGE = "This form has no questions yet."
UNAVAILABLE_MESSAGE = "This form is not available."
RECORDED_MESSAGE = "Your response has been recorded."


class QuestionView(BaseModel):
    number: int
    total: int
    question_id: str
    type: QuestionType
    title: str
    description: str = ""
    required: bool = False
    placeholder: str = ""
    choices: list[str] = Field(default_factory=list)
    value: Any = None
    error: str | None = None
    upload_state: UploadState | None = None
    upload_error: str | None = None
    action_label: str = "OK"
    progress: float = 0.0
    can_go_back: bool = False
    notice: str | None = None


class CompletedView(BaseModel):
    message: str
    detail: str = RECORDED_MESSAGE


class EmptyView(BaseModel):
    message: str = EMPTY_FORM_MESSAGE


class UnavailableView(BaseModel):
    message: str = UNAVAILABLE_MESSAGE


View = Union[QuestionView, CompletedView, EmptyView, UnavailableView]


def render(controller: NavigationController) -> View:
    """Project the session onto what the respondent should currently see."""
    state = controller.state
    if state.phase == PlayerPhase.SUBMITTED:
        return CompletedView(message=controller.form.thank_you_message)
    question = controller.current_question
    if question is None:
        return EmptyView()

    total = len(controller.questions)
    surface = controller.surface(question.id)
    if state.phase == PlayerPhase.SUBMITTING:
        action = "Submitting..."
    elif controller.is_last_question:
        action = "Submit"
    else:
        action = "OK"

    upload_state = upload_error = None
    if isinstance(surface, FileUploadSurface):
        upload_state = surface.state
        upload_error = surface.error

    value = state.answers.get(question.id)
    return QuestionView(
        number=state.current_index + 1,
        total=total,
        question_id=question.id,
        type=question.type,
        title=question.title or UNTITLED_QUESTION,
        description=question.description,
        required=question.required,
        placeholder=question.placeholder,
        choices=surface.choices(),
        value=value,
        error=state.errors.get(question.id),
        upload_state=upload_state,
        upload_error=upload_error,
        action_label=action,
        progress=(state.current_index + 1) / total * 100,
        can_go_back=state.current_index > 0,
        notice=state.notice,
    )
