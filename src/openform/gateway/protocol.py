from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from openform.models.form import FormDefinition
    from openform.models.question import AnswerValue, FileReference
    from openform.player.upload import UploadFile


@runtime_checkable
class FormRepository(Protocol):
    def fetch_form(self, slug: str) -> FormDefinition: ...


@runtime_checkable
class SubmissionGateway(Protocol):
    """Persists one finished answer set. Raises GatewayError on failure."""

    def submit(self, form_id: str, answers: dict[str, AnswerValue]) -> None: ...


@runtime_checkable
class FileStorage(Protocol):
    """Uploads a file and returns where it can be fetched.

    Raises UploadError on failure, or StorageNotConfiguredError when no
    storage is available at all.
    """

    def upload(self, file: UploadFile) -> FileReference: ...
