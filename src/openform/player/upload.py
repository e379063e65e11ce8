from __future__ import annotations

import base64
import logging
import mimetypes
from enum import Enum
from fnmatch import fnmatch
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from pydantic import BaseModel

from openform.gateway.exceptions import StorageNotConfiguredError, UploadError
from openform.models.question import FileReference
from openform.player.surfaces import FileValueSurface

if TYPE_CHECKING:
    from openform.gateway.protocol import FileStorage
    from openform.models.question import QuestionDefinition

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_SIZE_MB = 10


class UploadFile(BaseModel):
    name: str
    content_type: str = ""
    data: bytes = b""

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Path) -> UploadFile:
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(name=path.name, content_type=content_type, data=path.read_bytes())


class UploadState(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    UPLOADED = "uploaded"


def encode_inline(file: UploadFile) -> FileReference:
    """Produce a file reference whose url is a base64 data URL."""
    content_type = file.content_type or "application/octet-stream"
    encoded = base64.b64encode(file.data).decode("ascii")
    return FileReference(
        name=file.name,
        type=file.content_type,
        size=file.size,
        url=f"data:{content_type};base64,{encoded}",
    )


class FileUploadSurface(FileValueSurface):
    """Upload sub-state machine for one file_upload question.

    ``idle -> uploading -> uploaded`` on success. A failed upload records an
    inline ``error`` and drops back to ``idle``; it never touches the
    session's validation errors. Each selection gets a ticket, and completions
    for anything but the newest ticket are discarded.
    """

    def __init__(
        self,
        question: QuestionDefinition,
        storage: FileStorage | None = None,
        on_value: Callable[[FileReference | None], None] | None = None,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(question)
        self._storage = storage
        self._on_value = on_value
        self._on_error = on_error
        self._ticket = 0
        self.state = UploadState.IDLE
        self.error: str | None = None

    def select(self, file: UploadFile) -> None:
        ticket = self.begin(file)
        if ticket is None:
            return
        if self._storage is None:
            self.complete(ticket, encode_inline(file))
            return
        try:
            reference = self._storage.upload(file)
        except StorageNotConfiguredError:
            logger.info("File storage not configured, encoding %s inline", file.name)
            reference = encode_inline(file)
        except UploadError as e:
            self.fail(ticket, str(e) or "Upload failed")
            return
        self.complete(ticket, reference)

    def begin(self, file: UploadFile) -> int | None:
        """Start a new upload, superseding any in flight. Returns its ticket."""
        self._ticket += 1
        self.error = None
        problem = self._check(file)
        if problem is not None:
            self.fail(self._ticket, problem)
            return None
        self.state = UploadState.UPLOADING
        return self._ticket

    def complete(self, ticket: int, reference: FileReference) -> bool:
        if ticket != self._ticket or self.state != UploadState.UPLOADING:
            logger.debug("Discarding stale upload result for %s", self.question.id)
            return False
        self.state = UploadState.UPLOADED
        self.error = None
        if self._on_value is not None:
            self._on_value(reference)
        return True

    def fail(self, ticket: int, message: str) -> bool:
        if ticket != self._ticket:
            return False
        logger.warning("Upload failed for question %s: %s", self.question.id, message)
        self.state = UploadState.IDLE
        self.error = message
        if self._on_error is not None:
            self._on_error(message)
        return True

    def remove(self) -> None:
        self._ticket += 1
        self.state = UploadState.IDLE
        self.error = None
        if self._on_value is not None:
            self._on_value(None)

    def _check(self, file: UploadFile) -> str | None:
        limit_mb = self.question.max_file_size or DEFAULT_MAX_FILE_SIZE_MB
        if file.size > limit_mb * 1024 * 1024:
            return f"File is larger than {limit_mb}MB"
        patterns = self.question.allowed_file_types
        if patterns and not any(fnmatch(file.content_type, p) for p in patterns):
            return f"Unsupported file type: {file.content_type or 'unknown'}"
        return None
