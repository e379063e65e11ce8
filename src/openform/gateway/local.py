from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from openform.gateway.exceptions import FormNotFoundError, GatewayError, StorageNotConfiguredError
from openform.models.form import FormDefinition, FormFileError, load_form_file
from openform.models.question import AnswerValue, dump_answers

if TYPE_CHECKING:
    from openform.models.question import FileReference
    from openform.player.upload import UploadFile

logger = logging.getLogger(__name__)

FORM_SUFFIXES = (".yaml", ".yml", ".json")


class LocalFormRepository:
    """Forms stored as YAML/JSON files in one directory."""

    def __init__(self, forms_dir: Path) -> None:
        self._forms_dir = forms_dir

    def fetch_form(self, slug: str) -> FormDefinition:
        for suffix in FORM_SUFFIXES:
            candidate = self._forms_dir / f"{slug}{suffix}"
            if candidate.is_file():
                return self._load(candidate)

        # Fall back to forms whose slug differs from their file name
        for path in self.form_files():
            form = self._load(path)
            if form.slug == slug:
                return form
        raise FormNotFoundError(f"No form with slug {slug!r} in {self._forms_dir}")

    def form_files(self) -> list[Path]:
        if not self._forms_dir.is_dir():
            return []
        return sorted(p for p in self._forms_dir.iterdir() if p.suffix in FORM_SUFFIXES and p.is_file())

    def _load(self, path: Path) -> FormDefinition:
        try:
            return load_form_file(path)
        except FormFileError as e:
            raise GatewayError(str(e)) from e


class LocalResponseStore:
    """Appends each submission as one JSON line per form."""

    def __init__(self, responses_dir: Path) -> None:
        self._responses_dir = responses_dir

    def submit(self, form_id: str, answers: dict[str, AnswerValue]) -> None:
        record = {
            "id": str(uuid.uuid4()),
            "form_id": form_id,
            "answers": dump_answers(answers),
            "submitted_at": datetime.now(timezone.utc).isoformat(),
        }
        path = self.responses_path(form_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "a") as f:
                f.write(json.dumps(record) + "\n")
        except OSError as e:
            raise GatewayError(f"Cannot write response to {path}: {e}") from e
        logger.info("Stored response %s in %s", record["id"], path)

    def responses_path(self, form_id: str) -> Path:
        return self._responses_dir / f"{form_id}.jsonl"

    def list_responses(self, form_id: str) -> list[dict]:
        path = self.responses_path(form_id)
        if not path.is_file():
            return []
        return [json.loads(line) for line in path.read_text().splitlines() if line.strip()]


class UnconfiguredFileStorage:
    """No remote storage; the upload surface falls back to inline data URLs."""

    def upload(self, file: UploadFile) -> FileReference:
        raise StorageNotConfiguredError("File storage is not configured")
