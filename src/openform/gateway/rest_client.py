from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from openform.gateway.errors import sanitize_error
from openform.gateway.exceptions import (
    FormNotFoundError,
    GatewayConnectionError,
    GatewayError,
    StorageNotConfiguredError,
    UploadError,
)
from openform.models.form import FormDefinition
from openform.models.question import AnswerValue, FileReference, dump_answers

if TYPE_CHECKING:
    from openform.player.upload import UploadFile


class RestBackendClient:
    """Forms, responses and uploads over a PostgREST-style HTTP API."""

    def __init__(
        self,
        base_url: str = "http://localhost:54321",
        api_key: str = "",
        upload_url: str = "",
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._upload_url = upload_url
        headers = {}
        if api_key:
            headers = {"apikey": api_key, "Authorization": f"Bearer {api_key}"}
        self._client = httpx.Client(base_url=self._base_url, headers=headers, timeout=timeout)

    def health_check(self) -> dict[str, Any]:
        try:
            response = self._client.get("/rest/v1/")
            response.raise_for_status()
            return {"status": "ok", "code": response.status_code}
        except httpx.ConnectError as e:
            raise GatewayConnectionError(
                sanitize_error(f"Cannot connect to backend at {self._base_url}: {e}")
            ) from e
        except httpx.HTTPError as e:
            raise GatewayError(sanitize_error(f"Backend health check failed: {e}")) from e

    def fetch_form(self, slug: str) -> FormDefinition:
        try:
            response = self._client.get(
                "/rest/v1/forms",
                params={"slug": f"eq.{slug}", "select": "*", "limit": 1},
            )
            response.raise_for_status()
            rows = response.json()
        except httpx.ConnectError as e:
            raise GatewayConnectionError(
                sanitize_error(f"Cannot connect to backend at {self._base_url}: {e}")
            ) from e
        except httpx.HTTPError as e:
            raise GatewayError(sanitize_error(f"Failed to fetch form {slug!r}: {e}")) from e
        except ValueError as e:
            raise GatewayError(f"Malformed response for form {slug!r}: {e}") from e

        if not isinstance(rows, list) or not rows:
            raise FormNotFoundError(f"No form with slug {slug!r}")
        try:
            return FormDefinition.model_validate(rows[0])
        except ValueError as e:
            raise GatewayError(f"Malformed form {slug!r}: {e}") from e

    def submit(self, form_id: str, answers: dict[str, AnswerValue]) -> None:
        try:
            response = self._client.post(
                "/rest/v1/responses",
                json={"form_id": form_id, "answers": dump_answers(answers)},
                headers={"Prefer": "return=minimal"},
            )
            response.raise_for_status()
        except httpx.ConnectError as e:
            raise GatewayConnectionError(
                sanitize_error(f"Cannot connect to backend at {self._base_url}: {e}")
            ) from e
        except httpx.HTTPError as e:
            raise GatewayError(sanitize_error(f"Failed to submit response: {e}")) from e

    def upload(self, file: UploadFile) -> FileReference:
        if not self._upload_url:
            raise StorageNotConfiguredError("No upload endpoint configured")
        try:
            response = self._client.post(
                self._upload_url,
                files={"file": (file.name, file.data, file.content_type or "application/octet-stream")},
            )
        except httpx.ConnectError as e:
            raise UploadError(sanitize_error(f"Cannot reach upload endpoint: {e}")) from e
        except httpx.HTTPError as e:
            raise UploadError(sanitize_error(f"Upload request failed: {e}")) from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.status_code == 503 and not body.get("configured", False):
            raise StorageNotConfiguredError("Upload storage is not configured")
        if not response.is_success:
            raise UploadError(body.get("error") or "Upload failed")

        uploaded = body.get("file") or {}
        url = body.get("url")
        if not url:
            raise UploadError("Upload response did not include a URL")
        return FileReference(
            name=uploaded.get("name", file.name),
            type=uploaded.get("type", file.content_type),
            size=uploaded.get("size", file.size),
            url=url,
        )

    def close(self) -> None:
        self._client.close()
