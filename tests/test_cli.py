from __future__ import annotations

import json
import shutil
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from openform.cli.main import app
from openform.gateway.exceptions import GatewayConnectionError

runner = CliRunner()
FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def workspace(tmp_path, monkeypatch) -> Path:
    """A project directory with openform.yaml and the fixture forms."""
    for name in ("OPENFORM_BACKEND", "OPENFORM_API_URL", "OPENFORM_API_KEY", "OPENFORM_UPLOAD_URL"):
        monkeypatch.delenv(name, raising=False)
    shutil.copytree(FIXTURES / "forms", tmp_path / "forms")
    (tmp_path / "openform.yaml").write_text("backend: local\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_no_command_prints_help() -> None:
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert "play" in result.output


def test_types() -> None:
    result = runner.invoke(app, ["types"])
    assert result.exit_code == 0
    assert "short_text" in result.output
    assert "Opinion Scale - A numeric scale (1-10) (commits on select)" in result.output
    assert "Checkboxes - Select multiple options from a list\n" in result.output


class TestLint:
    def test_valid_form(self) -> None:
        result = runner.invoke(app, ["lint", str(FIXTURES / "forms" / "feedback.yaml")])
        assert result.exit_code == 0
        assert "Form: Product feedback (published)" in result.output
        assert "Questions: 5" in result.output
        assert "1. [short_text] What's your name? *" in result.output

    def test_errors(self) -> None:
        result = runner.invoke(app, ["lint", str(FIXTURES / "lint" / "broken.yaml")])
        assert result.exit_code == 1
        assert "ERROR: [unique_ids]" in result.output
        assert "ERROR: [scale_bounds]" in result.output
        assert "Suggestion: Add at least one option" in result.output

    def test_warnings_only(self) -> None:
        result = runner.invoke(app, ["lint", str(FIXTURES / "lint" / "warnings.yaml")])
        assert result.exit_code == 0
        assert "WARNING: [choice_options]" in result.output
        assert "1. [checkboxes] (untitled)" in result.output

    def test_parse_error(self) -> None:
        result = runner.invoke(app, ["lint", str(FIXTURES / "lint" / "not-yaml.yaml")])
        assert result.exit_code == 1
        assert "Parse error" in result.output

    def test_missing_file(self, tmp_path) -> None:
        result = runner.invoke(app, ["lint", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "file not found" in result.output


class TestPlay:
    def test_complete_session_writes_response(self, workspace) -> None:
        result = runner.invoke(app, ["play", "feedback", "--plain"], input="Ada\n\nb\n9\na\n")

        assert result.exit_code == 0, result.output
        assert "Submitting..." in result.output
        assert "Thanks for the feedback!" in result.output
        lines = (workspace / "responses" / "form-feedback.jsonl").read_text().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["answers"] == {
            "name": "Ada",
            "plan": "Pro",
            "score": 9,
            "features": ["Forms"],
        }

    def test_validation_message_then_continue(self, workspace) -> None:
        result = runner.invoke(app, ["play", "signup", "--plain"], input="\ny\n")
        assert result.exit_code == 0, result.output
        assert "This field is required." in result.output
        assert "Thank you!" in result.output

    def test_abandoned_session(self, workspace) -> None:
        result = runner.invoke(app, ["play", "feedback", "--plain"], input="Ada\n")
        assert result.exit_code == 1
        assert "Response not submitted." in result.output
        assert not (workspace / "responses").exists()

    @pytest.mark.parametrize("slug", ["draft", "missing"])
    def test_unavailable_form(self, workspace, slug: str) -> None:
        result = runner.invoke(app, ["play", slug, "--plain"])
        assert result.exit_code == 1
        assert "This form is not available." in result.output

    def test_empty_form(self, workspace) -> None:
        result = runner.invoke(app, ["play", "empty", "--plain"])
        assert result.exit_code == 0
        assert "This form has no questions yet." in result.output

    def test_unknown_backend(self, workspace) -> None:
        (workspace / "openform.yaml").write_text("backend: carrier-pigeon\n")
        result = runner.invoke(app, ["play", "feedback", "--plain"])
        assert result.exit_code == 1
        assert "Unknown backend 'carrier-pigeon'" in result.output

    def test_backend_unreachable(self, workspace) -> None:
        (workspace / "openform.yaml").write_text("backend: http\n")
        client = MagicMock()
        client.fetch_form.side_effect = GatewayConnectionError("Cannot connect to backend")
        with patch("openform.gateway.rest_client.RestBackendClient", return_value=client):
            result = runner.invoke(app, ["play", "feedback", "--plain"])
        assert result.exit_code == 1
        assert "Error: Cannot load form: Cannot connect to backend" in result.output
        client.close.assert_called_once()


class TestDoctor:
    def test_local_ok(self, workspace) -> None:
        result = runner.invoke(app, ["doctor"])
        assert result.exit_code == 0
        assert "Backend: local" in result.output
        assert "Forms directory: OK" in result.output
        assert "4 form(s)" in result.output

    def test_local_missing_dir(self, workspace) -> None:
        shutil.rmtree(workspace / "forms")
        result = runner.invoke(app, ["doctor"])
        assert result.exit_code == 1
        assert "Forms directory: MISSING" in result.output

    def test_http_ok(self, workspace) -> None:
        (workspace / "openform.yaml").write_text("backend: http\napi:\n  url: http://api.test\n")
        client = MagicMock()
        client.health_check.return_value = {"status": "ok", "code": 200}
        with patch("openform.gateway.rest_client.RestBackendClient", return_value=client):
            result = runner.invoke(app, ["doctor"])
        assert result.exit_code == 0
        assert "API URL: http://api.test" in result.output
        assert "API health: OK" in result.output
        assert "Uploads: inline fallback" in result.output

    def test_http_unreachable(self, workspace) -> None:
        (workspace / "openform.yaml").write_text("backend: http\n")
        client = MagicMock()
        client.health_check.side_effect = GatewayConnectionError("refused")
        with patch("openform.gateway.rest_client.RestBackendClient", return_value=client):
            result = runner.invoke(app, ["doctor"])
        assert result.exit_code == 1
        assert "API health: FAILED - cannot connect" in result.output
