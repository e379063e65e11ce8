from __future__ import annotations

from pathlib import Path

from openform.config.settings import OpenformConfig, load_config


def test_defaults_without_config_file(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("OPENFORM_BACKEND", raising=False)
    config = load_config(tmp_path)
    assert config.backend == "local"
    assert config.api.url == "http://localhost:54321"
    assert config.player.wheel_cooldown_ms == 500
    assert config.player.wheel_delta_threshold == 50
    assert config.config_dir is None


def test_finds_config_in_parent(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("OPENFORM_BACKEND", raising=False)
    (tmp_path / "openform.yaml").write_text(
        "backend: http\napi:\n  url: https://forms.example.com\nplayer:\n  wheel_cooldown_ms: 300\n"
    )
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    config = load_config(nested)

    assert config.backend == "http"
    assert config.api.url == "https://forms.example.com"
    assert config.player.wheel_cooldown_ms == 300
    assert config.config_dir == tmp_path.resolve()


def test_empty_config_file(tmp_path) -> None:
    (tmp_path / "openform.yaml").write_text("")
    config = load_config(tmp_path)
    assert config.local.forms_dir == "forms"


def test_env_overrides(tmp_path, monkeypatch) -> None:
    (tmp_path / "openform.yaml").write_text("backend: local\n")
    monkeypatch.setenv("OPENFORM_BACKEND", "http")
    monkeypatch.setenv("OPENFORM_API_KEY", "sk-test")
    monkeypatch.setenv("OPENFORM_UPLOAD_URL", "https://up.example.com/upload")

    config = load_config(tmp_path)

    assert config.backend == "http"
    assert config.api.key == "sk-test"
    assert config.api.upload_url == "https://up.example.com/upload"


def test_resolve_path(tmp_path) -> None:
    config = OpenformConfig(config_dir=tmp_path)
    assert config.resolve_path("forms") == tmp_path / "forms"
    assert config.resolve_path(str(tmp_path / "abs")) == tmp_path / "abs"


def test_resolve_path_without_config_dir(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert OpenformConfig().resolve_path("responses") == Path.cwd() / "responses"
