from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel

CONFIG_FILENAME = "openform.yaml"


class ApiConfig(BaseModel):
    url: str = "http://localhost:54321"
    key: str = ""
    upload_url: str = ""
    timeout: float = 10.0


class LocalConfig(BaseModel):
    forms_dir: str = "forms"
    responses_dir: str = "responses"


class PlayerConfig(BaseModel):
    wheel_cooldown_ms: int = 500
    wheel_delta_threshold: int = 50


class OpenformConfig(BaseModel):
    backend: str = "local"
    api: ApiConfig = ApiConfig()
    local: LocalConfig = LocalConfig()
    player: PlayerConfig = PlayerConfig()
    config_dir: Path | None = None

    def resolve_path(self, value: str) -> Path:
        """Resolve a configured path relative to the config file's directory."""
        path = Path(value).expanduser()
        if path.is_absolute():
            return path
        return (self.config_dir or Path.cwd()) / path


_ENV_OVERRIDES = {
    "OPENFORM_BACKEND": ("backend",),
    "OPENFORM_API_URL": ("api", "url"),
    "OPENFORM_API_KEY": ("api", "key"),
    "OPENFORM_UPLOAD_URL": ("api", "upload_url"),
}


def _find_config_file(start: Path | None = None) -> Path | None:
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def load_config(start: Path | None = None) -> OpenformConfig:
    config_path = _find_config_file(start)

    if config_path is not None:
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
        config = OpenformConfig.model_validate(raw)
        config.config_dir = config_path.parent
    else:
        config = OpenformConfig()

    for env_name, path in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value is None:
            continue
        target = config
        for attr in path[:-1]:
            target = getattr(target, attr)
        setattr(target, path[-1], value)

    return config
