from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

import typer

if TYPE_CHECKING:
    from openform.config.settings import OpenformConfig
    from openform.gateway.protocol import FileStorage, FormRepository, SubmissionGateway


@dataclass
class Gateways:
    repository: FormRepository
    submissions: SubmissionGateway
    storage: FileStorage
    close: Callable[[], None] = lambda: None


def build_gateways(config: OpenformConfig) -> Gateways:
    """Construct the form, submission and file gateways named by config."""
    backend_name = config.backend

    if backend_name == "local" or not backend_name:
        from openform.gateway.local import LocalFormRepository, LocalResponseStore, UnconfiguredFileStorage

        return Gateways(
            repository=LocalFormRepository(config.resolve_path(config.local.forms_dir)),
            submissions=LocalResponseStore(config.resolve_path(config.local.responses_dir)),
            storage=UnconfiguredFileStorage(),
        )

    if backend_name == "http":
        from openform.gateway.rest_client import RestBackendClient

        client = RestBackendClient(
            base_url=config.api.url,
            api_key=config.api.key,
            upload_url=config.api.upload_url,
            timeout=config.api.timeout,
        )
        return Gateways(repository=client, submissions=client, storage=client, close=client.close)

    typer.echo(f"Error: Unknown backend '{backend_name}'. Use: local, http")
    raise typer.Exit(code=1)
