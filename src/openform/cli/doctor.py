from __future__ import annotations

import typer

from openform.config.settings import load_config
from openform.gateway.exceptions import GatewayConnectionError, GatewayError


def doctor() -> None:
    """Check that the configured backend is reachable."""
    config = load_config()
    typer.echo(f"Backend: {config.backend}")

    if config.backend == "http":
        from openform.gateway.rest_client import RestBackendClient

        typer.echo(f"API URL: {config.api.url}")
        client = RestBackendClient(config.api.url, api_key=config.api.key, timeout=config.api.timeout)
        try:
            result = client.health_check()
            typer.echo(f"API health: OK ({result})")
        except GatewayConnectionError as e:
            typer.echo(f"API health: FAILED - cannot connect\n  {e}")
            raise typer.Exit(code=1)
        except GatewayError as e:
            typer.echo(f"API health: FAILED - {e}")
            raise typer.Exit(code=1)
        finally:
            client.close()
        typer.echo(f"Uploads: {'configured' if config.api.upload_url else 'inline fallback'}")
        return

    from openform.gateway.local import LocalFormRepository

    forms_dir = config.resolve_path(config.local.forms_dir)
    if not forms_dir.is_dir():
        typer.echo(f"Forms directory: MISSING ({forms_dir})")
        raise typer.Exit(code=1)
    count = len(LocalFormRepository(forms_dir).form_files())
    typer.echo(f"Forms directory: OK ({forms_dir}, {count} form(s))")
    typer.echo(f"Responses directory: {config.resolve_path(config.local.responses_dir)}")
    typer.echo("Uploads: inline fallback")
