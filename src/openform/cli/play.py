from __future__ import annotations

import typer

from openform.cli.gateway_factory import build_gateways
from openform.config.settings import load_config
from openform.events.dispatcher import EventDispatcher
from openform.events.observer import LoggingObserver, StdoutObserver
from openform.gateway.exceptions import GatewayError
from openform.host.console import ConsoleHost, echo_plain, read_plain_line
from openform.player.loader import open_session
from openform.player.views import UnavailableView


def play(
    slug: str,
    plain: bool = typer.Option(False, "--plain", help="Read answers line by line from stdin without prompt_toolkit"),
) -> None:
    """Fill in a published form in the terminal."""
    config = load_config()
    gateways = build_gateways(config)

    dispatcher = EventDispatcher()
    dispatcher.add_observer(StdoutObserver())
    dispatcher.add_observer(LoggingObserver())

    try:
        try:
            controller = open_session(
                gateways.repository,
                slug,
                gateways.submissions,
                storage=gateways.storage,
                dispatcher=dispatcher,
                player=config.player,
            )
        except GatewayError as e:
            typer.echo(f"Error: Cannot load form: {e}")
            raise typer.Exit(code=1)

        if controller is None:
            typer.echo(UnavailableView().message)
            raise typer.Exit(code=1)

        if plain:
            host = ConsoleHost(controller, reader=read_plain_line, writer=echo_plain)
        else:
            host = ConsoleHost(controller)
        state = host.run()
    finally:
        gateways.close()

    if not state.submitted and controller.questions:
        typer.echo("Response not submitted.")
        raise typer.Exit(code=1)
