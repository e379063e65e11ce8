import typer

from openform.cli.doctor import doctor as doctor_command
from openform.cli.lint import lint as lint_command
from openform.cli.play import play as play_command
from openform.cli.types_cmd import types as types_command

app = typer.Typer(name="openform", help="One-question-at-a-time form player")
app.command(name="doctor")(doctor_command)
app.command(name="lint")(lint_command)
app.command(name="play")(play_command)
app.command(name="types")(types_command)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


if __name__ == "__main__":
    app()
