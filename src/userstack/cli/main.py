"""Entry point for the ``userstack`` command."""

import typer

from .commands.codes import codes_command
from .commands.detect import detect_command

app = typer.Typer(
    name="userstack",
    help="Look up User-Agent strings with the userstack API.",
    no_args_is_help=True,
    add_completion=False,
)

app.command("detect", short_help="Detect browser, OS and device for a User-Agent")(
    detect_command
)
app.command("codes", short_help="List userstack error types and their codes")(
    codes_command
)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
