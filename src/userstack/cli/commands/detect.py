"""userstack detect command."""

import logging
from dataclasses import replace
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.markup import escape

from ...client import UserstackClient
from ...config import load_config
from ...exceptions import ApiError, UnsupportedTypeError
from ...logger import setup_logging
from ...models import RequestParams
from ..utils.formatting import stack_table

console = Console()


def detect_command(
    user_agent: str = typer.Argument(..., help="User-Agent string to look up"),
    access_key: Optional[str] = typer.Option(
        None,
        "--access-key",
        "-k",
        help="userstack access key (default: USERSTACK_ACCESS_KEY)",
    ),
    secure: Optional[bool] = typer.Option(
        None,
        "--secure/--insecure",
        help="Use https; paid plans only (default: USERSTACK_SECURE)",
    ),
    fields: Optional[str] = typer.Option(
        None, "--fields", "-f", help="Comma separated output fields, e.g. os,device"
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--lenient",
        help="Reject or accept enum values this client does not know "
        "(default: USERSTACK_STRICT)",
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Log the request (access key hidden)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
):
    """Look up a single User-Agent string."""
    config = load_config()
    overrides = {}
    if access_key:
        overrides["access_key"] = access_key
    if secure is not None:
        overrides["secure"] = secure
    if strict is not None:
        overrides["strict"] = strict
    if debug:
        overrides["debug"] = True
    config = replace(config, **overrides)

    setup_logging(logging.DEBUG if config.debug else logging.WARNING)

    try:
        with UserstackClient.from_config(config) as client:
            stack = client.detect(user_agent, RequestParams(fields=fields))
    except ApiError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    except UnsupportedTypeError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        console.print("Re-run with [bold]--lenient[/bold] to accept unknown values.")
        raise typer.Exit(2)
    except ValueError as e:
        console.print(f"[red]Malformed response:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]Request failed:[/red] {type(e).__name__}: {escape(str(e))}")
        raise typer.Exit(1)

    if as_json:
        console.print_json(data=stack.to_dict())
    else:
        console.print(stack_table(stack))
