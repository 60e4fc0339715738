"""userstack codes command."""

from rich.console import Console
from rich.table import Table

from ...enums import ErrorType
from ...exceptions import ERROR_DESCRIPTIONS, code_from_error_type

console = Console()


def codes_command():
    """Show the error type to numeric code table."""
    table = Table(title="userstack error codes")
    table.add_column("Code", justify="right", style="bold", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Description")

    for error_type in ErrorType:
        table.add_row(
            str(code_from_error_type(error_type)),
            error_type.value,
            ERROR_DESCRIPTIONS[error_type],
        )

    console.print(table)
