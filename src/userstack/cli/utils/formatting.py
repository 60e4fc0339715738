"""CLI output formatting helpers."""

from typing import Any, Iterable, Optional, Tuple

from rich.table import Table

from ...enums import encode_enum
from ...models import Stack


def display(value: Any) -> str:
    """Render an optional field, using "-" for missing values."""
    if value is None or value == "":
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return encode_enum(value) if isinstance(value, str) else str(value)


def _section(table: Table, title: str, rows: Iterable[Tuple[str, Optional[Any]]]):
    table.add_row(f"[bold]{title}[/bold]", "")
    for label, value in rows:
        table.add_row(f"  {label}", display(value))


def stack_table(stack: Stack) -> Table:
    """Build a two-column rich table describing a detection result."""
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("field", style="cyan", no_wrap=True)
    table.add_column("value")

    _section(
        table,
        "Entity",
        [
            ("type", stack.type),
            ("name", stack.name),
            ("brand", stack.brand),
            ("url", stack.url),
        ],
    )
    _section(
        table,
        "OS",
        [
            ("name", stack.os.name),
            ("code", stack.os.code),
            ("family", stack.os.family),
            ("vendor", stack.os.family_vendor),
        ],
    )
    _section(
        table,
        "Device",
        [
            ("type", stack.device.type),
            ("mobile", stack.device.is_mobile_device),
            ("brand", stack.device.brand),
            ("name", stack.device.name),
        ],
    )
    _section(
        table,
        "Browser",
        [
            ("name", stack.browser.name),
            ("version", stack.browser.version),
            ("engine", stack.browser.engine),
        ],
    )
    _section(
        table,
        "Crawler",
        [
            ("crawler", stack.crawler.is_crawler),
            ("category", stack.crawler.category),
            ("last seen", stack.crawler.last_seen),
        ],
    )
    return table
