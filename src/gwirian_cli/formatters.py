"""CLI output formatting helpers.

All formatters work with the JSON values returned by the API. Three
textual forms are produced: pretty JSON, a plain column list for pipes,
and a bordered rich table for interactive terminals. Errors get their
own boxed form on interactive stderr.
"""

import io
import json
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any

import click
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

LIST_MAX_WIDTH = 40
LIST_ELLIPSIS = ".."

TABLE_MAX_CONTENT_WIDTH = 50
TABLE_PADDING = 2
TABLE_ELLIPSIS = "…"

ERROR_WRAP_WIDTH = 60
ERROR_MIN_WIDTH = 20


class RenderMode(Enum):
    JSON = "json"
    LIST = "list"
    TABLE = "table"


@dataclass(frozen=True)
class TableOptions:
    """Per-command table tweaks.

    col_widths are full column widths including padding; word_wrap wraps
    long cells instead of truncating them.
    """

    word_wrap: bool = False
    col_widths: tuple[int, ...] | None = None


# -----------------------------------------------------------------------------
# Terminal facts
# -----------------------------------------------------------------------------


def stdin_is_tty() -> bool:
    return sys.stdin.isatty()


def stdout_is_tty() -> bool:
    return sys.stdout.isatty()


def stderr_is_tty() -> bool:
    return sys.stderr.isatty()


# -----------------------------------------------------------------------------
# Mode selection
# -----------------------------------------------------------------------------


def select_mode(
    data: Any,
    json_output: bool,
    columns: list[str] | None,
    is_tty: bool,
) -> RenderMode:
    """Pick the output form for a value.

    Args:
        data: Value to render
        json_output: --json was given
        columns: Columns for list-shaped data
        is_tty: stdout is an interactive terminal

    Returns:
        RenderMode to use
    """
    if json_output:
        return RenderMode.JSON
    if isinstance(data, list) and columns:
        if is_tty and data:
            return RenderMode.TABLE
        return RenderMode.LIST
    return RenderMode.JSON


def render(
    data: Any,
    mode: RenderMode,
    columns: list[str] | None = None,
    table_options: TableOptions | None = None,
) -> str:
    """Render a value in the given mode."""
    if mode is RenderMode.LIST:
        return format_list(data, columns or [])
    if mode is RenderMode.TABLE:
        return format_table(data, columns or [], table_options)
    return format_json(data)


# -----------------------------------------------------------------------------
# JSON / list / table
# -----------------------------------------------------------------------------


def format_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def cell_text(value: Any) -> str:
    """Stringify one cell. Missing values are empty."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _row_value(row: Any, column: str) -> str:
    if not isinstance(row, dict):
        return ""
    return cell_text(row.get(column))


def format_list(items: list[dict[str, Any]], columns: list[str]) -> str:
    """Fixed-width plain columns for piped output.

    Args:
        items: Records to list
        columns: Keys to show, in order

    Returns:
        Header, dashed separator and one line per record; "" if no items
    """
    if not items:
        return ""

    widths = []
    for col in columns:
        longest = max([len(col)] + [len(_row_value(r, col)) for r in items])
        widths.append(min(longest, LIST_MAX_WIDTH))

    header = "  ".join(col.ljust(w)[:w] for col, w in zip(columns, widths))
    sep = "  ".join("-" * w for w in widths)
    lines = [header, sep]
    for row in items:
        cells = []
        for col, w in zip(columns, widths):
            value = _row_value(row, col)
            if len(value) > w:
                value = value[: w - len(LIST_ELLIPSIS)] + LIST_ELLIPSIS
            cells.append(value.ljust(w))
        lines.append("  ".join(cells))
    return "\n".join(lines)


def column_label(column: str) -> str:
    """snake_case -> Title Case."""
    return " ".join(part.capitalize() for part in column.split("_") if part)


def truncate_cell(value: str, limit: int = TABLE_MAX_CONTENT_WIDTH) -> str:
    if len(value) <= limit:
        return value
    return value[: limit - len(TABLE_ELLIPSIS)] + TABLE_ELLIPSIS


def format_table(
    items: list[dict[str, Any]],
    columns: list[str],
    options: TableOptions | None = None,
) -> str:
    """Bordered, colored table for interactive terminals.

    Column content width is the longest of label and cells, capped at 50
    (52 with padding). Cells over the cap end with "…" unless word_wrap
    is set.
    """
    options = options or TableOptions()
    labels = [column_label(c) for c in columns]

    widths: list[int] = []
    for i, (col, label) in enumerate(zip(columns, labels)):
        if options.col_widths and i < len(options.col_widths):
            widths.append(max(options.col_widths[i] - TABLE_PADDING, 1))
            continue
        longest = max([len(label)] + [len(_row_value(r, col)) for r in items])
        widths.append(min(longest, TABLE_MAX_CONTENT_WIDTH))

    table = Table(
        box=box.SQUARE,
        border_style="cyan",
        header_style="bold cyan",
        show_header=True,
    )
    for label, width in zip(labels, widths):
        table.add_column(
            label,
            width=width,
            no_wrap=not options.word_wrap,
            overflow="fold" if options.word_wrap else "crop",
        )

    for row in items:
        cells = []
        for col, width in zip(columns, widths):
            value = _row_value(row, col)
            cells.append(Text(value if options.word_wrap else truncate_cell(value, width)))
        table.add_row(*cells)

    total_width = sum(w + TABLE_PADDING for w in widths) + len(widths) + 1
    console = Console(
        file=io.StringIO(),
        force_terminal=True,
        color_system="standard",
        width=total_width,
        highlight=False,
    )
    console.print(table)
    return console.file.getvalue().rstrip("\n")


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------


def wrap_text(text: str, width: int = ERROR_WRAP_WIDTH) -> list[str]:
    """Wrap text at width.

    Breaks at the last space before the limit when it lies past the
    midpoint, otherwise hard-breaks at the limit.
    """
    lines: list[str] = []
    for paragraph in text.split("\n"):
        rest = paragraph
        while len(rest) > width:
            cut = rest.rfind(" ", 0, width)
            if cut > width // 2:
                lines.append(rest[:cut])
                rest = rest[cut + 1 :]
            else:
                lines.append(rest[:width])
                rest = rest[width:]
        lines.append(rest)
    return lines


def format_error(
    message: str,
    title: str = "Error",
    status_code: int | None = None,
) -> str:
    """Red boxed error: title line, divider, wrapped message."""
    heading = f"{title} ({status_code})" if status_code is not None else title
    body = wrap_text(message)
    inner = max([ERROR_MIN_WIDTH, len(heading)] + [len(line) for line in body])

    def border(text: str) -> str:
        return click.style(text, fg="red")

    def line(text: str, **style: Any) -> str:
        padded = f" {text.ljust(inner)} "
        return border("│") + (click.style(padded, **style) if style else padded) + border("│")

    horizontal = "─" * (inner + 2)
    out = [border(f"┌{horizontal}┐"), line(heading, fg="red", bold=True)]
    out.append(border(f"├{horizontal}┤"))
    out.extend(line(text) for text in body)
    out.append(border(f"└{horizontal}┘"))
    return "\n".join(out)


def print_error(message: str, title: str = "Error", status_code: int | None = None) -> None:
    """Write an error to stderr, boxed only on an interactive terminal."""
    if stderr_is_tty():
        click.echo(format_error(message, title=title, status_code=status_code), err=True)
    else:
        click.echo(message, err=True)
