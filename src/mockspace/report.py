"""Rendering of aggregated verify failures."""

import io
from collections.abc import Sequence
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

from mockspace.config import MockspaceSettings, get_settings

if TYPE_CHECKING:
    from mockspace.exceptions import UnsatisfiedExpectationError


def render_failures(
    errors: Sequence["UnsatisfiedExpectationError"],
    settings: MockspaceSettings | None = None,
) -> str:
    """Render every failing double's unmet expectations as one message."""
    settings = settings or get_settings()
    if settings.report_format == "table":
        return _render_table(errors, settings.report_width)
    return _render_plain(errors)


def _render_plain(errors: Sequence["UnsatisfiedExpectationError"]) -> str:
    total = sum(len(error.failures) for error in errors)
    lines = [f"{total} unmet expectation(s) across {len(errors)} double(s):"]
    lines.extend(error.message for error in errors)
    return "\n".join(lines)


def _render_table(errors: Sequence["UnsatisfiedExpectationError"], width: int) -> str:
    table = Table(title=f"Unmet expectations ({len(errors)} double(s))")
    table.add_column("Double")
    table.add_column("Message")
    table.add_column("Expected")
    table.add_column("Received", justify="right")
    table.add_column("Declared at")

    for error in errors:
        for failure in error.failures:
            # Text cells so reprs with brackets are not read as markup
            table.add_row(
                Text(error.subject_description),
                Text(f":{failure.method_name}"),
                Text(failure.expected.describe()),
                Text(str(failure.observed_count)),
                Text(failure.origin or "-"),
            )

    console = Console(file=io.StringIO(), width=width, record=True, color_system=None)
    console.print(table)
    return console.export_text()
