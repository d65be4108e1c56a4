"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich markup rendered into a
string buffer) or machines (--json). In non-TTY environments (tests,
pipes) Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

if TYPE_CHECKING:
    from completionist_archiver.services.result import ServiceResult

ARCHIVER_THEME = Theme(
    {
        "ca.ok": "bold green",
        "ca.error": "bold red",
        "ca.op": "bold cyan",
        "ca.key": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=ARCHIVER_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def _summarize(data: dict[str, Any]) -> dict[str, Any]:
    """Replace the embedded export document with counts."""
    summary = {key: value for key, value in data.items() if key != "document"}
    document = data.get("document")
    if isinstance(document, dict):
        summary["uid"] = document.get("metadata", {}).get("uid")
        summary["achievements"] = len(document.get("achievements", []))
        summary["books"] = len(document.get("books", []))
    return summary


def format_result(result: ServiceResult, *, json_output: bool = False) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if result.ok:
        console.print(f"[ca.ok]OK[/]: [ca.op]{result.op}[/]", soft_wrap=True)
        for key, value in _summarize(result.data).items():
            console.print(f"  [ca.key]{key}:[/] {escape(str(value))}", soft_wrap=True)
    else:
        message = result.error.message if result.error else "Unknown error"
        code = result.error.code if result.error else "UNKNOWN"
        console.print(
            f"[ca.error]ERROR[/]: [ca.op]{result.op}[/] ({code}) {escape(message)}",
            soft_wrap=True,
        )
    assert isinstance(console.file, StringIO)
    return console.file.getvalue().rstrip("\n")
