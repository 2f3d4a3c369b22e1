"""Shared Rich consoles and result formatting for the CLI."""

from rich.console import Console
from rich.text import Text

from ..models.summary import ErrorKind, SummaryResult

console = Console()
err_console = Console(stderr=True)

# Failures the user can recover from by supplying a key
_KEY_ERRORS = frozenset({ErrorKind.MISSING_CREDENTIAL, ErrorKind.AUTH_REJECTED})


def status_icon(ok: bool) -> str:
    if ok:
        return "[green]✓[/green]"
    return "[red]✗[/red]"


def failure_text(result: SummaryResult) -> Text:
    """One styled line for a failed summary: yellow when a key would fix it, red otherwise."""
    style = "yellow" if result.error in _KEY_ERRORS else "red"
    return Text(f"✗ {result.message}", style=style)
