"""Console rendering for the task tracker."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

from . import __version__
from .result import CommandResult


COLORS = {
    'primary': '#68D5F3',
    'success': '#8BD649',
    'error': '#F78C6C',
    'text_primary': '#B7C5D3',
    'text_muted': '#4F5B66',
    'border': '#41505E',
}

TRACKER_THEME = Theme({
    'default': f"{COLORS['text_primary']}",
    'muted': f"{COLORS['text_muted']}",
    'primary': f"{COLORS['primary']} bold",
    'success': f"{COLORS['success']}",
    'error': f"{COLORS['error']} bold",
    'border': f"{COLORS['border']}",
})


def get_console(no_color: bool = False, file=None) -> Console:
    """Create a themed console."""
    return Console(theme=TRACKER_THEME, no_color=no_color, file=file, highlight=False)


def show_banner(console: Console) -> None:
    """Print the start-up greeting."""
    greeting = Text.assemble(
        ("Task Tracker", "primary"),
        (f" v{__version__}\n", "muted"),
        ("What can I do for you? Type 'help' to see the commands.", "default"),
    )
    console.print(Panel(greeting, border_style="border", expand=False))


def show_result(console: Console, result: CommandResult) -> None:
    """Print the outcome of a command.

    Task renderings contain square brackets, so text is printed as plain
    ``Text`` and never parsed as console markup.
    """
    style = "default" if result.ok else "error"
    console.print(Text(result.text, style=style))


def show_error(console: Console, message: str, detail: Optional[str] = None) -> None:
    """Print an error that did not come from a command."""
    console.print(Text(message, style="error"))
    if detail:
        console.print(Text(detail, style="muted"))
