"""Command 'version' of focusforge"""

import typer

from focusforge import __version__
from focusforge.utils.ui.console import get_console

app = typer.Typer()
console = get_console(highlight=False)


@app.command()
def version() -> None:
    """Show version information"""
    console.print(f"FocusForge {__version__}")
