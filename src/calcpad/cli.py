"""
Command-line interface for calcpad.

Provides commands for:
- Running the API server
- Pressing a sequence of keys and printing the result
- An interactive calculator session
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from calcpad.config import settings
from calcpad.engine import CalculatorEngine
from calcpad.keymap import KEY_BINDINGS, translate_key
from calcpad.log import configure_logging
from calcpad.scheduler import PollingScheduler

app = typer.Typer(
    name="calcpad",
    help="calcpad - Browser Calculator Engine",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Log level"),
):
    """Configure logging before any command runs."""
    configure_logging(log_level or settings.log_level)


# =============================================================================
# Server Commands
# =============================================================================

@app.command()
def serve(
    host: str = typer.Option(settings.host, "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(settings.port, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
):
    """Start the calcpad API server."""
    import uvicorn

    console.print(f"[bold green]Starting calcpad server on {host}:{port}[/]")

    # One engine per process, so a single worker
    uvicorn.run(
        "calcpad.api:app",
        host=host,
        port=port,
        reload=reload,
        workers=1,
    )


# =============================================================================
# Calculator Commands
# =============================================================================

@app.command()
def press(
    keys: list[str] = typer.Argument(..., help="Key names, e.g. 1 + 2 Enter"),
):
    """Press keys on a fresh calculator and show the result."""
    engine = CalculatorEngine()

    for key in keys:
        event = translate_key(key)
        if event is None:
            console.print(f"[red]Unknown key: {key}[/]")
            raise typer.Exit(1)
        engine.on_input(event)

    _render(engine)


@app.command()
def repl():
    """Start an interactive calculator session."""
    scheduler = PollingScheduler()
    engine = CalculatorEngine(scheduler=scheduler)

    console.print("[bold]calcpad[/] - type keys like [cyan]12+3=[/] or [cyan]5 * 2 Enter[/]; "
                  "[cyan]quit[/] to leave")

    while True:
        scheduler.run_pending()
        _render(engine, show_history=False)

        try:
            line = console.input("[bold cyan]> [/]")
        except (EOFError, KeyboardInterrupt):
            break

        if line.strip().lower() in ("quit", "exit"):
            break
        if line.strip().lower() == "history":
            _render_history(engine)
            continue

        for key in split_keys(line):
            event = translate_key(key)
            if event is None:
                console.print(f"[yellow]Unknown key: {key}[/]")
                continue
            scheduler.run_pending()
            engine.on_input(event)

    console.print()


# =============================================================================
# Helpers
# =============================================================================

def split_keys(line: str) -> list[str]:
    """
    Split a typed line into key names.

    Whitespace-separated words that name a key ("Enter", "F9", "M+") are
    kept whole; anything else is pressed one character at a time.
    """
    named = set(KEY_BINDINGS) | set(settings.sign_toggle_keys)

    keys: list[str] = []
    for word in line.split():
        if len(word) > 1 and word in named:
            keys.append(word)
        else:
            keys.extend(word)
    return keys


def _render(engine: CalculatorEngine, show_history: bool = True) -> None:
    """Print the display, and optionally the history."""
    snapshot = engine.get_display_snapshot()
    color = "red" if engine.in_error else "bold"

    if snapshot.secondary:
        console.print(f"  [dim]{snapshot.secondary}[/]")
    console.print(f"  [{color}]{snapshot.primary}[/]")
    if engine.memory:
        console.print("  [magenta]M[/]")

    if show_history:
        _render_history(engine)


def _render_history(engine: CalculatorEngine) -> None:
    history = engine.get_history()
    if not history:
        console.print("[yellow]No calculations yet[/]")
        return

    table = Table(title="History")
    table.add_column("#", style="dim")
    table.add_column("Calculation", style="cyan")
    for i, entry in enumerate(history, 1):
        table.add_row(str(i), entry)

    console.print(table)


if __name__ == "__main__":
    app()
