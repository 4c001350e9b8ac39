"""Topochat CLI — the main entry point."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from topochat import __version__

app = typer.Typer(
    name="topochat",
    help="Classify chat transcripts into conversation topology patterns.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


def _get_settings():
    from topochat.config.settings import get_settings

    try:
        return get_settings()
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(1)


def _setup_logging(level: str) -> None:
    root = logging.getLogger("topochat")
    root.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


def _load(path: Path):
    from topochat.topology.transcript import TranscriptError, load_transcript

    try:
        return load_transcript(path)
    except TranscriptError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)


@app.callback(invoke_without_command=True)
def main_callback(
    version: bool = typer.Option(False, "--version", "-v", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", help="Log classifier decisions"),
):
    if version:
        console.print(f"topochat v{__version__}")
        raise typer.Exit()

    level = "DEBUG" if verbose else _get_settings().log_level
    _setup_logging(level)


@app.command()
def classify(
    file: Path = typer.Argument(..., help="Transcript JSON file"),
    as_json: bool = typer.Option(False, "--json", help="Print the topology as JSON"),
):
    """Classify a transcript and show its topology."""
    from topochat.topology.classifier import classify as classify_messages

    transcript = _load(file)
    topology = classify_messages(transcript.messages)

    if as_json:
        print(json.dumps(topology.to_export_dict(), indent=2))
        return

    table = Table(title=escape(transcript.session.title), show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Pattern", topology.pattern)
    table.add_row("Complexity", topology.complexity.value)
    table.add_row("Order", str(topology.order))
    table.add_row("Threads", str(topology.threads))
    table.add_row("Nesting depth", str(topology.nesting_depth))
    table.add_row("Prime factors", " ".join(topology.prime_factors) or "-")
    table.add_row("Messages", str(len(transcript.messages)))
    console.print(table)


@app.command()
def export(
    file: Path = typer.Argument(..., help="Transcript JSON file"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Where to write the export (default: exports dir)"
    ),
    preview: bool = typer.Option(
        False, "--preview", help="Print a truncated preview instead of writing a file"
    ),
    model: str | None = typer.Option(None, "--model", help="Override the recorded AI model"),
):
    """Export a transcript together with its topology as JSON."""
    from topochat.topology.classifier import classify as classify_messages
    from topochat.topology.export import build_preview, export_filename, export_json

    settings = _get_settings()
    config = settings.export

    transcript = _load(file)
    session = transcript.session
    topology = classify_messages(transcript.messages)

    if preview:
        document = build_preview(session.id, session, transcript.messages, topology,
                                 config=config, ai_model=model)
        print(json.dumps(document, indent=config.indent, ensure_ascii=False))
        return

    target = output or settings.exports_path / export_filename(session.id)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        export_json(session.id, session, transcript.messages, topology,
                    config=config, ai_model=model),
        encoding="utf-8",
    )
    console.print(
        f"[green]Exported[/green] {escape(session.id)} → {escape(str(target))}"
        f"  ({escape(topology.pattern)})"
    )


@app.command()
def pattern(
    order: int = typer.Argument(..., min=0, max=4, help="Topology order (0-4)"),
    threads: int = typer.Argument(..., min=0, help="Thread count"),
    depth: int = typer.Argument(..., min=0, max=4, help="Nesting depth"),
):
    """Render the pattern string for a set of metrics."""
    from topochat.topology.render import render_pattern

    print(render_pattern(order, threads, depth))


if __name__ == "__main__":
    app()
