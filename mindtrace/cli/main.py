"""Mindtrace CLI - inspect a project snapshot's reasoning graphs and timeline.

Usage:
    mindtrace graph ./snapshot.json --sequence 7
    mindtrace timeline ./snapshot.json --type task --type progress --window week
    mindtrace stats ./snapshot.json
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

# MINDTRACE_CONFIG may come from .env
load_dotenv()
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from mindtrace.app.config import MindtraceConfig, set_config
from mindtrace.core.errors import MindtraceError
from mindtrace.core.models.activity import ActivityType, DateWindow, TimelineFilters
from mindtrace.core.models.thought import ThinkingSequence
from mindtrace.core.snapshot import ProjectSnapshot, load_snapshot
from mindtrace.graph.builder import ThoughtGraphBuilder
from mindtrace.graph.layout import GridLayoutEngine
from mindtrace.graph.summary import summarize_sequences
from mindtrace.timeline.aggregator import ActivityAggregator, coerce_records
from mindtrace.timeline.formatting import format_relative_time
from mindtrace.timeline.pipeline import TimelinePipeline, count_by_type, is_filtered
from mindtrace.utils.logging import setup_logging

app = typer.Typer(
    name="mindtrace",
    help="Mindtrace reasoning-graph and timeline inspector",
    add_completion=False,
)
console = Console()


def _bootstrap(config_path: Path | None, verbose: bool) -> MindtraceConfig:
    config = MindtraceConfig.load(config_path)
    if verbose:
        config.log_level = "DEBUG"
    setup_logging(
        level=config.log_level,
        log_dir=config.log_dir,
        console_output=True,
        file_output=config.log_dir is not None,
    )
    set_config(config)
    return config


def _load(snapshot: Path, config_path: Path | None, verbose: bool) -> tuple[MindtraceConfig, ProjectSnapshot]:
    try:
        config = _bootstrap(config_path, verbose)
        return config, load_snapshot(snapshot)
    except MindtraceError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to configuration file")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")]


@app.command("graph")
def show_graph(
    snapshot: Annotated[Path, typer.Argument(help="Path to snapshot JSON file")],
    sequence: Annotated[str, typer.Option("--sequence", "-s", help="Thinking sequence id")],
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """Lay out one thinking sequence and print node positions and edges."""
    config, data = _load(snapshot, config_path, verbose)

    try:
        seq = data.find_sequence(sequence)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Sequence {sequence} is malformed: {e.error_count()} error(s)")
        raise typer.Exit(1)
    if seq is None:
        console.print(f"[red]Error:[/red] Sequence not found: {sequence}")
        raise typer.Exit(1)

    graph = ThoughtGraphBuilder(label_length=config.layout.label_length).build_sequence(seq)
    layout = GridLayoutEngine(config.layout).layout(graph)

    console.print(Panel(
        f"[bold]Sequence:[/bold] {escape(seq.sequence_name or str(seq.id))}\n"
        f"[bold]Goal:[/bold] {escape(seq.goal or '-')}\n"
        f"[bold]Status:[/bold] {'complete' if seq.is_complete else 'in progress'}\n"
        f"[bold]Canvas:[/bold] {layout.width} x {layout.height} ({layout.total_rows} rows)",
        title="Reasoning Graph",
        border_style="cyan",
    ))

    if layout.is_empty:
        console.print("[yellow]No thoughts recorded for this sequence.[/yellow]")
        return

    nodes = Table(title="Nodes")
    for column in ("#", "Id", "Type", "Row", "Col", "X", "Y", "Label"):
        nodes.add_column(column)
    for node, pos in zip(graph.nodes, layout.positions):
        nodes.add_row(
            str(node.thought_number), node.id, f"{node.style.icon} {node.style.label}",
            str(pos.row), str(pos.col), str(pos.x), str(pos.y), escape(node.label),
        )
    console.print(nodes)

    edges = Table(title="Edges")
    for column in ("Kind", "From", "To", "Start", "End"):
        edges.add_column(column)
    for conn in layout.connectors:
        edges.add_row(conn.kind.value, conn.source, conn.target, str(conn.start), str(conn.end))
    console.print(edges)


@app.command("timeline")
def show_timeline(
    snapshot: Annotated[Path, typer.Argument(help="Path to snapshot JSON file")],
    types: Annotated[Optional[list[ActivityType]], typer.Option("--type", "-t", help="Activity type to include (repeatable)")] = None,
    search: Annotated[str, typer.Option("--search", "-q", help="Case-insensitive text filter")] = "",
    window: Annotated[Optional[DateWindow], typer.Option("--window", "-w", help="Date window")] = None,
    limit: Annotated[int, typer.Option("--limit", "-n", help="Maximum entries to print")] = 50,
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """Print the filtered, newest-first project timeline."""
    config, data = _load(snapshot, config_path, verbose)

    activities = ActivityAggregator(config.timeline.description_limit).aggregate(**data.collections())
    filters = TimelineFilters.of(
        types=types if types else config.timeline.default_types,
        search_query=search,
        date_window=window or config.timeline.default_window,
    )
    feed = TimelinePipeline().run(activities, filters)

    if not feed:
        message = "No activities match the current filters." if is_filtered(filters) else "No activity yet."
        console.print(f"[yellow]{message}[/yellow]")
        return

    table = Table(title=f"Timeline ({len(feed)} of {len(activities)} activities)")
    for column in ("When", "Type", "Title", "Description"):
        table.add_column(column)
    for activity in feed[:limit]:
        table.add_row(
            format_relative_time(activity.timestamp),
            f"[{_RICH_COLORS[activity.color.value]}]{activity.type.value}[/]",
            escape(activity.title),
            escape(activity.description),
        )

    console.print(table)


@app.command("stats")
def show_stats(
    snapshot: Annotated[Path, typer.Argument(help="Path to snapshot JSON file")],
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """Show sequence and activity counts for a snapshot."""
    config, data = _load(snapshot, config_path, verbose)

    sequences = coerce_records(data.thinking, ThinkingSequence, "thinking")
    summary = summarize_sequences(sequences)
    activities = ActivityAggregator(config.timeline.description_limit).aggregate(**data.collections())
    counts = count_by_type(activities)

    console.print(Panel(
        f"[bold]Sequences:[/bold] {summary.total}\n"
        f"  • Completed: {summary.completed}\n"
        f"  • In progress: {summary.in_progress}\n"
        f"  • Thoughts: {summary.total_thoughts}\n\n"
        f"[bold]Activities:[/bold] {len(activities)}\n"
        + "\n".join(f"  • {t.value}: {n}" for t, n in counts.items()),
        title="Snapshot Stats",
        border_style="cyan",
    ))


_RICH_COLORS = {
    "primary": "blue",
    "secondary": "magenta",
    "success": "green",
    "error": "red",
    "warning": "yellow",
    "info": "cyan",
}


def main() -> None:
    app()


if __name__ == "__main__":
    main()
