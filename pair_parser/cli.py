"""
CLI Interface
=============
Command-line interface for the pair parser engine.

Usage:
    python -m pair_parser.cli extract <response_path> [options]
    python -m pair_parser.cli stats <response_path>
    python -m pair_parser.cli segments <response_path>
    python -m pair_parser.cli serve [options]
"""

from __future__ import annotations

import json
import os
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .engine import ExtractorConfig, PairEngine, load_chat_text

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="pair-parser")
def cli():
    """Pair Parser: extracts "try this" DSL examples from AI tutor responses."""
    pass


@cli.command()
@click.argument("response_path", type=click.Path(exists=True))
@click.option(
    "--output", "-o",
    default="output",
    help="Output directory for saved reports",
)
@click.option(
    "--save",
    is_flag=True,
    default=False,
    help="Save the report as JSON in the output directory",
)
@click.option(
    "--max-gap-lines",
    default=5,
    type=int,
    help="Gap lines above which a cluster is split",
)
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.option(
    "--log-file",
    default=None,
    help="Path to log file",
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output only JSON result to stdout (for programmatic use)",
)
def extract(
    response_path: str,
    output: str,
    save: bool,
    max_gap_lines: int,
    log_level: str,
    log_file: str,
    json_output: bool,
):
    """Extract expression pairs from a saved chat response."""

    if json_output:
        # Suppress console output for JSON mode
        log_level = "ERROR"

    config = ExtractorConfig(
        output_dir=output,
        max_gap_lines=max_gap_lines,
        log_level=log_level,
        log_file=log_file,
    )

    try:
        content = load_chat_text(response_path)
        engine = PairEngine(config)
        report = engine.analyze(content, source=os.path.basename(response_path))

        if save:
            name = os.path.splitext(os.path.basename(response_path))[0]
            engine.save_report(report, name)

        if json_output:
            print(json.dumps(
                report.model_dump(mode="json"),
                indent=2,
                ensure_ascii=False,
                default=str,
            ))
            return

        console.print()
        console.print(
            Panel.fit(
                f"[bold cyan]Pair Parser v{__version__}[/]\n"
                f"[dim]Response: {os.path.basename(response_path)}[/]",
                border_style="cyan",
            )
        )
        console.print()
        _display_pairs(report)
        _display_statistics(report.statistics.model_dump())

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)


@cli.command()
@click.argument("response_path", type=click.Path(exists=True))
def stats(response_path: str):
    """Show marker statistics for a saved chat response."""

    try:
        content = load_chat_text(response_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)

    engine = PairEngine(ExtractorConfig(log_level="WARNING"))
    _display_statistics(engine.statistics(content).model_dump())


@cli.command()
@click.argument("response_path", type=click.Path(exists=True))
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output segments as JSON",
)
def segments(response_path: str, json_output: bool):
    """Split a saved chat response into display segments."""

    try:
        content = load_chat_text(response_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)

    engine = PairEngine(ExtractorConfig(log_level="WARNING"))
    result = engine.segments(content)

    if json_output:
        print(json.dumps(
            [s.model_dump(mode="json") for s in result],
            indent=2,
            ensure_ascii=False,
        ))
        return

    table = Table(title="Content Segments", border_style="cyan")
    table.add_column("#", justify="right")
    table.add_column("Type", style="bold")
    table.add_column("Offsets", justify="right")
    table.add_column("Content")

    for idx, segment in enumerate(result):
        snippet = segment.content.replace("\n", " ")
        if len(snippet) > 60:
            snippet = snippet[:57] + "..."
        table.add_row(
            str(idx),
            segment.type.value,
            f"{segment.start}-{segment.end}",
            snippet,
        )

    console.print(table)


@cli.command()
@click.option("--host", default="0.0.0.0", help="Server host")
@click.option("--port", default=5000, type=int, help="Server port")
@click.option("--debug", is_flag=True, default=False, help="Debug mode")
def serve(host: str, port: int, debug: bool):
    """Start the HTTP microservice for the chat UI."""
    from .server import run_server

    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]Pair Parser Microservice[/]\n"
            f"[dim]Starting on {host}:{port}[/]",
            border_style="cyan",
        )
    )
    console.print()

    run_server(host=host, port=port, debug=debug)


# ─── Display Helpers ──────────────────────────────────────────────────────────


def _display_pairs(report):
    """Display extracted pairs in a formatted table."""
    if not report.pairs:
        console.print("[yellow]No expression pairs detected[/]")
        console.print()
        return

    table = Table(title="Expression Pairs", border_style="cyan")
    table.add_column("#", justify="right")
    table.add_column("Label", style="bold")
    table.add_column("Title")
    table.add_column("Input")
    table.add_column("Expression")
    table.add_column("Result")

    for pair, label in zip(report.pairs, report.display_titles):
        table.add_row(
            str(pair.index),
            label,
            pair.title,
            pair.input,
            pair.expression,
            pair.result if pair.result is not None else "[dim](none)[/]",
        )

    console.print(table)
    console.print()
    console.print(
        f"[dim]Parser v{report.parser_version} | "
        f"Blocks: {report.block_count} | "
        f"Clusters: {report.cluster_count} | "
        f"Pairs: {report.pair_count}[/]"
    )
    console.print()


def _display_statistics(statistics: dict):
    """Display marker statistics as a rich table."""
    table = Table(title="Marker Statistics", border_style="green")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Title Blocks", str(statistics.get("title_blocks", 0)))
    table.add_row("Input Blocks", str(statistics.get("input_blocks", 0)))
    table.add_row(
        "Expression Blocks", str(statistics.get("expression_blocks", 0))
    )
    table.add_row("Result Blocks", str(statistics.get("result_blocks", 0)))
    table.add_row(
        "Has Markers",
        "[green]✓[/]" if statistics.get("has_markers") else "[red]✗[/]",
    )
    table.add_row(
        "Balanced",
        "[green]✓[/]" if statistics.get("is_balanced") else "[yellow]⚠[/]",
    )

    console.print(table)
    console.print()


# ─── Entry point (for python -m pair_parser.cli) ──────────────────────────────


if __name__ == "__main__":
    cli()
