"""Lexsim CLI: find the most similar documents in a folder.

Four commands: compare, profile, matrix, validate.
Uses typer for argument parsing and rich for formatted terminal output.
"""

from __future__ import annotations

import json

import numpy as np
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from simcore.comparator import compare_corpus, profile_corpus
from simcore.config import (
    ComparisonConfig,
    check_config,
    check_corpus_size,
    load_config,
    read_config_json,
    validate_config_dict,
)
from simcore.corpus import load_corpus, load_document
from simcore.errors import ConfigurationError, LexsimError
from simcore.log_setup import setup_logging
from simcore.profiler import build_profile
from simcore.scorer import similarity_matrix

app = typer.Typer(help="Lexsim: rank document pairs by shared frequent words.")
console = Console()


def _fail(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(code=1)


def _resolve_config(config_path: str | None, **overrides) -> ComparisonConfig:
    config = load_config(config_path) if config_path else ComparisonConfig()
    config = config.override(**overrides)
    check_config(config)
    return config


# ── compare ─────────────────────────────────────────────────────────


@app.command()
def compare(
    folder: str = typer.Argument(..., help="Folder holding one text file per document"),
    config_path: str | None = typer.Option(None, "--config", help="Path to config JSON"),
    top_k: int | None = typer.Option(None, "--top-k", help="Words kept per document profile"),
    top_m: int | None = typer.Option(None, "--top-m", help="Number of pairs to report"),
    expect_count: int | None = typer.Option(
        None, "--expect-count", help="Fail unless exactly this many documents are found"
    ),
    workers: int | None = typer.Option(None, "--workers", help="Worker processes"),
    plain: bool = typer.Option(False, "--plain", help="One line per pair, no table"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Rank the most similar document pairs in a folder."""
    setup_logging(verbose)
    try:
        config = _resolve_config(
            config_path,
            top_k=top_k,
            top_m=top_m,
            expected_count=expect_count,
            workers=workers,
        )
        documents = load_corpus(folder, expected_count=config.expected_count)
        with console.status("[bold blue]Comparing documents..."):
            result = compare_corpus(documents, config)
    except LexsimError as e:
        _fail(str(e))

    if plain:
        console.print(f"Top {config.top_m} Similar Document Pairs:", markup=False, highlight=False)
        for pair in result.pairs:
            console.print(pair.describe(), markup=False, highlight=False)
        return

    table = Table(title=f"Top {len(result.pairs)} Similar Document Pairs")
    table.add_column("#", style="dim", width=3)
    table.add_column("Document", style="cyan", min_width=20)
    table.add_column("Document", style="cyan", min_width=20)
    table.add_column("Similarity", justify="right", width=10)

    for pair in result.pairs:
        table.add_row(
            str(pair.rank),
            pair.first_name,
            pair.second_name,
            f"{pair.score:.6f}",
        )

    console.print(table)

    empty = [p.name for p in result.profiles if p.is_empty]
    console.print(
        f"\n{result.document_count} documents, {result.pairs_scored} pairs scored "
        f"(top-k: {config.top_k})"
    )
    if empty:
        console.print(
            f"[yellow]{len(empty)} document(s) with no countable words: {', '.join(empty)}[/yellow]"
        )


# ── profile ─────────────────────────────────────────────────────────


@app.command()
def profile(
    path: str = typer.Argument(..., help="Text file to profile"),
    top_k: int | None = typer.Option(None, "--top-k", help="Words kept in the profile"),
    limit: int = typer.Option(20, "--limit", help="Rows to display"),
    as_json: bool = typer.Option(False, "--json", help="Print the profile as JSON"),
):
    """Show the most frequent words of one document."""
    setup_logging()
    try:
        config = _resolve_config(None, top_k=top_k)
        prof = build_profile(load_document(path), config)
    except LexsimError as e:
        _fail(str(e))

    if as_json:
        console.print_json(json.dumps(prof.to_dict()))
        return

    console.print(
        f"\n[bold]Document:[/bold] {prof.name} | Tokens: {prof.total_tokens} | "
        f"Distinct: {prof.distinct_tokens} | Kept: {len(prof.top_words)}"
    )
    if prof.is_empty:
        console.print("[yellow]No words left after stop-word removal.[/yellow]")
        return

    table = Table()
    table.add_column("#", style="dim", width=4)
    table.add_column("Word", style="cyan", min_width=15)
    table.add_column("Frequency", justify="right", width=10)
    for i, (word, freq) in enumerate(prof.top_words[:limit], 1):
        table.add_row(str(i), word, f"{freq:.6f}")
    console.print(table)


# ── matrix ──────────────────────────────────────────────────────────


@app.command()
def matrix(
    folder: str = typer.Argument(..., help="Folder holding one text file per document"),
    output: str = typer.Option(..., "--output", "-o", help="CSV file to write"),
    config_path: str | None = typer.Option(None, "--config", help="Path to config JSON"),
    top_k: int | None = typer.Option(None, "--top-k", help="Words kept per document profile"),
):
    """Write the full pairwise similarity matrix as CSV."""
    setup_logging()
    try:
        config = _resolve_config(config_path, top_k=top_k)
        documents = load_corpus(folder, expected_count=config.expected_count)
        check_corpus_size(len(documents))
        profiles = profile_corpus(documents, config)
    except LexsimError as e:
        _fail(str(e))

    sim = similarity_matrix([p.top_words for p in profiles])
    names = [p.name for p in profiles]
    np.savetxt(
        output,
        sim,
        fmt="%.6f",
        delimiter=",",
        header=",".join(names),
        comments="",
    )
    console.print(
        Panel(
            f"[bold green]✓ Wrote {len(names)}×{len(names)} matrix[/bold green] to {output}",
            border_style="green",
        )
    )


# ── validate ────────────────────────────────────────────────────────


@app.command()
def validate(config_path: str = typer.Argument(..., help="Path to config JSON")):
    """Check a comparison config for errors."""
    try:
        raw = read_config_json(config_path)
    except ConfigurationError as e:
        errors = e.errors
    else:
        errors = validate_config_dict(raw)

    if not errors:
        console.print(
            Panel("[bold green]✓ Validation passed[/bold green]", border_style="green")
        )
    else:
        console.print(
            Panel("[bold red]✗ Validation failed[/bold red]", border_style="red")
        )
        for err in errors:
            console.print(f"  [red]✗[/red] {escape(err)}", highlight=False)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
