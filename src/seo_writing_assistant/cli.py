"""
Command-line interface for the SEO Writing Assistant.

Runs the SEO analysis engine on a text file (or stdin) and prints the
results as rich tables or JSON.
"""

import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .analysis import analyze_seo
from .keyword_extractor import rank_keyword_candidates
from .models import ReadabilityResult, SEOAnalysis
from .readability import calculate_readability
from .text_stats import InvalidInputError

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _read_source(source) -> str:
    text = source.read()
    if not text.strip():
        err_console.print("[yellow]Warning:[/yellow] input is empty")
    return text


def _print_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2))


@click.group()
@click.version_option(__version__, prog_name="seo-assist")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
def main(verbose: bool) -> None:
    """
    SEO Writing Assistant - score and improve content for search engines.

    Examples:

        seo-assist analyze article.txt -k "content marketing"

        seo-assist keywords article.txt -n 10

        cat article.txt | seo-assist readability -
    """
    _configure_logging(verbose)


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option(
    "--keyword",
    "-k",
    "keywords",
    multiple=True,
    help="Target keyword (repeatable). Extracted automatically when omitted.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON instead of tables.")
def analyze(source, keywords: tuple[str, ...], as_json: bool) -> None:
    """Score SOURCE for SEO (use - for stdin)."""
    content = _read_source(source)
    try:
        result = analyze_seo(content, list(keywords) or None)
    except InvalidInputError as e:
        err_console.print(f"[red]Invalid input:[/red] {e}")
        sys.exit(1)

    if as_json:
        _print_json(result.to_dict())
        return
    _display_analysis(result)


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option(
    "--count",
    "-n",
    type=click.IntRange(min=0),
    default=10,
    help="Maximum keywords to show (default: 10).",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON instead of a table.")
def keywords(source, count: int, as_json: bool) -> None:
    """Extract ranked keywords and phrases from SOURCE."""
    content = _read_source(source)
    candidates = rank_keyword_candidates(content)[:count]

    if as_json:
        _print_json([c.to_dict() for c in candidates])
        return

    if not candidates:
        console.print("[yellow]No keywords found.[/yellow]")
        return

    table = Table(title="Keywords", show_header=True)
    table.add_column("#", style="dim")
    table.add_column("Keyword", style="green")
    table.add_column("Count", justify="right")
    table.add_column("Density", justify="right")
    for rank, candidate in enumerate(candidates, start=1):
        table.add_row(
            str(rank),
            candidate.text,
            str(candidate.count),
            f"{candidate.density * 100:.2f}%",
        )
    console.print(table)


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON instead of a table.")
def readability(source, as_json: bool) -> None:
    """Calculate the Flesch reading ease of SOURCE."""
    content = _read_source(source)
    result = calculate_readability(content)

    if as_json:
        _print_json(result.to_dict())
        return
    console.print(_readability_table(result))


def _readability_table(result: ReadabilityResult) -> Table:
    table = Table(title="Readability", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Flesch reading ease", f"{result.flesch_kincaid:.2f}")
    table.add_row("Sentences", str(result.total_sentences))
    table.add_row("Words", str(result.total_words))
    table.add_row("Syllables per word", f"{result.average_syllables_per_word:.2f}")
    return table


def _score_style(score: float) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"


def _display_analysis(result: SEOAnalysis, title: Optional[str] = None) -> None:
    """Display an SEO analysis summary."""
    style = _score_style(result.score)
    console.print(Panel.fit(
        f"[bold {style}]SEO score: {result.score}/100[/bold {style}]\n"
        f"{result.word_count} words",
        title=title or "SEO Analysis",
        border_style="blue",
    ))

    breakdown = Table(title="Score Breakdown", show_header=True)
    breakdown.add_column("Signal", style="cyan")
    breakdown.add_column("Score", justify="right")
    for name, value in (
        ("Length", result.breakdown.length),
        ("Keyword density", result.breakdown.keyword_density),
        ("Readability", result.breakdown.readability),
        ("Structure", result.breakdown.structure),
    ):
        breakdown.add_row(name, f"[{_score_style(value)}]{value:.2f}[/]")
    console.print(breakdown)

    if result.keyword_density:
        kw_table = Table(title="Keyword Density", show_header=True)
        kw_table.add_column("Keyword", style="green")
        kw_table.add_column("Density", justify="right")
        for keyword, density in result.keyword_density.items():
            kw_table.add_row(keyword, f"{density:.2f}%")
        console.print(kw_table)

    console.print(_readability_table(result.readability))

    if result.recommendations:
        console.print("\n[bold]Recommendations[/bold]")
        for recommendation in result.recommendations:
            console.print(f"  - {recommendation}")


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
