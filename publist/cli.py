# publist/cli.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from publist.config.settings import get_settings
from publist.dblp_client import DblpClient, DblpClientError
from publist.filtering import FilterCriteria, compile_pattern, filter_publications, parse_year_range
from publist.models.publication import MalformedRecordError
from publist.parsing.dblp_parser import MalformedDocumentError, read_person_page
from publist.render import render_publications

app = typer.Typer(
    help="Export a DBLP publication list as BibTeX or a LaTeX table.",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)

# Progress and errors go to stderr so piped output stays clean.
err_console = Console(stderr=True, soft_wrap=True)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _configure_logging(verbose: bool, log_level: str) -> None:
    level = logging.DEBUG if verbose else log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _build_criteria(
    author: Optional[str],
    title: Optional[str],
    journal: Optional[str],
    year: Optional[str],
) -> FilterCriteria:
    """Turn raw option strings into compiled filter predicates."""
    criteria = FilterCriteria()

    for hint, raw, attr in (
        ("--author", author, "author"),
        ("--title", title, "title"),
        ("--journal", journal, "venue"),
    ):
        if raw is None:
            continue
        try:
            setattr(criteria, attr, compile_pattern(raw))
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint=hint) from exc

    if year is not None:
        try:
            criteria.years = parse_year_range(year)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--year") from exc

    return criteria


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

@app.command()
def main(
    mode: str = typer.Argument(
        ...,
        help="Output mode: 'bibtex' or 'latex-table'.",
        metavar="MODE",
    ),
    address: str = typer.Argument(
        ...,
        help="DBLP person page URL (…/pid/xx/yyyy.html) or a bare 'pid/xx/yyyy'.",
        metavar="URL",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the result to this file instead of stdout.",
    ),
    author: Optional[str] = typer.Option(
        None,
        "--author",
        "-a",
        help="Author pattern, e.g. 'Doe' or '/doe/i'.",
    ),
    title: Optional[str] = typer.Option(
        None,
        "--title",
        "-t",
        help="Title pattern.",
    ),
    journal: Optional[str] = typer.Option(
        None,
        "--journal",
        "-j",
        help="Journal/conference pattern.",
    ),
    year: Optional[str] = typer.Option(
        None,
        "--year",
        "-y",
        help="Inclusive year range, e.g. 2018-2021.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
) -> None:
    """
    Fetch a DBLP person page, filter its publications and render them.

    Example:
        publist bibtex https://dblp.org/pid/12/3456.html -y 2019-2021 -o pubs.bib
    """
    try:
        settings = get_settings()
    except ValidationError as exc:
        err_console.print(f"[red]ERROR:[/red] invalid configuration: {escape(str(exc))}", highlight=False)
        raise typer.Exit(code=1)

    _configure_logging(verbose, settings.LOG_LEVEL)
    criteria = _build_criteria(author, title, journal, year)

    try:
        err_console.print(f"Fetching {escape(address)} and parsing XML ...")
        client = DblpClient()
        page = read_person_page(client.fetch(address))
        err_console.print(
            f"Found {len(page.publications)} publications for {escape(page.name or 'unknown person')}."
        )

        err_console.print("Extracting and filtering publications ...")
        pubs = filter_publications(page.publications, criteria)
        err_console.print(f"{len(pubs)} publications match.")

        err_console.print("Converting publications to the desired output format ...")
        result = render_publications(pubs, mode)
    except (DblpClientError, MalformedDocumentError, MalformedRecordError) as exc:
        err_console.print(f"[red]ERROR:[/red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(code=1)

    if output is not None:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(result, encoding="utf-8")
        except OSError as exc:
            err_console.print(f"[red]ERROR:[/red] cannot write {escape(str(output))}: {escape(str(exc))}", highlight=False)
            raise typer.Exit(code=1)
        err_console.print(f"[green]Wrote {len(pubs)} publications to {escape(str(output))}[/green]")
    else:
        typer.echo(result)


if __name__ == "__main__":
    app()
