#!/usr/bin/env python3
"""
Parse a saved assistant response into structured recommendations.

Usage:
    python scripts/parse_response.py data/responses/reply.txt
    python scripts/parse_response.py reply.txt --language ru --json
    cat reply.txt | python scripts/parse_response.py - --category universities
    python scripts/parse_response.py reply.txt --match anywhere
"""

import json
import sys
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from tandau.contexts.extraction.heading_patterns import (
    CATEGORY_ORDER,
    HeadingMatchMode,
    available_languages,
    load_heading_labels,
)
from tandau.contexts.extraction.recommendation_builder import build_recommendations
from tandau.contexts.extraction.recommendation_data_structure import first_non_empty_category
from tandau.contexts.guidance.results_formatter import format_category

load_dotenv()

app = typer.Typer(add_completion=False, help="Parse an assistant response into recommendations.")


@app.command()
def main(
    source: str = typer.Argument(..., help="Response text file, or '-' to read stdin"),
    language: Optional[str] = typer.Option(
        None, "--language", "-l", help="Heading language (default: TANDAU_LANGUAGE)"
    ),
    match: Optional[HeadingMatchMode] = typer.Option(
        None, "--match", "-m", help="Heading match mode (default: TANDAU_HEADING_MATCH)"
    ),
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help=f"Only show one category ({', '.join(CATEGORY_ORDER)})"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the record as JSON"),
):
    """Parse one response and display what was extracted."""
    try:
        labels = load_heading_labels(language)
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if source == "-":
        text = sys.stdin.read()
    else:
        path = Path(source)
        if not path.exists():
            typer.secho(f"File not found: {path}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        text = path.read_text(encoding="utf-8")

    if category and category not in CATEGORY_ORDER:
        typer.secho(
            f"Unknown category '{category}'. Available: {', '.join(CATEGORY_ORDER)}",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    record = build_recommendations(text, labels=labels, mode=match)

    if as_json:
        data = record.to_dict()
        if category:
            data = {category: data.get(category)}
        typer.echo(json.dumps(data, ensure_ascii=False, indent=2))
        return

    categories = [category] if category else list(CATEGORY_ORDER)
    typer.echo(f"Language: {labels.language} (available: {', '.join(available_languages())})")
    for name in categories:
        typer.echo("")
        typer.echo(format_category(record, name, labels))

    if record.is_empty():
        typer.secho("\n! No recommendation headings found", fg=typer.colors.YELLOW)
        raise typer.Exit(code=2)

    typer.secho(
        f"\n✓ Parsed (first non-empty category: {first_non_empty_category(record)})",
        fg=typer.colors.GREEN,
    )


if __name__ == "__main__":
    app()
