#!/usr/bin/env python3
"""
Show a user's stored career plan.

Usage:
    python scripts/show_results.py u-42
    python scripts/show_results.py u-42 --category internships
    python scripts/show_results.py u-42 --events 20
"""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from tandau.contexts.extraction.heading_patterns import CATEGORY_ORDER, load_heading_labels
from tandau.contexts.guidance.results_formatter import format_category, format_results_text
from tandau.contexts.session.session_state import CareerPlanSession
from tandau.contexts.session.store import JsonFileStore, StoreError
from tandau.utils.event_logging import get_recent_events
from tandau.utils.timestamp import format_timestamp

load_dotenv()

app = typer.Typer(add_completion=False, help="Show a stored career plan.")


@app.command()
def main(
    user_id: str = typer.Argument(..., help="User identity the plan is stored under"),
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help="Show one category instead of the full summary"
    ),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Output language"),
    data_path: Optional[Path] = typer.Option(
        None, "--data-path", help="Store directory (default: TANDAU_DATA_PATH)"
    ),
    app_id: Optional[str] = typer.Option(None, "--app-id", help="App id (default: TANDAU_APP_ID)"),
    events: int = typer.Option(0, "--events", "-e", help="Also show the last N session events"),
):
    """Print the stored recommendations of a user."""
    labels = load_heading_labels(language)
    session = CareerPlanSession(
        user_id, JsonFileStore(data_path), app_id=app_id, labels=labels, record_events=False
    )
    try:
        session.load()
    except StoreError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if session.current is None:
        typer.secho(f"No recommendations stored for {user_id}", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    if category:
        if category not in CATEGORY_ORDER:
            typer.secho(
                f"Unknown category '{category}'. Available: {', '.join(CATEGORY_ORDER)}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1)
        typer.echo(format_category(session.current, category, labels))
    else:
        typer.echo(format_results_text(session.current, labels))

    if events:
        typer.secho("\n=== Recent events ===", bold=True)
        for event in get_recent_events(n=events, user_id=user_id):
            when = format_timestamp(event["timestamp"], relative=True)
            typer.echo(f"  {when:>10}  {event['event_type']}")


if __name__ == "__main__":
    app()
