#!/usr/bin/env python3
"""
Run the career questionnaire and chat with the assistant in the terminal.

Usage:
    python scripts/career_chat.py u-42
    python scripts/career_chat.py u-42 --language ru --provider anthropic
    python scripts/career_chat.py u-42 --resume          # continue a stored chat
    python scripts/career_chat.py u-42 --dry-run         # nothing is written to disk

In the chat:
    /done            finish and show the results summary
    /describe NAME   ask for a detailed description of a profession
    /quit            leave without the summary
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from tandau.contexts.extraction.heading_patterns import load_heading_labels
from tandau.contexts.guidance.chat import CareerAdvisor
from tandau.contexts.guidance.logger import setup_guidance_logger
from tandau.contexts.guidance.questionnaire import load_questions, validate_answers
from tandau.contexts.guidance.results_formatter import format_category, format_results_text
from tandau.contexts.session.session_state import CareerPlanSession
from tandau.contexts.session.store import InMemoryStore, JsonFileStore
from tandau.utils.llm import MODEL_ROLE, get_provider
from tandau.utils.timestamp import session_stamp

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(add_completion=False, help="Career questionnaire and assistant chat.")


def ask_questions(language: str) -> dict[str, str]:
    """Prompt for every questionnaire answer by option number."""
    answers = {}
    questions = load_questions(language)
    for number, question in enumerate(questions, start=1):
        typer.secho(f"\n{number}/{len(questions)}. {question.question}", bold=True)
        for index, option in enumerate(question.options, start=1):
            typer.echo(f"  {index}) {option.label}")
        choice = typer.prompt(">", type=int)
        while not 1 <= choice <= len(question.options):
            choice = typer.prompt(f"Choose 1-{len(question.options)}", type=int)
        answers[question.id] = question.options[choice - 1].value
    validate_answers(answers, questions)
    return answers


@app.command()
def main(
    user_id: str = typer.Argument(..., help="User identity the plan is stored under"),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Chat language"),
    provider_name: Optional[str] = typer.Option(
        None, "--provider", "-p", help="anthropic or openai (default: LLM_PROVIDER)"
    ),
    model: Optional[str] = typer.Option(None, "--model", help="Model name override"),
    resume: bool = typer.Option(False, "--resume", help="Continue the stored conversation"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Keep everything in memory"),
):
    """Take the questionnaire, talk to the assistant, and show the recommendations."""
    labels = load_heading_labels(language)

    try:
        provider = get_provider(provider_name, model)
    except (ImportError, ValueError) as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    log_file = setup_guidance_logger(
        LOGS_PATH / f"chat_{session_stamp()}", provider_name=provider.name, language=labels.language
    )
    typer.echo(f"Log file: {log_file}")

    store = InMemoryStore() if dry_run else JsonFileStore()
    session = CareerPlanSession(user_id, store, labels=labels, record_events=not dry_run).load()
    advisor = CareerAdvisor(session, provider, labels=labels)

    if resume and session.chat_history:
        last = session.chat_history[-1]
        if last.role == MODEL_ROLE:
            typer.echo(f"\nAssistant: {last.text}")
    else:
        session.record_test_results(ask_questions(labels.language))
        typer.echo("")
        reply = advisor.start_chat()
        typer.echo(f"Assistant: {reply.text}")

    while True:
        message = typer.prompt("\nYou", prompt_suffix=": ").strip()
        if message == "/quit":
            raise typer.Exit()
        if message == "/done":
            break
        if message.startswith("/describe "):
            reply = advisor.describe_profession(message.removeprefix("/describe "))
            typer.echo(f"\n{reply.text}")
            continue
        if not message:
            continue

        reply = advisor.send(message)
        color = typer.colors.RED if not reply.success else None
        typer.secho(f"\nAssistant: {reply.text}", fg=color)
        if reply.recommendations is not None:
            typer.secho("(recommendations updated)", fg=typer.colors.GREEN)

    selected = advisor.finish()
    if selected is None:
        typer.secho("No recommendations yet. Keep chatting to get some.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)

    typer.echo("")
    typer.echo(format_category(session.current, selected, labels))
    typer.secho("\n=== Summary ===", bold=True)
    typer.echo(format_results_text(session.current, labels))


if __name__ == "__main__":
    app()
