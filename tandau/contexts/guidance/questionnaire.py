"""
Career questionnaire for the Guidance context.

Questions are loaded from questions.yaml (overridable with
QUESTIONS_CONFIG_PATH). Answers are stored as {question_id: option_value},
the shape embedded in the initial chat prompt.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from tandau.contexts.extraction.heading_patterns import DEFAULT_LANGUAGE

load_dotenv()
QUESTIONS_CONFIG_PATH = Path(
    os.getenv("QUESTIONS_CONFIG_PATH", Path(__file__).parent / "questions.yaml")
)


@dataclass(frozen=True)
class Option:
    """One selectable answer."""

    value: str
    label: str


@dataclass(frozen=True)
class Question:
    """One questionnaire question with its options, in display order."""

    id: str
    question: str
    options: tuple[Option, ...]

    def option_values(self) -> list[str]:
        return [option.value for option in self.options]

    def label_for(self, value: str) -> str:
        """Display label of an option value."""
        for option in self.options:
            if option.value == value:
                return option.label
        raise ValueError(f"'{value}' is not an option of question '{self.id}'")


def load_questions(language: Optional[str] = None, config_path: Path = None) -> list[Question]:
    """
    Load the questionnaire for a language.

    Args:
        language: Language key (defaults to TANDAU_LANGUAGE)
        config_path: Optional YAML path (defaults to QUESTIONS_CONFIG_PATH)

    Returns:
        Questions in display order

    Raises:
        ValueError: If the language is not defined
    """
    if language is None:
        language = DEFAULT_LANGUAGE
    if config_path is None:
        config_path = QUESTIONS_CONFIG_PATH

    config = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    if language not in config:
        raise ValueError(
            f"Questionnaire for language '{language}' not found. Available: {list(config.keys())}"
        )

    return [
        Question(
            id=entry["id"],
            question=entry["question"],
            options=tuple(Option(value=o["value"], label=o["label"]) for o in entry["options"]),
        )
        for entry in config[language]
    ]


def validate_answers(answers: dict[str, str], questions: list[Question]) -> None:
    """
    Check that every answer refers to a known question and option.

    Partial answer sets are valid; use is_complete() to require all questions.

    Raises:
        ValueError: On an unknown question id or option value
    """
    by_id = {q.id: q for q in questions}
    for question_id, value in answers.items():
        if question_id not in by_id:
            raise ValueError(f"Unknown question: {question_id}. Expected one of {list(by_id)}")
        allowed = by_id[question_id].option_values()
        if value not in allowed:
            raise ValueError(
                f"Invalid answer '{value}' for question '{question_id}'. Expected one of {allowed}"
            )


def is_complete(answers: dict[str, str], questions: list[Question]) -> bool:
    """True when every question has an answer."""
    return all(q.id in answers for q in questions)
