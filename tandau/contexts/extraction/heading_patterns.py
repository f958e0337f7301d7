"""
Heading labels and line patterns for recommendation section identification.

This module owns the vocabulary the extractor recognizes: the five top-level
recommendation categories, the local/international sub-labels of the grouped
categories, and the markup that may decorate a heading line.

Pattern classes follow the same convention throughout the package:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import os
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
HEADINGS_CONFIG_PATH = Path(
    os.getenv("HEADINGS_CONFIG_PATH", Path(__file__).parent / "headings.yaml")
)
DEFAULT_LANGUAGE = os.getenv("TANDAU_LANGUAGE", "en")

# Bold markup produced by the assistant, removed wherever it occurs
EMPHASIS_MARKER = "**"

# =============================================================================
# CATEGORIES
# =============================================================================

PROFESSIONS = "professions"
UNIVERSITIES = "universities"
COURSES = "courses"
INTERNSHIPS = "internships"
INDIVIDUAL_PLAN = "individualPlan"

# Order of appearance in a response; also the default display priority
CATEGORY_ORDER = (PROFESSIONS, UNIVERSITIES, COURSES, INTERNSHIPS, INDIVIDUAL_PLAN)

# Categories split into local/international sub-lists
GROUPED_CATEGORIES = (UNIVERSITIES, INTERNSHIPS)


class HeadingMatchMode(str, Enum):
    """
    Where a heading label is allowed to match.

    LINE: the label must open a line (after bullets/markup are removed).
    ANYWHERE: first occurrence of "label:" anywhere in the text, the way
        a free-form regex search behaves. Kept for responses that run
        headings into paragraphs.
    """

    LINE = "line"
    ANYWHERE = "anywhere"


def default_match_mode() -> HeadingMatchMode:
    """Heading match mode from TANDAU_HEADING_MATCH (default: line)."""
    return HeadingMatchMode(os.getenv("TANDAU_HEADING_MATCH", HeadingMatchMode.LINE.value).lower())


# =============================================================================
# LINE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class HeadingLinePatterns:
    """
    Regex patterns for decorations that may precede a heading label.

    The assistant is asked for plain "Label:" lines but routinely answers
    with list bullets ("- Local:"), numbered lists ("1. Professions:") or
    markdown headers ("## Courses:").
    """

    # Markdown hash headers: # Label, ## Label, ### Label, #### Label
    HASH_PREFIX: str = r"^#{1,4}\s*"

    # One or more list bullets: "- ", "* ", "• ", "- - "
    BULLET_PREFIX: str = r"^(?:[-*•]\s*)+"

    # Numbered list markers: "1. ", "2) "
    NUMBER_PREFIX: str = r"^\d+[.)]\s*"

    # Separator between a label and its body
    SEPARATOR: str = ":"


def strip_heading_decorations(line: str) -> str:
    """
    Reduce a raw line to the text a heading label is compared against.

    Args:
        line: Raw line from the response

    Returns:
        Line without emphasis markers, hash prefix, bullets, list number
        or outer whitespace
    """
    cleaned = line.replace(EMPHASIS_MARKER, "").strip()
    cleaned = re.sub(HeadingLinePatterns.HASH_PREFIX, "", cleaned)
    cleaned = re.sub(HeadingLinePatterns.BULLET_PREFIX, "", cleaned)
    cleaned = re.sub(HeadingLinePatterns.NUMBER_PREFIX, "", cleaned)
    return cleaned.strip()


def heading_line_pattern(label: str) -> re.Pattern:
    """
    Compile the pattern for a line-anchored heading.

    Matches the label at the start of an already-decoration-stripped line,
    followed by optional whitespace and the separator. Group "inline" holds
    whatever follows the separator on the same line.
    """
    return re.compile(
        rf"^{re.escape(label)}\s*{HeadingLinePatterns.SEPARATOR}(?P<inline>.*)$",
        re.IGNORECASE,
    )


# =============================================================================
# LABEL SETS
# =============================================================================


@dataclass(frozen=True)
class GroupLabels:
    """Top-level label plus the two sub-labels of a grouped category."""

    label: str
    local: str
    international: str


@dataclass(frozen=True)
class HeadingLabels:
    """
    Literal heading labels for one target language.

    Only the order of CATEGORY_ORDER matters for section boundaries: each
    section stops at the first heading of any category that follows it.
    """

    professions: str
    universities: GroupLabels
    courses: str
    internships: GroupLabels
    individual_plan: str
    language: str = "en"

    def label_for(self, category: str) -> str:
        """
        Get the top-level label of a category.

        Raises:
            ValueError: If category is not one of CATEGORY_ORDER
        """
        if category == PROFESSIONS:
            return self.professions
        if category == UNIVERSITIES:
            return self.universities.label
        if category == COURSES:
            return self.courses
        if category == INTERNSHIPS:
            return self.internships.label
        if category == INDIVIDUAL_PLAN:
            return self.individual_plan
        raise ValueError(f"Unknown category: {category}. Expected one of {list(CATEGORY_ORDER)}")

    def group_for(self, category: str) -> GroupLabels:
        """Get the sub-labels of a grouped category."""
        if category == UNIVERSITIES:
            return self.universities
        if category == INTERNSHIPS:
            return self.internships
        raise ValueError(f"Category '{category}' has no local/international split")

    def stop_labels_after(self, category: str) -> tuple[str, ...]:
        """
        Labels of every category that follows the given one.

        Example:
            labels.stop_labels_after("courses")
            # ("Internships", "Individual Plan")
        """
        position = CATEGORY_ORDER.index(category)
        return tuple(self.label_for(c) for c in CATEGORY_ORDER[position + 1 :])


def _group_from_config(node: dict, category: str) -> GroupLabels:
    try:
        return GroupLabels(
            label=node["label"], local=node["local"], international=node["international"]
        )
    except (KeyError, TypeError) as e:
        raise ValueError(
            f"'{category}' must define label, local and international sub-labels"
        ) from e


@lru_cache(maxsize=None)
def _load_label_config(config_path: Path) -> dict:
    return OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)


def available_languages(config_path: Path = None) -> list[str]:
    """List the languages defined in the headings config."""
    if config_path is None:
        config_path = HEADINGS_CONFIG_PATH
    return list(_load_label_config(Path(config_path)).keys())


def load_heading_labels(language: Optional[str] = None, config_path: Path = None) -> HeadingLabels:
    """
    Load the heading label set for a language.

    Args:
        language: Language key in the config (defaults to TANDAU_LANGUAGE)
        config_path: Optional YAML path (defaults to HEADINGS_CONFIG_PATH)

    Returns:
        HeadingLabels for that language

    Raises:
        ValueError: If the language is not defined or its entry is incomplete
    """
    if language is None:
        language = DEFAULT_LANGUAGE
    if config_path is None:
        config_path = HEADINGS_CONFIG_PATH

    config = _load_label_config(Path(config_path))
    if language not in config:
        raise ValueError(
            f"Heading labels for language '{language}' not found. Available: {list(config.keys())}"
        )

    entry = config[language]
    try:
        return HeadingLabels(
            professions=entry[PROFESSIONS],
            universities=_group_from_config(entry[UNIVERSITIES], UNIVERSITIES),
            courses=entry[COURSES],
            internships=_group_from_config(entry[INTERNSHIPS], INTERNSHIPS),
            individual_plan=entry[INDIVIDUAL_PLAN],
            language=language,
        )
    except KeyError as e:
        raise ValueError(f"Heading labels for '{language}' missing category {e}") from e
