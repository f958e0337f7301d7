"""
Section extraction for assistant responses.

Locates one labeled section in free-form response text and returns its body
as a list of cleaned items. Two strategies are available (see
HeadingMatchMode):

- LINE: the response is tokenized into lines, each line classified as a
  heading or content, and a small state machine walks the tokens
  (OUTSIDE -> IN_SECTION -> DONE). A heading word quoted in the middle of a
  sentence is content, not a boundary.
- ANYWHERE: first case-insensitive "label:" anywhere in the text, body up to
  the first occurrence of any stop label. Matches responses that run headings
  into paragraphs, at the cost of positional false positives.

Neither strategy treats a missing heading as an error: the result is simply
an empty list.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from tandau.contexts.extraction.exceptions import require_text
from tandau.contexts.extraction.heading_patterns import (
    EMPHASIS_MARKER,
    HeadingMatchMode,
    default_match_mode,
    heading_line_pattern,
    strip_heading_decorations,
)

# Tokenizer states
OUTSIDE = "outside"
IN_SECTION = "in_section"
DONE = "done"


@dataclass(frozen=True)
class LineToken:
    """
    One classified line of a response.

    heading is the matched label for heading lines, None for content lines.
    inline is the remainder after the separator on a heading line
    ("Courses: Intro to SQL" -> " Intro to SQL").
    """

    raw: str
    heading: Optional[str] = None
    inline: str = ""

    @property
    def is_heading(self) -> bool:
        return self.heading is not None


def clean_item(line: str) -> str:
    """Remove every emphasis marker from a line and trim it."""
    return line.replace(EMPHASIS_MARKER, "").strip()


def clean_lines(lines: Iterable[str]) -> list[str]:
    """
    Clean a sequence of raw lines into items.

    Blank and whitespace-only lines are dropped; order and duplicates are kept.
    """
    items = []
    for line in lines:
        item = clean_item(line)
        if item:
            items.append(item)
    return items


def classify_line(line: str, labels: Iterable[str]) -> LineToken:
    """
    Classify a raw line as a heading for one of labels, or as content.

    Labels are tried in the order given, so a longer label that shares a
    prefix with a shorter one should come first.

    Args:
        line: Raw line from the response
        labels: Candidate heading labels

    Returns:
        LineToken for the line
    """
    stripped = strip_heading_decorations(line)
    for label in labels:
        match = heading_line_pattern(label).match(stripped)
        if match:
            return LineToken(raw=line, heading=label, inline=match.group("inline"))
    return LineToken(raw=line)


def tokenize(text: str, labels: Iterable[str]) -> list[LineToken]:
    """Split text into lines and classify each one against labels."""
    # Longest first so "International" is never shadowed by a shorter prefix label
    ordered = sorted(set(labels), key=len, reverse=True)
    return [classify_line(line, ordered) for line in text.splitlines()]


def _find_by_lines(text: str, heading: str, stop_headings: set[str]) -> Optional[list[str]]:
    heading_key = heading.lower()
    stop_keys = {label.lower() for label in stop_headings} - {heading_key}

    tokens = tokenize(text, [heading, *stop_headings])

    state = OUTSIDE
    body = []
    for token in tokens:
        if state == OUTSIDE:
            if token.is_heading and token.heading.lower() == heading_key:
                state = IN_SECTION
                body.append(token.inline)
        elif state == IN_SECTION:
            if token.is_heading and token.heading.lower() in stop_keys:
                state = DONE
                break
            # A repeated heading of the same section is kept as content
            body.append(token.raw)

    if state == OUTSIDE:
        return None
    return clean_lines(body)


def _find_anywhere(
    text: str, heading: str, stop_headings: set[str], stop_needs_separator: bool = False
) -> Optional[list[str]]:
    match = re.search(rf"{re.escape(heading)}\s*:\s*", text, re.IGNORECASE)
    if not match:
        return None

    body = text[match.end() :]
    if stop_headings:
        # Longest first so alternation prefers the most specific label
        alternatives = "|".join(
            re.escape(label) for label in sorted(stop_headings, key=len, reverse=True)
        )
        if stop_needs_separator:
            alternatives = rf"(?:{alternatives})\s*:"
        stop = re.search(alternatives, body, re.IGNORECASE)
        if stop:
            body = body[: stop.start()]

    return clean_lines(body.split("\n"))


def find_section(
    text: str,
    heading: str,
    stop_headings: Iterable[str] = (),
    mode: Optional[HeadingMatchMode] = None,
    stop_needs_separator: bool = False,
) -> Optional[list[str]]:
    """
    Like extract_section(), but distinguishes an absent heading from an empty body.

    stop_needs_separator makes ANYWHERE mode end the body only at "label:"
    rather than at the bare label. LINE mode always requires the separator.

    Returns:
        Items of the section, [] if the heading is present with no body,
        None if the heading does not occur at all
    """
    require_text(text, "text")
    require_text(heading, "heading")
    stop_headings = set(stop_headings)
    for label in stop_headings:
        require_text(label, "stop_headings")

    if mode is None:
        mode = default_match_mode()

    if HeadingMatchMode(mode) == HeadingMatchMode.ANYWHERE:
        return _find_anywhere(text, heading, stop_headings, stop_needs_separator)
    return _find_by_lines(text, heading, stop_headings)


def extract_section(
    text: str,
    heading: str,
    stop_headings: Iterable[str] = (),
    mode: Optional[HeadingMatchMode] = None,
) -> list[str]:
    """
    Extract the items of one labeled section.

    The body starts after the first "heading:" and ends before the first
    heading in stop_headings, or at the end of text. Blank lines are dropped;
    every remaining line has the emphasis marker removed and is trimmed.

    Args:
        text: Full response text
        heading: Label of the section to extract (case-insensitive)
        stop_headings: Labels that end the section
        mode: Heading match strategy (defaults to TANDAU_HEADING_MATCH)

    Returns:
        Items in order of appearance; empty list if heading is not present

    Raises:
        InvalidInputError: If text, heading or a stop heading is not a str

    Example:
        >>> extract_section("Courses:\\n**SQL**: basics\\n\\nInternships:\\nX", "Courses", {"Internships"})
        ['SQL: basics']
    """
    items = find_section(text, heading, stop_headings, mode=mode)
    return items if items is not None else []
