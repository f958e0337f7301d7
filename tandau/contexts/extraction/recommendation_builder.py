"""
Recommendation building for the Extraction context.

Runs the section extractor once per top-level heading, splits the grouped
categories into local/international sub-lists, and assembles one
RecommendationRecord. Pure once labels and mode are given: no I/O, no logging,
same text -> equal record.

Pattern follows the rest of the package: extractor produces item lists,
data structure consumes them.
"""

from typing import Optional

from tandau.contexts.extraction.exceptions import require_text
from tandau.contexts.extraction.heading_patterns import (
    COURSES,
    INDIVIDUAL_PLAN,
    INTERNSHIPS,
    PROFESSIONS,
    UNIVERSITIES,
    HeadingLabels,
    HeadingMatchMode,
    default_match_mode,
    load_heading_labels,
)
from tandau.contexts.extraction.recommendation_data_structure import (
    GroupedList,
    RecommendationRecord,
)
from tandau.contexts.extraction.section_extractor import clean_lines, extract_section, find_section


def split_grouped_section(
    items: list[str],
    local_label: str,
    international_label: str,
    mode: Optional[HeadingMatchMode] = None,
) -> GroupedList:
    """
    Split the body of a grouped category into local/international sub-lists.

    The body is re-joined into one blob and scanned for the two sub-headings.
    Each sub-body ends at the other sub-heading or at the end of the blob.
    When neither sub-heading is present every non-blank line goes to all.

    Args:
        items: Items of the top-level section
        local_label: Sub-heading of local entries (e.g., "Local")
        international_label: Sub-heading of international entries
        mode: Heading match strategy

    Returns:
        GroupedList honoring the all-only-without-sub-headings rule
    """
    if mode is None:
        mode = default_match_mode()
    blob = "\n".join(items)

    # Free-position matching lets the international body run to the end of the blob
    international_stop = () if mode == HeadingMatchMode.ANYWHERE else {local_label}

    # Sub-bodies end only at a sub-heading with its colon, never at the label in an item
    local = find_section(
        blob, local_label, {international_label}, mode=mode, stop_needs_separator=True
    )
    international = find_section(
        blob, international_label, international_stop, mode=mode, stop_needs_separator=True
    )

    if local is None and international is None:
        return GroupedList(all=tuple(clean_lines(blob.split("\n"))))

    return GroupedList(local=tuple(local or ()), international=tuple(international or ()))


def build_recommendations(
    text: str,
    labels: Optional[HeadingLabels] = None,
    mode: Optional[HeadingMatchMode] = None,
) -> RecommendationRecord:
    """
    Parse one assistant response into a RecommendationRecord.

    Each section stops at the headings of the categories that follow it, so a
    boundary never runs past the next top-level heading. Missing sections are
    empty; text without any heading yields an empty record, not an error.

    Parsing itself does no I/O. Omitting labels or mode falls back to the
    configured defaults: TANDAU_HEADING_MATCH is read from the environment and
    the headings YAML is read once (then cached). Pass both explicitly for a
    fully pure call, as CareerPlanSession does.

    Args:
        text: Full response text
        labels: Heading labels to recognize (defaults to TANDAU_LANGUAGE)
        mode: Heading match strategy (defaults to TANDAU_HEADING_MATCH)

    Returns:
        Fully populated RecommendationRecord

    Raises:
        InvalidInputError: If text is not a str
    """
    require_text(text, "text")
    if labels is None:
        labels = load_heading_labels()
    if mode is None:
        mode = default_match_mode()

    def section(category: str) -> list[str]:
        return extract_section(
            text, labels.label_for(category), labels.stop_labels_after(category), mode=mode
        )

    def grouped(category: str) -> GroupedList:
        group = labels.group_for(category)
        return split_grouped_section(section(category), group.local, group.international, mode)

    return RecommendationRecord(
        professions=tuple(section(PROFESSIONS)),
        universities=grouped(UNIVERSITIES),
        courses=tuple(section(COURSES)),
        internships=grouped(INTERNSHIPS),
        individual_plan=tuple(section(INDIVIDUAL_PLAN)),
    )
