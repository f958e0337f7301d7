"""
Plain-text results summary.

Renders a RecommendationRecord into the text a user copies out of the results
view. Only categories with items are printed; a grouped category prints its
local and international lists, and falls back to the ungrouped list only when
both are empty.
"""

from typing import Optional

from tandau.contexts.extraction.heading_patterns import HeadingLabels, load_heading_labels
from tandau.contexts.extraction.recommendation_data_structure import (
    GroupedList,
    RecommendationRecord,
)
from tandau.contexts.guidance.prompts import RESULTS_SUMMARY, PromptRegistry, get_registry


def format_results_text(
    record: Optional[RecommendationRecord],
    labels: Optional[HeadingLabels] = None,
    registry: Optional[PromptRegistry] = None,
) -> str:
    """
    Format recommendations as copyable plain text.

    Args:
        record: Recommendations to format (None is treated as empty)
        labels: Label set selecting the output language
        registry: Template registry (defaults to the packaged templates)

    Returns:
        Summary text (title line only when there are no recommendations)
    """
    if record is None:
        record = RecommendationRecord.empty()
    if labels is None:
        labels = load_heading_labels()
    if registry is None:
        registry = get_registry()
    return registry.render(RESULTS_SUMMARY, labels.language, record=record, labels=labels)


def format_category(record: RecommendationRecord, category: str, labels: HeadingLabels) -> str:
    """
    Format a single category for display, e.g. the selected tab of the results view.

    Returns:
        "Label:" line followed by one item per line; grouped categories list
        their sub-labels; an empty category yields just the label line
    """
    lines = [f"{labels.label_for(category)}:"]
    value = record.get(category)

    if isinstance(value, GroupedList):
        group = labels.group_for(category)
        if value.local:
            lines.append(f"  {group.local}:")
            lines.extend(f"    {item}" for item in value.local)
        if value.international:
            lines.append(f"  {group.international}:")
            lines.extend(f"    {item}" for item in value.international)
        lines.extend(f"  {item}" for item in value.all)
    else:
        lines.extend(f"  {item}" for item in value)

    return "\n".join(lines)
