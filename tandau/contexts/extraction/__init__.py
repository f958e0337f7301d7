"""
Extraction Context

Responsibilities:
- Locates labeled sections in free-form assistant responses
- Splits grouped categories into local/international sub-lists
- Assembles one immutable RecommendationRecord per response

Owns: Heading vocabulary, section boundaries, recommendation record shape
Never: Performs I/O, calls the assistant, or decides what gets persisted
"""

from tandau.contexts.extraction.exceptions import InvalidInputError
from tandau.contexts.extraction.heading_patterns import (
    CATEGORY_ORDER,
    GroupLabels,
    HeadingLabels,
    HeadingMatchMode,
    load_heading_labels,
)
from tandau.contexts.extraction.recommendation_builder import (
    build_recommendations,
    split_grouped_section,
)
from tandau.contexts.extraction.recommendation_data_structure import (
    GroupedList,
    RecommendationRecord,
    first_non_empty_category,
)
from tandau.contexts.extraction.section_extractor import extract_section, find_section

__all__ = [
    "CATEGORY_ORDER",
    "GroupLabels",
    "GroupedList",
    "HeadingLabels",
    "HeadingMatchMode",
    "InvalidInputError",
    "RecommendationRecord",
    "build_recommendations",
    "extract_section",
    "find_section",
    "first_non_empty_category",
    "load_heading_labels",
    "split_grouped_section",
]
