"""
Recommendation data structures for the Extraction context.

RecommendationRecord is the complete structured output of one parsed
assistant response. It is immutable: a newer parse supersedes a record, it
never edits one in place. to_dict()/from_dict() convert to and from the shape
stored by the persistence collaborator.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from tandau.contexts.extraction.exceptions import InvalidInputError
from tandau.contexts.extraction.heading_patterns import (
    CATEGORY_ORDER,
    COURSES,
    GROUPED_CATEGORIES,
    INDIVIDUAL_PLAN,
    INTERNSHIPS,
    PROFESSIONS,
    UNIVERSITIES,
)

ItemList = tuple[str, ...]


def _as_items(value: Any, key: str) -> ItemList:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise InvalidInputError(f"Expected a list of items for '{key}'", argument=key, value=value)
    return tuple(str(item) for item in value)


@dataclass(frozen=True)
class GroupedList:
    """
    Items of a category split into local and international sub-lists.

    all is only filled when the response had neither sub-heading; as soon as
    one sub-heading is present, all stays empty even if the other is missing.
    """

    local: ItemList = ()
    international: ItemList = ()
    all: ItemList = ()

    def items(self) -> ItemList:
        """Every item regardless of grouping (local, international, then all)."""
        return self.local + self.international + self.all

    def is_empty(self) -> bool:
        return not (self.local or self.international or self.all)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "local": list(self.local),
            "international": list(self.international),
            "all": list(self.all),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict], key: str = "group") -> "GroupedList":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise InvalidInputError(f"Expected a mapping for '{key}'", argument=key, value=data)
        return cls(
            local=_as_items(data.get("local"), f"{key}.local"),
            international=_as_items(data.get("international"), f"{key}.international"),
            all=_as_items(data.get("all"), f"{key}.all"),
        )


@dataclass(frozen=True)
class RecommendationRecord:
    """
    Structured recommendations parsed from one assistant response.

    Every field is always present; a category without data is an empty tuple
    (or an empty GroupedList), never None.

    Factory methods:
        from_dict(data) - Restore from the persisted shape
        empty() - Record with no recommendations
    """

    professions: ItemList = ()
    universities: GroupedList = field(default_factory=GroupedList)
    courses: ItemList = ()
    internships: GroupedList = field(default_factory=GroupedList)
    individual_plan: ItemList = ()

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def empty(cls) -> "RecommendationRecord":
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> "RecommendationRecord":
        """
        Restore a record from its persisted shape.

        Missing keys become empty lists; the camelCase key individualPlan is
        the stored name of individual_plan.

        Raises:
            InvalidInputError: If data is not a mapping or a field has the wrong shape
        """
        if not isinstance(data, dict):
            raise InvalidInputError("Expected a mapping of recommendations", argument="data", value=data)
        return cls(
            professions=_as_items(data.get(PROFESSIONS), PROFESSIONS),
            universities=GroupedList.from_dict(data.get(UNIVERSITIES), UNIVERSITIES),
            courses=_as_items(data.get(COURSES), COURSES),
            internships=GroupedList.from_dict(data.get(INTERNSHIPS), INTERNSHIPS),
            individual_plan=_as_items(data.get(INDIVIDUAL_PLAN), INDIVIDUAL_PLAN),
        )

    # =========================================================================
    # PUBLIC API METHODS
    # =========================================================================

    def get(self, category: str):
        """
        Get the items of a category by its key.

        Returns:
            ItemList for flat categories, GroupedList for grouped ones

        Raises:
            ValueError: If category is not one of CATEGORY_ORDER
        """
        if category == PROFESSIONS:
            return self.professions
        if category == UNIVERSITIES:
            return self.universities
        if category == COURSES:
            return self.courses
        if category == INTERNSHIPS:
            return self.internships
        if category == INDIVIDUAL_PLAN:
            return self.individual_plan
        raise ValueError(f"Unknown category: {category}. Expected one of {list(CATEGORY_ORDER)}")

    def has_items(self, category: str) -> bool:
        value = self.get(category)
        if category in GROUPED_CATEGORIES:
            return not value.is_empty()
        return len(value) > 0

    def is_empty(self) -> bool:
        """True when no category has any item."""
        return not any(self.has_items(category) for category in CATEGORY_ORDER)

    def to_dict(self) -> dict[str, Any]:
        return {
            PROFESSIONS: list(self.professions),
            UNIVERSITIES: self.universities.to_dict(),
            COURSES: list(self.courses),
            INTERNSHIPS: self.internships.to_dict(),
            INDIVIDUAL_PLAN: list(self.individual_plan),
        }


def first_non_empty_category(
    record: Optional[RecommendationRecord], order: Iterable[str] = CATEGORY_ORDER
) -> Optional[str]:
    """
    Pick the first category in order that has at least one item.

    Grouped categories count as non-empty when any of local, international
    or all has an item.

    Args:
        record: Parsed recommendations (None when nothing was parsed yet)
        order: Category keys in priority order

    Returns:
        Category key, or None if record is None or every listed category is empty

    Raises:
        ValueError: If order contains an unknown category
    """
    if record is None:
        return None
    for category in order:
        if record.has_items(category):
            return category
    return None
