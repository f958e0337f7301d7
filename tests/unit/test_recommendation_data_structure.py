"""Unit tests for RecommendationRecord, GroupedList and first_non_empty_category."""

import dataclasses

import pytest

from tandau.contexts.extraction.exceptions import InvalidInputError
from tandau.contexts.extraction.heading_patterns import (
    COURSES,
    INDIVIDUAL_PLAN,
    INTERNSHIPS,
    PROFESSIONS,
    UNIVERSITIES,
)
from tandau.contexts.extraction.recommendation_data_structure import (
    GroupedList,
    RecommendationRecord,
    first_non_empty_category,
)


@pytest.fixture
def record():
    return RecommendationRecord(
        professions=("Data Analyst: desc",),
        universities=GroupedList(local=("KazNU, Almaty",), international=("TU Munich, Germany",)),
        courses=(),
        internships=GroupedList(all=("Kaspi.kz",)),
        individual_plan=("Month 1: Python",),
    )


@pytest.mark.unit
def test_empty_record_has_every_field():
    record = RecommendationRecord.empty()
    assert record.professions == ()
    assert record.universities == GroupedList()
    assert record.internships == GroupedList()
    assert record.is_empty()


@pytest.mark.unit
def test_record_is_immutable(record):
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.professions = ()


@pytest.mark.unit
def test_to_dict_uses_stored_key_names(record):
    data = record.to_dict()

    assert list(data.keys()) == [PROFESSIONS, UNIVERSITIES, COURSES, INTERNSHIPS, INDIVIDUAL_PLAN]
    assert data["individualPlan"] == ["Month 1: Python"]
    assert data["universities"] == {
        "local": ["KazNU, Almaty"],
        "international": ["TU Munich, Germany"],
        "all": [],
    }
    assert data["courses"] == []


@pytest.mark.unit
def test_from_dict_restores_record(record):
    assert RecommendationRecord.from_dict(record.to_dict()) == record


@pytest.mark.unit
def test_from_dict_fills_missing_keys():
    restored = RecommendationRecord.from_dict({"courses": ["SQL"]})

    assert restored.courses == ("SQL",)
    assert restored.professions == ()
    assert restored.universities == GroupedList()


@pytest.mark.unit
def test_from_dict_accepts_partial_group():
    restored = RecommendationRecord.from_dict({"internships": {"local": ["Kaspi.kz"]}})
    assert restored.internships == GroupedList(local=("Kaspi.kz",))


@pytest.mark.unit
@pytest.mark.parametrize(
    "data",
    [
        None,
        "professions",
        {"professions": "Data Analyst"},
        {"universities": ["MIT"]},
        {"internships": {"all": 5}},
    ],
)
def test_from_dict_rejects_wrong_shapes(data):
    with pytest.raises(InvalidInputError):
        RecommendationRecord.from_dict(data)


@pytest.mark.unit
def test_get_returns_category_values(record):
    assert record.get(PROFESSIONS) == ("Data Analyst: desc",)
    assert record.get(INTERNSHIPS).all == ("Kaspi.kz",)


@pytest.mark.unit
def test_get_unknown_category_raises(record):
    with pytest.raises(ValueError, match="Unknown category"):
        record.get("hobbies")


@pytest.mark.unit
def test_grouped_items_order():
    group = GroupedList(local=("L",), international=("I",), all=("A",))
    assert group.items() == ("L", "I", "A")


@pytest.mark.unit
def test_has_items(record):
    assert record.has_items(UNIVERSITIES)
    assert record.has_items(INTERNSHIPS)
    assert not record.has_items(COURSES)


# =============================================================================
# first_non_empty_category
# =============================================================================


@pytest.mark.unit
def test_first_non_empty_default_order(record):
    assert first_non_empty_category(record) == PROFESSIONS


@pytest.mark.unit
def test_first_non_empty_skips_empty_categories():
    record = RecommendationRecord(courses=("SQL",), individual_plan=("Step",))
    assert first_non_empty_category(record) == COURSES


@pytest.mark.unit
def test_first_non_empty_custom_order(record):
    assert first_non_empty_category(record, [COURSES, INTERNSHIPS, PROFESSIONS]) == INTERNSHIPS


@pytest.mark.unit
def test_first_non_empty_grouped_counts_any_sub_list():
    record = RecommendationRecord(universities=GroupedList(international=("MIT",)))
    assert first_non_empty_category(record) == UNIVERSITIES


@pytest.mark.unit
def test_first_non_empty_none_when_all_empty():
    assert first_non_empty_category(RecommendationRecord.empty()) is None
    assert first_non_empty_category(None) is None


@pytest.mark.unit
def test_first_non_empty_only_looks_at_given_order(record):
    assert first_non_empty_category(record, [COURSES]) is None


@pytest.mark.unit
def test_first_non_empty_unknown_category_raises():
    with pytest.raises(ValueError):
        first_non_empty_category(RecommendationRecord.empty(), ["hobbies"])
