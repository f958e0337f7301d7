"""Unit tests for heading label loading and line patterns."""

import pytest

from tandau.contexts.extraction.heading_patterns import (
    COURSES,
    INDIVIDUAL_PLAN,
    INTERNSHIPS,
    PROFESSIONS,
    UNIVERSITIES,
    HeadingMatchMode,
    available_languages,
    default_match_mode,
    heading_line_pattern,
    load_heading_labels,
    strip_heading_decorations,
)


@pytest.mark.unit
def test_available_languages():
    assert set(available_languages()) >= {"en", "ru"}


@pytest.mark.unit
def test_load_english_labels():
    labels = load_heading_labels("en")

    assert labels.language == "en"
    assert labels.label_for(PROFESSIONS) == "Professions"
    assert labels.label_for(INDIVIDUAL_PLAN) == "Individual Plan"
    assert labels.group_for(UNIVERSITIES).local == "Local"
    assert labels.group_for(INTERNSHIPS).international == "International"


@pytest.mark.unit
def test_load_russian_labels():
    labels = load_heading_labels("ru")

    assert labels.label_for(COURSES) == "Онлайн-курсы"
    assert labels.universities.local == "Местные вузы"
    assert labels.internships.international == "Международные стажировки"


@pytest.mark.unit
def test_unknown_language_raises():
    with pytest.raises(ValueError, match="not found"):
        load_heading_labels("xx")


@pytest.mark.unit
def test_incomplete_config_raises(tmp_path):
    config = tmp_path / "headings.yaml"
    config.write_text("en:\n  professions: Professions\n  courses: Courses\n")

    with pytest.raises(ValueError):
        load_heading_labels("en", config_path=config)


@pytest.mark.unit
def test_custom_config(tmp_path):
    config = tmp_path / "headings.yaml"
    config.write_text(
        "de:\n"
        "  professions: Berufe\n"
        "  universities: {label: Hochschulen, local: Lokal, international: International}\n"
        "  courses: Kurse\n"
        "  internships: {label: Praktika, local: Lokal, international: International}\n"
        "  individualPlan: Plan\n"
    )

    labels = load_heading_labels("de", config_path=config)
    assert labels.label_for(INTERNSHIPS) == "Praktika"
    assert available_languages(config) == ["de"]


@pytest.mark.unit
def test_stop_labels_follow_category_order():
    labels = load_heading_labels("en")

    assert labels.stop_labels_after(PROFESSIONS) == (
        "Universities",
        "Courses",
        "Internships",
        "Individual Plan",
    )
    assert labels.stop_labels_after(COURSES) == ("Internships", "Individual Plan")
    assert labels.stop_labels_after(INDIVIDUAL_PLAN) == ()


@pytest.mark.unit
def test_label_for_unknown_category():
    with pytest.raises(ValueError):
        load_heading_labels("en").label_for("hobbies")


@pytest.mark.unit
def test_group_for_flat_category():
    with pytest.raises(ValueError, match="no local/international split"):
        load_heading_labels("en").group_for(COURSES)


@pytest.mark.unit
@pytest.mark.parametrize(
    "line,expected",
    [
        ("**Courses:**", "Courses:"),
        ("### Courses:", "Courses:"),
        ("- **Local:**", "Local:"),
        ("  • International:", "International:"),
        ("- - Local:", "Local:"),
        ("1. Professions:", "Professions:"),
        ("### 2) Courses:", "Courses:"),
        ("Plain text", "Plain text"),
    ],
)
def test_strip_heading_decorations(line, expected):
    assert strip_heading_decorations(line) == expected


@pytest.mark.unit
def test_heading_line_pattern_is_anchored():
    pattern = heading_line_pattern("Courses")

    assert pattern.match("courses: SQL").group("inline") == " SQL"
    assert pattern.match("Courses :")
    assert not pattern.match("My Courses: SQL")
    assert not pattern.match("Courses")


@pytest.mark.unit
def test_heading_line_pattern_escapes_label():
    assert not heading_line_pattern("Online-courses (free)").match("Online-courses free:")
    assert heading_line_pattern("Online-courses (free)").match("Online-courses (free):")


@pytest.mark.unit
def test_default_match_mode(monkeypatch):
    monkeypatch.delenv("TANDAU_HEADING_MATCH", raising=False)
    assert default_match_mode() == HeadingMatchMode.LINE

    monkeypatch.setenv("TANDAU_HEADING_MATCH", "ANYWHERE")
    assert default_match_mode() == HeadingMatchMode.ANYWHERE
