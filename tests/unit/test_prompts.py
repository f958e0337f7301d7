"""Unit tests for PromptRegistry, prompt rendering and the results summary."""

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from tandau.contexts.extraction.heading_patterns import (
    INTERNSHIPS,
    PROFESSIONS,
    UNIVERSITIES,
    HeadingMatchMode,
    load_heading_labels,
)
from tandau.contexts.extraction.recommendation_builder import build_recommendations
from tandau.contexts.extraction.recommendation_data_structure import (
    GroupedList,
    RecommendationRecord,
)
from tandau.contexts.guidance.prompts import (
    INITIAL_PROMPT,
    PromptRegistry,
    render_initial_prompt,
    render_profession_prompt,
)
from tandau.contexts.guidance.results_formatter import format_category, format_results_text

EN = load_heading_labels("en")
RU = load_heading_labels("ru")


@pytest.fixture
def record():
    return RecommendationRecord(
        professions=("Data Analyst: desc",),
        universities=GroupedList(local=("KazNU, Almaty: desc",)),
        courses=("SQL basics",),
        internships=GroupedList(all=("Kaspi.kz: analytics",)),
        individual_plan=(),
    )


# =============================================================================
# PromptRegistry
# =============================================================================


@pytest.mark.unit
def test_registry_caches_templates():
    registry = PromptRegistry()

    first = registry.get_template(INITIAL_PROMPT, "en")
    second = registry.get_template(INITIAL_PROMPT, "en")

    assert first is second
    registry.clear_cache()
    assert registry._cache == {}


@pytest.mark.unit
def test_registry_missing_language():
    with pytest.raises(TemplateNotFound, match="not found for language 'xx'"):
        PromptRegistry().get_template(INITIAL_PROMPT, "xx")


@pytest.mark.unit
def test_registry_strict_undefined(tmp_path):
    (tmp_path / "greeting.en.txt.jinja").write_text("Hello {{ name }}")
    registry = PromptRegistry(tmp_path)

    assert registry.render("greeting", "en", name="Aida") == "Hello Aida"
    with pytest.raises(UndefinedError):
        registry.render("greeting", "en")


# =============================================================================
# Prompts
# =============================================================================


@pytest.mark.unit
def test_initial_prompt_embeds_answers_and_headings():
    prompt = render_initial_prompt({"interest": "tech", "goals": "growth"}, EN)

    assert '{"interest": "tech", "goals": "growth"}' in prompt
    for heading in ["Professions:", "Universities:", "Courses:", "Internships:", "Individual Plan:"]:
        assert heading in prompt
    assert "- Local:" in prompt
    assert "- International:" in prompt


@pytest.mark.unit
def test_initial_prompt_uses_russian_labels():
    prompt = render_initial_prompt({"interest": "tech"}, RU)

    assert "Онлайн-курсы:" in prompt
    assert "- Местные стажировки:" in prompt
    assert "Индивидуальный план:" in prompt


@pytest.mark.unit
@pytest.mark.parametrize("labels", [EN, RU], ids=["en", "ru"])
def test_initial_prompt_layout_parses_as_headings(labels):
    """Test that the heading layout the model is asked to echo parses line by line."""
    prompt = render_initial_prompt({"interest": "tech"}, labels)

    assert not any(line.startswith("'") or line.endswith("'") for line in prompt.splitlines())

    record = build_recommendations(prompt, labels, HeadingMatchMode.LINE)
    assert len(record.professions) == 2
    assert len(record.universities.local) == 2
    assert len(record.universities.international) == 1
    assert len(record.courses) == 2
    assert len(record.internships.local) == 1
    assert len(record.internships.international) == 1
    assert len(record.individual_plan) == 2


@pytest.mark.unit
def test_initial_prompt_example_items_en():
    record = build_recommendations(
        render_initial_prompt({"interest": "tech"}, EN), EN, HeadingMatchMode.LINE
    )

    assert record.professions == (
        "- [Profession 1]: [Short description]",
        "- [Profession 2]: [Short description]",
    )
    assert record.universities.local[0] == "- [University 1], [City]: [Short description]"
    assert record.individual_plan[-1] == "- [Plan step 2]: [Short description]"


@pytest.mark.unit
def test_profession_prompt():
    prompt = render_profession_prompt("  Data Analyst ", "en")
    assert '"Data Analyst"' in prompt


@pytest.mark.unit
@pytest.mark.parametrize("name", ["", "   "])
def test_profession_prompt_requires_name(name):
    with pytest.raises(ValueError):
        render_profession_prompt(name, "en")


# =============================================================================
# Results summary
# =============================================================================


@pytest.mark.unit
def test_results_text_lists_non_empty_categories(record):
    text = format_results_text(record, EN)

    assert text.startswith("My career recommendations from Tandau:")
    assert "Recommended professions:\nData Analyst: desc\n" in text
    assert "Local universities:\nKazNU, Almaty: desc\n" in text
    assert "Recommended online courses:\nSQL basics\n" in text
    assert "Recommended internships:\nKaspi.kz: analytics\n" in text
    assert "International universities" not in text
    assert "Individual plan" not in text


@pytest.mark.unit
def test_results_text_empty_record():
    text = format_results_text(None, EN)
    assert text.strip() == "My career recommendations from Tandau:"


@pytest.mark.unit
def test_results_text_russian(record):
    text = format_results_text(record, RU)
    assert "Data Analyst: desc" in text
    assert "Местные вузы" in text


@pytest.mark.unit
def test_format_flat_category(record):
    assert format_category(record, PROFESSIONS, EN) == "Professions:\n  Data Analyst: desc"


@pytest.mark.unit
def test_format_grouped_category():
    record = RecommendationRecord(
        universities=GroupedList(local=("U1",), international=("U2", "U3")),
    )
    assert format_category(record, UNIVERSITIES, EN) == (
        "Universities:\n  Local:\n    U1\n  International:\n    U2\n    U3"
    )


@pytest.mark.unit
def test_format_grouped_fallback(record):
    assert format_category(record, INTERNSHIPS, EN) == "Internships:\n  Kaspi.kz: analytics"


@pytest.mark.unit
def test_format_empty_category():
    assert format_category(RecommendationRecord.empty(), PROFESSIONS, EN) == "Professions:"
