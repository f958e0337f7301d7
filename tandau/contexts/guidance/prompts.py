"""
Prompt and text templates for the Guidance context.

Templates live in guidance/templates/ as {name}.{language}.txt.jinja. The
initial prompt is rendered from the same HeadingLabels the extractor uses, so
the headings the assistant is asked for are exactly the headings parsed back.
"""

import json
import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from tandau.contexts.extraction.heading_patterns import HeadingLabels, load_heading_labels

load_dotenv()
TEMPLATES_PATH = Path(os.getenv("TANDAU_TEMPLATES_PATH", Path(__file__).parent / "templates"))

INITIAL_PROMPT = "initial_prompt"
PROFESSION_DESCRIPTION = "profession_description"
RESULTS_SUMMARY = "results_summary"


class PromptRegistry:
    """
    Registry for loading and caching Jinja2 text templates per language.
    """

    def __init__(self, templates_path: Path = None):
        """
        Args:
            templates_path: Directory holding the templates. Defaults to
                           TANDAU_TEMPLATES_PATH from environment
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=False,
        )

    def get_template(self, name: str, language: str) -> Template:
        """
        Get a template by name and language, loading and caching it if necessary.

        Raises:
            TemplateNotFound: If no template exists for that language
        """
        template_file = f"{name}.{language}.txt.jinja"
        if template_file in self._cache:
            return self._cache[template_file]

        try:
            template = self.env.get_template(template_file)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template '{name}' not found for language '{language}' at "
                f"{self.templates_path / template_file}"
            ) from e

        self._cache[template_file] = template
        return template

    def render(self, name: str, language: str, **context) -> str:
        return self.get_template(name, language).render(**context)

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()


_default_registry: Optional[PromptRegistry] = None


def get_registry() -> PromptRegistry:
    """Shared registry over the packaged templates."""
    global _default_registry
    if _default_registry is None:
        _default_registry = PromptRegistry()
    return _default_registry


def render_initial_prompt(
    test_results: dict[str, str],
    labels: Optional[HeadingLabels] = None,
    registry: Optional[PromptRegistry] = None,
) -> str:
    """
    Render the message that opens the chat.

    Args:
        test_results: Questionnaire answers (question id -> option value)
        labels: Heading labels the assistant must use (defaults to TANDAU_LANGUAGE)
        registry: Template registry (defaults to the packaged templates)

    Returns:
        Prompt text embedding the answers as JSON and the expected headings
    """
    if labels is None:
        labels = load_heading_labels()
    if registry is None:
        registry = get_registry()
    return registry.render(
        INITIAL_PROMPT,
        labels.language,
        results_json=json.dumps(test_results, ensure_ascii=False),
        labels=labels,
    )


def render_profession_prompt(
    profession: str, language: str, registry: Optional[PromptRegistry] = None
) -> str:
    """Render the request for a detailed description of one profession."""
    if not profession or not profession.strip():
        raise ValueError("Profession name is required")
    if registry is None:
        registry = get_registry()
    return registry.render(PROFESSION_DESCRIPTION, language, profession=profession.strip())
