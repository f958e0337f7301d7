"""
Guidance Context

Responsibilities:
- Presents the career questionnaire and validates answers
- Renders prompts from the shared heading labels
- Drives the conversation with the assistant
- Formats recommendations as copyable text

Owns: Questionnaire, prompt templates, chat flow
Never: Parses responses (delegates to the session and extraction contexts)
"""

from tandau.contexts.guidance.chat import CareerAdvisor, ChatReply
from tandau.contexts.guidance.prompts import (
    PromptRegistry,
    render_initial_prompt,
    render_profession_prompt,
)
from tandau.contexts.guidance.questionnaire import (
    Option,
    Question,
    is_complete,
    load_questions,
    validate_answers,
)
from tandau.contexts.guidance.results_formatter import format_category, format_results_text

__all__ = [
    "CareerAdvisor",
    "ChatReply",
    "Option",
    "PromptRegistry",
    "Question",
    "format_category",
    "format_results_text",
    "is_complete",
    "load_questions",
    "render_initial_prompt",
    "render_profession_prompt",
    "validate_answers",
]
