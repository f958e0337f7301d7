"""
Chat orchestration for the Guidance context.

CareerAdvisor drives the conversation with the assistant: it opens the chat
from the questionnaire answers, forwards user messages, records every turn in
the session, and hands each assistant reply to the session so that new
recommendations are picked up as soon as they appear.

The assistant is an external service; a failed call is recorded in the chat
as an apology turn instead of ending the conversation.
"""

from dataclasses import dataclass
from typing import Optional

from tandau.contexts.extraction.heading_patterns import HeadingLabels
from tandau.contexts.extraction.recommendation_data_structure import RecommendationRecord
from tandau.contexts.guidance.logger import (
    _log_debug,
    _log_error,
    _log_info,
    _log_success,
    _log_warning,
)
from tandau.contexts.guidance.prompts import render_initial_prompt, render_profession_prompt
from tandau.contexts.session.session_state import CareerPlanSession
from tandau.utils.event_logging import log_session_event
from tandau.utils.llm import MODEL_ROLE, USER_ROLE, ChatMessage, LLMProvider

# Messages shown in the chat when the assistant cannot answer
FAILURE_MESSAGES = {
    "ru": {
        "empty": "Извините, я не смог получить ответ от ИИ. Пожалуйста, попробуйте еще раз.",
        "error": "Произошла ошибка при обращении к ИИ: {error}. Пожалуйста, попробуйте позже.",
        "description_empty": "Не удалось сгенерировать описание для этой профессии.",
        "description_error": "Ошибка при генерации описания: {error}",
    },
    "en": {
        "empty": "Sorry, I could not get an answer from the assistant. Please try again.",
        "error": "The assistant request failed: {error}. Please try again later.",
        "description_empty": "Could not generate a description for this profession.",
        "description_error": "Error while generating the description: {error}",
    },
}


@dataclass
class ChatReply:
    """
    Outcome of one exchange with the assistant.

    Attributes:
        text: Reply shown to the user (the apology text when the call failed)
        recommendations: New current record if this reply contained recommendations
        error: Error description if the assistant call failed
    """

    text: str
    recommendations: Optional[RecommendationRecord] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


class CareerAdvisor:
    """
    Conversation driver between a CareerPlanSession and an LLM provider.

    Example:
        session = CareerPlanSession("u-42", JsonFileStore()).load()
        advisor = CareerAdvisor(session, get_provider())
        session.record_test_results({"interest": "tech"})
        reply = advisor.start_chat()
    """

    def __init__(
        self,
        session: CareerPlanSession,
        provider: LLMProvider,
        labels: Optional[HeadingLabels] = None,
        system_prompt: Optional[str] = None,
    ):
        if labels is None:
            labels = session.labels
        self.session = session
        self.provider = provider
        self.labels = labels
        self.system_prompt = system_prompt

    @property
    def messages(self) -> dict[str, str]:
        return FAILURE_MESSAGES.get(self.labels.language, FAILURE_MESSAGES["en"])

    def start_chat(self) -> ChatReply:
        """Open the conversation with the questionnaire answers."""
        prompt = render_initial_prompt(self.session.test_results, self.labels)
        _log_info(f"Starting chat for {self.session.user_id}")
        return self.send(prompt)

    def send(self, message: str) -> ChatReply:
        """
        Send a user message and record the assistant reply.

        Args:
            message: User text

        Returns:
            ChatReply with the reply text and any recommendations it contained
        """
        if not message or not message.strip():
            raise ValueError("Cannot send an empty message")

        self.session.append_message(ChatMessage(role=USER_ROLE, text=message))

        try:
            response = self.provider.chat(self.session.chat_history, self.system_prompt)
        except Exception as e:
            _log_error(f"Assistant call failed for {self.session.user_id}: {e}")
            if self.session.record_events:
                log_session_event(
                    "assistant_failed",
                    user_id=self.session.user_id,
                    source="guide",
                    provider=self.provider.name,
                    error=str(e),
                )
            text = self.messages["error"].format(error=e)
            self.session.append_message(ChatMessage(role=MODEL_ROLE, text=text))
            return ChatReply(text=text, error=str(e))

        if not response.content:
            _log_warning(f"Assistant returned an empty reply ({response.model})")
            text = self.messages["empty"]
            self.session.append_message(ChatMessage(role=MODEL_ROLE, text=text))
            return ChatReply(text=text, error="empty response")

        _log_debug(
            f"Reply from {response.model}: {response.input_tokens} in / "
            f"{response.output_tokens} out tokens"
        )
        self.session.append_message(ChatMessage(role=MODEL_ROLE, text=response.content))
        record = self.session.accept_response(response.content)
        return ChatReply(text=response.content, recommendations=record)

    def describe_profession(self, profession: str) -> ChatReply:
        """
        Ask for a detailed description of one recommended profession.

        The request is a separate single-turn call and is not added to the chat.
        """
        prompt = render_profession_prompt(profession, self.labels.language)
        try:
            response = self.provider.generate(self.system_prompt, prompt)
        except Exception as e:
            _log_error(f"Profession description failed for '{profession}': {e}")
            return ChatReply(text=self.messages["description_error"].format(error=e), error=str(e))

        if not response.content:
            return ChatReply(text=self.messages["description_empty"], error="empty response")
        _log_success(f"Description generated for '{profession}'")
        return ChatReply(text=response.content)

    def finish(self) -> Optional[str]:
        """End the chat and return the category to show first."""
        return self.session.finish()
