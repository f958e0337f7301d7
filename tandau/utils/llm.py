"""
LLM provider abstraction for the conversational assistant.

Provides a provider-agnostic chat interface with automatic retries. The
assistant is an opaque text source: nothing here knows about recommendation
headings or parsing.
"""

import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional, Sequence, TypeVar

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

# Retry configuration
MAX_RETRIES = 5
BASE_DELAY = 1.0
MAX_TOKENS = 4096

# Roles as stored in chat history; providers translate "model" to their own name
USER_ROLE = "user"
MODEL_ROLE = "model"

T = TypeVar("T")


def _retry_with_backoff(
    operation: Callable[[], T],
    retryable_exception: type[Exception],
    error_message: str,
) -> T:
    """
    Execute operation with exponential backoff retry on specific exception.

    Args:
        operation: Callable that performs the API request and returns result
        retryable_exception: Exception type that triggers retry
        error_message: Message prefix for retry logging (e.g., "API overloaded")
    """
    for attempt in range(MAX_RETRIES):
        try:
            return operation()
        except retryable_exception:
            if attempt == MAX_RETRIES - 1:
                raise
            delay = BASE_DELAY * (2**attempt)
            logger.warning(
                f"{error_message}, retrying in {delay:.1f}s... "
                f"(attempt {attempt + 1}/{MAX_RETRIES})"
            )
            time.sleep(delay)


@dataclass(frozen=True)
class ChatMessage:
    """
    One turn of the conversation.

    Stored as {"role": ..., "parts": [{"text": ...}]}, the chat history shape
    the web client reads.
    """

    role: str
    text: str

    def __post_init__(self):
        if self.role not in (USER_ROLE, MODEL_ROLE):
            raise ValueError(f"Unknown chat role: {self.role}. Use '{USER_ROLE}' or '{MODEL_ROLE}'")

    def to_dict(self) -> dict:
        return {"role": self.role, "parts": [{"text": self.text}]}

    @classmethod
    def from_dict(cls, data: dict) -> "ChatMessage":
        parts = data.get("parts") or []
        text = "".join(part.get("text", "") for part in parts)
        return cls(role=data["role"], text=text)


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Abstract base for LLM providers.

    Subclasses must:
    - Set _provider_prefix class attribute (e.g., "anthropic", "openai")
    - Set self._retryable_exception to the exception type that triggers retry
    - Set self._retry_message for logging during retries
    - Implement _call_api() for the actual API call
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str
    _retryable_exception: type[Exception]
    _retry_message: str

    name: str
    model: str

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(self, system_prompt: Optional[str], messages: Sequence[ChatMessage]) -> LLMResponse:
        """Make a single API call (no retries). Implemented by subclasses."""
        pass

    def chat(
        self, messages: Sequence[ChatMessage], system_prompt: Optional[str] = None
    ) -> LLMResponse:
        """Continue a conversation with automatic retry on transient errors."""
        if not messages:
            raise ValueError("Cannot send an empty conversation")
        return _retry_with_backoff(
            partial(self._call_api, system_prompt, list(messages)),
            self._retryable_exception,
            self._retry_message,
        )

    def generate(self, system_prompt: Optional[str], user_prompt: str) -> LLMResponse:
        """Single-turn shortcut for chat()."""
        return self.chat([ChatMessage(role=USER_ROLE, text=user_prompt)], system_prompt)


def _to_provider_messages(messages: Sequence[ChatMessage]) -> list[dict]:
    return [
        {"role": "assistant" if m.role == MODEL_ROLE else "user", "content": m.text}
        for m in messages
    ]


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider with exponential backoff retry."""

    _provider_prefix = "anthropic"
    _retry_message = "API overloaded"

    def __init__(self, model: str = "claude-sonnet-4-20250514"):
        # Lazy import - anthropic SDK is heavy, only load if this provider is used
        try:
            import anthropic
        except ImportError:
            raise ImportError("anthropic package required. Install with: pip install anthropic")

        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self.client = anthropic.Anthropic(api_key=api_key)
        self._retryable_exception = anthropic.OverloadedError
        self.update_model(model)

    def _call_api(self, system_prompt: Optional[str], messages: Sequence[ChatMessage]) -> LLMResponse:
        kwargs = {"system": system_prompt} if system_prompt else {}
        response = self.client.messages.create(
            model=self.model,
            max_tokens=MAX_TOKENS,
            messages=_to_provider_messages(messages),
            **kwargs,
        )
        return LLMResponse(
            content=response.content[0].text,
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider with exponential backoff retry."""

    _provider_prefix = "openai"
    _retry_message = "Rate limit hit"

    def __init__(self, model: str = "gpt-4o"):
        # Lazy import - openai SDK is heavy, only load if this provider is used
        try:
            import openai
        except ImportError:
            raise ImportError("openai package required. Install with: pip install openai")

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        self.client = openai.OpenAI(api_key=api_key)
        self._retryable_exception = openai.RateLimitError
        self.update_model(model)

    def _call_api(self, system_prompt: Optional[str], messages: Sequence[ChatMessage]) -> LLMResponse:
        payload = _to_provider_messages(messages)
        if system_prompt:
            payload = [{"role": "system", "content": system_prompt}, *payload]
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=MAX_TOKENS,
            messages=payload,
        )
        return LLMResponse(
            content=response.choices[0].message.content,
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


# --- Provider Factory ---


def get_provider(provider_name: str = None, model: str = None) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "anthropic" or "openai" (default: from LLM_PROVIDER env var)
        model: Model name (default: provider-specific default)

    Returns:
        LLMProvider instance
    """
    if provider_name is None:
        provider_name = os.getenv("LLM_PROVIDER", "openai").lower()

    if provider_name == "anthropic":
        return AnthropicProvider(model=model) if model else AnthropicProvider()
    elif provider_name == "openai":
        return OpenAIProvider(model=model) if model else OpenAIProvider()
    else:
        raise ValueError(f"Unknown provider: {provider_name}. Use 'anthropic' or 'openai'")
