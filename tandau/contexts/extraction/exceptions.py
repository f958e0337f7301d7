"""Custom exceptions for the extraction context."""

from typing import Any, Optional


class InvalidInputError(TypeError):
    """
    Exception raised when the extractor receives something that is not text.

    A response without any recognized heading is NOT an error; this is only
    raised for input that cannot be a response at all (None, bytes, numbers,
    mappings where a mapping is not expected, ...). The value is never coerced.

    Attributes:
        message: Error description
        argument: Name of the offending argument
        received_type: Type name of the value that was passed
    """

    def __init__(self, message: str, argument: Optional[str] = None, value: Any = None):
        self.message = message
        self.argument = argument
        self.received_type = type(value).__name__

        parts = [message]
        if argument:
            parts.append(f"Argument: {argument} (got {self.received_type})")

        super().__init__("\n".join(parts))


def require_text(value: Any, argument: str) -> str:
    """
    Return value unchanged if it is a str, raise InvalidInputError otherwise.

    Args:
        value: Value to check
        argument: Argument name used in the error message
    """
    if not isinstance(value, str):
        raise InvalidInputError("Expected response text as str", argument=argument, value=value)
    return value
