"""Typed outcomes of a chat submission.

The controller only ever sees these types; raw transport errors are
classified at the gateway boundary.
"""

from sipangkat.agent.prompts import (
    INVALID_CREDENTIAL_TEXT,
    MISSING_CREDENTIAL_TEXT,
    SERVICE_ERROR_TEXT,
)


class ChatError(Exception):
    """Base class for classified chat failures.

    Attributes:
        user_message: Localized text safe to show in the transcript.
    """

    default_message = SERVICE_ERROR_TEXT

    def __init__(self, user_message: str | None = None) -> None:
        self.user_message = user_message or self.default_message
        super().__init__(self.user_message)


class MissingCredential(ChatError):
    """Raised when no API key is configured before a call is made."""

    default_message = MISSING_CREDENTIAL_TEXT


class InvalidCredential(ChatError):
    """Raised when the model service rejects the API key."""

    default_message = INVALID_CREDENTIAL_TEXT


class ServiceError(ChatError):
    """Raised for any other model service failure."""

    default_message = SERVICE_ERROR_TEXT
