"""Gemini model gateway.

Translates local conversation state into one ``generate_content`` request
and interprets the response.

Design notes:

1. **Stateless** - A gateway holds only its API key and static config. A new
   SDK client is created per call, so a gateway can be rebuilt for every
   submission without losing anything.

2. **One attempt** - No retry, backoff or timeout. A failed call surfaces as
   a typed error and the user resubmits.

3. **Classification at the boundary** - Raw SDK errors never leave this
   module. Structured ``APIError`` codes are checked first; substring
   matching on the error text is only a fallback for errors that carry no
   usable code.
"""

import base64
import logging
from collections.abc import Sequence

from google import genai
from google.genai import errors, types

from sipangkat.agent.config import GatewayConfig, get_gateway_config
from sipangkat.agent.errors import ChatError, InvalidCredential, ServiceError
from sipangkat.agent.prompts import FALLBACK_REPLY
from sipangkat.models.schemas import Attachment, Message, Role

logger = logging.getLogger(__name__)

_INVALID_CREDENTIAL_CODES = frozenset({401, 403, 404})
_INVALID_CREDENTIAL_STATUSES = frozenset({"UNAUTHENTICATED", "PERMISSION_DENIED", "NOT_FOUND"})
_INVALID_CREDENTIAL_PATTERNS = ("API key", "Requested entity was not found")


def build_parts(text: str, attachments: Sequence[Attachment]) -> list[types.Part]:
    """Build content parts: the text first, then one inline part per attachment.

    Args:
        text: Turn text, may be empty.
        attachments: Files carried by the turn, in order.

    Returns:
        Parts ready for a ``types.Content``.
    """
    parts = [types.Part(text=text)]
    for attachment in attachments:
        parts.append(
            types.Part(
                inline_data=types.Blob(
                    mime_type=attachment.mime_type,
                    data=base64.b64decode(attachment.data, validate=True),
                )
            )
        )
    return parts


def build_contents(
    prior_history: Sequence[Message],
    new_text: str,
    new_attachments: Sequence[Attachment] = (),
) -> list[types.Content]:
    """Serialize the conversation into request turns.

    System and error-flagged messages are skipped. The new turn is always
    appended last with role "user", even when it is empty.

    Args:
        prior_history: Messages already in the conversation.
        new_text: Text of the turn being submitted.
        new_attachments: Attachments of the turn being submitted.

    Returns:
        Ordered request turns.
    """
    contents = [
        types.Content(
            role="user" if message.role == Role.USER else "model",
            parts=build_parts(message.text, message.attachments),
        )
        for message in prior_history
        if message.role != Role.SYSTEM and not message.is_error
    ]
    contents.append(types.Content(role="user", parts=build_parts(new_text, new_attachments)))
    return contents


def classify_error(error: Exception) -> ChatError:
    """Map a raw model service error to a typed outcome.

    Args:
        error: Exception raised while calling the service.

    Returns:
        InvalidCredential when the key was rejected, ServiceError otherwise.
    """
    if isinstance(error, errors.APIError):
        status = (error.status or "").upper()
        if error.code in _INVALID_CREDENTIAL_CODES or status in _INVALID_CREDENTIAL_STATUSES:
            return InvalidCredential()

    message = str(error)
    if any(pattern in message for pattern in _INVALID_CREDENTIAL_PATTERNS):
        return InvalidCredential()

    return ServiceError()


class ModelGateway:
    """Adapter between the local conversation and the Gemini API.

    Owns no conversation state; each ``converse`` call receives a read-only
    snapshot of the history.
    """

    def __init__(
        self,
        api_key: str,
        config: GatewayConfig | None = None,
        client: genai.Client | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            api_key: Key used to authenticate the call.
            config: Optional gateway configuration.
                    Loads from environment if not provided.
            client: Optional pre-built SDK client. A fresh one is created
                    per call when omitted.
        """
        self._api_key = api_key
        self._config = config or get_gateway_config()
        self._client = client

    def _create_client(self) -> genai.Client:
        return genai.Client(api_key=self._api_key)

    def _generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=self._config.system_instruction,
            temperature=self._config.temperature,
        )

    async def converse(
        self,
        prior_history: Sequence[Message],
        new_text: str,
        new_attachments: Sequence[Attachment] = (),
    ) -> str:
        """Send the conversation plus a new user turn and return the answer.

        Args:
            prior_history: Messages before the new turn.
            new_text: The user's new text.
            new_attachments: Files attached to the new turn.

        Returns:
            The model's answer, or a fixed fallback when it has no text.

        Raises:
            InvalidCredential: If the service rejected the API key.
            ServiceError: For any other failure.
        """
        try:
            contents = build_contents(prior_history, new_text, new_attachments)
            client = self._client or self._create_client()
            response = await client.aio.models.generate_content(
                model=self._config.model_name,
                contents=contents,
                config=self._generation_config(),
            )
            text = response.text
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise classify_error(e) from e

        if not text:
            logger.warning("Gemini response contained no text")
            return FALLBACK_REPLY

        logger.info(f"Gemini replied with {len(text)} characters")
        return text
