"""Pydantic models for conversation state and API payloads.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Role: Speaker of a message (user, model, or reserved system)
    - Attachment: Base64-encoded file embedded in one message
    - Message: Immutable conversation turn
    - ChatRequest: Incoming chat submission payload
    - ChatResponse: Messages appended by one submission
    - SessionState: Snapshot of a chat session
    - CredentialRequest / CredentialStatus: API key selection
    - AttachmentUploadResponse: File intake outcome
    - KnowledgeBase: Official document links and suggested questions
"""

import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Speaker of a conversation message."""

    USER = "user"
    MODEL = "model"
    SYSTEM = "system"


class Attachment(BaseModel):
    """A user-supplied file carried as base64 text.

    Attributes:
        name: Original filename, display only.
        mime_type: MIME type reported for the file.
        data: Base64-encoded file content.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Original filename")
    mime_type: str = Field(..., description="MIME type of the file")
    data: str = Field(..., description="Base64-encoded content")


class Message(BaseModel):
    """A single turn in the conversation.

    Messages are never mutated after creation.

    Attributes:
        id: Opaque unique identifier.
        role: Who produced the message.
        text: Message text, may be empty when attachments carry the content.
        attachments: Files embedded in this message, in upload order.
        timestamp: Creation time (UTC).
        is_error: Whether the message reports a failure.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Role
    text: str = ""
    attachments: tuple[Attachment, ...] = ()
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    is_error: bool = False


class ChatRequest(BaseModel):
    """Request payload for a chat submission.

    Attributes:
        text: User's question or prompt.
        attachments: Files previously accepted by the intake endpoint.
    """

    text: str = ""
    attachments: list[Attachment] = Field(default_factory=list)


class ChatResponse(BaseModel):
    """Messages appended to the history by one submission.

    Attributes:
        messages: New messages, in append order.
        busy: Busy flag after the submission finished.
        credential_selected: Whether a usable credential is still selected.
    """

    messages: list[Message]
    busy: bool
    credential_selected: bool


class SessionState(BaseModel):
    """Snapshot of one chat session."""

    session_id: str
    messages: list[Message]
    busy: bool
    credential_selected: bool


class CredentialRequest(BaseModel):
    """API key supplied by the browser's key selector."""

    api_key: str = Field(..., min_length=1)

    @field_validator("api_key", mode="before")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip()
        return v


class CredentialStatus(BaseModel):
    """Credential state of a session."""

    session_id: str
    credential_selected: bool


class AttachmentUploadResponse(BaseModel):
    """Response after file intake.

    Attributes:
        attachments: Files accepted for the next submission.
        notices: User-visible notices for rejected files.
    """

    attachments: list[Attachment]
    notices: list[str] = Field(default_factory=list)


class DocumentLink(BaseModel):
    """Link to an official document the user may download and upload."""

    label: str
    url: str


class KnowledgeBase(BaseModel):
    """Reference material shown next to the chat."""

    links: list[DocumentLink]
    suggestions: list[str]
    tip: str
