"""Conversation data model and API request/response schemas."""

from sipangkat.models.schemas import (
    Attachment,
    AttachmentUploadResponse,
    ChatRequest,
    ChatResponse,
    CredentialRequest,
    CredentialStatus,
    DocumentLink,
    KnowledgeBase,
    Message,
    Role,
    SessionState,
)

__all__ = [
    "Attachment",
    "AttachmentUploadResponse",
    "ChatRequest",
    "ChatResponse",
    "CredentialRequest",
    "CredentialStatus",
    "DocumentLink",
    "KnowledgeBase",
    "Message",
    "Role",
    "SessionState",
]
