"""Conversation state and orchestration.

Responsibilities:
    - Ordered, append-only message history per session
    - Single-flight submission flow (idle -> sending -> idle)
    - Credential presence checks and re-prompting after a rejected key
"""

from sipangkat.conversation.controller import ChatController
from sipangkat.conversation.credentials import (
    CredentialSource,
    EnvCredentialSource,
    SessionCredentialSource,
)
from sipangkat.conversation.sessions import SessionNotFound, SessionRegistry
from sipangkat.conversation.store import ConversationStore

__all__ = [
    "ChatController",
    "ConversationStore",
    "CredentialSource",
    "EnvCredentialSource",
    "SessionCredentialSource",
    "SessionNotFound",
    "SessionRegistry",
]
