"""Registry of per-browser chat sessions."""

import logging
import uuid

from sipangkat.agent.config import GatewayConfig, get_gateway_config
from sipangkat.conversation.controller import ChatController, GatewayFactory
from sipangkat.conversation.credentials import (
    CredentialSource,
    EnvCredentialSource,
    SessionCredentialSource,
)

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    """Raised when a session id is unknown."""


class SessionRegistry:
    """Creates and looks up one ChatController per session.

    Held by the application instance; nothing is persisted.
    """

    def __init__(
        self,
        config: GatewayConfig | None = None,
        gateway_factory: GatewayFactory | None = None,
    ) -> None:
        self._config = config or get_gateway_config()
        self._gateway_factory = gateway_factory
        self._sessions: dict[str, ChatController] = {}

    def _create_credentials(self) -> CredentialSource:
        if self._config.credential_mode == "env":
            return EnvCredentialSource(self._config.api_key)
        return SessionCredentialSource(fallback=self._config.api_key)

    def create(self) -> tuple[str, ChatController]:
        """Start a new session.

        Returns:
            The new session id and its controller.
        """
        session_id = uuid.uuid4().hex
        controller = ChatController(
            credentials=self._create_credentials(),
            gateway_factory=self._gateway_factory,
            config=self._config,
        )
        self._sessions[session_id] = controller
        logger.info(f"Created chat session {session_id[:8]}")
        return session_id, controller

    def get(self, session_id: str) -> ChatController:
        """Look up a session.

        Raises:
            SessionNotFound: If the id is unknown.
        """
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFound(session_id) from None

    def remove(self, session_id: str) -> None:
        """Drop a session and its history.

        Raises:
            SessionNotFound: If the id is unknown.
        """
        try:
            del self._sessions[session_id]
        except KeyError:
            raise SessionNotFound(session_id) from None
        logger.info(f"Closed chat session {session_id[:8]}")

    def __len__(self) -> int:
        return len(self._sessions)
