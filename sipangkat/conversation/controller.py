"""Chat orchestration for one session.

Drives a single request at a time: append the user turn, call the gateway
with the history as it was before that turn, then append the answer or an
error. The caller is responsible for not submitting while ``busy`` is set.
"""

import logging
from collections.abc import Callable, Sequence

from sipangkat.agent.config import GatewayConfig, get_gateway_config
from sipangkat.agent.errors import InvalidCredential, MissingCredential, ServiceError
from sipangkat.agent.gateway import ModelGateway
from sipangkat.agent.prompts import TECHNICAL_ERROR_TEXT
from sipangkat.conversation.credentials import CredentialSource
from sipangkat.conversation.store import ConversationStore
from sipangkat.models.schemas import Attachment, Message, Role

logger = logging.getLogger(__name__)

GatewayFactory = Callable[[str], ModelGateway]


class ChatController:
    """Owns the conversation store and the credential-selected flag.

    Attributes:
        store: Message history and busy flag.
        credentials: Source of the API key.
        credential_selected: False after the service rejected the key,
            until the user selects a key again.
    """

    def __init__(
        self,
        credentials: CredentialSource,
        gateway_factory: GatewayFactory | None = None,
        store: ConversationStore | None = None,
        config: GatewayConfig | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            credentials: Source of the API key.
            gateway_factory: Builds a gateway for a given API key. Defaults
                             to a fresh ModelGateway per submission.
            store: Optional existing conversation store.
            config: Gateway configuration used by the default factory.
        """
        self._config = config or get_gateway_config()
        self._gateway_factory = gateway_factory or self._default_gateway
        self.store = store or ConversationStore()
        self.credentials = credentials
        self.credential_selected = False
        self.refresh_credential()

    def _default_gateway(self, api_key: str) -> ModelGateway:
        return ModelGateway(api_key, config=self._config)

    @property
    def busy(self) -> bool:
        return self.store.busy

    def refresh_credential(self) -> bool:
        """Re-read whether a credential is available."""
        self.credential_selected = self.credentials.has_credential()
        return self.credential_selected

    async def select_credential(self) -> None:
        """Open the key selector and mark the credential as selected."""
        await self.credentials.select_credential()
        self.credential_selected = True

    def _append_error(self, text: str) -> None:
        self.store.append(Message(role=Role.MODEL, text=text, is_error=True))

    async def submit(self, text: str, attachments: Sequence[Attachment] = ()) -> list[Message]:
        """Submit a user turn and record the outcome.

        Args:
            text: The user's message.
            attachments: Files accepted by intake for this turn.

        Returns:
            Messages appended to the history by this call.
        """
        start = len(self.store)

        api_key = self.credentials.api_key()
        if not api_key:
            logger.warning("Submission without a configured API key")
            self._append_error(MissingCredential().user_message)
            return list(self.store.snapshot()[start:])

        history = self.store.snapshot()
        self.store.append(Message(role=Role.USER, text=text, attachments=tuple(attachments)))
        self.store.busy = True

        try:
            gateway = self._gateway_factory(api_key)
            reply = await gateway.converse(history, text, attachments)
            self.store.append(Message(role=Role.MODEL, text=reply))
        except InvalidCredential as e:
            if self.credentials.interactive:
                logger.warning("API key rejected, asking for a new key")
                self.credentials.revoke()
                self.credential_selected = False
            else:
                self._append_error(e.user_message)
        except ServiceError as e:
            self._append_error(e.user_message)
        except Exception:
            logger.exception("Unexpected error while handling submission")
            self._append_error(TECHNICAL_ERROR_TEXT)
        finally:
            self.store.busy = False

        return list(self.store.snapshot()[start:])
