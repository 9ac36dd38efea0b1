"""Credential sources for the model service.

A credential source answers whether an API key is available and can open
the key selector. Two implementations exist:

    - EnvCredentialSource: the fixed environment slot. Nothing to select.
    - SessionCredentialSource: a key supplied by the browser client for its
      own session, falling back to the environment slot.
"""

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class CredentialSource(Protocol):
    """Provider of the API key used for model calls."""

    interactive: bool

    def has_credential(self) -> bool: ...

    async def select_credential(self) -> None: ...

    def api_key(self) -> str | None: ...

    def revoke(self) -> None: ...


class EnvCredentialSource:
    """Reads the key from the environment slot only."""

    interactive = False

    def __init__(self, api_key: str | None) -> None:
        self._api_key = api_key

    def has_credential(self) -> bool:
        return bool(self._api_key)

    async def select_credential(self) -> None:
        logger.debug("Environment credential source has no selector")

    def api_key(self) -> str | None:
        return self._api_key

    def revoke(self) -> None:
        logger.debug("Environment credential cannot be revoked")


class SessionCredentialSource:
    """Holds a key chosen through the browser's key selector.

    Attributes:
        interactive: Always True; an invalid key sends the user back to the
            selector instead of showing an error in the chat.
    """

    interactive = True

    def __init__(self, fallback: str | None = None) -> None:
        self._fallback = fallback
        self._selected: str | None = None

    def provide(self, api_key: str) -> None:
        """Store the key chosen by the user."""
        self._selected = api_key

    def revoke(self) -> None:
        """Forget the chosen key.

        The environment fallback is dropped too, so a key the service has
        rejected is never sent again by this session.
        """
        self._selected = None
        self._fallback = None

    def has_credential(self) -> bool:
        return bool(self.api_key())

    async def select_credential(self) -> None:
        if self._selected is None:
            logger.info("No session key provided, using environment key")

    def api_key(self) -> str | None:
        return self._selected or self._fallback
