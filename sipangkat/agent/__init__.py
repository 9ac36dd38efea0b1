"""Gemini gateway for answering KP questions.

Responsibilities:
    - Serializing conversation history and attachments into request turns
    - Attaching the static persona and sampling configuration
    - Classifying service failures into typed outcomes

Holds no conversation state. Maintains clean separation from the HTTP layer.
"""

from sipangkat.agent.config import GatewayConfig, get_gateway_config
from sipangkat.agent.errors import ChatError, InvalidCredential, MissingCredential, ServiceError
from sipangkat.agent.gateway import ModelGateway, build_contents, classify_error

__all__ = [
    "ChatError",
    "GatewayConfig",
    "InvalidCredential",
    "MissingCredential",
    "ModelGateway",
    "ServiceError",
    "build_contents",
    "classify_error",
    "get_gateway_config",
]
