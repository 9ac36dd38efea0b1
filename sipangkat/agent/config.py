"""Gateway configuration with environment variable loading.

Pydantic-based configuration for the Gemini model gateway.
"""

import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from sipangkat.agent.prompts import SYSTEM_INSTRUCTION

# Load environment variables from .env file
load_dotenv()


def _env_api_key() -> str | None:
    for name in ("API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"):
        value = (os.getenv(name) or "").strip()
        if value:
            return value
    return None


class GatewayConfig(BaseModel):
    """Configuration for the model gateway.

    The system instruction and temperature are static: every call carries
    the same values.

    Attributes:
        api_key: Key from the environment slot, None when not configured.
        model_name: Gemini model identifier.
        temperature: Sampling temperature, kept low for factual answers.
        system_instruction: Persona and formatting policy.
        credential_mode: "session" lets each browser session supply its own
            key; "env" only ever uses the environment slot.
    """

    api_key: str | None = Field(
        default_factory=_env_api_key,
        validate_default=True,
        description="API key for the model service",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "gemini-2.5-flash"),
        description="Model to use",
    )
    temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    system_instruction: str = Field(default=SYSTEM_INSTRUCTION)
    credential_mode: Literal["env", "session"] = Field(
        default_factory=lambda: os.getenv("CREDENTIAL_MODE", "session").lower(),
        description="Where API keys come from",
    )

    @field_validator("api_key")
    @classmethod
    def normalize_api_key(cls, v: str | None) -> str | None:
        """Treat blank keys as missing."""
        if v is None or not v.strip():
            return None
        return v.strip()


def get_gateway_config() -> GatewayConfig:
    """Create gateway configuration from environment.

    Returns:
        Configured GatewayConfig instance.
    """
    return GatewayConfig()
