"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - clean_env: Removes API key variables so tests never reach the network
    - gateway_config: Config with a test key
    - fake_gateway: Recording stand-in for the Gemini gateway
    - app / async_client: FastAPI app wired to the fake gateway
    - pdf_bytes: A minimal one-page PDF
"""

import io
from collections.abc import AsyncGenerator, Sequence

import pytest
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from sipangkat.agent.config import GatewayConfig
from sipangkat.api.app import create_app
from sipangkat.models.schemas import Attachment, Message

_ENV_VARS = ("API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY", "CREDENTIAL_MODE", "LLM_MODEL")


class FakeGateway:
    """Records converse calls and replays a scripted outcome."""

    def __init__(self, reply: str = "Jawaban", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[tuple[tuple[Message, ...], str, tuple[Attachment, ...]]] = []
        self.api_keys: list[str] = []

    def factory(self, api_key: str) -> "FakeGateway":
        self.api_keys.append(api_key)
        return self

    async def converse(
        self,
        prior_history: Sequence[Message],
        new_text: str,
        new_attachments: Sequence[Attachment] = (),
    ) -> str:
        self.calls.append((tuple(prior_history), new_text, tuple(new_attachments)))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove environment variables that change configuration."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def gateway_config() -> GatewayConfig:
    """Return gateway config with a test API key."""
    return GatewayConfig(api_key="test-key", credential_mode="session")


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway(reply="Syarat: SKP 2 tahun terakhir...")


@pytest.fixture
def app(gateway_config: GatewayConfig, fake_gateway: FakeGateway):
    """Create the FastAPI app with the fake gateway."""
    return create_app(config=gateway_config, gateway_factory=fake_gateway.factory)


@pytest.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def pdf_bytes() -> bytes:
    """Build a one-page blank PDF."""
    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()
