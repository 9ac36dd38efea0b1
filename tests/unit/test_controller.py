"""Unit tests for ChatController submission flow."""

import pytest
import pytest_check as check
from pydantic import ValidationError

from sipangkat.agent.config import GatewayConfig
from sipangkat.agent.errors import InvalidCredential, ServiceError
from sipangkat.agent.gateway import build_contents
from sipangkat.agent.prompts import (
    INVALID_CREDENTIAL_TEXT,
    MISSING_CREDENTIAL_TEXT,
    SERVICE_ERROR_TEXT,
    TECHNICAL_ERROR_TEXT,
)
from sipangkat.conversation.controller import ChatController
from sipangkat.conversation.credentials import EnvCredentialSource, SessionCredentialSource
from sipangkat.models.schemas import Attachment, Role
from tests.conftest import FakeGateway


def make_controller(gateway: FakeGateway, api_key: str | None = "test-key") -> ChatController:
    return ChatController(
        credentials=SessionCredentialSource(fallback=api_key),
        gateway_factory=gateway.factory,
    )


class TestSubmitSuccess:
    """Tests for successful submissions."""

    async def test_concrete_scenario(self) -> None:
        """A single question produces a user and a model message."""
        gateway = FakeGateway(reply="Syarat: SKP 2 tahun terakhir...")
        controller = make_controller(gateway)

        await controller.submit("Apa syarat KP reguler?", [])

        messages = controller.store.snapshot()
        check.equal(len(messages), 2)
        check.equal(messages[0].role, Role.USER)
        check.equal(messages[0].text, "Apa syarat KP reguler?")
        check.equal(messages[1].role, Role.MODEL)
        check.equal(messages[1].text, "Syarat: SKP 2 tahun terakhir...")
        check.is_false(messages[1].is_error)
        check.is_false(controller.busy)

    async def test_history_grows_by_two_per_submit(self) -> None:
        """N successful submissions leave 2N messages in call order."""
        gateway = FakeGateway(reply="ok")
        controller = make_controller(gateway)
        questions = ["satu", "dua", "tiga", "empat"]

        for question in questions:
            await controller.submit(question)

        messages = controller.store.snapshot()
        check.equal(len(messages), 2 * len(questions))
        check.equal([m.text for m in messages[::2]], questions)
        check.equal([m.role for m in messages[1::2]], [Role.MODEL] * len(questions))

    async def test_gateway_receives_history_before_call(self) -> None:
        """The gateway gets the prior history, not the new user turn."""
        gateway = FakeGateway(reply="ok")
        controller = make_controller(gateway)
        attachment = Attachment(name="a.png", mime_type="image/png", data="iVBORw0KGgo=")

        await controller.submit("pertama")
        await controller.submit("kedua", [attachment])

        prior, text, attachments = gateway.calls[1]
        check.equal([m.text for m in prior], ["pertama", "ok"])
        check.equal(text, "kedua")
        check.equal(attachments, (attachment,))
        check.equal(controller.store.snapshot()[2].attachments, (attachment,))

    async def test_returns_appended_messages(self) -> None:
        """submit returns only the messages it appended."""
        controller = make_controller(FakeGateway(reply="ok"))
        await controller.submit("pertama")

        appended = await controller.submit("kedua")

        assert [m.text for m in appended] == ["kedua", "ok"]

    async def test_busy_while_call_in_flight(self) -> None:
        """The busy flag is set during the gateway call and cleared after."""
        observed: list[bool] = []
        controller: ChatController

        class ObservingGateway(FakeGateway):
            async def converse(self, prior_history, new_text, new_attachments=()):
                observed.append(controller.busy)
                return "ok"

        controller = make_controller(ObservingGateway())

        await controller.submit("halo")

        check.equal(observed, [True])
        check.is_false(controller.busy)


class TestSubmitCredentials:
    """Tests for credential handling."""

    async def test_missing_credential_makes_no_call(self) -> None:
        """Without a key, one error message is appended and nothing is sent."""
        gateway = FakeGateway()
        controller = make_controller(gateway, api_key=None)

        await controller.submit("halo", [])

        messages = controller.store.snapshot()
        check.equal(len(messages), 1)
        check.equal(messages[0].role, Role.MODEL)
        check.is_true(messages[0].is_error)
        check.equal(messages[0].text, MISSING_CREDENTIAL_TEXT)
        check.equal(gateway.calls, [])
        check.is_false(controller.busy)

    async def test_invalid_credential_resets_selection(self) -> None:
        """A rejected key clears the selection flag without a chat message."""
        gateway = FakeGateway(error=InvalidCredential())
        controller = make_controller(gateway)
        check.is_true(controller.credential_selected)

        appended = await controller.submit("halo")

        check.is_false(controller.credential_selected)
        check.equal([m.role for m in appended], [Role.USER])
        check.is_false(any(m.is_error for m in controller.store.snapshot()))
        check.is_false(controller.busy)

    async def test_rejected_key_is_not_resent(self) -> None:
        """After a rejection the next submission reports a missing key."""
        gateway = FakeGateway(error=InvalidCredential())
        controller = make_controller(gateway, api_key="env-key")
        await controller.submit("pertama")

        gateway.error = None
        appended = await controller.submit("kedua")

        check.equal(gateway.api_keys, ["env-key"])
        check.equal(len(gateway.calls), 1)
        check.equal([m.text for m in appended], [MISSING_CREDENTIAL_TEXT])
        check.is_true(appended[0].is_error)
        check.is_false(controller.credential_selected)

    async def test_blank_environment_key_makes_no_call(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A whitespace-only API_KEY is treated as missing, not sent."""
        monkeypatch.setenv("API_KEY", "   ")
        config = GatewayConfig(credential_mode="env")
        gateway = FakeGateway()
        controller = ChatController(
            credentials=EnvCredentialSource(config.api_key),
            gateway_factory=gateway.factory,
            config=config,
        )

        await controller.submit("halo")

        messages = controller.store.snapshot()
        check.equal(len(messages), 1)
        check.equal(messages[0].text, MISSING_CREDENTIAL_TEXT)
        check.equal(gateway.calls, [])
        check.is_false(controller.credential_selected)

    async def test_invalid_credential_from_env_source_is_visible(self) -> None:
        """With no key selector, a rejected key is shown in the chat."""
        gateway = FakeGateway(error=InvalidCredential())
        controller = ChatController(
            credentials=EnvCredentialSource("bad-key"),
            gateway_factory=gateway.factory,
        )

        await controller.submit("halo")

        last = controller.store.snapshot()[-1]
        check.is_true(last.is_error)
        check.equal(last.text, INVALID_CREDENTIAL_TEXT)
        check.is_true(controller.credential_selected)

    async def test_select_credential_restores_flag(self) -> None:
        """Selecting a key after a rejection marks it selected again."""
        source = SessionCredentialSource()
        controller = ChatController(credentials=source, gateway_factory=FakeGateway().factory)
        check.is_false(controller.credential_selected)

        source.provide("new-key")
        await controller.select_credential()

        check.is_true(controller.credential_selected)
        check.is_true(controller.refresh_credential())

    async def test_gateway_built_with_selected_key(self) -> None:
        """The session key takes precedence over the environment key."""
        gateway = FakeGateway()
        source = SessionCredentialSource(fallback="env-key")
        source.provide("session-key")
        controller = ChatController(credentials=source, gateway_factory=gateway.factory)

        await controller.submit("halo")

        assert gateway.api_keys == ["session-key"]


class TestSubmitFailures:
    """Tests for service failures."""

    async def test_service_error_appends_error_message(self) -> None:
        """Service errors are shown as error-flagged model messages."""
        controller = make_controller(FakeGateway(error=ServiceError()))

        await controller.submit("halo")

        last = controller.store.snapshot()[-1]
        check.equal(last.role, Role.MODEL)
        check.is_true(last.is_error)
        check.equal(last.text, SERVICE_ERROR_TEXT)
        check.is_false(controller.busy)

    async def test_unexpected_error_appends_technical_message(self) -> None:
        """Unclassified exceptions still clear busy and show a generic message."""
        controller = make_controller(FakeGateway(error=ValueError("boom")))

        await controller.submit("halo")

        last = controller.store.snapshot()[-1]
        check.is_true(last.is_error)
        check.equal(last.text, TECHNICAL_ERROR_TEXT)
        check.is_false(controller.busy)

    async def test_error_messages_are_not_resent(self) -> None:
        """An earlier failure is excluded from the next request's turns."""
        gateway = FakeGateway(error=ServiceError())
        controller = make_controller(gateway)
        await controller.submit("pertama")

        gateway.error = None
        await controller.submit("kedua")

        prior, text, _ = gateway.calls[1]
        contents = build_contents(prior, text)
        check.equal([c.parts[0].text for c in contents], ["pertama", "kedua"])


class TestConversationStore:
    """Tests for the append-only store."""

    def test_snapshot_is_read_only_copy(self) -> None:
        controller = make_controller(FakeGateway())

        snapshot = controller.store.snapshot()

        check.is_instance(snapshot, tuple)
        check.equal(len(controller.store), 0)

    async def test_messages_are_immutable(self) -> None:
        controller = make_controller(FakeGateway())
        await controller.submit("halo")

        with pytest.raises(ValidationError):
            controller.store.snapshot()[0].text = "ubah"
