"""In-memory conversation history with a busy flag."""

from sipangkat.models.schemas import Message


class ConversationStore:
    """Append-only ordered message history for one chat session.

    Insertion order is the turn order sent to the model.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self.busy: bool = False

    @property
    def messages(self) -> tuple[Message, ...]:
        return self.snapshot()

    def snapshot(self) -> tuple[Message, ...]:
        """Return a read-only copy of the current history."""
        return tuple(self._messages)

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def __len__(self) -> int:
        return len(self._messages)
