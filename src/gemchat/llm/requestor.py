"""Turns the conversation into one provider call per turn.

Hides which part of the conversation is sent. By default only the most
recent user message goes out and earlier turns are dropped; HistoryMode.FULL
sends every turn with its role instead.
"""

from collections.abc import Callable
from enum import Enum

from ..errors import EmptyConversationError
from .base import LLMProvider
from .models import ChatMessage, GenerationSettings

DebugCallback = Callable[[str, str, str], None]


class HistoryMode(str, Enum):
    """How much of the conversation is sent with each request."""

    LATEST = "latest"
    FULL = "full"


class ResponseRequestor:
    """Sends the conversation to a provider and returns the reply text.

    Errors from the provider are not caught here; they reach the caller
    exactly as the provider raised them.
    """

    def __init__(
        self,
        provider: LLMProvider,
        settings: GenerationSettings | None = None,
        history: HistoryMode | str = HistoryMode.LATEST,
        model: str | None = None,
    ) -> None:
        self._provider = provider
        self._settings = settings or GenerationSettings()
        self._history = HistoryMode(history)
        self._model = model
        self._debug_callback: DebugCallback | None = None

    @property
    def provider(self) -> LLMProvider:
        return self._provider

    @property
    def settings(self) -> GenerationSettings:
        return self._settings

    @property
    def history(self) -> HistoryMode:
        return self._history

    @property
    def model(self) -> str:
        return self._model or self._provider.model

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for request tracing.

        Args:
            callback: Function(level, component, message) or None to disable
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback(level, "LLM", message)

    def select_messages(self, messages: list[ChatMessage]) -> list[ChatMessage]:
        """Pick the messages that will be sent.

        Raises:
            EmptyConversationError: If no user message exists
        """
        user_messages = [msg for msg in messages if msg.role == "user"]
        if not user_messages:
            raise EmptyConversationError()

        if self._history is HistoryMode.FULL:
            # Gemini expects the conversation to end on a user turn
            last_user_index = max(i for i, msg in enumerate(messages) if msg.role == "user")
            return list(messages[: last_user_index + 1])

        return [user_messages[-1]]

    async def generate_response(self, messages: list[ChatMessage]) -> str:
        """Send the conversation and return the first candidate's text.

        Args:
            messages: Full conversation, oldest first

        Returns:
            Reply text of the first candidate

        Raises:
            EmptyConversationError: No user message in the conversation
            ResponseError: Non-success status from the API
            EmptyResponseError: The API returned no candidates
        """
        outgoing = self.select_messages(messages)
        self._debug(
            "info",
            f"Sending {len(outgoing)} message(s) to {self.model} (history={self._history.value})"
        )

        try:
            response = await self._provider.chat_completion(
                outgoing,
                model=self._model,
                temperature=self._settings.temperature,
                max_tokens=self._settings.max_output_tokens,
                top_k=self._settings.top_k,
                top_p=self._settings.top_p,
            )
        except Exception as e:
            self._debug("error", f"Request failed: {e}")
            raise

        if response.usage:
            self._debug("debug", f"Usage: {response.usage}")
        self._debug("info", f"Received {len(response.content)} characters")
        return response.content
