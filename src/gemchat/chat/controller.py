"""Conversation state and the submit flow.

Hides the turn-taking rules:
- Empty input and submissions while a request is pending are ignored
- The user message is appended before the request (optimistic)
- A failed request is reported and leaves the user message in place
- Loading is cleared and the view scrolled whatever the outcome
"""

from typing import TYPE_CHECKING

from ..formatting.code_blocks import CodeBlock, extract_code_blocks
from ..llm.models import ChatMessage
from ..llm.requestor import ResponseRequestor
from .callbacks import ChatCallback

if TYPE_CHECKING:
    from ..voice.controller import VoiceController


class ConversationController:
    """Owns the message list, input text and loading flag of one session.

    State lives only in memory; a new controller is a new conversation.
    """

    def __init__(
        self,
        requestor: ResponseRequestor,
        callback: ChatCallback | None = None,
        voice: "VoiceController | None" = None,
    ) -> None:
        self._requestor = requestor
        self._callback = callback or ChatCallback()
        self._voice = voice
        self._messages: list[ChatMessage] = []
        self._input = ""
        self._loading = False

        self._requestor.set_debug_callback(self._callback.log)
        if self._voice is not None:
            self._voice.bind_transcript(self.set_input)

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def input_text(self) -> str:
        return self._input

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def requestor(self) -> ResponseRequestor:
        return self._requestor

    @property
    def voice(self) -> "VoiceController | None":
        return self._voice

    def set_input(self, text: str, notify_view: bool = True) -> None:
        """Replace the pending input text.

        Args:
            text: New input text
            notify_view: False when the view itself is the source of the change
        """
        if text == self._input:
            return
        self._input = text
        if notify_view:
            self._callback.on_input_changed(text)

    def _append(self, message: ChatMessage) -> None:
        self._messages.append(message)
        self._callback.on_messages_changed(self.messages)

    def _set_loading(self, loading: bool) -> None:
        self._loading = loading
        self._callback.on_loading_changed(loading)

    async def submit(self, text: str | None = None) -> ChatMessage | None:
        """Send ``text`` (or the pending input) and append the reply.

        Returns:
            The model message, or None if the submission was ignored or failed
        """
        content = self._input if text is None else text
        if not content.strip() or self._loading:
            return None

        self._append(ChatMessage(role="user", content=content))
        self.set_input("")
        self._set_loading(True)
        self._callback.log("info", "Chat", f"Submitted message #{len(self._messages)}")

        try:
            if self._voice is not None:
                self._voice.stop_listening()
            self._callback.scroll_to_end()

            reply = await self._requestor.generate_response(list(self._messages))

            model_message = ChatMessage(role="model", content=reply)
            self._append(model_message)
            return model_message
        except Exception as e:
            message = str(e) or "Failed to generate response"
            self._callback.log("error", "Chat", f"Error generating response: {message}")
            self._callback.notify("Error", message, "error")
            return None
        finally:
            self._set_loading(False)
            self._callback.scroll_to_end()

    def reset(self) -> bool:
        """Start a fresh conversation. Refused while a request is pending."""
        if self._loading:
            return False
        self._messages.clear()
        self._callback.on_messages_changed(self.messages)
        self._callback.log("info", "Chat", "Conversation cleared")
        return True

    def last_response(self) -> ChatMessage | None:
        """The newest model message, if any."""
        for message in reversed(self._messages):
            if message.role == "model":
                return message
        return None

    def last_code_block(self) -> CodeBlock | None:
        """The last fenced code block of the newest model message."""
        response = self.last_response()
        if response is None:
            return None
        blocks = extract_code_blocks(response.content)
        return blocks[-1] if blocks else None
