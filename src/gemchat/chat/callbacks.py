"""Callback interface between the chat core and whatever displays it.

Hides how a view learns about state changes. The controllers call these
hooks; a view overrides the ones it cares about. Every hook is a no-op here,
so a bare ChatCallback runs the core headless.
"""

from collections.abc import Sequence
from typing import Literal

from ..llm.models import ChatMessage

Severity = Literal["information", "warning", "error"]


class ChatCallback:
    """No-op base for view callbacks."""

    def on_messages_changed(self, messages: Sequence[ChatMessage]) -> None:
        """The conversation gained a message or was reset."""

    def on_input_changed(self, text: str) -> None:
        """The pending input text was replaced (cleared or dictated)."""

    def on_loading_changed(self, loading: bool) -> None:
        """A request started or finished."""

    def on_listening_changed(self, listening: bool) -> None:
        """Speech capture started or stopped."""

    def on_speaking_changed(self, speaking: bool) -> None:
        """Speech playback started or stopped."""

    def scroll_to_end(self) -> None:
        """Bring the newest message into view."""

    def notify(self, title: str, message: str, severity: Severity = "information") -> None:
        """Show a transient notification."""

    def log(self, level: str, component: str, message: str) -> None:
        """Debug trace entry; matches the set_debug_callback signature."""
