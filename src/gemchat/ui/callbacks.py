"""ChatCallback implementation for the Textual app.

Hides the details of how the TUI receives updates from the chat core.
Uses thread-safe methods since speech engines may report from other threads.
"""

import threading
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from textual.css.query import NoMatches

from ..chat.callbacks import ChatCallback, Severity
from ..llm.models import ChatMessage
from .config import NOTIFY_ERROR_TIMEOUT, NOTIFY_TIMEOUT, LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, StatusLine

if TYPE_CHECKING:
    from textual.app import App


class TUIChatCallback(ChatCallback):
    """Routes chat core events to the app's widgets."""

    def __init__(self, app: "App") -> None:
        self.app = app

    def _call_thread_safe(self, func: Any, *args: Any, **kwargs: Any) -> None:
        """Call a function in a thread-safe manner for UI updates."""
        if self.app._thread_id != threading.get_ident():
            self.app.call_from_thread(func, *args, **kwargs)
        else:
            func(*args, **kwargs)

    def _widget(self, selector: str, expect_type: type) -> Any | None:
        # Events can arrive before compose or after unmount
        try:
            return self.app.query_one(selector, expect_type)
        except NoMatches:
            return None

    def on_messages_changed(self, messages: Sequence[ChatMessage]) -> None:
        chat = self._widget("#chat-history", ChatHistoryWidget)
        if chat is not None:
            self._call_thread_safe(chat.sync, tuple(messages))

    def on_input_changed(self, text: str) -> None:
        input_bar = self._widget("#chat-input-bar", ChatInputBar)
        if input_bar is not None:
            self._call_thread_safe(input_bar.set_text, text)

    def on_loading_changed(self, loading: bool) -> None:
        status = self._widget("#status-line", StatusLine)
        if status is not None:
            self._call_thread_safe(status.set_loading, loading)
        input_bar = self._widget("#chat-input-bar", ChatInputBar)
        if input_bar is not None:
            self._call_thread_safe(input_bar.set_sending_enabled, not loading)

    def on_listening_changed(self, listening: bool) -> None:
        input_bar = self._widget("#chat-input-bar", ChatInputBar)
        if input_bar is not None:
            self._call_thread_safe(input_bar.set_listening, listening)

    def on_speaking_changed(self, speaking: bool) -> None:
        chat = self._widget("#chat-history", ChatHistoryWidget)
        if chat is not None:
            self._call_thread_safe(chat.set_speaking, speaking)

    def scroll_to_end(self) -> None:
        chat = self._widget("#chat-history", ChatHistoryWidget)
        if chat is not None:
            self._call_thread_safe(chat.scroll_end, animate=False)

    def notify(self, title: str, message: str, severity: Severity = "information") -> None:
        timeout = NOTIFY_ERROR_TIMEOUT if severity == "error" else NOTIFY_TIMEOUT
        self._call_thread_safe(
            self.app.notify,
            escape(message),
            title=title,
            severity=severity,
            timeout=timeout,
        )

    def log(self, level: str, component: str, message: str) -> None:
        panel = self._widget("#debug-panel", DebugPanel)
        if panel is not None:
            self._call_thread_safe(
                panel.log_entry, component, message, LogLevel.from_string(level)
            )
