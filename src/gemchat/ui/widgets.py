"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Chat message rendering (plain user text, markdown model replies)
- Input bar layout and submit shortcuts
- Log rendering with level filtering
"""

from collections.abc import Sequence
from datetime import datetime

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Markdown, RichLog, Static, TextArea

from ..llm.models import ChatMessage
from .config import (
    LOADING_TEXT,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    MODEL_LABEL,
    SPEAK_LABEL,
    STOP_SPEAKING_LABEL,
    USER_LABEL,
    WELCOME_TEXT,
    WELCOME_TITLE,
    LogLevel,
)


class MessageView(Vertical):
    """One chat message: header, content and, for replies, a speak button."""

    def __init__(self, message: ChatMessage, index: int, speaking: bool = False) -> None:
        super().__init__(classes=f"chat-message {message.role}-message")
        self.message = message
        self.index = index
        self._speaking = speaking

    def compose(self) -> ComposeResult:
        label = USER_LABEL if self.message.role == "user" else MODEL_LABEL
        sent_at = datetime.fromtimestamp(self.message.timestamp / 1000)
        yield Static(
            f"{label} [{sent_at.strftime(MESSAGE_TIMESTAMP_FORMAT)}]",
            classes="message-header",
            markup=False,
        )

        if self.message.role == "user":
            yield Static(self.message.content, classes="message-content", markup=False)
            return

        yield Markdown(self.message.content, classes="message-content")
        button = Button(
            STOP_SPEAKING_LABEL if self._speaking else SPEAK_LABEL,
            name=str(self.index),
            classes="speak-btn",
        )
        button.set_class(self._speaking, "speaking")
        yield button


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history mirroring the controller's message list."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "New conversation"

    class SpeakRequested(Message):
        """Posted when the speak button of a reply is pressed."""

        def __init__(self, index: int) -> None:
            super().__init__()
            self.index = index

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._rendered = 0
        self._speaking = False

    def sync(self, messages: Sequence[ChatMessage]) -> None:
        """Mount views for messages not yet shown; rebuild after a reset."""
        if len(messages) < self._rendered:
            self.remove_children()
            self._rendered = 0

        if not messages:
            if not self.query("#welcome"):
                self.mount(Static(f"{WELCOME_TITLE}\n\n{WELCOME_TEXT}", id="welcome", markup=False))
            self.border_subtitle = self.BORDER_SUBTITLE
            return

        self.query("#welcome").remove()
        for index in range(self._rendered, len(messages)):
            self.mount(MessageView(messages[index], index, speaking=self._speaking))
        self._rendered = len(messages)
        self.border_subtitle = f"{len(messages)} messages"

    def set_speaking(self, speaking: bool) -> None:
        """Switch every speak button between read and stop."""
        self._speaking = speaking
        for button in self.query(".speak-btn").results(Button):
            button.label = STOP_SPEAKING_LABEL if speaking else SPEAK_LABEL
            button.set_class(speaking, "speaking")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.has_class("speak-btn") and event.button.name is not None:
            event.stop()
            self.post_message(self.SpeakRequested(int(event.button.name)))


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea, microphone toggle and Send button.

    The bar never clears itself: the conversation controller owns the input
    text and pushes changes back through set_text().
    """

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class MicToggled(Message):
        """Message sent when the microphone button is pressed."""

    def compose(self) -> ComposeResult:
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Mic", id="mic-btn").with_tooltip("Start voice input (Ctrl+T)")
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        self.query_one("#chat-input", TextArea).highlight_cursor_line = False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()
        elif event.button.id == "mic-btn":
            event.stop()
            self.post_message(self.MicToggled())

    def on_key(self, event) -> None:
        """Submit with ctrl+j.

        Terminals do not pass modifiers with Enter, so Enter alone inserts
        a newline and ctrl+j sends.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()

    def _submit(self) -> None:
        value = self.query_one("#chat-input", TextArea).text
        if value.strip():
            self.post_message(self.Submitted(value))

    @property
    def text(self) -> str:
        return self.query_one("#chat-input", TextArea).text

    def set_text(self, text: str) -> None:
        """Replace the input text and move the cursor to its end."""
        text_area = self.query_one("#chat-input", TextArea)
        if text_area.text != text:
            text_area.text = text
            text_area.move_cursor(text_area.document.end)

    def set_sending_enabled(self, enabled: bool) -> None:
        self.query_one("#send-btn", Button).disabled = not enabled

    def set_listening(self, listening: bool) -> None:
        button = self.query_one("#mic-btn", Button)
        button.label = "Stop" if listening else "Mic"
        button.set_class(listening, "listening")

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class StatusLine(Static):
    """One-line status shown under the chat while a request is pending."""

    def set_loading(self, loading: bool) -> None:
        self.update(LOADING_TEXT if loading else "")
        self.set_class(loading, "loading")


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Hidden by default, shown with --log-level or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Hidden"

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "Chat": "green",
        "LLM": "magenta",
        "Voice": "bright_blue",
    }

    def __init__(self, *args, log_level: int = LogLevel.INFO, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def log_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold."""
        if level < self._log_level:
            return

        from rich.markup import escape

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self.LEVEL_COLORS.get(level, "white")
        comp_color = self.COMPONENT_COLORS.get(component, "white")
        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<7}[/] "
            f"[{comp_color}]\\[{escape(component)}][/] {escape(message)}"
        )

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
