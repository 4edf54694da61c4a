"""Main Textual TUI application.

Orchestrates the UI components and hands user actions to the conversation
and voice controllers. The app holds no chat state of its own.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, TextArea

from ..chat.controller import ConversationController
from ..formatting.markdown import MarkdownFormatter
from ..llm.requestor import ResponseRequestor
from ..voice.base import SpeechRecognizer, SpeechSynthesizer
from ..voice.controller import VoiceController
from .callbacks import TUIChatCallback
from .config import LogLevel
from .styles import APP_CSS
from .themes import GEMCHAT_DARK, THEMES, toggled_theme
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, StatusLine


class GemChatApp(App):
    """Textual TUI for chatting with Gemini."""

    CSS = APP_CSS
    TITLE = "Gemini Chat"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat", priority=True),
        Binding("ctrl+t", "toggle_voice", "Voice", priority=True),
        Binding("ctrl+s", "speak_last", "Read Aloud", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+y", "copy_code_block", "Copy Code", priority=True),
        Binding("ctrl+o", "copy_html", "Copy HTML", show=False),
        Binding("ctrl+d", "toggle_debug", "Debug", priority=True),
        Binding("ctrl+l", "toggle_theme", "Theme"),
    ]

    def __init__(
        self,
        requestor: ResponseRequestor,
        formatter: MarkdownFormatter | None = None,
        recognizer: SpeechRecognizer | None = None,
        synthesizer: SpeechSynthesizer | None = None,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._formatter = formatter or MarkdownFormatter()
        self._log_level = log_level
        self._callback = TUIChatCallback(self)
        self.voice = VoiceController(recognizer, synthesizer, self._callback)
        self.controller = ConversationController(requestor, self._callback, self.voice)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        yield StatusLine("", id="status-line")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        for theme in THEMES:
            self.register_theme(theme)
        self.theme = GEMCHAT_DARK.name

        if self._log_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()

        requestor = self.controller.requestor
        self.sub_title = f"{requestor.model} | history: {requestor.history.value}"
        self._callback.log("info", "TUI", f"Started with model {requestor.model}")

        self.query_one("#chat-history", ChatHistoryWidget).sync(self.controller.messages)
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        """Stop speech so no audio outlives the app."""
        self.voice.shutdown()

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self.controller.set_input(event.value, notify_view=False)
        self._send()

    @work(group="chat")
    async def _send(self) -> None:
        """Run one turn as a background async worker."""
        await self.controller.submit()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if event.text_area.id == "chat-input":
            self.controller.set_input(event.text_area.text, notify_view=False)

    def on_chat_input_bar_mic_toggled(self, event: ChatInputBar.MicToggled) -> None:
        self.voice.toggle_listening()

    def on_chat_history_widget_speak_requested(
        self, event: ChatHistoryWidget.SpeakRequested
    ) -> None:
        messages = self.controller.messages
        if 0 <= event.index < len(messages):
            self.voice.toggle_speech(messages[event.index].content)

    def action_clear_chat(self) -> None:
        """Clear the conversation."""
        if self.controller.reset():
            self.notify("Chat cleared", timeout=2)
        else:
            self.notify("Wait for the current response", severity="warning", timeout=2)

    def action_toggle_voice(self) -> None:
        """Start or stop voice input."""
        self.voice.toggle_listening()

    def action_speak_last(self) -> None:
        """Read the last response aloud, or stop reading."""
        response = self.controller.last_response()
        if response is None and not self.voice.speaking:
            self.notify("No response to read", severity="warning", timeout=2)
            return
        self.voice.toggle_speech(response.content if response else "")

    def action_copy_last_response(self) -> None:
        """Copy last model response to clipboard."""
        response = self.controller.last_response()
        if response is None:
            self.notify("No response to copy", severity="warning")
            return
        self.copy_to_clipboard(response.content)
        self.notify("Response copied")

    def action_copy_code_block(self) -> None:
        """Copy the last code block of the last response."""
        block = self.controller.last_code_block()
        if block is None:
            self.notify("No code block to copy", severity="warning")
            return
        self.copy_to_clipboard(block.code)
        self.notify(f"Copied {block.language} code")

    def action_copy_html(self) -> None:
        """Copy the last response as sanitized HTML."""
        response = self.controller.last_response()
        if response is None:
            self.notify("No response to copy", severity="warning")
            return
        self.copy_to_clipboard(self._formatter.format(response.content))
        self.notify("Response HTML copied")

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_toggle_theme(self) -> None:
        """Switch between the light and dark theme."""
        self.theme = toggled_theme(self.theme)


async def run_textual_tui(
    requestor: ResponseRequestor,
    formatter: MarkdownFormatter | None = None,
    recognizer: SpeechRecognizer | None = None,
    synthesizer: SpeechSynthesizer | None = None,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        requestor: Sends each turn to the model
        formatter: Formatter used for HTML copies of responses
        recognizer: Speech-to-text capability (None: unsupported)
        synthesizer: Text-to-speech capability (None: unsupported)
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = GemChatApp(
        requestor=requestor,
        formatter=formatter,
        recognizer=recognizer,
        synthesizer=synthesizer,
        log_level=log_level,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        app.voice.shutdown()
