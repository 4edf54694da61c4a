"""Terminal UI module for gemchat.

Provides a Textual-based TUI for chatting with Gemini.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (message views, input bar, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and the light/dark toggle
- config.py: Labels, timeouts and log levels
- callbacks.py: Chat core integration (how the TUI receives updates)
- app.py: Application orchestration (user interaction flow)
"""

from .app import GemChatApp, run_textual_tui
from .callbacks import TUIChatCallback
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, MessageView, StatusLine

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "GemChatApp",
    "LogLevel",
    "MessageView",
    "StatusLine",
    "TUIChatCallback",
    "run_textual_tui",
]
