"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Single column: chat history, optional log panel, status line, input bar.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* Chat history */
#chat-history {
    height: 1fr;
    background: $surface;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

#welcome {
    width: 100%;
    height: auto;
    margin: 4 2;
    content-align: center middle;
    text-align: center;
    color: $text-muted;
}

.chat-message {
    height: auto;
    max-width: 90%;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    margin-left: 8;
    background: $primary 20%;
    border-left: thick $primary;
}

.model-message {
    margin-right: 8;
    background: $panel;
    border-left: thick $secondary;
}

.message-header {
    color: $text-muted;
    text-style: italic;
}

.message-content {
    height: auto;
    margin: 0;
    padding: 0;
    background: transparent;
}

.speak-btn {
    dock: right;
    min-width: 16;
    height: 1;
    border: none;
    margin: 0;
    background: $secondary 30%;

    &.speaking {
        background: $warning 40%;
        text-style: bold;
    }
}

/* Debug log panel - hidden until toggled */
#debug-panel {
    display: none;
    height: 12;
    background: $panel;
    border: round $accent 60%;
    border-title-color: $accent;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
}

/* Status line */
#status-line {
    height: 1;
    padding: 0 2;
    color: $text-muted;
    text-style: italic;

    &.loading {
        color: $accent;
    }
}

/* Input bar */
#chat-input-bar {
    height: auto;
    max-height: 9;
    padding: 0 1;
}

#chat-input {
    width: 1fr;
    height: 5;
    border: round $border;

    &:focus {
        border: round $primary;
    }
}

#chat-input-bar Button {
    height: 5;
    min-width: 10;
    margin-left: 1;
}

#mic-btn.listening {
    background: $error 60%;
    text-style: bold;
}
"""
