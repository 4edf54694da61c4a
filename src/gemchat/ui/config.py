"""UI configuration constants.

Centralizes text and timing values for the UI module.
"""


class LogLevel:
    """Log level constants with numeric values for comparison.

    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert a level name ("info", "WARNING", ...) to its value. DEBUG if unknown."""
        by_name = {name.lower(): value for value, name in cls._names.items()}
        return by_name.get(level_str.lower(), cls.DEBUG)


# Chat panel text
WELCOME_TITLE = "Welcome to Gemini Chat"
WELCOME_TEXT = (
    "Start a conversation with the AI assistant. "
    "Type your message below or use voice input (Ctrl+T)."
)
LOADING_TEXT = "Generating response..."
USER_LABEL = "You"
MODEL_LABEL = "Gemini AI"

# Speak button labels
SPEAK_LABEL = "Read aloud"
STOP_SPEAKING_LABEL = "Stop speaking"

# Notification timeouts in seconds
NOTIFY_TIMEOUT = 3
NOTIFY_ERROR_TIMEOUT = 6

# Message header timestamp
MESSAGE_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
