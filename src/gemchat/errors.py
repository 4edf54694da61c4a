"""Error types surfaced to the user.

Every failure the chat client reports is a ChatError. None of them are
fatal: the UI shows them as a transient notification and the conversation
stays usable.
"""


class ChatError(Exception):
    """Base class for chat client errors."""

    title = "Error"


class UnsupportedFeatureError(ChatError):
    """A speech capability is not available in this environment."""

    title = "Not Supported"

    def __init__(self, feature: str):
        super().__init__(f"{feature} is not supported in this environment.")
        self.feature = feature


class ResponseError(ChatError):
    """The API call failed or returned a malformed response."""

    def __init__(self, message: str | None = None, status: int | None = None):
        super().__init__(message or "Failed to generate response")
        self.status = status


class EmptyResponseError(ChatError):
    """The API returned no candidates."""

    def __init__(self, message: str = "No response generated"):
        super().__init__(message)


class EmptyConversationError(ChatError):
    """There is no user message to send."""

    def __init__(self):
        super().__init__("No user message to send")
