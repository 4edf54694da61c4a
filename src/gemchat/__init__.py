"""
gemchat: a Gemini chat client with sanitized, syntax-highlighted markdown
rendering and optional speech input and output.

Each subpackage hides one design decision: which API answers (llm), how
text becomes HTML (formatting), how a turn is taken (chat), how speech is
produced (voice) and how it is all displayed (ui, cli).
"""

__version__ = "0.1.0"

from .chat import ChatCallback, ConversationController
from .errors import (
    ChatError,
    EmptyConversationError,
    EmptyResponseError,
    ResponseError,
    UnsupportedFeatureError,
)
from .formatting import CodeBlock, MarkdownFormatter, extract_code_blocks, to_speech_text
from .llm import ChatMessage, GenerationSettings, HistoryMode, ResponseRequestor

__all__ = [
    "ChatCallback",
    "ChatError",
    "ChatMessage",
    "CodeBlock",
    "ConversationController",
    "EmptyConversationError",
    "EmptyResponseError",
    "GenerationSettings",
    "HistoryMode",
    "MarkdownFormatter",
    "ResponseError",
    "ResponseRequestor",
    "UnsupportedFeatureError",
    "extract_code_blocks",
    "to_speech_text",
]
