from .base import LLMProvider
from .factory import create_llm_provider
from .models import ChatMessage, GenerationSettings, LLMResponse
from .providers import GeminiProvider
from .requestor import HistoryMode, ResponseRequestor

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "ChatMessage",
    "GenerationSettings",
    "LLMResponse",
    "GeminiProvider",
    "HistoryMode",
    "ResponseRequestor",
]
