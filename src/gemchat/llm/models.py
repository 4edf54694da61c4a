import time
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "model"]


def _now_ms() -> int:
    return int(time.time() * 1000)


class ChatMessage(BaseModel):
    """A single turn in the conversation.

    Messages are immutable once created; the conversation is an
    append-only list of them in the order they were produced.
    """

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who authored the message: 'user' or 'model'")
    content: str = Field(description="Raw message text (markdown for model replies)")
    timestamp: int = Field(
        default_factory=_now_ms,
        description="Creation time in epoch milliseconds"
    )


class GenerationSettings(BaseModel):
    """Sampling parameters sent with every request."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_k: int = Field(default=40, ge=1)
    top_p: float = Field(default=0.95, gt=0.0, le=1.0)
    max_output_tokens: int = Field(default=1024, ge=1)


class LLMResponse(BaseModel):
    """Response from an LLM provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Text of the first candidate")
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
