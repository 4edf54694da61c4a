"""Pytest configuration and shared fixtures."""
import asyncio
import os
from typing import Any

import pytest

from gemchat.chat import ChatCallback
from gemchat.llm import LLMProvider, LLMResponse, ResponseRequestor
from gemchat.llm.models import ChatMessage
from gemchat.voice import InMemorySpeechRecognizer, InMemorySpeechSynthesizer


class FakeProvider(LLMProvider):
    """Provider that records each call and answers from a script."""

    def __init__(self, reply: str = "Hello from Gemini", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append({
            "messages": list(messages),
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            **kwargs,
        })
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply, model=model or self.model)

    async def close(self) -> None:
        self.closed = True


class RecordingCallback(ChatCallback):
    """Callback that keeps every event it receives."""

    def __init__(self):
        self.messages: list[tuple[ChatMessage, ...]] = []
        self.inputs: list[str] = []
        self.loading: list[bool] = []
        self.listening: list[bool] = []
        self.speaking: list[bool] = []
        self.scrolls = 0
        self.notifications: list[tuple[str, str, str]] = []
        self.logs: list[tuple[str, str, str]] = []

    def on_messages_changed(self, messages):
        self.messages.append(tuple(messages))

    def on_input_changed(self, text):
        self.inputs.append(text)

    def on_loading_changed(self, loading):
        self.loading.append(loading)

    def on_listening_changed(self, listening):
        self.listening.append(listening)

    def on_speaking_changed(self, speaking):
        self.speaking.append(speaking)

    def scroll_to_end(self):
        self.scrolls += 1

    def notify(self, title, message, severity="information"):
        self.notifications.append((title, message, severity))

    def log(self, level, component, message):
        self.logs.append((level, component, message))


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {"gemini": os.getenv("GEMINI_API_KEY")}


@pytest.fixture
def provider():
    """Return a scripted provider."""
    return FakeProvider()


@pytest.fixture
def requestor(provider):
    """Return a requestor around the scripted provider."""
    return ResponseRequestor(provider)


@pytest.fixture
def callback():
    """Return a recording callback."""
    return RecordingCallback()


@pytest.fixture
def recognizer():
    return InMemorySpeechRecognizer()


@pytest.fixture
def synthesizer():
    return InMemorySpeechSynthesizer()


@pytest.fixture
def sample_reply():
    """Return a model reply with prose and two code blocks."""
    return '''Here is **bold** text and `inline code`.

```python
def add(a, b):
    return a + b
```

And a shell example:

```bash
echo hello
```
'''
