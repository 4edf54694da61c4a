"""Unit tests for the llm module."""
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from conftest import FakeProvider
from google.genai import errors
from hypothesis import given
from hypothesis import strategies as st

from gemchat.errors import EmptyConversationError, EmptyResponseError, ResponseError
from gemchat.llm import (
    ChatMessage,
    GeminiProvider,
    GenerationSettings,
    HistoryMode,
    LLMProvider,
    ResponseRequestor,
    create_llm_provider,
)


def _conversation() -> list[ChatMessage]:
    return [
        ChatMessage(role="user", content="first question"),
        ChatMessage(role="model", content="first answer"),
        ChatMessage(role="user", content="second question"),
    ]


def _genai_response(*texts: str, usage=None):
    parts = [SimpleNamespace(text=text) for text in texts]
    return SimpleNamespace(
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))],
        usage_metadata=usage,
    )


def _mock_client(provider: GeminiProvider, result=None, error=None) -> AsyncMock:
    generate = AsyncMock(return_value=result, side_effect=error)
    provider._client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(
        generate_content=generate
    )))
    return generate


class TestModels:
    """Tests for message and settings models."""

    def test_message_defaults(self):
        """Test that messages get a millisecond timestamp."""
        message = ChatMessage(role="user", content="hi")
        assert message.timestamp > 1_000_000_000_000

    def test_message_is_immutable(self):
        """Test that messages cannot be edited after creation."""
        message = ChatMessage(role="user", content="hi")
        with pytest.raises(ValueError):
            message.content = "changed"  # type: ignore

    def test_unknown_role_fails(self):
        """Test role validation."""
        with pytest.raises(ValueError):
            ChatMessage(role="assistant", content="hi")  # type: ignore

    def test_settings_defaults(self):
        """Test the fixed generation parameters."""
        settings = GenerationSettings()

        assert settings.temperature == 0.7
        assert settings.top_k == 40
        assert settings.top_p == 0.95
        assert settings.max_output_tokens == 1024

    @given(st.floats(min_value=0.0, max_value=2.0))
    def test_temperature_within_bounds(self, temperature: float):
        """Property test: temperature accepts 0-2."""
        assert GenerationSettings(temperature=temperature).temperature == temperature

    def test_temperature_above_maximum_fails(self):
        with pytest.raises(ValueError):
            GenerationSettings(temperature=2.5)


class TestResponseRequestor:
    """Tests for turn construction and provider calls."""

    def test_provider_is_abstract(self):
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore

    def test_latest_sends_only_last_user_message(self, requestor):
        """Test the default history mode."""
        selected = requestor.select_messages(_conversation())

        assert requestor.history is HistoryMode.LATEST
        assert [m.content for m in selected] == ["second question"]

    def test_full_sends_whole_conversation(self, provider):
        """Test full history mode."""
        requestor = ResponseRequestor(provider, history="full")
        selected = requestor.select_messages(_conversation())

        assert [m.role for m in selected] == ["user", "model", "user"]

    def test_full_ends_on_user_turn(self, provider):
        """Test that trailing model messages are not sent."""
        requestor = ResponseRequestor(provider, history=HistoryMode.FULL)
        conversation = _conversation() + [ChatMessage(role="model", content="dangling")]

        selected = requestor.select_messages(conversation)

        assert selected[-1].content == "second question"

    def test_no_user_message_fails(self, requestor):
        """Test that a conversation without user input is rejected."""
        with pytest.raises(EmptyConversationError):
            requestor.select_messages([ChatMessage(role="model", content="hello")])

    def test_unknown_history_mode_fails(self, provider):
        with pytest.raises(ValueError):
            ResponseRequestor(provider, history="some")

    @pytest.mark.asyncio
    async def test_generate_response_passes_settings(self, provider, requestor):
        """Test that every request carries the generation settings."""
        reply = await requestor.generate_response(_conversation())

        assert reply == "Hello from Gemini"
        assert len(provider.calls) == 1
        call = provider.calls[0]
        assert [m.content for m in call["messages"]] == ["second question"]
        assert call["temperature"] == 0.7
        assert call["max_tokens"] == 1024
        assert call["top_k"] == 40
        assert call["top_p"] == 0.95

    @pytest.mark.asyncio
    async def test_generate_response_propagates_errors(self):
        """Test that provider errors reach the caller unchanged."""
        error = ResponseError("quota exceeded", status=429)
        requestor = ResponseRequestor(FakeProvider(error=error))
        logs = []
        requestor.set_debug_callback(lambda *entry: logs.append(entry))

        with pytest.raises(ResponseError) as exc_info:
            await requestor.generate_response(_conversation())

        assert exc_info.value is error
        assert logs[-1][0] == "error"
        assert logs[-1][1] == "LLM"

    def test_model_falls_back_to_provider(self, provider):
        assert ResponseRequestor(provider).model == "fake-model"
        assert ResponseRequestor(provider, model="other").model == "other"


class TestGeminiProvider:
    """Tests for the Gemini provider with a mocked client."""

    @pytest.fixture
    def gemini(self):
        return GeminiProvider(api_key="test-key")

    @pytest.mark.asyncio
    async def test_request_payload(self, gemini):
        """Test contents and generation config sent to the API."""
        generate = _mock_client(gemini, result=_genai_response("Hi", " there"))

        response = await gemini.chat_completion(
            [ChatMessage(role="user", content="Hello")],
            temperature=0.7,
            max_tokens=1024,
            top_k=40,
            top_p=0.95,
        )

        assert response.content == "Hi there"
        assert response.model == "gemini-2.5-flash"

        kwargs = generate.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        content = kwargs["contents"][0]
        assert content.role == "user"
        assert content.parts[0].text == "Hello"
        config = kwargs["config"]
        assert config.temperature == 0.7
        assert config.top_k == 40
        assert config.top_p == 0.95
        assert config.max_output_tokens == 1024

    @pytest.mark.asyncio
    async def test_usage_is_reported(self, gemini):
        usage = SimpleNamespace(
            prompt_token_count=3, candidates_token_count=5, total_token_count=8
        )
        _mock_client(gemini, result=_genai_response("ok", usage=usage))

        response = await gemini.chat_completion([ChatMessage(role="user", content="q")])

        assert response.usage == {"prompt_tokens": 3, "completion_tokens": 5, "total_tokens": 8}

    @pytest.mark.asyncio
    async def test_model_override(self, gemini):
        generate = _mock_client(gemini, result=_genai_response("ok"))

        await gemini.chat_completion(
            [ChatMessage(role="user", content="q")], model="gemini-2.5-pro"
        )

        assert generate.call_args.kwargs["model"] == "gemini-2.5-pro"

    @pytest.mark.asyncio
    async def test_no_candidates_fails(self, gemini):
        """Test that an empty candidate list is reported."""
        _mock_client(gemini, result=SimpleNamespace(candidates=[], usage_metadata=None))

        with pytest.raises(EmptyResponseError, match="No response generated"):
            await gemini.chat_completion([ChatMessage(role="user", content="q")])

    @pytest.mark.asyncio
    async def test_candidate_without_parts_fails(self, gemini):
        _mock_client(gemini, result=SimpleNamespace(
            candidates=[SimpleNamespace(content=None)], usage_metadata=None
        ))

        with pytest.raises(EmptyResponseError):
            await gemini.chat_completion([ChatMessage(role="user", content="q")])

    @pytest.mark.asyncio
    async def test_api_error_carries_message(self, gemini):
        """Test that the API's own error message is surfaced."""
        error = errors.ClientError(400, {
            "error": {
                "code": 400,
                "message": "API key not valid",
                "status": "INVALID_ARGUMENT",
            }
        })
        _mock_client(gemini, error=error)

        with pytest.raises(ResponseError) as exc_info:
            await gemini.chat_completion([ChatMessage(role="user", content="q")])

        assert "API key not valid" in str(exc_info.value)
        assert exc_info.value.status == 400

    @pytest.mark.asyncio
    async def test_context_manager(self, gemini):
        async with gemini as provider:
            assert provider is gemini


class TestFactory:
    """Tests for provider creation."""

    def test_create_gemini(self):
        provider = create_llm_provider("gemini", api_key="k", model="gemini-2.5-pro")

        assert isinstance(provider, GeminiProvider)
        assert provider.model == "gemini-2.5-pro"

    def test_google_alias(self):
        assert isinstance(create_llm_provider("Google", api_key="k"), GeminiProvider)

    def test_missing_api_key_fails(self):
        with pytest.raises(TypeError):
            create_llm_provider("gemini")

    def test_unsupported_provider_fails(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("openai", api_key="k")
