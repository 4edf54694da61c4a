"""Google Gemini LLM provider implementation.

Uses the official Google GenAI SDK for async generateContent calls.
Reference: https://github.com/googleapis/python-genai

One call per turn: there is no retry loop. A non-success status becomes a
ResponseError carrying the API's own message, and a reply without
candidates becomes an EmptyResponseError.
"""

from typing import Any

from google import genai
from google.genai import errors, types

from ...errors import EmptyResponseError, ResponseError
from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse

DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider implementation.

    Hidden design decisions:
    - Google GenAI client initialization
    - Message format conversion (roles map 1:1 onto Gemini content roles)
    - How API errors and empty candidate lists are reported
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Default model (gemini-2.5-flash, gemini-2.5-pro, ...)
            **client_kwargs: Additional kwargs for Client
        """
        self._model = model
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    def _convert_messages(self, messages: list[ChatMessage]) -> list[types.Content]:
        return [
            types.Content(role=msg.role, parts=[types.Part(text=msg.content)])
            for msg in messages
        ]

    def _extract_content(self, response: Any) -> str:
        """Extract the first candidate's text.

        Raises:
            EmptyResponseError: No candidates, or the first one has no text
        """
        if not response.candidates:
            raise EmptyResponseError()

        candidate = response.candidates[0]
        if candidate.content is None or not candidate.content.parts:
            raise EmptyResponseError()

        texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
        if not texts:
            raise EmptyResponseError()
        return "".join(texts)

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a completion using Google Gemini.

        Args:
            messages: Messages to send, oldest first
            model: Model to use (overrides default)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Additional GenerateContentConfig fields (top_k, top_p)

        Returns:
            LLMResponse with the first candidate's text
        """
        model_to_use = model or self._model
        config = types.GenerateContentConfig(temperature=temperature, **kwargs)
        if max_tokens is not None:
            config.max_output_tokens = max_tokens

        try:
            response = await self._client.aio.models.generate_content(
                model=model_to_use,
                contents=self._convert_messages(messages),
                config=config
            )
        except errors.APIError as e:
            raise ResponseError(e.message or str(e), status=e.code) from e

        usage = None
        if response.usage_metadata:
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
                "completion_tokens": response.usage_metadata.candidates_token_count or 0,
                "total_tokens": response.usage_metadata.total_token_count or 0
            }

        return LLMResponse(
            content=self._extract_content(response),
            model=model_to_use,
            usage=usage
        )

    async def close(self) -> None:
        """Close the Gemini client.

        The GenAI client holds no resources that need explicit release;
        this exists for interface consistency.
        """
