"""Abstract speech capabilities.

This module defines what the chat client needs from speech devices and
nothing more. The abstraction hides:
- Which engine recognizes or synthesizes speech
- Whether speech is available at all on this machine
- Threading of engine callbacks (implementations may call back from any thread)
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

ResultCallback = Callable[[list[str]], None]
ErrorCallback = Callable[[str], None]
EndCallback = Callable[[], None]


class SpeechRecognizer(ABC):
    """Speech-to-text capture session.

    Sessions are continuous with interim results: ``on_result`` is called
    repeatedly with the transcripts of every result so far, not only the
    newest one.
    """

    @property
    @abstractmethod
    def is_supported(self) -> bool:
        """Whether capture can be started at all."""

    @abstractmethod
    def start(self, on_result: ResultCallback, on_error: ErrorCallback) -> None:
        """Begin a capture session."""

    @abstractmethod
    def stop(self) -> None:
        """End the capture session. Safe to call when not capturing."""


class SpeechSynthesizer(ABC):
    """Text-to-speech output."""

    @property
    @abstractmethod
    def is_supported(self) -> bool:
        """Whether speech can be produced at all."""

    @property
    @abstractmethod
    def speaking(self) -> bool:
        """True while an utterance is playing."""

    @abstractmethod
    def speak(
        self,
        text: str,
        on_end: EndCallback,
        rate: float = 1.0,
        pitch: float = 1.0,
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Start speaking ``text``.

        ``on_end`` fires when playback finishes. If playback fails after
        speak() has returned, ``on_error`` fires with a description instead.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Stop the current utterance. Safe to call when silent."""
