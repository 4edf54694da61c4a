"""In-memory speech capabilities.

Scriptable stand-ins for real speech engines. Nothing is heard or played:
tests (and headless runs) drive recognition results and playback endings
by hand.
"""

from dataclasses import dataclass

from .base import EndCallback, ErrorCallback, ResultCallback, SpeechRecognizer, SpeechSynthesizer


class InMemorySpeechRecognizer(SpeechRecognizer):
    """Recognizer whose results are pushed with ``emit``.

    Example:
        recognizer = InMemorySpeechRecognizer()
        recognizer.start(on_result, on_error)
        recognizer.emit("hello ")
        recognizer.emit("world")   # on_result(["hello ", "world"])
    """

    def __init__(self) -> None:
        self._on_result: ResultCallback | None = None
        self._on_error: ErrorCallback | None = None
        self._results: list[str] = []
        self.start_count = 0
        self.stop_count = 0

    @property
    def is_supported(self) -> bool:
        return True

    @property
    def active(self) -> bool:
        return self._on_result is not None

    def start(self, on_result: ResultCallback, on_error: ErrorCallback) -> None:
        self._on_result = on_result
        self._on_error = on_error
        self._results = []
        self.start_count += 1

    def stop(self) -> None:
        if self.active:
            self.stop_count += 1
        self._on_result = None
        self._on_error = None

    def emit(self, transcript: str) -> None:
        """Deliver a new result; ignored when no session is active."""
        if self._on_result is None:
            return
        self._results.append(transcript)
        self._on_result(list(self._results))

    def fail(self, error: str) -> None:
        """Report an engine error and end the session."""
        on_error = self._on_error
        self.stop()
        if on_error is not None:
            on_error(error)


@dataclass
class Utterance:
    """One spoken text and its playback parameters."""

    text: str
    rate: float
    pitch: float
    cancelled: bool = False


class InMemorySpeechSynthesizer(SpeechSynthesizer):
    """Synthesizer that records utterances instead of playing them.

    Like a browser engine, ``speak`` queues behind anything already
    playing and ``cancel`` clears the whole queue. Utterances stay active
    until ``finish`` or ``cancel`` is called.
    """

    def __init__(self) -> None:
        self.utterances: list[Utterance] = []
        self._queue: list[tuple[Utterance, EndCallback, ErrorCallback | None]] = []

    @property
    def is_supported(self) -> bool:
        return True

    @property
    def speaking(self) -> bool:
        return bool(self._queue)

    @property
    def active_count(self) -> int:
        return len(self._queue)

    def speak(
        self,
        text: str,
        on_end: EndCallback,
        rate: float = 1.0,
        pitch: float = 1.0,
        on_error: ErrorCallback | None = None,
    ) -> None:
        utterance = Utterance(text=text, rate=rate, pitch=pitch)
        self.utterances.append(utterance)
        self._queue.append((utterance, on_end, on_error))

    def finish(self) -> None:
        """Play the current utterance to its end."""
        if not self._queue:
            return
        _, on_end, _ = self._queue.pop(0)
        on_end()

    def fail(self, error: str) -> None:
        """Abort the current utterance with a playback error."""
        if not self._queue:
            return
        _, on_end, on_error = self._queue.pop(0)
        if on_error is not None:
            on_error(error)
        else:
            on_end()

    def cancel(self) -> None:
        for utterance, _, _ in self._queue:
            utterance.cancelled = True
        self._queue.clear()
