"""Speech capabilities for environments without speech support."""

from .base import EndCallback, ErrorCallback, ResultCallback, SpeechRecognizer, SpeechSynthesizer


class UnsupportedSpeechRecognizer(SpeechRecognizer):
    """Recognizer that reports itself unsupported and never captures."""

    @property
    def is_supported(self) -> bool:
        return False

    def start(self, on_result: ResultCallback, on_error: ErrorCallback) -> None:
        pass

    def stop(self) -> None:
        pass


class NullSpeechSynthesizer(SpeechSynthesizer):
    """Synthesizer that reports itself unsupported and stays silent."""

    @property
    def is_supported(self) -> bool:
        return False

    @property
    def speaking(self) -> bool:
        return False

    def speak(
        self,
        text: str,
        on_end: EndCallback,
        rate: float = 1.0,
        pitch: float = 1.0,
        on_error: ErrorCallback | None = None,
    ) -> None:
        pass

    def cancel(self) -> None:
        pass
