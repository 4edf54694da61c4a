"""Voice input and output toggles for the chat.

Hides the interaction rules around speech:
- Capture is continuous; every result so far is joined into the input text
- Only one utterance may play; any toggle while speaking just cancels
- Model replies are read without their markdown markers
"""

from collections.abc import Callable

from ..chat.callbacks import ChatCallback
from ..errors import UnsupportedFeatureError
from ..formatting.speech import to_speech_text
from .base import SpeechRecognizer, SpeechSynthesizer
from .null import NullSpeechSynthesizer, UnsupportedSpeechRecognizer

SPEECH_RATE = 1.0
SPEECH_PITCH = 1.0


class VoiceController:
    """Starts and stops speech capture and playback.

    Example:
        voice = VoiceController(recognizer, synthesizer, callback)
        voice.bind_transcript(controller.set_input)
        voice.toggle_listening()
    """

    def __init__(
        self,
        recognizer: SpeechRecognizer | None = None,
        synthesizer: SpeechSynthesizer | None = None,
        callback: ChatCallback | None = None,
    ) -> None:
        self._recognizer = recognizer or UnsupportedSpeechRecognizer()
        self._synthesizer = synthesizer or NullSpeechSynthesizer()
        self._callback = callback or ChatCallback()
        self._transcript_sink: Callable[[str], None] | None = None
        self._listening = False
        self._speaking = False

    @property
    def listening(self) -> bool:
        return self._listening

    @property
    def speaking(self) -> bool:
        return self._speaking

    @property
    def recognizer(self) -> SpeechRecognizer:
        return self._recognizer

    @property
    def synthesizer(self) -> SpeechSynthesizer:
        return self._synthesizer

    def bind_transcript(self, sink: Callable[[str], None]) -> None:
        """Send live transcripts to ``sink`` (usually the input setter)."""
        self._transcript_sink = sink

    def _set_listening(self, listening: bool) -> None:
        if listening != self._listening:
            self._listening = listening
            self._callback.on_listening_changed(listening)

    def _set_speaking(self, speaking: bool) -> None:
        if speaking != self._speaking:
            self._speaking = speaking
            self._callback.on_speaking_changed(speaking)

    def _report_unsupported(self, feature: str) -> None:
        error = UnsupportedFeatureError(feature)
        self._callback.log("warning", "Voice", str(error))
        self._callback.notify(error.title, str(error), "error")

    def toggle_listening(self) -> bool:
        """Start capture, or stop it if running. Returns the new state."""
        if not self._recognizer.is_supported:
            self._report_unsupported("Speech recognition")
            return False

        if self._listening:
            self.stop_listening()
            return False

        self._recognizer.start(self._on_result, self._on_error)
        self._set_listening(True)
        self._callback.log("info", "Voice", "Speech capture started")
        self._callback.notify("Listening", "Speak now...")
        return True

    def stop_listening(self) -> None:
        """Stop capture if it is running."""
        if not self._listening:
            return
        self._recognizer.stop()
        self._set_listening(False)
        self._callback.log("info", "Voice", "Speech capture stopped")

    def _on_result(self, transcripts: list[str]) -> None:
        if self._transcript_sink is not None:
            self._transcript_sink("".join(transcripts))

    def _on_error(self, error: str) -> None:
        self._set_listening(False)
        self._callback.log("error", "Voice", f"Speech recognition error: {error}")
        self._callback.notify("Speech Recognition Error", f"Error: {error}", "error")

    def toggle_speech(self, text: str) -> bool:
        """Read ``text`` aloud, or cancel playback if anything is playing.

        Returns:
            True if a new utterance started
        """
        if self._speaking or self._synthesizer.speaking:
            self._synthesizer.cancel()
            self._set_speaking(False)
            return False

        if not self._synthesizer.is_supported:
            self._report_unsupported("Text-to-speech")
            return False

        self._set_speaking(True)
        try:
            self._synthesizer.speak(
                to_speech_text(text),
                self._on_speech_end,
                rate=SPEECH_RATE,
                pitch=SPEECH_PITCH,
                on_error=self._on_speech_error,
            )
        except UnsupportedFeatureError:
            self._set_speaking(False)
            self._report_unsupported("Text-to-speech")
            return False
        return True

    def _on_speech_end(self) -> None:
        self._set_speaking(False)

    def _on_speech_error(self, error: str) -> None:
        self._set_speaking(False)
        self._callback.log("error", "Voice", f"Speech synthesis error: {error}")
        self._callback.notify("Speech Synthesis Error", f"Error: {error}", "error")

    def shutdown(self) -> None:
        """Release speech resources; no audio outlives the view."""
        self.stop_listening()
        if self._speaking or self._synthesizer.speaking:
            self._synthesizer.cancel()
        self._set_speaking(False)
