"""Speech input and output.

Module structure:
- base.py: capability interfaces (SpeechRecognizer, SpeechSynthesizer)
- null.py: implementations for environments without speech
- in_memory.py: scriptable implementations for tests and headless runs
- command.py: synthesizer backed by the platform speech command
- controller.py: toggle rules used by the chat views
"""

from .base import SpeechRecognizer, SpeechSynthesizer
from .command import CommandSpeechSynthesizer, find_speech_command
from .controller import VoiceController
from .in_memory import InMemorySpeechRecognizer, InMemorySpeechSynthesizer
from .null import NullSpeechSynthesizer, UnsupportedSpeechRecognizer

__all__ = [
    "CommandSpeechSynthesizer",
    "InMemorySpeechRecognizer",
    "InMemorySpeechSynthesizer",
    "NullSpeechSynthesizer",
    "SpeechRecognizer",
    "SpeechSynthesizer",
    "UnsupportedSpeechRecognizer",
    "VoiceController",
    "find_speech_command",
]
