"""Text-to-speech through the platform's speech command.

Uses `say` on macOS and `espeak-ng` or `espeak` on Linux. Text is fed on
stdin so it is never parsed as command-line options. Playback runs as an
asyncio subprocess, so speak() must be called from a running event loop.
"""

import asyncio
import contextlib
import shutil
import sys
from pathlib import Path

from ..errors import UnsupportedFeatureError
from .base import EndCallback, ErrorCallback, SpeechSynthesizer

# Words per minute at rate 1.0 for both engines
_BASE_WPM = 175
# espeak pitch range is 0-99, 50 is the engine default
_BASE_PITCH = 50


def find_speech_command() -> str | None:
    """Locate a speech command for this platform, or None."""
    if sys.platform == "darwin":
        candidates = ["say"]
    elif sys.platform.startswith("linux"):
        candidates = ["espeak-ng", "espeak"]
    else:
        candidates = []

    for name in candidates:
        path = shutil.which(name)
        if path:
            return path
    return None


def build_speech_command(executable: str, rate: float = 1.0, pitch: float = 1.0) -> list[str]:
    """Command line that speaks stdin with the given rate and pitch."""
    words_per_minute = str(max(1, round(_BASE_WPM * rate)))
    if Path(executable).name == "say":
        # say has no pitch control
        return [executable, "-r", words_per_minute, "-f", "-"]
    pitch_value = str(min(99, max(0, round(_BASE_PITCH * pitch))))
    return [executable, "-s", words_per_minute, "-p", pitch_value, "--stdin"]


class CommandSpeechSynthesizer(SpeechSynthesizer):
    """Speaks by running a local speech command per utterance."""

    def __init__(self, executable: str | None = None) -> None:
        self._executable = executable or find_speech_command()
        self._task: asyncio.Task[None] | None = None
        self._process: asyncio.subprocess.Process | None = None

    @property
    def executable(self) -> str | None:
        return self._executable

    @property
    def is_supported(self) -> bool:
        return self._executable is not None

    @property
    def speaking(self) -> bool:
        return self._task is not None and not self._task.done()

    def speak(
        self,
        text: str,
        on_end: EndCallback,
        rate: float = 1.0,
        pitch: float = 1.0,
        on_error: ErrorCallback | None = None,
    ) -> None:
        if self._executable is None:
            raise UnsupportedFeatureError("Text-to-speech")
        command = build_speech_command(self._executable, rate=rate, pitch=pitch)
        report = on_error or (lambda _error: on_end())
        task = asyncio.get_running_loop().create_task(self._play(command, text, on_end, report))
        task.add_done_callback(lambda done: self._collect(done, report))
        self._task = task

    async def _play(
        self,
        command: list[str],
        text: str,
        on_end: EndCallback,
        on_error: ErrorCallback,
    ) -> None:
        try:
            self._process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
            await self._process.communicate(text.encode("utf-8"))
        except OSError as e:
            # Missing binary, no exec permission, broken pipe
            on_error(f"{Path(command[0]).name}: {e.strerror or e}")
            return
        finally:
            self._process = None
        # Not reached when cancelled: cancel() already reset the caller's state
        on_end()

    @staticmethod
    def _collect(task: "asyncio.Task[None]", on_error: ErrorCallback) -> None:
        """Report a playback task that died with an unexpected error."""
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            on_error(str(error) or error.__class__.__name__)

    def cancel(self) -> None:
        if self._process is not None and self._process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                self._process.terminate()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
