"""Plain-text rendering of markdown for speech output."""

import re

CODE_BLOCK_PLACEHOLDER = "Code block omitted for speech."

# Applied in order: code blocks first so their contents are never read out
_SPEECH_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"```.*?```", re.DOTALL), CODE_BLOCK_PLACEHOLDER),
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),
    (re.compile(r"\*(.*?)\*"), r"\1"),
    (re.compile(r"\[(.*?)\]\(.*?\)"), r"\1"),
    (re.compile(r"#+\s(.*)"), r"\1"),
    (re.compile(r"`(.*?)`"), r"\1"),
]


def to_speech_text(text: str) -> str:
    """Strip markdown markers so a synthesizer reads only the words."""
    for pattern, replacement in _SPEECH_RULES:
        text = pattern.sub(replacement, text)
    return text
