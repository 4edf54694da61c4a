"""Fenced code block extraction."""

import re
from dataclasses import dataclass

from .markdown import PLAINTEXT

_FENCE_PATTERN = re.compile(r"```([\w+#.-]*)[^\n]*\n(.*?)```", re.DOTALL)


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block found in a message."""

    code: str
    language: str = PLAINTEXT


def extract_code_blocks(text: str) -> list[CodeBlock]:
    """Return the fenced code blocks in ``text`` in document order.

    Blocks without a language tag get ``plaintext``. An unterminated fence
    is not a block.
    """
    return [
        CodeBlock(code=match.group(2), language=match.group(1).lower() or PLAINTEXT)
        for match in _FENCE_PATTERN.finditer(text)
    ]
