"""Message formatting.

Hides how chat text becomes output:
- markdown.py: markdown to sanitized, highlighted HTML
- sanitize.py: the HTML allow-list
- code_blocks.py: fenced block extraction
- speech.py: markdown-free text for speech synthesis
"""

from .code_blocks import CodeBlock, extract_code_blocks
from .markdown import MarkdownFormatter, format_markdown
from .sanitize import HtmlSanitizer
from .speech import to_speech_text

__all__ = [
    "CodeBlock",
    "HtmlSanitizer",
    "MarkdownFormatter",
    "extract_code_blocks",
    "format_markdown",
    "to_speech_text",
]
