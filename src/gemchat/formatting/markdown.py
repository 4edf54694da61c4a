"""Markdown to sanitized, syntax-highlighted HTML.

Hidden design decisions:
- markdown-it-py with CommonMark rules plus GFM tables and strikethrough
- Single newlines render as <br> (chat text is written line by line)
- Pygments highlights fenced code; the class prefix matches highlight.js
  ("hljs language-<name>") so existing chat stylesheets keep working
- nh3 sanitizes the final HTML, after highlighting, so nothing the
  highlighter emits can bypass the allow-list
"""

import html
from typing import Any

from markdown_it import MarkdownIt
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

from .sanitize import HtmlSanitizer

PLAINTEXT = "plaintext"
DEFAULT_STYLE = "monokai"
DEFAULT_LANG_PREFIX = "hljs language-"

_DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: system-ui, sans-serif; max-width: 48rem; margin: 2rem auto; line-height: 1.5; }}
pre {{ padding: 0.75rem; border-radius: 0.5rem; overflow-x: auto; }}
{stylesheet}
</style>
</head>
<body>
{body}
</body>
</html>
"""


class MarkdownFormatter:
    """Formats chat text as HTML that is safe to inject into a page.

    One instance holds the parser, highlighter and sanitizer configuration.
    Pass it to whatever renders messages instead of configuring globals.

    Example:
        formatter = MarkdownFormatter(style="monokai")
        html = formatter.format("**bold** and `code`")
    """

    def __init__(
        self,
        style: str = DEFAULT_STYLE,
        auto_detect: bool = True,
        lang_prefix: str = DEFAULT_LANG_PREFIX,
        breaks: bool = True,
        sanitizer: HtmlSanitizer | None = None,
    ) -> None:
        self._sanitizer = sanitizer or HtmlSanitizer()
        self._options: dict[str, Any] = {}
        self.configure(
            style=style,
            auto_detect=auto_detect,
            lang_prefix=lang_prefix,
            breaks=breaks,
        )

    @property
    def style(self) -> str:
        return self._options["style"]

    @property
    def auto_detect(self) -> bool:
        return self._options["auto_detect"]

    def configure(self, **options: Any) -> None:
        """Update formatter options and rebuild the parser.

        Accepts style, auto_detect, lang_prefix and breaks. Calling it again
        with the same options yields an identical formatter.

        Raises:
            ValueError: Unknown option or unknown Pygments style
        """
        unknown = set(options) - {"style", "auto_detect", "lang_prefix", "breaks"}
        if unknown:
            raise ValueError(f"Unknown formatter option(s): {', '.join(sorted(unknown))}")

        merged = {**self._options, **options}
        try:
            html_formatter = HtmlFormatter(nowrap=True, style=merged["style"])
        except ClassNotFound as e:
            raise ValueError(f"Unknown highlight style: {merged['style']}") from e

        self._options = merged
        self._html_formatter = html_formatter
        self._md = MarkdownIt(
            "commonmark",
            {"breaks": merged["breaks"], "html": True, "highlight": self._highlight},
        ).enable(["table", "strikethrough"])

    def resolve_lexer(self, code: str, language: str | None) -> tuple[Lexer, str]:
        """Pick a lexer for a fenced block.

        A declared language is used when Pygments knows it; an unknown one
        falls back to plaintext. Without a declaration the language is
        guessed when auto-detection is on.

        Returns:
            Tuple of (lexer, language name used in the CSS class)
        """
        if language:
            try:
                return get_lexer_by_name(language), language.lower()
            except ClassNotFound:
                return TextLexer(), PLAINTEXT

        if self.auto_detect and code.strip():
            try:
                lexer = guess_lexer(code)
            except ClassNotFound:
                lexer = None
            if lexer is not None and not isinstance(lexer, TextLexer) and lexer.aliases:
                return lexer, lexer.aliases[0]

        return TextLexer(), PLAINTEXT

    def _highlight(self, code: str, language: str, attrs: str) -> str:
        # An empty string makes markdown-it render the block unhighlighted
        try:
            lexer, name = self.resolve_lexer(code, language)
            body = highlight(code, lexer, self._html_formatter)
        except Exception:
            return ""
        css_class = html.escape(f"{self._options['lang_prefix']}{name}", quote=True)
        return f'<pre><code class="{css_class}">{body}</code></pre>'

    def format(self, text: str) -> str:
        """Render markdown text to sanitized HTML."""
        rendered = self._md.render(text)
        return self._sanitizer.clean(rendered)

    def stylesheet(self, selector: str = ".hljs") -> str:
        """CSS for highlighted code under ``selector``."""
        return self._html_formatter.get_style_defs(selector)

    def render_document(self, body_html: str, title: str = "Gemini Chat") -> str:
        """Wrap already-formatted HTML in a standalone page with styles."""
        return _DOCUMENT_TEMPLATE.format(
            title=html.escape(title),
            stylesheet=self.stylesheet(),
            body=body_html,
        )


def format_markdown(text: str, formatter: MarkdownFormatter | None = None) -> str:
    """Format ``text`` with ``formatter`` or a default-configured one."""
    return (formatter or MarkdownFormatter()).format(text)
