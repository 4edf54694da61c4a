"""Provider factory functions for CLI.

Centralizes creation of the LLM provider, requestor, formatter and speech
capabilities from environment variables. Hides configuration details from
command implementations.

Environment variables:
    GEMINI_API_KEY: Gemini API key (required for chat and ask)
    GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
    GEMCHAT_HISTORY: 'latest' (last user message only) or 'full' (default: latest)
    GEMCHAT_HIGHLIGHT_STYLE: Pygments style for code blocks (default: monokai)
"""

import os

import typer
from rich.console import Console

from ..formatting.markdown import DEFAULT_STYLE, MarkdownFormatter
from ..llm import HistoryMode, LLMProvider, ResponseRequestor, create_llm_provider
from ..llm.providers.gemini import DEFAULT_MODEL
from ..voice import CommandSpeechSynthesizer, SpeechRecognizer, SpeechSynthesizer
from ..voice.null import NullSpeechSynthesizer, UnsupportedSpeechRecognizer

# Default console for output
_console = Console()


def get_llm(console: Console | None = None, model: str | None = None) -> LLMProvider | None:
    """Create the Gemini provider from environment variables.

    Returns:
        LLM provider instance, or None if GEMINI_API_KEY is not set
    """
    con = console or _console
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        con.print("[yellow]Warning: GEMINI_API_KEY not set[/yellow]")
        return None
    return create_llm_provider(
        "gemini",
        api_key=api_key,
        model=model or os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
    )


def require_llm(console: Console | None = None, model: str | None = None) -> LLMProvider:
    """Get the LLM provider, exiting if it is not configured.

    Raises:
        typer.Exit: If GEMINI_API_KEY is not set
    """
    con = console or _console
    llm = get_llm(con, model=model)
    if not llm:
        con.print("[red]Error: LLM provider not configured (set GEMINI_API_KEY)[/red]")
        raise typer.Exit(code=1)
    return llm


def resolve_history(history: str | None, console: Console | None = None) -> HistoryMode:
    """Parse a history mode from the option value or GEMCHAT_HISTORY.

    Raises:
        typer.Exit: If the value is not a known mode
    """
    con = console or _console
    value = (history or os.getenv("GEMCHAT_HISTORY", HistoryMode.LATEST.value)).lower()
    try:
        return HistoryMode(value)
    except ValueError:
        modes = ", ".join(mode.value for mode in HistoryMode)
        con.print(f"[red]Error: Unknown history mode '{value}' (expected one of: {modes})[/red]")
        raise typer.Exit(code=1) from None


def get_requestor(
    console: Console | None = None,
    model: str | None = None,
    history: str | None = None,
) -> ResponseRequestor:
    """Create a requestor around the configured provider."""
    con = console or _console
    mode = resolve_history(history, con)
    return ResponseRequestor(require_llm(con, model=model), history=mode)


def get_formatter(
    console: Console | None = None,
    style: str | None = None,
    auto_detect: bool = True,
) -> MarkdownFormatter:
    """Create a formatter; style defaults to GEMCHAT_HIGHLIGHT_STYLE.

    Raises:
        typer.Exit: If the highlight style is unknown
    """
    con = console or _console
    try:
        return MarkdownFormatter(
            style=style or os.getenv("GEMCHAT_HIGHLIGHT_STYLE", DEFAULT_STYLE),
            auto_detect=auto_detect,
        )
    except ValueError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from None


def get_speech() -> tuple[SpeechRecognizer, SpeechSynthesizer]:
    """Speech capabilities available on this machine.

    There is no local speech recognizer, so capture is always reported as
    unsupported; synthesis uses the platform speech command when present.
    """
    synthesizer = CommandSpeechSynthesizer()
    if not synthesizer.is_supported:
        return UnsupportedSpeechRecognizer(), NullSpeechSynthesizer()
    return UnsupportedSpeechRecognizer(), synthesizer
