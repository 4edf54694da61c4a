"""Main CLI application using Typer."""
import asyncio
import os
import shlex
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown

from ..errors import ChatError
from ..llm.models import ChatMessage
from ..voice import find_speech_command
from .providers import get_formatter, get_requestor, get_speech, resolve_history

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="gemchat",
    help="Terminal chat client for Google Gemini with markdown rendering and voice",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.command()
def chat(
    history: str | None = typer.Option(
        None,
        "--history",
        "-H",
        help="Context sent per turn: 'latest' (last message) or 'full' (whole conversation)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Gemini model (default: $GEMINI_MODEL or gemini-2.5-flash)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
    auto_detect: bool = typer.Option(
        True,
        "--auto-detect/--no-auto-detect",
        help="Guess the language of code blocks that do not declare one"
    ),
):
    """Launch interactive TUI chat interface."""
    async def _chat():
        from ..ui import run_textual_tui

        requestor = get_requestor(console, model=model, history=history)
        formatter = get_formatter(console, auto_detect=auto_detect)
        recognizer, synthesizer = get_speech()

        try:
            await run_textual_tui(
                requestor=requestor,
                formatter=formatter,
                recognizer=recognizer,
                synthesizer=synthesizer,
                log_level=log_level,
            )
        finally:
            await requestor.provider.close()
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


@app.command()
def serve(
    host: str = typer.Option("localhost", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on"),
    history: str | None = typer.Option(
        None,
        "--history",
        "-H",
        help="Context sent per turn: 'latest' or 'full'"
    ),
    model: str | None = typer.Option(None, "--model", "-m", help="Gemini model"),
):
    """Serve the chat TUI to a web browser."""
    from textual_serve.server import Server

    # Fail here rather than inside every browser session
    mode = resolve_history(history, console)
    if not os.getenv("GEMINI_API_KEY"):
        console.print("[red]Error: LLM provider not configured (set GEMINI_API_KEY)[/red]")
        raise typer.Exit(code=1)

    args = [sys.executable, "-m", "gemchat", "chat", "--history", mode.value]
    if model:
        args += ["--model", model]

    console.print(f"[dim]Serving on http://{host}:{port}[/dim]")
    server = Server(shlex.join(args), host=host, port=port, title="Gemini Chat")
    server.serve()


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Message to send"),
    html: bool = typer.Option(
        False,
        "--html",
        help="Print the reply as sanitized HTML instead of rich markdown"
    ),
    model: str | None = typer.Option(None, "--model", "-m", help="Gemini model"),
):
    """Send a single message and print the reply."""
    async def _ask():
        requestor = get_requestor(console, model=model)
        formatter = get_formatter(console) if html else None

        try:
            with console.status("[dim]Generating response...[/dim]"):
                reply = await requestor.generate_response(
                    [ChatMessage(role="user", content=prompt)]
                )
        except ChatError as e:
            console.print(f"[red]{e.title}: {e}[/red]")
            raise typer.Exit(code=1)
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await requestor.provider.close()

        if formatter is not None:
            typer.echo(formatter.format(reply))
        else:
            console.print(Markdown(reply))

    asyncio.run(_ask())


@app.command()
def render(
    file: Path | None = typer.Argument(
        None,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Markdown file (default: read stdin)"
    ),
    full_page: bool = typer.Option(
        False,
        "--full-page",
        help="Wrap the fragment in an HTML document with the highlight stylesheet"
    ),
    style: str | None = typer.Option(
        None,
        "--style",
        "-s",
        help="Pygments style (default: $GEMCHAT_HIGHLIGHT_STYLE or monokai)"
    ),
    auto_detect: bool = typer.Option(
        True,
        "--auto-detect/--no-auto-detect",
        help="Guess the language of code blocks that do not declare one"
    ),
):
    """Render markdown to sanitized, highlighted HTML."""
    text = file.read_text(encoding="utf-8") if file else sys.stdin.read()
    formatter = get_formatter(console, style=style, auto_detect=auto_detect)

    body = formatter.format(text)
    typer.echo(formatter.render_document(body) if full_page else body)


@app.command()
def health():
    """Check API key and speech capability."""
    all_healthy = True

    if os.getenv("GEMINI_API_KEY"):
        console.print("[green]+[/green] Gemini API key: SET")
    else:
        console.print("[red]x[/red] Gemini API key: NOT SET")
        all_healthy = False

    speech = find_speech_command()
    if speech:
        console.print(f"[green]+[/green] Text-to-speech: {speech}")
    else:
        console.print("[yellow]![/yellow] Text-to-speech: NOT AVAILABLE (install espeak-ng)")
    console.print("[yellow]![/yellow] Speech recognition: NOT AVAILABLE in terminal")

    try:
        formatter = get_formatter(console)
        console.print(f"[green]+[/green] Highlight style: {formatter.style}")
    except typer.Exit:
        all_healthy = False

    if not all_healthy:
        raise typer.Exit(code=1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
