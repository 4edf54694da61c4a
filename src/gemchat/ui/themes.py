"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes for the dark and light variants
- Which theme the light/dark toggle switches between

To add a new theme, define it here and register it in the app.
"""

from textual.theme import Theme

GEMCHAT_DARK = Theme(
    name="gemchat-dark",
    primary="#8ab4f8",      # Gemini blue - user bubbles, focus
    secondary="#c58af9",    # Violet - model bubbles
    accent="#fdd663",       # Amber - highlights
    foreground="#e3e3e3",
    background="#131314",
    surface="#1e1f20",
    panel="#282a2c",
    success="#81c995",
    warning="#fcad70",
    error="#f28b82",
    dark=True,
    variables={
        "border": "#444746",
        "border-blurred": "#303134",
        "text-muted": "#9aa0a6",
        "scrollbar": "#303134",
        "scrollbar-hover": "#444746",
        "scrollbar-active": "#8ab4f8",
        "footer-key-foreground": "#fdd663",
    },
)

GEMCHAT_LIGHT = Theme(
    name="gemchat-light",
    primary="#1a73e8",
    secondary="#9334e6",
    accent="#e37400",
    foreground="#1f1f1f",
    background="#ffffff",
    surface="#f0f4f9",
    panel="#e9eef6",
    success="#188038",
    warning="#e37400",
    error="#d93025",
    dark=False,
    variables={
        "border": "#c4c7c5",
        "border-blurred": "#dde3ea",
        "text-muted": "#5f6368",
        "scrollbar": "#dde3ea",
        "scrollbar-hover": "#c4c7c5",
        "scrollbar-active": "#1a73e8",
        "footer-key-foreground": "#1a73e8",
    },
)

THEMES = (GEMCHAT_DARK, GEMCHAT_LIGHT)


def toggled_theme(current: str) -> str:
    """Name of the theme the light/dark toggle switches to."""
    return GEMCHAT_LIGHT.name if current == GEMCHAT_DARK.name else GEMCHAT_DARK.name
