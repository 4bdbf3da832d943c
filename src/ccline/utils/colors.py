"""ANSI SGR encoding for configured colors."""

from typing import Optional

from ..config.schema import AnsiColor, Color16, Color256, Rgb

ESC = "\x1b["
RESET = "\x1b[0m"
BG_RESET = "\x1b[49m"
SEPARATOR_COLOR = "\x1b[37m"
BOLD_PARAM = "1"


def _color16_code(c16: int, background: bool) -> int:
    base = 30 if c16 < 8 else 90
    code = base + (c16 % 8)
    return code + 10 if background else code


def color_params(color: AnsiColor, background: bool = False) -> str:
    """SGR parameter string for a color, without the escape wrapper.

    Args:
        color: 4-bit, 8-bit or 24-bit color
        background: Encode as background instead of foreground

    Returns:
        Parameters such as "91", "38;5;208" or "48;2;10;20;30"
    """
    if isinstance(color, Color16):
        return str(_color16_code(color.c16, background))
    prefix = "48" if background else "38"
    if isinstance(color, Color256):
        return f"{prefix};5;{color.c256}"
    if isinstance(color, Rgb):
        return f"{prefix};2;{color.r};{color.g};{color.b}"
    raise TypeError(f"Unsupported color: {color!r}")


def foreground_code(color: AnsiColor) -> str:
    return f"{ESC}{color_params(color)}m"


def background_code(color: AnsiColor) -> str:
    return f"{ESC}{color_params(color, background=True)}m"


def apply_color(text: str, color: Optional[AnsiColor]) -> str:
    """Wrap text in a foreground color followed by a full reset."""
    if color is None:
        return text
    return f"{foreground_code(color)}{text}{RESET}"


def apply_style(text: str, color: Optional[AnsiColor], bold: bool = False) -> str:
    """Wrap text in one SGR sequence combining bold and color, then reset."""
    params = []
    if bold:
        params.append(BOLD_PARAM)
    if color is not None:
        params.append(color_params(color))

    if not params:
        return text

    return f"{ESC}{';'.join(params)}m{text}{RESET}"


def strip_resets(text: str) -> str:
    """Remove full resets so an enclosing background stays active."""
    return text.replace(RESET, "")
