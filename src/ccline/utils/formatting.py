"""Formatting utilities for numbers, percentages and progress bars."""


def _trim_fraction(value: float) -> str:
    """One decimal place, dropped when it rounds to zero."""
    text = f"{value:.1f}"
    return text[:-2] if text.endswith(".0") else text


def format_percentage(percentage: float) -> str:
    """Format a percentage, hiding the decimal for whole numbers.

    Returns:
        Formatted string (e.g., "50%", "12.5%")
    """
    return f"{_trim_fraction(percentage)}%"


def format_tokens_k(tokens: int, compact: bool = True) -> str:
    """Format a token count in thousands (e.g., "25k", "12.5k", "12.5 k")."""
    unit = "k" if compact else " k"
    return f"{_trim_fraction(tokens / 1000)}{unit}"


def format_tokens_auto(tokens: int, compact: bool = True) -> str:
    """Raw count below 1000, thousands above."""
    if tokens < 1000:
        return str(tokens)
    return format_tokens_k(tokens, compact)


def render_progress_bar(
    percentage: float, width: int = 10, filled_char: str = "#", empty_char: str = "-"
) -> str:
    """Render a fixed-width ASCII progress bar.

    Args:
        percentage: Progress percentage, values outside 0-100 are clamped
        width: Number of cells inside the brackets
        filled_char: Character for filled cells
        empty_char: Character for empty cells

    Returns:
        Progress bar string (e.g., "[####------]")
    """
    clamped = max(0.0, min(100.0, percentage))
    filled = int((clamped / 100) * width)
    return "[" + filled_char * filled + empty_char * (width - filled) + "]"


def pluralize(count: int, singular: str) -> str:
    return f"{count} {singular}" if count == 1 else f"{count} {singular}s"
