"""Main rendering pipeline for status line."""

from typing import Optional

from .config.schema import POWERLINE_ARROW, AnsiColor, Config, SegmentConfig, StyleMode
from .types import SegmentData
from .utils.colors import (
    BG_RESET,
    RESET,
    SEPARATOR_COLOR,
    apply_color,
    apply_style,
    background_code,
    foreground_code,
    strip_resets,
)


def create_powerline_arrow(
    prev_bg: Optional[AnsiColor], curr_bg: Optional[AnsiColor]
) -> str:
    """Arrow glyph colored to blend the previous segment into the current one.

    Args:
        prev_bg: Background of the segment to the left, drawn as arrow foreground
        curr_bg: Background of the segment to the right, drawn behind the arrow

    Returns:
        Arrow with its color codes, followed by a reset when any color was set
    """
    codes = ""
    if curr_bg is not None:
        codes += background_code(curr_bg)
    if prev_bg is not None:
        codes += foreground_code(prev_bg)

    if not codes:
        return POWERLINE_ARROW
    return f"{codes}{POWERLINE_ARROW}{RESET}"


class StatusLineGenerator:
    """Turns collected segment data into one ANSI-colored line."""

    def __init__(self, config: Config):
        self.config = config

    def get_icon(self, segment_config: SegmentConfig) -> str:
        if self.config.style.mode == StyleMode.PLAIN:
            return segment_config.icon.plain
        return segment_config.icon.nerd_font

    def render_segment(self, segment_config: SegmentConfig, data: SegmentData) -> str:
        """Render a single segment with its icon, colors and background.

        With a background color, inner resets are removed so the background
        spans the whole segment, and only the background is reset at the end.
        """
        icon = self.get_icon(segment_config)
        colors = segment_config.colors
        bold = segment_config.styles.text_bold

        def styled(text: str) -> str:
            return apply_style(text, colors.text, bold)

        if colors.background is None:
            segment = f"{apply_color(icon, colors.icon)} {styled(data.primary)}"
            if data.secondary:
                segment += f" {styled(data.secondary)}"
            return segment

        icon_text = strip_resets(apply_color(icon, colors.icon))
        content = f" {icon_text} {strip_resets(styled(data.primary))} "
        if data.secondary:
            content += f"{strip_resets(styled(data.secondary))} "
        return f"{background_code(colors.background)}{content}{BG_RESET}"

    def join_with_separator(self, rendered: list[str]) -> str:
        separator = f"{SEPARATOR_COLOR}{self.config.style.separator}{RESET}"
        return separator.join(rendered)

    def join_with_powerline_arrows(
        self, rendered: list[str], backgrounds: list[Optional[AnsiColor]]
    ) -> str:
        parts = [rendered[0]]
        for i in range(1, len(rendered)):
            parts.append(create_powerline_arrow(backgrounds[i - 1], backgrounds[i]))
            parts.append(rendered[i])
        parts.append(RESET)
        return "".join(parts)

    def generate(self, segments: list[tuple[SegmentConfig, SegmentData]]) -> str:
        """Render enabled segments and join them into the final line.

        Args:
            segments: (segment config, segment data) pairs in display order

        Returns:
            Rendered status line, or "" when nothing is enabled
        """
        rendered: list[str] = []
        backgrounds: list[Optional[AnsiColor]] = []

        for segment_config, data in segments:
            if not segment_config.enabled:
                continue
            text = self.render_segment(segment_config, data)
            if text:
                rendered.append(text)
                backgrounds.append(segment_config.colors.background)

        if not rendered:
            return ""

        if self.config.style.separator == POWERLINE_ARROW:
            return self.join_with_powerline_arrows(rendered, backgrounds)
        return self.join_with_separator(rendered)
