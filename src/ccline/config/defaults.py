"""Default configuration for ccline."""

from .schema import (
    ColorConfig,
    Color16,
    Config,
    IconConfig,
    SegmentConfig,
    SegmentId,
    StyleConfig,
    StyleMode,
    TextStyleConfig,
)


def _segment(
    segment_id: SegmentId,
    plain_icon: str,
    nerd_font_icon: str,
    icon_color: int,
    text_color: int,
    enabled: bool = True,
    **options: object,
) -> SegmentConfig:
    return SegmentConfig(
        id=segment_id,
        enabled=enabled,
        icon=IconConfig(plain=plain_icon, nerd_font=nerd_font_icon),
        colors=ColorConfig(icon=Color16(c16=icon_color), text=Color16(c16=text_color)),
        styles=TextStyleConfig(text_bold=True),
        options=dict(options),
    )


def get_default_config() -> Config:
    """Generate the default statusline configuration."""
    return Config(
        theme="default",
        style=StyleConfig(mode=StyleMode.NERD_FONT, separator=" | "),
        segments=[
            _segment(
                SegmentId.MODEL,
                "🤖",
                "\ue26d",
                14,
                14,
                display_format="name",
                show_version=False,
                abbreviate_names=True,
            ),
            _segment(
                SegmentId.DIRECTORY,
                "📁",
                "\U000f024b",
                11,
                10,
                max_length=20,
                show_full_path=False,
                abbreviate_home=True,
                show_parent=False,
                case_style="original",
            ),
            _segment(
                SegmentId.GIT,
                "🌿",
                "\U000f02a2",
                12,
                12,
                show_sha=False,
                sha_length=7,
                show_remote=True,
                show_stash=False,
                show_tag=False,
                hide_clean_status=False,
                branch_max_length=20,
                status_format="symbols",
            ),
            _segment(
                SegmentId.USAGE,
                "⚡️",
                "\uf49b",
                13,
                13,
                display_format="both",
                show_limit=False,
                warning_threshold=80,
                critical_threshold=95,
                compact_format=True,
                token_unit="auto",
                bar_show_percentage=True,
                bar_show_tokens=False,
            ),
            _segment(
                SegmentId.COST,
                "💰",
                "\ueec1",
                3,
                3,
                enabled=False,
                currency_format="auto",
                precision=2,
                threshold_warning=1.0,
            ),
            _segment(
                SegmentId.SESSION,
                "⏱️",
                "\U000f19bb",
                2,
                2,
                enabled=False,
                time_format="auto",
                show_milliseconds=False,
                compact_format=True,
                show_line_changes=True,
            ),
            _segment(
                SegmentId.OUTPUT_STYLE,
                "🎯",
                "\U000f12f5",
                6,
                6,
                enabled=False,
                display_format="name",
                abbreviate_names=False,
                show_description=False,
            ),
        ],
    )
