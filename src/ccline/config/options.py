"""Per-segment option parsing.

Each segment reads its own settings out of the free-form ``options`` map of
its SegmentConfig. Values of the wrong type fall back to the default and
numeric values are clamped to a sane range, so a bad config file never stops
a segment from rendering.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, TypeVar

E = TypeVar("E", bound=Enum)


def option_bool(options: dict[str, Any], key: str, default: bool) -> bool:
    value = options.get(key)
    return value if isinstance(value, bool) else default


def option_int(
    options: dict[str, Any],
    key: str,
    default: int,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> int:
    """Read an integer option and clamp it into [minimum, maximum]."""
    value = options.get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        result = default
    else:
        result = int(value)
    if minimum is not None:
        result = max(minimum, result)
    if maximum is not None:
        result = min(maximum, result)
    return result


def option_float(
    options: dict[str, Any],
    key: str,
    default: float,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> float:
    value = options.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        result = default
    else:
        result = float(value)
    if minimum is not None:
        result = max(minimum, result)
    if maximum is not None:
        result = min(maximum, result)
    return result


def option_enum(options: dict[str, Any], key: str, default: E) -> E:
    """Read an enum option by its (case-insensitive) value."""
    value = options.get(key)
    if isinstance(value, str):
        try:
            return type(default)(value.lower())
        except ValueError:
            pass
    return default


def option_str_map(options: dict[str, Any], key: str) -> dict[str, str]:
    value = options.get(key)
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items() if isinstance(v, str)}


class CaseStyle(str, Enum):
    ORIGINAL = "original"
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"


@dataclass
class DirectorySegmentConfig:
    max_length: int = 20
    show_full_path: bool = False
    abbreviate_home: bool = True
    show_parent: bool = False
    case_style: CaseStyle = CaseStyle.ORIGINAL

    @classmethod
    def from_options(cls, options: dict[str, Any]) -> "DirectorySegmentConfig":
        return cls(
            max_length=option_int(options, "max_length", 20, 5, 100),
            show_full_path=option_bool(options, "show_full_path", False),
            abbreviate_home=option_bool(options, "abbreviate_home", True),
            show_parent=option_bool(options, "show_parent", False),
            case_style=option_enum(options, "case_style", CaseStyle.ORIGINAL),
        )


class GitStatusFormat(str, Enum):
    SYMBOLS = "symbols"
    TEXT = "text"
    COUNT = "count"


@dataclass
class GitSegmentConfig:
    show_sha: bool = False
    sha_length: int = 7
    show_remote: bool = True
    show_stash: bool = False
    show_tag: bool = False
    hide_clean_status: bool = False
    branch_max_length: int = 20
    status_format: GitStatusFormat = GitStatusFormat.SYMBOLS

    @classmethod
    def from_options(cls, options: dict[str, Any]) -> "GitSegmentConfig":
        return cls(
            show_sha=option_bool(options, "show_sha", False),
            sha_length=option_int(options, "sha_length", 7, 4, 40),
            show_remote=option_bool(options, "show_remote", True),
            show_stash=option_bool(options, "show_stash", False),
            show_tag=option_bool(options, "show_tag", False),
            hide_clean_status=option_bool(options, "hide_clean_status", False),
            branch_max_length=option_int(options, "branch_max_length", 20, 5, 100),
            status_format=option_enum(
                options, "status_format", GitStatusFormat.SYMBOLS
            ),
        )


class ModelDisplayFormat(str, Enum):
    NAME = "name"
    FULL = "full"
    CUSTOM = "custom"


@dataclass
class ModelSegmentConfig:
    display_format: ModelDisplayFormat = ModelDisplayFormat.NAME
    show_version: bool = False
    abbreviate_names: bool = True
    custom_names: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_options(cls, options: dict[str, Any]) -> "ModelSegmentConfig":
        return cls(
            display_format=option_enum(
                options, "display_format", ModelDisplayFormat.NAME
            ),
            show_version=option_bool(options, "show_version", False),
            abbreviate_names=option_bool(options, "abbreviate_names", True),
            custom_names=option_str_map(options, "custom_names"),
        )


class UsageDisplayFormat(str, Enum):
    PERCENTAGE = "percentage"
    TOKENS = "tokens"
    BOTH = "both"
    BAR = "bar"


class TokenUnit(str, Enum):
    AUTO = "auto"
    K = "k"
    RAW = "raw"


@dataclass
class UsageSegmentConfig:
    display_format: UsageDisplayFormat = UsageDisplayFormat.BOTH
    show_limit: bool = False
    warning_threshold: int = 80
    critical_threshold: int = 95
    compact_format: bool = True
    token_unit: TokenUnit = TokenUnit.AUTO
    bar_width: int = 10
    bar_show_percentage: bool = True
    bar_show_tokens: bool = False

    @classmethod
    def from_options(cls, options: dict[str, Any]) -> "UsageSegmentConfig":
        warning = option_int(options, "warning_threshold", 80, 0, 100)
        critical = option_int(options, "critical_threshold", 95, warning, 100)
        return cls(
            display_format=option_enum(
                options, "display_format", UsageDisplayFormat.BOTH
            ),
            show_limit=option_bool(options, "show_limit", False),
            warning_threshold=warning,
            critical_threshold=critical,
            compact_format=option_bool(options, "compact_format", True),
            token_unit=option_enum(options, "token_unit", TokenUnit.AUTO),
            bar_width=option_int(options, "bar_width", 10, 5, 50),
            bar_show_percentage=option_bool(options, "bar_show_percentage", True),
            bar_show_tokens=option_bool(options, "bar_show_tokens", False),
        )


class CurrencyFormat(str, Enum):
    AUTO = "auto"
    FIXED = "fixed"
    COMPACT = "compact"
    SCIENTIFIC = "scientific"


@dataclass
class CostSegmentConfig:
    currency_format: CurrencyFormat = CurrencyFormat.AUTO
    precision: int = 2
    threshold_warning: float = 1.0

    @classmethod
    def from_options(cls, options: dict[str, Any]) -> "CostSegmentConfig":
        return cls(
            currency_format=option_enum(
                options, "currency_format", CurrencyFormat.AUTO
            ),
            precision=option_int(options, "precision", 2, 0, 6),
            threshold_warning=option_float(options, "threshold_warning", 1.0, 0.0),
        )


class TimeFormat(str, Enum):
    AUTO = "auto"
    SHORT = "short"
    LONG = "long"
    DIGITAL = "digital"


@dataclass
class SessionSegmentConfig:
    time_format: TimeFormat = TimeFormat.AUTO
    show_milliseconds: bool = False
    compact_format: bool = True
    show_line_changes: bool = True

    @classmethod
    def from_options(cls, options: dict[str, Any]) -> "SessionSegmentConfig":
        return cls(
            time_format=option_enum(options, "time_format", TimeFormat.AUTO),
            show_milliseconds=option_bool(options, "show_milliseconds", False),
            compact_format=option_bool(options, "compact_format", True),
            show_line_changes=option_bool(options, "show_line_changes", True),
        )


class OutputStyleDisplayFormat(str, Enum):
    NAME = "name"
    FULL = "full"
    ABBREVIATED = "abbreviated"
    CUSTOM = "custom"


@dataclass
class OutputStyleSegmentConfig:
    display_format: OutputStyleDisplayFormat = OutputStyleDisplayFormat.NAME
    abbreviate_names: bool = False
    show_description: bool = False
    custom_names: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_options(cls, options: dict[str, Any]) -> "OutputStyleSegmentConfig":
        return cls(
            display_format=option_enum(
                options, "display_format", OutputStyleDisplayFormat.NAME
            ),
            abbreviate_names=option_bool(options, "abbreviate_names", False),
            show_description=option_bool(options, "show_description", False),
            custom_names=option_str_map(options, "custom_names"),
        )
