"""Model display names and context limits.

Entries are matched in order by case-insensitive substring, so a specific
pattern such as ``claude-sonnet-4-5`` must come before ``sonnet-4``. A model
id carrying the ``[1m]`` marker is matched without it and always reports a
1M token context window.
"""

import tomllib

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from .debug import debug_log

ONE_M_MARKER = "[1m]"
ONE_M_CONTEXT_LIMIT = 1_000_000
ONE_M_FALLBACK_NAME = "Sonnet 4 1M"
DEFAULT_CONTEXT_LIMIT = 200_000

MODELS_TEMPLATE = """\
# ccline model configuration
# Defines display names and context limits for models.
# File location: ~/.claude/ccline/models.toml

models = []

# Each [[models]] table defines a pattern and its properties.
# Order matters: the first matching pattern wins, and entries here take
# priority over the built-in table. Put more specific patterns first.
#
# [[models]]
# pattern = "glm-4.5"
# display_name = "GLM-4.5"
# context_limit = 128000
"""


class ModelEntry(BaseModel):
    """A model pattern with its display name and context window size."""

    pattern: str
    display_name: str
    context_limit: int = Field(gt=0)

    model_config = {"frozen": True}


class ModelOverrides(BaseModel):
    """Schema of the user models.toml file."""

    models: list[ModelEntry] = Field(default_factory=list)


DEFAULT_MODEL_ENTRIES: tuple[ModelEntry, ...] = (
    ModelEntry(pattern="claude-sonnet-4-5", display_name="Sonnet 4.5", context_limit=200_000),
    ModelEntry(pattern="sonnet-4-5", display_name="Sonnet 4.5", context_limit=200_000),
    ModelEntry(pattern="claude-sonnet-4", display_name="Sonnet 4", context_limit=200_000),
    ModelEntry(pattern="claude-4-sonnet", display_name="Sonnet 4", context_limit=200_000),
    ModelEntry(pattern="claude-opus-4-6", display_name="Opus 4.6", context_limit=200_000),
    ModelEntry(pattern="opus-4-6", display_name="Opus 4.6", context_limit=200_000),
    ModelEntry(pattern="claude-opus-4", display_name="Opus 4", context_limit=200_000),
    ModelEntry(pattern="claude-4-opus", display_name="Opus 4", context_limit=200_000),
    ModelEntry(pattern="sonnet-4", display_name="Sonnet 4", context_limit=200_000),
    ModelEntry(pattern="claude-3-7-sonnet", display_name="Sonnet 3.7", context_limit=200_000),
    ModelEntry(pattern="glm-4.5", display_name="GLM-4.5", context_limit=128_000),
    ModelEntry(pattern="kimi-k2-turbo", display_name="Kimi K2 Turbo", context_limit=128_000),
    ModelEntry(pattern="kimi-k2", display_name="Kimi K2", context_limit=128_000),
    ModelEntry(pattern="qwen3-coder", display_name="Qwen Coder", context_limit=256_000),
    # Never matched directly; documents the [1m] handling in _match()
    ModelEntry(
        pattern=ONE_M_MARKER,
        display_name=ONE_M_FALLBACK_NAME,
        context_limit=ONE_M_CONTEXT_LIMIT,
    ),
)


def get_user_models_path() -> Path:
    """Get path to the user model override file."""
    return Path.home() / ".claude" / "ccline" / "models.toml"


def get_models_search_paths() -> list[Path]:
    """Override file locations, in priority order."""
    return [get_user_models_path(), Path("models.toml")]


def load_models_file(path: Path) -> list[ModelEntry]:
    """Parse a models.toml file.

    Raises:
        OSError: If the file cannot be read
        tomllib.TOMLDecodeError: If the file is not valid TOML
        ValidationError: If an entry is missing fields or has bad values
    """
    with open(path, "rb") as f:
        data = tomllib.load(f)
    return ModelOverrides.model_validate(data).models


def create_default_models_file(path: Path) -> None:
    """Write the commented models.toml template."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(MODELS_TEMPLATE, encoding="utf-8")


class ModelRegistry:
    """Ordered model table with first-match-wins lookup."""

    def __init__(self, entries: Optional[list[ModelEntry]] = None):
        self.entries: list[ModelEntry] = (
            list(entries) if entries is not None else list(DEFAULT_MODEL_ENTRIES)
        )

    @classmethod
    def load(cls, search_paths: Optional[list[Path]] = None) -> "ModelRegistry":
        """Build a registry from the first readable override file plus built-ins.

        Override entries are prepended so they take priority. Unreadable or
        invalid files are skipped.
        """
        if search_paths is None:
            user_path = get_user_models_path()
            if not user_path.exists():
                try:
                    create_default_models_file(user_path)
                except OSError as e:
                    debug_log(f"Could not create {user_path}: {e}")
            search_paths = get_models_search_paths()

        for path in search_paths:
            if not path.exists():
                continue
            try:
                overrides = load_models_file(path)
            except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
                debug_log(f"Ignoring model overrides in {path}: {e}")
                continue
            debug_log(f"Loaded {len(overrides)} model override(s) from {path}")
            return cls(overrides + list(DEFAULT_MODEL_ENTRIES))

        return cls()

    def _match(self, model_id: str) -> tuple[Optional[ModelEntry], bool]:
        """Find the first entry matching model_id.

        Returns:
            Tuple of (matching entry or None, whether the [1m] marker was present)
        """
        model_lower = model_id.lower()
        has_1m = ONE_M_MARKER in model_lower
        match_id = model_lower.replace(ONE_M_MARKER, "") if has_1m else model_lower

        for entry in self.entries:
            if entry.pattern == ONE_M_MARKER:
                continue
            if entry.pattern.lower() in match_id:
                return entry, has_1m

        return None, has_1m

    def get_context_limit(self, model_id: str) -> int:
        """Get the context window size for a model id."""
        entry, has_1m = self._match(model_id)
        if has_1m:
            return ONE_M_CONTEXT_LIMIT
        if entry is not None:
            return entry.context_limit
        return DEFAULT_CONTEXT_LIMIT

    def get_display_name(self, model_id: str) -> Optional[str]:
        """Get the display name for a model id, or None if unrecognized."""
        entry, has_1m = self._match(model_id)
        if entry is not None:
            return f"{entry.display_name} 1M" if has_1m else entry.display_name
        if has_1m:
            return ONE_M_FALLBACK_NAME
        return None


# Module-level cache for the loaded registry
_registry: Optional[ModelRegistry] = None


def get_model_registry() -> ModelRegistry:
    """Get the process-wide registry, loading it on first use."""
    global _registry
    if _registry is None:
        _registry = ModelRegistry.load()
    return _registry


def reset_model_registry() -> None:
    """Forget the cached registry so the next lookup reloads it."""
    global _registry
    _registry = None
