"""Token usage normalization across provider usage schemas.

Anthropic reports ``input_tokens``/``cache_*_input_tokens`` while OpenAI
compatible providers report ``prompt_tokens``/``completion_tokens`` and nest
cached tokens under ``prompt_tokens_details``. Everything is folded into a
single NormalizedUsage record.
"""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict

CALCULATION_TOTAL_DIRECT = "total_tokens_direct"
CALCULATION_FROM_COMPONENTS = "total_from_components"


class PromptTokensDetails(BaseModel):
    """Nested OpenAI-style prompt token breakdown."""

    model_config = ConfigDict(extra="allow")

    cached_tokens: Optional[int] = None


class RawUsage(BaseModel):
    """Permissive ``message.usage`` block from a transcript entry.

    Fields not listed here are kept in ``model_extra`` for debugging.
    """

    model_config = ConfigDict(extra="allow")

    # Anthropic
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    cache_creation_input_tokens: Optional[int] = None
    cache_read_input_tokens: Optional[int] = None

    # OpenAI and compatible providers
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    cache_creation_prompt_tokens: Optional[int] = None
    cache_read_prompt_tokens: Optional[int] = None
    cached_tokens: Optional[int] = None
    prompt_tokens_details: Optional[PromptTokensDetails] = None

    total_tokens: Optional[int] = None

    def normalize(self) -> "NormalizedUsage":
        return normalize(self)


@dataclass
class NormalizedUsage:
    """Canonical token accounting for one assistant message."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0
    calculation_source: str = ""
    raw_data_available: list[str] = field(default_factory=list)

    def context_tokens(self) -> int:
        """Tokens currently occupying the context window."""
        return (
            self.input_tokens
            + self.output_tokens
            + self.cache_creation_input_tokens
            + self.cache_read_input_tokens
        )

    def display_tokens(self) -> int:
        """Best single number to show the user.

        Prefers the context token count, then the total, then the larger of
        input and output.
        """
        context = self.context_tokens()
        if context > 0:
            return context
        if self.total_tokens > 0:
            return self.total_tokens
        return max(self.input_tokens, self.output_tokens)


def _first_present(*values: Optional[int]) -> int:
    """Return the first value that is not None, or 0."""
    for value in values:
        if value is not None:
            return value
    return 0


def _available_fields(raw: RawUsage) -> list[str]:
    details_cached = (
        raw.prompt_tokens_details.cached_tokens if raw.prompt_tokens_details else None
    )
    candidates = [
        ("input_tokens", raw.input_tokens),
        ("prompt_tokens", raw.prompt_tokens),
        ("output_tokens", raw.output_tokens),
        ("completion_tokens", raw.completion_tokens),
        ("cache_creation_input_tokens", raw.cache_creation_input_tokens),
        ("cache_creation_prompt_tokens", raw.cache_creation_prompt_tokens),
        ("cache_read_input_tokens", raw.cache_read_input_tokens),
        ("cache_read_prompt_tokens", raw.cache_read_prompt_tokens),
        ("cached_tokens", raw.cached_tokens),
        ("prompt_tokens_details.cached_tokens", details_cached),
        ("total_tokens", raw.total_tokens),
    ]
    return [name for name, value in candidates if value]


def normalize(raw: RawUsage) -> NormalizedUsage:
    """Fold a provider-specific usage block into a NormalizedUsage.

    Args:
        raw: Parsed usage block

    Returns:
        NormalizedUsage where total_tokens is either the provider total or the
        sum of the four component fields
    """
    input_tokens = _first_present(raw.input_tokens, raw.prompt_tokens)
    output_tokens = _first_present(raw.output_tokens, raw.completion_tokens)
    cache_creation = _first_present(
        raw.cache_creation_input_tokens, raw.cache_creation_prompt_tokens
    )
    cache_read = _first_present(
        raw.cache_read_input_tokens,
        raw.cache_read_prompt_tokens,
        raw.cached_tokens,
        raw.prompt_tokens_details.cached_tokens if raw.prompt_tokens_details else None,
    )

    components = (input_tokens, output_tokens, cache_creation, cache_read)

    if raw.total_tokens is not None and raw.total_tokens > 0:
        total_tokens = raw.total_tokens
        calculation_source = CALCULATION_TOTAL_DIRECT
    elif any(value > 0 for value in components):
        total_tokens = sum(components)
        calculation_source = CALCULATION_FROM_COMPONENTS
    else:
        total_tokens = 0
        calculation_source = ""

    return NormalizedUsage(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        total_tokens=total_tokens,
        cache_creation_input_tokens=cache_creation,
        cache_read_input_tokens=cache_read,
        calculation_source=calculation_source,
        raw_data_available=_available_fields(raw),
    )
