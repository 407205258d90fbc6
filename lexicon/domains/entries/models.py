"""
Entry Models - Data types for lexicon entries.

Entries form a closed tagged union discriminated by ``kind``.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from lexicon.config.errors import EntryValidationError


class EntryKind(str, Enum):
    """Entry variant."""

    WORD = "word"
    PHRASE = "phrase"
    QUOTE = "quote"
    HYPOTHETICAL = "hypothetical"


class BaseEntry(BaseModel):
    """Fields shared by every entry kind."""

    id: int | None = None
    slug: str = ""
    tags: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"frozen": True}

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: list[str]) -> list[str]:
        # Set semantics, first-seen order kept for stable output
        return [tag for tag in dict.fromkeys(t.strip() for t in value) if tag]


class Word(BaseEntry):
    """Single word with definition."""

    kind: Literal["word"] = "word"
    name: str = Field(..., min_length=1)
    definition: str | None = None
    part_of_speech: str | None = None
    etymology: str | None = None
    notes: str | None = None


class Phrase(BaseEntry):
    """Multi-word phrase with definition."""

    kind: Literal["phrase"] = "phrase"
    body: str = Field(..., min_length=1)
    definition: str | None = None
    source: str | None = None
    notes: str | None = None


class Quote(BaseEntry):
    """Attributed quotation."""

    kind: Literal["quote"] = "quote"
    body: str = Field(..., min_length=1)
    name: str | None = None
    author: str | None = None
    source: str | None = None
    notes: str | None = None


class Hypothetical(BaseEntry):
    """Hypothetical scenario."""

    kind: Literal["hypothetical"] = "hypothetical"
    body: str = Field(..., min_length=1)
    source: str | None = None
    notes: str | None = None


Entry = Annotated[Union[Word, Phrase, Quote, Hypothetical], Field(discriminator="kind")]

_entry_adapter: TypeAdapter[Entry] = TypeAdapter(Entry)


def parse_entry(data: dict[str, Any]) -> Entry:
    """
    Validate a raw mapping into the matching entry variant.

    Raises:
        EntryValidationError: If ``kind`` is unknown or a field is invalid
    """
    try:
        return _entry_adapter.validate_python(data)
    except ValidationError as e:
        raise EntryValidationError(
            "Invalid entry payload",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e
