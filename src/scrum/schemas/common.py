"""Field types shared by several schemas."""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import AfterValidator, Field


def _to_naive_utc(value: datetime) -> datetime:
    """Store-compatible datetime: aware values are converted to UTC and made naive."""
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


UTCDateTime = Annotated[datetime, AfterValidator(_to_naive_utc)]

Name = Annotated[str, Field(min_length=1, max_length=100)]
Description = Annotated[str, Field(max_length=1000)]
Icon = Annotated[str, Field(max_length=100)]
Color = Annotated[str, Field(pattern=r"^#[0-9A-Fa-f]{6}$")]


def strip_required(value: str | None, field: str) -> str | None:
    """Strip whitespace, rejecting values that become empty."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError(f"{field} cannot be empty or whitespace only")
    return value


def strip_optional(value: str | None) -> str | None:
    """Strip whitespace, turning empty strings into None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def reject_null(value: str | None, field: str) -> str:
    """Refuse an explicit null for a column that cannot be empty."""
    if value is None:
        raise ValueError(f"{field} cannot be null")
    return value
