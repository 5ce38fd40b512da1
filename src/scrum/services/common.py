"""Helpers shared by services."""

from enum import Enum
from typing import Any

from pydantic import BaseModel

from src.scrum.models.base import utc_now


def plain(value: Any) -> Any:
    """Unwrap enum members to their stored string value."""
    return value.value if isinstance(value, Enum) else value


def apply_updates(entity: Any, data: BaseModel, exclude: set[str] | None = None) -> list[str]:
    """Copy the fields explicitly set on `data` onto `entity`.

    Bumps `updated_at` when the entity has one. Returns the changed field names.
    """
    changed = []
    for field, value in data.model_dump(exclude_unset=True, exclude=exclude).items():
        setattr(entity, field, plain(value))
        changed.append(field)
    if hasattr(entity, "updated_at"):
        entity.updated_at = utc_now()
    return changed
