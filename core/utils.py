# core/utils.py

from typing import Iterable

from pydantic import BaseModel

from core.errors import ValidationFailed


def sanitize(data: dict) -> dict:
    """
    Sanitize dictionary data:
    - Empty strings → None
    - Strip string whitespace
    - Everything else (None, booleans, numbers, dicts) kept as-is
    """
    clean = {}

    for k, v in data.items():
        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped or None
            continue

        clean[k] = v

    return clean


def partial_update(payload: BaseModel, non_nullable: Iterable[str] = ()) -> dict:
    """
    Build the column set for a PUT.

    Only fields present in the request body are returned; absent fields are
    left untouched in the store. An explicit null (or blank string) for a
    non-nullable column is rejected.
    """
    updates = sanitize(payload.model_dump(mode="json", exclude_unset=True))

    if not updates:
        raise ValidationFailed("No fields provided to update")

    nulled = [name for name in non_nullable if name in updates and updates[name] is None]
    if nulled:
        raise ValidationFailed(f"Fields cannot be null: {', '.join(nulled)}")

    return updates
