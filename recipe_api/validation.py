from __future__ import annotations

from typing import Any

from .errors import ValidationError

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 50
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 500


def require_id(recipe_id: Any, action: str) -> str:
    """Return ``recipe_id`` or raise if it is missing.

    ``action`` completes the message, e.g. ``"fetch"`` gives
    "ID is required to fetch a recipe".
    """

    if not recipe_id:
        raise ValidationError(f"ID is required to {action} a recipe")
    if not isinstance(recipe_id, str):
        raise ValidationError("ID must be a string")
    return recipe_id


def require_fields(name: Any, description: Any) -> None:
    if not name or not description:
        raise ValidationError("Both name and description are required")


def sanitize_name(name: Any) -> str:
    if not isinstance(name, str):
        raise ValidationError("Name must be a string")

    sanitized = name.strip().lower()
    if not NAME_MIN_LENGTH <= len(sanitized) <= NAME_MAX_LENGTH:
        raise ValidationError(
            f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
        )
    return sanitized


def sanitize_description(description: Any) -> str:
    if not isinstance(description, str):
        raise ValidationError("Description must be a string")

    sanitized = description.strip()
    if not DESCRIPTION_MIN_LENGTH <= len(sanitized) <= DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            "Description must be between "
            f"{DESCRIPTION_MIN_LENGTH} and {DESCRIPTION_MAX_LENGTH} characters"
        )
    return sanitized


def parse_amount(amount: Any, default: int, maximum: int) -> int:
    """Return the number of recipes to list.

    ``None`` and ``0`` fall back to ``default``. Values above ``maximum``
    are rejected.
    """

    if amount is None:
        return default
    # bool is an int subclass
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError("Amount must be a valid number")
    if amount < 0:
        raise ValidationError("Amount must be a positive number")
    if amount > maximum:
        raise ValidationError(f"Amount must not exceed {maximum}")
    return amount or default


__all__ = [
    "DESCRIPTION_MAX_LENGTH",
    "DESCRIPTION_MIN_LENGTH",
    "NAME_MAX_LENGTH",
    "NAME_MIN_LENGTH",
    "parse_amount",
    "require_fields",
    "require_id",
    "sanitize_description",
    "sanitize_name",
]
