"""Error kinds raised by the recipe operations.

Every failure an operation reports is a :class:`RecipeError` subclass.
``kind`` is the stable, machine-readable category and ``status_code`` the
HTTP status the web layer answers with.
"""


class RecipeError(Exception):
    kind = "error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": {"kind": self.kind, "message": self.message}}


class ValidationError(RecipeError):
    """Missing, mistyped or out-of-bounds input."""

    kind = "validation"
    status_code = 400


class NotFoundError(RecipeError):
    """The referenced recipe does not exist."""

    kind = "not_found"
    status_code = 404


class ConflictError(RecipeError):
    """Another recipe already uses the requested name."""

    kind = "conflict"
    status_code = 409


class PersistenceError(RecipeError):
    """The store failed or reported no effect where one was expected."""

    kind = "persistence"
    status_code = 500


__all__ = [
    "ConflictError",
    "NotFoundError",
    "PersistenceError",
    "RecipeError",
    "ValidationError",
]
