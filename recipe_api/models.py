from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class Recipe:
    """Domain object representing a stored recipe."""

    id: str
    name: str
    description: str
    created_at: Optional[datetime] = None
    thumbs_up: int = 0
    thumbs_down: int = 0

    def to_document(self) -> Dict[str, Any]:
        """Return the persisted field layout, without the id."""

        return {
            "name": self.name,
            "description": self.description,
            "createdAt": self.created_at,
            "thumbsUp": self.thumbs_up,
            "thumbsDown": self.thumbs_down,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = self.to_document()
        data["createdAt"] = self.created_at.isoformat() if self.created_at else None
        return {"id": self.id, **data}


__all__ = ["Recipe"]
