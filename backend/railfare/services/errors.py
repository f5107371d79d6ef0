from __future__ import annotations
from typing import Any, Dict, Optional


class FareRequestError(ValueError):
    """A query parameter that could not be turned into a domain value."""

    def __init__(self, field: str, message: str, value: Optional[str] = None) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
        self.value = value

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "message": self.message, "value": self.value}


class FareServiceError(RuntimeError):
    """The fare collaborator could not produce a result."""
