"""Vote categories and response models."""
from datetime import datetime
from enum import Enum
from typing import Dict, Literal

from pydantic import BaseModel, Field, RootModel


class InvalidCategoryError(ValueError):
    """Raised when a vote targets a category outside the allow-list."""
    pass


class Category(str, Enum):
    """Categories that can receive votes."""
    CAT = "cat"
    DOG = "dog"

    @classmethod
    def parse(cls, raw: str) -> "Category":
        """
        Resolve a raw path segment to a category.

        The value is lowercased before lookup, so "CAT" and "cat" are the
        same vote.

        Raises:
            InvalidCategoryError: if the value is not a known category
        """
        try:
            return cls(raw.lower())
        except ValueError:
            raise InvalidCategoryError(f"Unknown category: {raw}")


class TallyResponse(RootModel[Dict[str, int]]):
    """Vote counts keyed by category."""

    model_config = {
        "json_schema_extra": {
            "example": {"cat": 12, "dog": 9}
        }
    }


class HealthResponse(BaseModel):
    """Health check response model."""

    status: Literal["healthy", "unhealthy"] = Field(..., description="Overall health status")
    services: dict = Field(..., description="Status of individual services")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Health check timestamp")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "services": {"database": "connected"},
                "timestamp": "2024-01-15T10:30:00"
            }
        }
