"""Exception hierarchy for desimeal.

The planning engine itself does not raise: an empty slot is a normal outcome.
These errors are raised at the edges, when loading catalogs, reading saved
state or applying user commands.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional


class DesiMealError(Exception):
    """Base class for all desimeal errors.

    Attributes:
        message: Human-readable message
        details: Optional mapping with extra context
    """

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {
            "error": type(self).__name__,
            "message": self.message,
        }
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class CatalogError(DesiMealError):
    """Raised when a catalog file is missing or contains invalid records."""


class MealNotFoundError(DesiMealError):
    """Raised when a meal id is not present in the catalog."""

    def __init__(self, meal_id: str):
        super().__init__(f"Meal '{meal_id}' not found in catalog", {"meal_id": meal_id})
        self.meal_id = meal_id


class PlanError(DesiMealError):
    """Raised for invalid plan commands or unreadable saved plans."""


class ProfileError(DesiMealError):
    """Raised when a profile value is not a valid choice."""

    def __init__(
        self,
        field_name: str,
        value: Any,
        choices: list[str],
        message: Optional[str] = None,
    ):
        super().__init__(
            message or f"Invalid {field_name} '{value}'. Choose from: {', '.join(choices)}",
            {"field": field_name, "value": value, "choices": choices},
        )
        self.field_name = field_name
