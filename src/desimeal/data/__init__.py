"""Meal catalog models and loaders."""

from __future__ import annotations

from desimeal.data.catalog import MealCatalog, load_catalog
from desimeal.data.models import (
    SLOT_ORDER,
    DietType,
    Difficulty,
    MealRecord,
    MealType,
    OutsideFoodItem,
    is_diet_compatible,
)

__all__ = [
    "SLOT_ORDER",
    "DietType",
    "Difficulty",
    "MealCatalog",
    "MealRecord",
    "MealType",
    "OutsideFoodItem",
    "is_diet_compatible",
    "load_catalog",
]
