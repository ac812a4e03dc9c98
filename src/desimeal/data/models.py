"""Data models for the meal catalog.

The catalog is a fixed, read-only collection of meal records. Each record is
tagged with the meal slot it belongs to, its diet class, nutrition, cost and
cooking difficulty. Records are shared between plans and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class MealType(Enum):
    """Meal slots in a day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


# Order in which slots are filled when building a daily plan
SLOT_ORDER: tuple[MealType, ...] = (
    MealType.BREAKFAST,
    MealType.LUNCH,
    MealType.DINNER,
    MealType.SNACK,
)


class DietType(Enum):
    """Diet class of a meal, or diet preference of a user."""

    VEG = "veg"
    EGG = "egg"  # Vegetarian plus eggs
    NON_VEG = "non-veg"


def is_diet_compatible(preference: DietType, meal_diet: DietType) -> bool:
    """Check whether a meal of `meal_diet` is acceptable for `preference`.

    Acceptability is ordered veg <= egg <= non-veg: a non-veg eater accepts
    everything, everyone accepts veg, and an egg eater accepts anything that
    is not non-veg.
    """
    if preference == DietType.NON_VEG:
        return True
    if meal_diet == DietType.VEG:
        return True
    return preference == DietType.EGG and meal_diet != DietType.NON_VEG


class Difficulty(Enum):
    """Cooking difficulty tiers, easiest first."""

    NO_COOK = "no-cook"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class MealRecord:
    """A single catalog meal, one serving.

    Attributes:
        id: Unique catalog identifier (e.g., "poha-1")
        name: Display name
        meal_type: Slot this meal is planned for
        diet: Diet class of the meal
        calories: Energy per serving (kcal)
        protein: Protein per serving (g)
        carbs: Carbohydrates per serving (g)
        fat: Fat per serving (g)
        cost_per_serving: Cost per serving (INR)
        difficulty: Cooking difficulty
        prep_time: Preparation time (minutes)
        cook_time: Cooking time (minutes)
        portion: Household portion description (e.g., "2 roti (80g)")
        ingredients: Ordered ingredient names
        description: Short description
        fiber: Fiber per serving (g)
        badges: Display tags (e.g., "High-protein")
        name_hindi: Optional Hindi name
    """

    id: str
    name: str
    meal_type: MealType
    diet: DietType
    calories: int
    protein: float
    carbs: float
    fat: float
    cost_per_serving: float
    difficulty: Difficulty
    prep_time: int = 0
    cook_time: int = 0
    portion: str = ""
    ingredients: tuple[str, ...] = field(default_factory=tuple)
    description: str = ""
    fiber: float = 0.0
    badges: tuple[str, ...] = field(default_factory=tuple)
    name_hindi: Optional[str] = None

    @property
    def total_time(self) -> int:
        """Prep plus cook time in minutes."""
        return self.prep_time + self.cook_time


@dataclass(frozen=True)
class OutsideFoodItem:
    """A common outside food offered for quick logging."""

    id: str
    name: str
    calories: int
    protein: float
    carbs: float
    fat: float
