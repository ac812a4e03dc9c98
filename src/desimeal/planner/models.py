"""Data models for daily and weekly meal plans.

A DailyMealPlan holds at most one catalog meal per slot plus the outside
foods logged over the day. Meals are shared references into the catalog;
the plan never copies or edits them. Plans are owned by the caller and are
changed in place only by swapping a slot or appending outside food.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Iterator, Optional

from desimeal.data.models import SLOT_ORDER, MealRecord, MealType, OutsideFoodItem
from desimeal.exceptions import PlanError


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class OutsideFoodEntry:
    """Snapshot of an unplanned food eaten outside the plan."""

    name: str
    calories: int
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    @classmethod
    def from_item(cls, item: OutsideFoodItem) -> "OutsideFoodEntry":
        return cls(
            name=item.name,
            calories=item.calories,
            protein=item.protein,
            carbs=item.carbs,
            fat=item.fat,
        )

    @classmethod
    def estimate(cls, name: str, calories: int) -> "OutsideFoodEntry":
        """Estimate macros for a custom entry from its calories alone.

        Assumes a 10/50/40 protein/carb/fat calorie split.
        """
        return cls(
            name=name,
            calories=calories,
            protein=_round_half_up(calories * 0.1 / 4),
            carbs=_round_half_up(calories * 0.5 / 4),
            fat=_round_half_up(calories * 0.4 / 9),
        )


@dataclass
class DailyMealPlan:
    """Meals planned for one day.

    Attributes:
        date: Day the plan is for
        breakfast: Planned breakfast, or None if nothing fit
        lunch: Planned lunch, or None
        dinner: Planned dinner, or None
        snack: Planned snack, or None
        outside_foods: Outside foods logged during the day, in order
    """

    date: date
    breakfast: Optional[MealRecord] = None
    lunch: Optional[MealRecord] = None
    dinner: Optional[MealRecord] = None
    snack: Optional[MealRecord] = None
    outside_foods: list[OutsideFoodEntry] = field(default_factory=list)

    def meal_for(self, slot: MealType) -> Optional[MealRecord]:
        return getattr(self, slot.value)

    def meals(self) -> Iterator[tuple[MealType, MealRecord]]:
        """Iterate populated slots in day order."""
        for slot in SLOT_ORDER:
            meal = self.meal_for(slot)
            if meal is not None:
                yield slot, meal

    def meal_ids(self) -> list[str]:
        return [meal.id for _, meal in self.meals()]

    def swap_meal(self, slot: MealType, meal: MealRecord) -> None:
        """Replace the meal in a slot.

        Raises:
            PlanError: If the meal belongs to a different slot
        """
        if meal.meal_type != slot:
            raise PlanError(
                f"Cannot put {meal.meal_type.value} '{meal.id}' in the {slot.value} slot",
                {"slot": slot.value, "meal_id": meal.id},
            )
        setattr(self, slot.value, meal)

    def add_outside_food(self, entry: OutsideFoodEntry) -> None:
        self.outside_foods.append(entry)


@dataclass(frozen=True)
class PlanTotals:
    """Summed nutrition and cost for a plan."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    cost: float = 0.0

    def __add__(self, other: "PlanTotals") -> "PlanTotals":
        return PlanTotals(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
            cost=self.cost + other.cost,
        )


@dataclass
class WeeklyPlan:
    """Seven consecutive daily plans starting at `start_date`."""

    start_date: date
    days: list[DailyMealPlan] = field(default_factory=list)

    @property
    def end_date(self) -> date:
        return self.days[-1].date if self.days else self.start_date
