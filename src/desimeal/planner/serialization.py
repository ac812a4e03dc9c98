"""JSON-friendly serialization for plans.

Meals are stored by id and resolved through the catalog on load, so a saved
plan always reflects the catalog's current record for each meal.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from desimeal.data.catalog import MealCatalog
from desimeal.data.models import SLOT_ORDER, MealRecord
from desimeal.exceptions import DesiMealError, PlanError
from desimeal.planner.models import DailyMealPlan, OutsideFoodEntry, PlanTotals, WeeklyPlan


def meal_to_dict(meal: MealRecord) -> dict[str, Any]:
    return {
        "id": meal.id,
        "name": meal.name,
        "type": meal.meal_type.value,
        "diet": meal.diet.value,
        "calories": meal.calories,
        "protein": meal.protein,
        "carbs": meal.carbs,
        "fat": meal.fat,
        "cost_per_serving": meal.cost_per_serving,
        "difficulty": meal.difficulty.value,
        "total_time": meal.total_time,
        "portion": meal.portion,
        "fiber": meal.fiber,
        "name_hindi": meal.name_hindi,
        "ingredients": list(meal.ingredients),
        "badges": list(meal.badges),
    }


def totals_to_dict(totals: PlanTotals) -> dict[str, float]:
    return {
        "calories": round(totals.calories, 1),
        "protein": round(totals.protein, 1),
        "carbs": round(totals.carbs, 1),
        "fat": round(totals.fat, 1),
        "cost": round(totals.cost, 2),
    }


def plan_to_dict(plan: DailyMealPlan, include_meals: bool = False) -> dict[str, Any]:
    """Convert a plan to a JSON-serializable dict.

    Args:
        plan: Plan to serialize
        include_meals: Embed full meal details instead of ids only

    Returns:
        Dict compatible with plan_from_dict()
    """
    data: dict[str, Any] = {"date": plan.date.isoformat()}
    for slot in SLOT_ORDER:
        meal = plan.meal_for(slot)
        if meal is None:
            data[slot.value] = None
        elif include_meals:
            data[slot.value] = meal_to_dict(meal)
        else:
            data[slot.value] = meal.id
    data["outside_foods"] = [
        {
            "name": e.name,
            "calories": e.calories,
            "protein": e.protein,
            "carbs": e.carbs,
            "fat": e.fat,
        }
        for e in plan.outside_foods
    ]
    return data


def plan_from_dict(data: dict[str, Any], catalog: MealCatalog) -> DailyMealPlan:
    """Rebuild a plan from plan_to_dict() output.

    Raises:
        PlanError: If the data is malformed or references unknown meals
    """
    try:
        plan = DailyMealPlan(date=date.fromisoformat(data["date"]))
        for slot in SLOT_ORDER:
            value = data.get(slot.value)
            if value is None:
                continue
            meal_id = value["id"] if isinstance(value, dict) else value
            plan.swap_meal(slot, catalog.require(meal_id))
        for entry in data.get("outside_foods", []):
            plan.add_outside_food(
                OutsideFoodEntry(
                    name=entry["name"],
                    calories=entry["calories"],
                    protein=entry.get("protein", 0.0),
                    carbs=entry.get("carbs", 0.0),
                    fat=entry.get("fat", 0.0),
                )
            )
    except PlanError:
        raise
    except (KeyError, TypeError, ValueError, DesiMealError) as e:
        raise PlanError(f"Saved plan is invalid: {e}") from e
    return plan


def weekly_plan_to_dict(weekly: WeeklyPlan) -> dict[str, Any]:
    return {
        "start_date": weekly.start_date.isoformat(),
        "end_date": weekly.end_date.isoformat(),
        "days": [plan_to_dict(day) for day in weekly.days],
    }
