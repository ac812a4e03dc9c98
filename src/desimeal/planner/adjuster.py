"""Plan adjustment after outside food and swap suggestions."""

from __future__ import annotations

import logging
from dataclasses import replace

from desimeal.data.catalog import MealCatalog
from desimeal.data.models import DietType, MealRecord, MealType
from desimeal.planner.models import DailyMealPlan, OutsideFoodEntry
from desimeal.planner.nutrition import calculate_totals
from desimeal.profiles.user_profile import UserProfile

logger = logging.getLogger(__name__)

# Plan must exceed the post-outside-food target by more than this to adjust
OVERSHOOT_THRESHOLD = 200
# A replacement dinner must be at least this much lighter
MIN_DINNER_REDUCTION = 100

# Protein difference counts this much more than calorie difference when
# ranking swap alternatives
ALTERNATIVE_PROTEIN_WEIGHT = 5


def adjust_after_outside_food(
    catalog: MealCatalog,
    plan: DailyMealPlan,
    outside_calories: float,
    profile: UserProfile,
) -> DailyMealPlan:
    """Swap in a lighter dinner if outside food pushed the day over target.

    Only dinner is ever replaced; it is assumed to be still ahead. The
    replacement is the lowest-calorie diet-compatible dinner that is at
    least MIN_DINNER_REDUCTION kcal lighter than the current one.

    Args:
        catalog: Meal catalog
        plan: Current plan (not modified)
        outside_calories: Calories of the outside food just eaten
        profile: User profile

    Returns:
        `plan` itself if nothing changed, otherwise a new plan with the
        lighter dinner.
    """
    current = calculate_totals(plan)
    target_after_outside = profile.target_calories - outside_calories

    if current.calories <= target_after_outside + OVERSHOOT_THRESHOLD:
        return plan
    if plan.dinner is None:
        return plan

    ceiling = plan.dinner.calories - MIN_DINNER_REDUCTION
    lighter = sorted(
        (m for m in catalog.by_type(MealType.DINNER, profile.diet) if m.calories <= ceiling),
        key=lambda m: m.calories,
    )
    if not lighter:
        logger.debug("No dinner lighter than %d kcal available", ceiling)
        return plan

    logger.info(
        "Over target by %.0f kcal, replacing dinner %s with %s",
        current.calories - target_after_outside, plan.dinner.id, lighter[0].id,
    )
    return replace(plan, dinner=lighter[0], outside_foods=list(plan.outside_foods))


def log_outside_food(
    catalog: MealCatalog,
    plan: DailyMealPlan,
    entry: OutsideFoodEntry,
    profile: UserProfile,
) -> DailyMealPlan:
    """Adjust the rest of the day for outside food, then record it.

    The adjustment compares the plan as it stood before this entry against
    the target reduced by the entry's calories, so the entry is counted once.
    The entry is then appended to the returned plan. When dinner is not
    replaced that is `plan` itself, modified in place.

    Returns:
        The adjusted plan (see adjust_after_outside_food) with the entry
        recorded.
    """
    adjusted = adjust_after_outside_food(catalog, plan, entry.calories, profile)
    adjusted.add_outside_food(entry)
    return adjusted


def get_alternative_meals(
    catalog: MealCatalog,
    meal: MealRecord,
    diet: DietType,
    count: int = 3,
) -> list[MealRecord]:
    """Suggest replacements for a meal from the same slot.

    Candidates are ranked by closeness in calories and protein.
    """
    same_slot = [m for m in catalog.by_type(meal.meal_type, diet) if m.id != meal.id]
    same_slot.sort(
        key=lambda m: abs(m.calories - meal.calories)
        + abs(m.protein - meal.protein) * ALTERNATIVE_PROTEIN_WEIGHT
    )
    return same_slot[:count]
