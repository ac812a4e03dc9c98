"""Daily and weekly plan generation.

A day is filled slot by slot in a fixed order. Each slot receives a budget
ceiling and the calorie allowance still left, and what it picks is deducted
before the next slot is filled:

- breakfast: 20% of the daily budget
- lunch: 35% of the daily budget plus whatever breakfast left unspent
- dinner: 80% of the budget left after breakfast and lunch
- snack: all of the budget that is left

No meal appears twice in the same day.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from desimeal.data.catalog import MealCatalog
from desimeal.data.models import MealType
from desimeal.planner.models import DailyMealPlan, WeeklyPlan
from desimeal.planner.selector import IndexPicker, RandomPicker, select_meal
from desimeal.profiles.user_profile import UserProfile

logger = logging.getLogger(__name__)

# Share of the daily budget allocated up front to each slot
BUDGET_SHARES: dict[MealType, float] = {
    MealType.BREAKFAST: 0.20,
    MealType.LUNCH: 0.35,
    MealType.DINNER: 0.35,
    MealType.SNACK: 0.10,
}

# Dinner may spend this share of what is left, keeping a margin for the snack
DINNER_BUDGET_FRACTION = 0.8

DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class BudgetAllocation:
    """Initial per-slot budget split."""

    breakfast: float
    lunch: float
    dinner: float
    snack: float

    @property
    def total(self) -> float:
        return self.breakfast + self.lunch + self.dinner + self.snack


def allocate_budget(daily_budget: float) -> BudgetAllocation:
    """Split a daily budget across slots using BUDGET_SHARES."""
    return BudgetAllocation(
        breakfast=daily_budget * BUDGET_SHARES[MealType.BREAKFAST],
        lunch=daily_budget * BUDGET_SHARES[MealType.LUNCH],
        dinner=daily_budget * BUDGET_SHARES[MealType.DINNER],
        snack=daily_budget * BUDGET_SHARES[MealType.SNACK],
    )


def build_daily_plan(
    catalog: MealCatalog,
    profile: UserProfile,
    picker: Optional[IndexPicker] = None,
    plan_date: Optional[date] = None,
) -> DailyMealPlan:
    """Generate a plan for one day.

    Args:
        catalog: Meal catalog
        profile: User profile
        picker: Source of randomness. If None, an unseeded RandomPicker.
        plan_date: Date stamp for the plan. Defaults to today.

    Returns:
        New DailyMealPlan with no outside foods. Slots with no fitting
        meal are left empty.
    """
    picker = picker or RandomPicker()
    used_ids: set[str] = set()
    remaining_budget = profile.budget
    remaining_calories = float(profile.target_calories)
    allocation = allocate_budget(profile.budget)

    logger.debug(
        "Budget allocation: breakfast=%.2f lunch=%.2f dinner=%.2f snack=%.2f",
        allocation.breakfast, allocation.lunch, allocation.dinner, allocation.snack,
    )

    breakfast = select_meal(
        catalog, MealType.BREAKFAST, profile, used_ids,
        allocation.breakfast, remaining_calories, picker,
    )
    if breakfast:
        used_ids.add(breakfast.id)
        remaining_budget -= breakfast.cost_per_serving
        remaining_calories -= breakfast.calories

    breakfast_cost = breakfast.cost_per_serving if breakfast else 0.0
    lunch_ceiling = allocation.lunch + (allocation.breakfast - breakfast_cost)
    lunch = select_meal(
        catalog, MealType.LUNCH, profile, used_ids,
        lunch_ceiling, remaining_calories, picker,
    )
    if lunch:
        used_ids.add(lunch.id)
        remaining_budget -= lunch.cost_per_serving
        remaining_calories -= lunch.calories

    dinner_ceiling = remaining_budget * DINNER_BUDGET_FRACTION
    dinner = select_meal(
        catalog, MealType.DINNER, profile, used_ids,
        dinner_ceiling, remaining_calories, picker,
    )
    if dinner:
        used_ids.add(dinner.id)
        remaining_budget -= dinner.cost_per_serving
        remaining_calories -= dinner.calories

    snack = select_meal(
        catalog, MealType.SNACK, profile, used_ids,
        remaining_budget, remaining_calories, picker,
    )
    if snack:
        used_ids.add(snack.id)

    plan = DailyMealPlan(
        date=plan_date or date.today(),
        breakfast=breakfast,
        lunch=lunch,
        dinner=dinner,
        snack=snack,
    )
    logger.info("Generated plan for %s with meals %s", plan.date, plan.meal_ids())
    return plan


def week_start(day: Optional[date] = None) -> date:
    """First day (Sunday) of the week containing `day`."""
    day = day or date.today()
    # date.weekday() is Monday=0 ... Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def shift_week(start_date: date, weeks: int) -> date:
    """Move a week start forward (positive) or back (negative)."""
    return start_date + timedelta(days=DAYS_PER_WEEK * weeks)


def build_weekly_plan(
    catalog: MealCatalog,
    profile: UserProfile,
    start_date: Optional[date] = None,
    picker: Optional[IndexPicker] = None,
) -> WeeklyPlan:
    """Generate seven independent daily plans.

    Meals may repeat across days; each day only avoids repeats within itself.

    Args:
        catalog: Meal catalog
        profile: User profile
        start_date: First day. Defaults to the start of the current week.
        picker: Source of randomness shared by all days

    Returns:
        WeeklyPlan with one plan per day
    """
    picker = picker or RandomPicker()
    start = start_date or week_start()
    days = [
        build_daily_plan(catalog, profile, picker, start + timedelta(days=i))
        for i in range(DAYS_PER_WEEK)
    ]
    return WeeklyPlan(start_date=start, days=days)
