"""Meal recommendation and plan adjustment engine.

The engine is stateless: every operation takes the catalog, the user's
profile and (where relevant) the caller-owned plan, and returns a result
without touching anything else.
"""

from __future__ import annotations

from desimeal.planner.adjuster import (
    adjust_after_outside_food,
    get_alternative_meals,
    log_outside_food,
)
from desimeal.planner.builder import (
    allocate_budget,
    build_daily_plan,
    build_weekly_plan,
    shift_week,
    week_start,
)
from desimeal.planner.models import (
    DailyMealPlan,
    OutsideFoodEntry,
    PlanTotals,
    WeeklyPlan,
)
from desimeal.planner.nutrition import (
    NutritionProgress,
    calculate_totals,
    calculate_week_totals,
    summarize_progress,
)
from desimeal.planner.pantry import (
    PantryMatch,
    catalog_ingredients,
    find_matching_meals,
    normalize_ingredient,
)
from desimeal.planner.selector import (
    IndexPicker,
    RandomPicker,
    filter_candidates,
    score_meal,
    select_meal,
)

__all__ = [
    "DailyMealPlan",
    "IndexPicker",
    "NutritionProgress",
    "OutsideFoodEntry",
    "PantryMatch",
    "PlanTotals",
    "RandomPicker",
    "WeeklyPlan",
    "adjust_after_outside_food",
    "allocate_budget",
    "build_daily_plan",
    "build_weekly_plan",
    "calculate_totals",
    "calculate_week_totals",
    "catalog_ingredients",
    "filter_candidates",
    "find_matching_meals",
    "get_alternative_meals",
    "log_outside_food",
    "normalize_ingredient",
    "score_meal",
    "select_meal",
    "shift_week",
    "summarize_progress",
    "week_start",
]
