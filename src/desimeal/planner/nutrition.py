"""Nutrition and cost totals for plans."""

from __future__ import annotations

from dataclasses import dataclass

from desimeal.planner.models import DailyMealPlan, PlanTotals, WeeklyPlan
from desimeal.profiles.user_profile import UserProfile


def calculate_totals(plan: DailyMealPlan) -> PlanTotals:
    """Sum nutrition and cost over a plan.

    Planned meals contribute nutrition and cost. Outside foods contribute
    nutrition only; they carry no cost.
    """
    calories = protein = carbs = fat = cost = 0.0

    for _, meal in plan.meals():
        calories += meal.calories
        protein += meal.protein
        carbs += meal.carbs
        fat += meal.fat
        cost += meal.cost_per_serving

    for entry in plan.outside_foods:
        calories += entry.calories
        protein += entry.protein
        carbs += entry.carbs
        fat += entry.fat

    return PlanTotals(calories=calories, protein=protein, carbs=carbs, fat=fat, cost=cost)


def calculate_week_totals(weekly: WeeklyPlan) -> PlanTotals:
    """Sum daily totals across a week."""
    total = PlanTotals()
    for day in weekly.days:
        total = total + calculate_totals(day)
    return total


@dataclass(frozen=True)
class NutritionProgress:
    """Progress of a day's totals against the profile's targets.

    Percentages are capped at 100.
    """

    calorie_percent: float
    protein_percent: float
    budget_percent: float
    is_over_calories: bool
    is_over_budget: bool


def _percent(value: float, target: float) -> float:
    if target <= 0:
        return 100.0 if value > 0 else 0.0
    return min(value / target * 100, 100.0)


def summarize_progress(totals: PlanTotals, profile: UserProfile) -> NutritionProgress:
    """Compare totals against calorie, protein and budget targets."""
    return NutritionProgress(
        calorie_percent=_percent(totals.calories, profile.target_calories),
        protein_percent=_percent(totals.protein, profile.target_protein),
        budget_percent=_percent(totals.cost, profile.budget),
        is_over_calories=totals.calories > profile.target_calories,
        is_over_budget=totals.cost > profile.budget,
    )
