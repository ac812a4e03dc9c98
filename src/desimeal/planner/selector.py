"""Meal selection for a single slot.

Selection filters the catalog down to meals compatible with the slot, the
user's diet and cooking skill, scores what is left, and then picks at
random among the best few so the same meal does not win every day.
"""

from __future__ import annotations

import logging
import random
from typing import Collection, Optional, Protocol

from desimeal.data.catalog import MealCatalog
from desimeal.data.models import DietType, Difficulty, MealRecord, MealType
from desimeal.profiles.user_profile import UserProfile

logger = logging.getLogger(__name__)

# Scoring weights
PROTEIN_WEIGHT = 2.0
BUDGET_HEADROOM_WEIGHT = 0.5
CALORIE_MISMATCH_WEIGHT = 0.1

# Share of the remaining calorie allowance targeted by one slot
MAIN_MEAL_CALORIE_SHARE = 0.3
SNACK_CALORIE_SHARE = 0.1

# Number of top-scoring meals the final pick is drawn from
TOP_CANDIDATES = 3


class IndexPicker(Protocol):
    """Source of randomness for selection."""

    def pick_index(self, n: int) -> int:
        """Return an index in range(n). `n` is always >= 1."""
        ...


class RandomPicker:
    """IndexPicker backed by `random.Random`."""

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def pick_index(self, n: int) -> int:
        return self.rng.randrange(n)


def filter_candidates(
    catalog: MealCatalog,
    meal_type: MealType,
    diet: DietType,
    allowed_difficulties: Collection[Difficulty],
) -> list[MealRecord]:
    """Get meals for a slot that fit a diet preference and difficulty set.

    Args:
        catalog: Meal catalog
        meal_type: Slot to fill
        diet: User's diet preference
        allowed_difficulties: Difficulties the user may cook

    Returns:
        Matching meals in catalog order. May be empty.
    """
    return [
        m for m in catalog.by_type(meal_type, diet)
        if m.difficulty in allowed_difficulties
    ]


def slot_target_calories(meal_type: MealType, remaining_calories: float) -> float:
    """Calories a slot should aim for, given what is left of the day."""
    if meal_type == MealType.SNACK:
        return remaining_calories * SNACK_CALORIE_SHARE
    return remaining_calories * MAIN_MEAL_CALORIE_SHARE


def score_meal(
    meal: MealRecord,
    remaining_budget: float,
    target_calories: float,
) -> float:
    """Score a candidate meal; higher is better.

    Rewards protein and unspent budget, penalizes distance from the slot's
    calorie target.
    """
    protein_bonus = meal.protein * PROTEIN_WEIGHT
    budget_bonus = (remaining_budget - meal.cost_per_serving) * BUDGET_HEADROOM_WEIGHT
    calorie_penalty = abs(meal.calories - target_calories) * CALORIE_MISMATCH_WEIGHT
    return protein_bonus + budget_bonus - calorie_penalty


def select_meal(
    catalog: MealCatalog,
    meal_type: MealType,
    profile: UserProfile,
    used_ids: Collection[str],
    remaining_budget: float,
    remaining_calories: float,
    picker: IndexPicker,
) -> Optional[MealRecord]:
    """Pick one meal for a slot.

    Algorithm:
    1. Filter by slot, diet, skill, unused ids and cost within budget
    2. If nothing is affordable, pick uniformly among the unused meals that
       fit slot, diet and skill regardless of cost
    3. Otherwise score candidates and pick uniformly among the top three

    Does not modify `used_ids`; the caller records the choice.

    Args:
        catalog: Meal catalog
        meal_type: Slot to fill
        profile: User profile (diet, skill)
        used_ids: Meal ids already planned today
        remaining_budget: Spending ceiling for this slot (negative is treated as 0)
        remaining_calories: Calorie allowance left for the day
        picker: Source of randomness

    Returns:
        Selected MealRecord, or None if no meal fits.
    """
    remaining_budget = max(remaining_budget, 0.0)

    eligible = [
        m for m in filter_candidates(
            catalog, meal_type, profile.diet, profile.allowed_difficulties
        )
        if m.id not in used_ids
    ]
    candidates = [m for m in eligible if m.cost_per_serving <= remaining_budget]

    logger.debug(
        "%s: %d eligible, %d within budget %.2f",
        meal_type.value, len(eligible), len(candidates), remaining_budget,
    )

    if not candidates:
        if not eligible:
            logger.debug("%s: no candidates, leaving slot empty", meal_type.value)
            return None
        # Nothing affordable - ignore the budget
        logger.debug("%s: nothing within budget, ignoring cost", meal_type.value)
        return eligible[picker.pick_index(len(eligible))]

    target = slot_target_calories(meal_type, remaining_calories)
    scored = sorted(
        candidates,
        key=lambda m: score_meal(m, remaining_budget, target),
        reverse=True,
    )
    top = scored[:TOP_CANDIDATES]
    return top[picker.pick_index(len(top))]
