"""Pytest fixtures for desimeal tests."""

from __future__ import annotations

import pytest

from desimeal.config.settings import HOME_ENV_VAR, reload_settings
from desimeal.data.catalog import MealCatalog
from desimeal.data.models import (
    DietType,
    Difficulty,
    MealRecord,
    MealType,
    OutsideFoodItem,
)
from desimeal.profiles.user_profile import CookingSkill, Goal, UserProfile


def _meal(
    meal_id: str,
    meal_type: MealType,
    diet: DietType = DietType.VEG,
    calories: int = 300,
    protein: float = 10,
    cost: float = 20,
    difficulty: Difficulty = Difficulty.EASY,
    carbs: float = 40,
    fat: float = 8,
    ingredients: tuple[str, ...] = (),
) -> MealRecord:
    """Build a MealRecord with sensible defaults for tests."""
    return MealRecord(
        id=meal_id,
        name=meal_id.replace("-", " ").title(),
        meal_type=meal_type,
        diet=diet,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        cost_per_serving=cost,
        difficulty=difficulty,
        ingredients=ingredients,
    )


class _StubPicker:
    """Deterministic IndexPicker that always returns the same index.

    Records the `n` passed on every call.
    """

    def __init__(self, index: int = 0):
        self.index = index
        self.calls: list[int] = []

    def pick_index(self, n: int) -> int:
        self.calls.append(n)
        return min(self.index, n - 1)


B, L, D, S = MealType.BREAKFAST, MealType.LUNCH, MealType.DINNER, MealType.SNACK
VEG, EGG, NON_VEG = DietType.VEG, DietType.EGG, DietType.NON_VEG
NO_COOK, EASY, MEDIUM, HARD = (
    Difficulty.NO_COOK, Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD,
)

_SAMPLE_MEALS = [
    # Breakfast
    _meal("b-veg-easy", B, VEG, calories=300, protein=10, cost=20, difficulty=EASY),
    _meal("b-veg-nocook", B, VEG, calories=200, protein=8, cost=15, difficulty=NO_COOK),
    _meal("b-egg-easy", B, EGG, calories=350, protein=18, cost=30, difficulty=EASY),
    _meal("b-veg-medium", B, VEG, calories=320, protein=12, cost=25, difficulty=MEDIUM),
    _meal("b-nonveg-hard", B, NON_VEG, calories=400, protein=30, cost=60, difficulty=HARD),
    # Lunch
    _meal("l-veg-easy", L, VEG, calories=500, protein=15, cost=40, difficulty=EASY),
    _meal("l-veg-medium", L, VEG, calories=550, protein=18, cost=50, difficulty=MEDIUM),
    _meal("l-nonveg-medium", L, NON_VEG, calories=600, protein=35, cost=80, difficulty=MEDIUM),
    _meal("l-egg-easy", L, EGG, calories=450, protein=20, cost=35, difficulty=EASY),
    # Dinner
    _meal("d-veg-easy", D, VEG, calories=500, protein=14, cost=40, difficulty=EASY),
    _meal("d-veg-light", D, VEG, calories=300, protein=10, cost=30, difficulty=EASY),
    _meal("d-veg-lighter", D, VEG, calories=250, protein=9, cost=35, difficulty=NO_COOK),
    _meal("d-nonveg-hard", D, NON_VEG, calories=650, protein=40, cost=90, difficulty=HARD),
    _meal("d-nonveg-light", D, NON_VEG, calories=200, protein=25, cost=70, difficulty=MEDIUM),
    # Snack
    _meal("s-veg-nocook", S, VEG, calories=150, protein=5, cost=20, difficulty=NO_COOK),
    _meal("s-veg-easy", S, VEG, calories=120, protein=4, cost=30, difficulty=EASY),
    _meal("s-egg-easy", S, EGG, calories=160, protein=12, cost=25, difficulty=EASY),
]

_SAMPLE_OUTSIDE_FOODS = [
    OutsideFoodItem("of-1", "Samosa (2 pcs)", 300, 6, 35, 16),
    OutsideFoodItem("of-2", "Vada Pav", 350, 8, 45, 16),
    OutsideFoodItem("of-7", "Thali (Full)", 800, 22, 120, 28),
]


@pytest.fixture
def sample_catalog() -> MealCatalog:
    """Small in-memory catalog covering every slot, diet and difficulty."""
    return MealCatalog(_SAMPLE_MEALS, _SAMPLE_OUTSIDE_FOODS)


@pytest.fixture
def veg_beginner() -> UserProfile:
    """Default profile: maintain, veg, Rs 150, beginner."""
    return UserProfile.for_goal(Goal.MAINTAIN, DietType.VEG, 150, CookingSkill.BEGINNER)


@pytest.fixture
def nonveg_advanced() -> UserProfile:
    return UserProfile.for_goal(Goal.GAIN, DietType.NON_VEG, 300, CookingSkill.ADVANCED)


@pytest.fixture
def first_picker():
    """Picker that always takes the best-scored candidate."""
    return _StubPicker(0)


@pytest.fixture
def desimeal_home(tmp_path, monkeypatch):
    """Point settings and saved state at a temporary directory."""
    monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path))
    reload_settings()
    yield tmp_path
    monkeypatch.delenv(HOME_ENV_VAR, raising=False)
    reload_settings()


@pytest.fixture
def make_meal():
    """Factory for MealRecords with test defaults."""
    return _meal


@pytest.fixture
def stub_picker():
    """Factory for deterministic pickers: stub_picker(index)."""
    return _StubPicker


@pytest.fixture
def sample_meals() -> list[MealRecord]:
    """The records behind sample_catalog, in catalog order."""
    return list(_SAMPLE_MEALS)
