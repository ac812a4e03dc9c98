"""Tests for catalog loading and lookup."""

from __future__ import annotations

import pytest

from desimeal.data.catalog import MealCatalog, load_catalog, load_meals
from desimeal.data.models import DietType, Difficulty, MealType, is_diet_compatible
from desimeal.exceptions import CatalogError, MealNotFoundError


MEAL_HEADER = (
    "id,name,type,diet,calories,protein,carbs,fat,cost_per_serving,difficulty\n"
)


class TestBundledCatalog:
    """Tests for the catalog shipped with the package."""

    def test_loads_all_records(self):
        catalog = load_catalog()
        assert len(catalog) == 29
        assert len(catalog.outside_foods) == 12

    def test_record_fields(self):
        catalog = load_catalog()
        poha = catalog.require("poha-1")
        assert poha.name == "Vegetable Poha"
        assert poha.meal_type == MealType.BREAKFAST
        assert poha.diet == DietType.VEG
        assert poha.calories == 280
        assert poha.cost_per_serving == 25
        assert poha.difficulty == Difficulty.EASY
        assert poha.ingredients[0] == "Poha"
        assert poha.total_time == 15

    def test_every_slot_has_meals(self):
        catalog = load_catalog()
        for slot in MealType:
            assert catalog.by_type(slot, DietType.VEG), f"no veg {slot.value}"

    def test_outside_food_lookup(self):
        catalog = load_catalog()
        thali = catalog.get_outside_food("of-7")
        assert thali is not None
        assert thali.calories == 800


class TestMealCatalog:
    """Tests for MealCatalog lookups."""

    def test_get_missing_returns_none(self, sample_catalog):
        assert sample_catalog.get("nope") is None

    def test_require_missing_raises(self, sample_catalog):
        with pytest.raises(MealNotFoundError) as exc:
            sample_catalog.require("nope")
        assert exc.value.meal_id == "nope"

    def test_duplicate_ids_rejected(self, make_meal):
        meal = make_meal("dup", MealType.LUNCH)
        with pytest.raises(CatalogError):
            MealCatalog([meal, meal])

    def test_by_type_respects_diet(self, sample_catalog):
        egg_breakfasts = {m.id for m in sample_catalog.by_type(MealType.BREAKFAST, DietType.EGG)}
        assert "b-egg-easy" in egg_breakfasts
        assert "b-veg-easy" in egg_breakfasts
        assert "b-nonveg-hard" not in egg_breakfasts

    def test_by_type_respects_slot(self, sample_catalog):
        for meal in sample_catalog.by_type(MealType.SNACK, DietType.NON_VEG):
            assert meal.meal_type == MealType.SNACK

    def test_search_outside_foods_case_insensitive(self, sample_catalog):
        names = [f.name for f in sample_catalog.search_outside_foods("PAV")]
        assert names == ["Vada Pav"]

    def test_empty_search_returns_all(self, sample_catalog):
        assert len(sample_catalog.search_outside_foods()) == 3


class TestDietCompatibility:
    """Tests for the diet acceptability rule."""

    @pytest.mark.parametrize(
        "preference,meal_diet,expected",
        [
            (DietType.VEG, DietType.VEG, True),
            (DietType.VEG, DietType.EGG, False),
            (DietType.VEG, DietType.NON_VEG, False),
            (DietType.EGG, DietType.VEG, True),
            (DietType.EGG, DietType.EGG, True),
            (DietType.EGG, DietType.NON_VEG, False),
            (DietType.NON_VEG, DietType.VEG, True),
            (DietType.NON_VEG, DietType.EGG, True),
            (DietType.NON_VEG, DietType.NON_VEG, True),
        ],
    )
    def test_rule(self, preference, meal_diet, expected):
        assert is_diet_compatible(preference, meal_diet) is expected


class TestLoadMeals:
    """Tests for reading catalog CSV files."""

    def test_load_custom_file(self, tmp_path):
        path = tmp_path / "meals.csv"
        path.write_text(
            MEAL_HEADER
            + "x-1,Test Dal,lunch,veg,400,15,60,8,35,easy\n"
        )
        meals = load_meals(path)
        assert len(meals) == 1
        assert meals[0].id == "x-1"
        assert meals[0].ingredients == ()
        assert meals[0].name_hindi is None

    def test_invalid_enum_value(self, tmp_path):
        path = tmp_path / "meals.csv"
        path.write_text(MEAL_HEADER + "x-1,Test,brunch,veg,400,15,60,8,35,easy\n")
        with pytest.raises(CatalogError):
            load_meals(path)

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "meals.csv"
        path.write_text("id,name\nx-1,Test\n")
        with pytest.raises(CatalogError) as exc:
            load_meals(path)
        assert "missing columns" in exc.value.message

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            load_meals(tmp_path / "absent.csv")
