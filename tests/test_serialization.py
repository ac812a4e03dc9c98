"""Tests for plan serialization."""

from __future__ import annotations

import json
from datetime import date

import pytest

from desimeal.exceptions import PlanError
from desimeal.planner.builder import build_weekly_plan
from desimeal.planner.models import DailyMealPlan, OutsideFoodEntry
from desimeal.planner.serialization import (
    plan_from_dict,
    plan_to_dict,
    weekly_plan_to_dict,
)


@pytest.fixture
def logged_plan(sample_catalog):
    plan = DailyMealPlan(
        date=date(2026, 10, 18),
        breakfast=sample_catalog.require("b-veg-easy"),
        dinner=sample_catalog.require("d-veg-light"),
    )
    plan.add_outside_food(OutsideFoodEntry("Vada Pav", 350, 8, 45, 16))
    return plan


class TestPlanSerialization:
    """Tests for plan_to_dict / plan_from_dict."""

    def test_stores_meal_ids(self, logged_plan):
        data = plan_to_dict(logged_plan)
        assert data["date"] == "2026-10-18"
        assert data["breakfast"] == "b-veg-easy"
        assert data["lunch"] is None
        assert data["outside_foods"][0]["name"] == "Vada Pav"
        json.dumps(data)

    def test_restores_shared_catalog_records(self, logged_plan, sample_catalog):
        restored = plan_from_dict(plan_to_dict(logged_plan), sample_catalog)
        assert restored.breakfast is sample_catalog.require("b-veg-easy")
        assert restored.lunch is None
        assert restored.outside_foods == logged_plan.outside_foods

    def test_embedded_meals_load_by_id(self, logged_plan, sample_catalog):
        data = plan_to_dict(logged_plan, include_meals=True)
        assert data["dinner"]["calories"] == 300
        restored = plan_from_dict(data, sample_catalog)
        assert restored.dinner.id == "d-veg-light"

    def test_unknown_meal(self, sample_catalog):
        with pytest.raises(PlanError):
            plan_from_dict({"date": "2026-10-18", "dinner": "gone-1"}, sample_catalog)

    def test_meal_in_wrong_slot(self, sample_catalog):
        with pytest.raises(PlanError):
            plan_from_dict({"date": "2026-10-18", "lunch": "d-veg-light"}, sample_catalog)

    def test_bad_date(self, sample_catalog):
        with pytest.raises(PlanError):
            plan_from_dict({"date": "yesterday"}, sample_catalog)


class TestWeeklySerialization:
    def test_weekly_plan(self, sample_catalog, veg_beginner, stub_picker):
        weekly = build_weekly_plan(sample_catalog, veg_beginner, date(2026, 10, 18), stub_picker(0))
        data = weekly_plan_to_dict(weekly)
        assert data["start_date"] == "2026-10-18"
        assert data["end_date"] == "2026-10-24"
        assert len(data["days"]) == 7
