"""Tests for CLI commands."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from desimeal.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(desimeal_home):
    """Keep CLI state out of the real home directory."""
    return desimeal_home


def invoke_json(*args: str) -> dict:
    result = runner.invoke(app, [*args, "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestMainCommands:
    """Tests for main CLI commands."""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "meal" in result.output.lower()

    def test_plan_saves_state(self, isolated_home):
        data = invoke_json("plan", "--seed", "1", "--date", "2026-10-18")
        assert data["plan"]["date"] == "2026-10-18"
        assert data["targets"]["calories"] == 2000

        saved = json.loads((isolated_home / "plan.json").read_text())
        assert saved["date"] == "2026-10-18"
        assert saved["outside_foods"] == []

    def test_plan_table_output(self):
        result = runner.invoke(app, ["plan", "--seed", "1"])
        assert result.exit_code == 0
        assert "Nutrition Summary" in result.output

    def test_show_without_plan_fails(self):
        result = runner.invoke(app, ["show"])
        assert result.exit_code == 1
        assert "No plan yet" in result.output

    def test_show_after_plan(self):
        invoke_json("plan", "--seed", "2")
        data = invoke_json("show")
        assert "totals" in data
        assert "progress" in data

    def test_week(self):
        data = invoke_json("week", "--seed", "3")
        assert len(data["days"]) == 7
        assert len(data["daily_totals"]) == 7


class TestPlanEditing:
    """Tests for swap, alternatives and eat-out."""

    def test_swap(self, isolated_home):
        invoke_json("plan", "--seed", "1")
        data = invoke_json("swap", "dinner", "veggie-soup-1")
        assert data["meal_id"] == "veggie-soup-1"

        saved = json.loads((isolated_home / "plan.json").read_text())
        assert saved["dinner"] == "veggie-soup-1"

    def test_swap_wrong_slot(self):
        invoke_json("plan", "--seed", "1")
        result = runner.invoke(app, ["swap", "breakfast", "veggie-soup-1"])
        assert result.exit_code == 1

    def test_swap_unknown_meal(self):
        invoke_json("plan", "--seed", "1")
        result = runner.invoke(app, ["swap", "dinner", "no-such-meal", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"] == "MealNotFoundError"

    def test_alternatives(self):
        invoke_json("plan", "--seed", "1")
        data = invoke_json("alternatives", "lunch", "--count", "2")
        assert data["slot"] == "lunch"
        assert len(data["alternatives"]) == 2
        assert data["current"] not in [m["id"] for m in data["alternatives"]]

    def test_eat_out_preset(self, isolated_home):
        invoke_json("plan", "--seed", "1")
        data = invoke_json("eat-out", "of-7")
        assert data["logged"] == {"name": "Thali (Full)", "calories": 800}
        assert "dinner_changed" in data

        saved = json.loads((isolated_home / "plan.json").read_text())
        assert saved["outside_foods"][0]["calories"] == 800

    def test_eat_out_custom(self, isolated_home):
        invoke_json("plan", "--seed", "1")
        invoke_json("eat-out", "--name", "Street corn", "--calories", "100")
        saved = json.loads((isolated_home / "plan.json").read_text())
        assert saved["outside_foods"][0]["protein"] == 3

    def test_eat_out_requires_food(self):
        invoke_json("plan", "--seed", "1")
        result = runner.invoke(app, ["eat-out", "--name", "Mystery"])
        assert result.exit_code == 1


class TestProfileCommands:
    """Tests for profile subcommands."""

    def test_default_profile(self):
        data = invoke_json("profile", "show")
        assert data["goal"] == "maintain"
        assert data["diet"] == "veg"
        assert data["budget"] == 150

    def test_set_goal_updates_targets(self, isolated_home):
        invoke_json("profile", "set", "--goal", "lose", "--diet", "non-veg", "--budget", "250")
        data = invoke_json("profile", "show")
        assert data["target_calories"] == 1600
        assert data["target_protein"] == 80
        assert data["diet"] == "non-veg"
        assert data["budget"] == 250
        assert (isolated_home / "profile.yaml").exists()

    def test_invalid_diet_rejected(self):
        result = runner.invoke(app, ["profile", "set", "--diet", "keto"])
        assert result.exit_code != 0


class TestCatalogCommands:
    """Tests for catalog subcommands."""

    def test_meals_by_slot(self):
        result = runner.invoke(app, ["catalog", "meals", "--slot", "snack", "--json"])
        assert result.exit_code == 0
        meals = json.loads(result.stdout)
        assert meals
        assert all(m["type"] == "snack" for m in meals)

    def test_veg_filter(self):
        result = runner.invoke(app, ["catalog", "meals", "--diet", "veg", "--json"])
        meals = json.loads(result.stdout)
        assert all(m["diet"] == "veg" for m in meals)

    def test_outside_search(self):
        result = runner.invoke(app, ["catalog", "outside", "--search", "pav", "--json"])
        names = [f["name"] for f in json.loads(result.stdout)]
        assert names == ["Vada Pav", "Pav Bhaji"]

    def test_meal_details_in_json(self):
        result = runner.invoke(app, ["catalog", "meals", "--slot", "breakfast", "--json"])
        poha = next(m for m in json.loads(result.stdout) if m["id"] == "poha-1")
        assert poha["ingredients"][0] == "Poha"
        assert poha["name_hindi"]

    def test_match_pantry(self):
        result = runner.invoke(
            app,
            ["catalog", "match", "--have", "poha", "-i", "pyaz", "-i", "aloo", "-i", "peanuts", "--json"],
        )
        assert result.exit_code == 0, result.output
        matches = json.loads(result.stdout)
        assert matches[0]["meal"]["id"] == "poha-1"
        assert matches[0]["score"] == 51
        assert matches[0]["missing"] == ["curry leaves", "turmeric"]

    def test_match_nothing_found(self):
        result = runner.invoke(app, ["catalog", "match", "--have", "quinoa"])
        assert result.exit_code == 0
        assert "No meals match" in result.output

    def test_match_requires_ingredient(self):
        result = runner.invoke(app, ["catalog", "match"])
        assert result.exit_code != 0

    def test_ingredients(self):
        result = runner.invoke(app, ["catalog", "ingredients", "--json"])
        names = json.loads(result.stdout)
        assert "poha" in names
        assert names == sorted(names)


class TestSavedProfileErrors:
    """A corrupt profile file is reported, not raised."""

    def test_non_numeric_target(self, isolated_home):
        (isolated_home / "profile.yaml").write_text("goal: maintain\ntarget_calories: lots\n")
        result = runner.invoke(app, ["profile", "show"])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Invalid target_calories" in result.output

    def test_invalid_yaml_json_envelope(self, isolated_home):
        (isolated_home / "profile.yaml").write_text("goal: [maintain\n")
        result = runner.invoke(app, ["profile", "show", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["success"] is False
        assert data["error"] == "ProfileError"

    def test_non_mapping_document(self, isolated_home):
        (isolated_home / "profile.yaml").write_text("- lose\n- veg\n")
        result = runner.invoke(app, ["plan", "--seed", "1"])
        assert result.exit_code == 1
        assert "mapping" in result.output
