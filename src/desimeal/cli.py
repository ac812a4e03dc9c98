"""CLI interface using Typer.

The CLI is the owner of user state: it keeps the profile in a YAML file and
the current day's plan in a JSON file, and passes both explicitly into the
planning engine.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from desimeal.config import get_settings
from desimeal.data.catalog import MealCatalog, load_catalog
from desimeal.data.models import SLOT_ORDER, DietType, MealType
from desimeal.exceptions import CatalogError, DesiMealError, PlanError, ProfileError
from desimeal.export.formatters import JSONFormatter, TableFormatter, format_plan
from desimeal.planner import (
    DailyMealPlan,
    OutsideFoodEntry,
    RandomPicker,
    build_daily_plan,
    build_weekly_plan,
    catalog_ingredients,
    find_matching_meals,
    get_alternative_meals,
    log_outside_food,
    shift_week,
    week_start,
)
from desimeal.planner.serialization import meal_to_dict, plan_from_dict, plan_to_dict
from desimeal.profiles.user_profile import (
    DEFAULT_PROFILE,
    CookingSkill,
    Goal,
    UserProfile,
)

app = typer.Typer(
    help="Indian meal planning within your diet, budget and cooking skill",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

profile_app = typer.Typer(help="View and edit your profile")
catalog_app = typer.Typer(help="Browse the meal catalog")

app.add_typer(profile_app, name="profile")
app.add_typer(catalog_app, name="catalog")


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict | list) -> None:
    """Output JSON response to stdout."""
    print(json.dumps(response, indent=2, ensure_ascii=False))


def configure_logging(level: str) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def use_json(json_output: bool) -> bool:
    return json_output or get_settings().defaults.output_format == "json"


@contextmanager
def handle_errors(json_output: bool) -> Iterator[None]:
    """Report DesiMealError to the user and exit with status 1."""
    try:
        yield
    except DesiMealError as e:
        if json_output:
            output_json({"success": False, **e.to_dict()})
        else:
            console.print(f"[red]Error: {escape(e.message)}[/red]")
        raise typer.Exit(1)


def get_catalog() -> MealCatalog:
    settings = get_settings()
    return load_catalog(settings.catalog.meals_path, settings.catalog.outside_foods_path)


def load_profile() -> UserProfile:
    """Load the saved profile, or the default profile if none is saved.

    Raises:
        ProfileError: If the saved profile is not valid YAML or holds
            invalid values
    """
    path = get_settings().state.profile_path
    if not path.exists():
        return DEFAULT_PROFILE
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ProfileError(
            "profile", str(path), [], message=f"Saved profile {path} is not valid YAML: {e}"
        ) from e
    return UserProfile.from_dict(data)


def save_profile(profile: UserProfile) -> Path:
    path = get_settings().state.profile_path
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(profile.to_dict(), f, default_flow_style=False, sort_keys=False)
    return path


def load_plan(catalog: MealCatalog) -> DailyMealPlan:
    """Load the saved plan.

    Raises:
        PlanError: If no plan has been generated yet
    """
    path = get_settings().state.plan_path
    if not path.exists():
        raise PlanError("No plan yet. Run: desimeal plan")
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise PlanError(f"Saved plan {path} is not valid JSON: {e}") from e
    return plan_from_dict(data, catalog)


def save_plan(plan: DailyMealPlan) -> Path:
    path = get_settings().state.plan_path
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(plan_to_dict(plan), f, indent=2)
    return path


def _picker(seed: Optional[int]) -> RandomPicker:
    return RandomPicker(seed if seed is not None else get_settings().planner.seed)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Indian meal planning within your diet, budget and cooking skill."""
    configure_logging("DEBUG" if verbose else get_settings().logging.level)


# ============================================================================
# Plan Commands
# ============================================================================


@app.command()
def plan(
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for reproducible plans"),
    plan_date: Optional[datetime] = typer.Option(
        None, "--date", formats=["%Y-%m-%d"], help="Date to plan for (default today)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Generate and save a plan for the day."""
    as_json = use_json(json_output)
    with handle_errors(as_json):
        catalog = get_catalog()
        profile = load_profile()
        daily = build_daily_plan(
            catalog,
            profile,
            _picker(seed),
            plan_date.date() if plan_date else None,
        )
        save_plan(daily)

        if as_json:
            print(JSONFormatter().format_plan(daily, profile))
        else:
            format_plan(daily, profile, "table", console)
            empty = [slot.value for slot in SLOT_ORDER if daily.meal_for(slot) is None]
            if empty:
                console.print(
                    f"[yellow]No meal fits for: {', '.join(empty)}. "
                    f"Try a higher budget or skill level.[/yellow]"
                )


@app.command()
def show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the saved plan with totals and progress."""
    as_json = use_json(json_output)
    with handle_errors(as_json):
        catalog = get_catalog()
        daily = load_plan(catalog)
        result = format_plan(daily, load_profile(), "json" if as_json else "table", console)
        if result:
            print(result)


@app.command()
def week(
    offset: int = typer.Option(0, "--offset", help="Weeks from the current week (e.g., 1 or -1)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Generate a 7-day plan for a week starting Sunday."""
    as_json = use_json(json_output)
    with handle_errors(as_json):
        catalog = get_catalog()
        profile = load_profile()
        start = shift_week(week_start(), offset)
        weekly = build_weekly_plan(catalog, profile, start, _picker(seed))

        if as_json:
            print(JSONFormatter().format_week(weekly))
        else:
            TableFormatter(console).format_week(weekly)


@app.command()
def swap(
    slot: MealType = typer.Argument(..., help="Slot to change"),
    meal_id: str = typer.Argument(..., help="Catalog id of the new meal"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Replace the meal in one slot of the saved plan."""
    as_json = use_json(json_output)
    with handle_errors(as_json):
        catalog = get_catalog()
        daily = load_plan(catalog)
        daily.swap_meal(slot, catalog.require(meal_id))
        save_plan(daily)

        if as_json:
            output_json({"success": True, "slot": slot.value, "meal_id": meal_id})
        else:
            console.print(f"[green]{slot.value.title()} is now {daily.meal_for(slot).name}[/green]")


@app.command()
def alternatives(
    slot: MealType = typer.Argument(..., help="Slot to find alternatives for"),
    count: int = typer.Option(3, "--count", "-n", help="Number of suggestions"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Suggest similar meals to swap into a slot."""
    as_json = use_json(json_output)
    with handle_errors(as_json):
        catalog = get_catalog()
        profile = load_profile()
        daily = load_plan(catalog)
        current = daily.meal_for(slot)
        if current is None:
            raise PlanError(f"The {slot.value} slot is empty; nothing to compare against")

        options = get_alternative_meals(catalog, current, profile.diet, count)
        if as_json:
            output_json({
                "slot": slot.value,
                "current": current.id,
                "alternatives": [meal_to_dict(m) for m in options],
            })
        else:
            TableFormatter(console).format_meals(
                options, title=f"Alternatives to {current.name}"
            )


@app.command("eat-out")
def eat_out(
    preset: Optional[str] = typer.Argument(None, help="Outside food id (see: catalog outside)"),
    name: Optional[str] = typer.Option(None, "--name", help="Name of a custom food"),
    calories: Optional[int] = typer.Option(None, "--calories", help="Calories of a custom food"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log food eaten outside the plan and lighten dinner if needed."""
    as_json = use_json(json_output)
    with handle_errors(as_json):
        catalog = get_catalog()
        profile = load_profile()

        if preset:
            item = catalog.get_outside_food(preset)
            if item is None:
                raise CatalogError(f"Outside food '{preset}' not found", {"food_id": preset})
            entry = OutsideFoodEntry.from_item(item)
        elif name and calories is not None:
            if calories < 0:
                raise PlanError("Calories must be zero or more")
            entry = OutsideFoodEntry.estimate(name, calories)
        else:
            raise PlanError("Give an outside food id, or both --name and --calories")

        daily = load_plan(catalog)
        previous_dinner = daily.dinner
        adjusted = log_outside_food(catalog, daily, entry, profile)
        save_plan(adjusted)

        dinner_changed = adjusted.dinner is not previous_dinner
        if as_json:
            output_json({
                "success": True,
                "logged": {"name": entry.name, "calories": entry.calories},
                "dinner_changed": dinner_changed,
                "dinner": adjusted.dinner.id if adjusted.dinner else None,
            })
        else:
            console.print(f"[green]Logged {entry.name} ({entry.calories} kcal)[/green]")
            if dinner_changed:
                console.print(
                    f"Dinner lightened: {previous_dinner.name} -> "
                    f"[cyan]{adjusted.dinner.name}[/cyan] ({adjusted.dinner.calories} kcal)"
                )


# ============================================================================
# Profile Commands
# ============================================================================


@profile_app.command("show")
def profile_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the current profile."""
    as_json = use_json(json_output)
    with handle_errors(as_json):
        profile = load_profile()
        if as_json:
            output_json(profile.to_dict())
            return
        for key, value in profile.to_dict().items():
            console.print(f"[bold]{key}[/bold]: {value}")


@profile_app.command("set")
def profile_set(
    goal: Optional[Goal] = typer.Option(None, "--goal", help="Weight goal"),
    diet: Optional[DietType] = typer.Option(None, "--diet", help="Diet preference"),
    budget: Optional[float] = typer.Option(None, "--budget", help="Daily budget in INR"),
    skill: Optional[CookingSkill] = typer.Option(None, "--skill", help="Cooking skill"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Update profile fields. Changing the goal resets calorie/protein targets."""
    as_json = use_json(json_output)
    with handle_errors(as_json):
        profile = load_profile()
        if goal is not None:
            profile = profile.with_goal(goal)
        if diet is not None:
            profile = replace(profile, diet=diet)
        if budget is not None:
            if budget < 0:
                raise ProfileError("budget", budget, ["a non-negative number"])
            profile = replace(profile, budget=budget)
        if skill is not None:
            profile = replace(profile, cooking_skill=skill)

        path = save_profile(profile)
        if as_json:
            output_json({"success": True, "profile": profile.to_dict()})
        else:
            console.print(f"[green]Profile saved to {path}[/green]")


# ============================================================================
# Catalog Commands
# ============================================================================


@catalog_app.command("meals")
def catalog_meals(
    slot: Optional[MealType] = typer.Option(None, "--slot", help="Only this slot"),
    diet: Optional[DietType] = typer.Option(None, "--diet", help="Only meals this diet accepts"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List catalog meals."""
    as_json = use_json(json_output)
    with handle_errors(as_json):
        catalog = get_catalog()
        if slot is not None:
            meals = catalog.by_type(slot, diet or DietType.NON_VEG)
        elif diet is not None:
            meals = [m for s in SLOT_ORDER for m in catalog.by_type(s, diet)]
        else:
            meals = list(catalog.meals)

        if as_json:
            print(JSONFormatter().format_meals(meals))
        else:
            TableFormatter(console).format_meals(meals)


@catalog_app.command("outside")
def catalog_outside(
    search: str = typer.Option("", "--search", "-s", help="Filter by name"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List outside foods available for quick logging."""
    as_json = use_json(json_output)
    with handle_errors(as_json):
        foods = get_catalog().search_outside_foods(search)
        if as_json:
            output_json([
                {"id": f.id, "name": f.name, "calories": f.calories, "protein": f.protein}
                for f in foods
            ])
            return
        for f in foods:
            console.print(f"[dim]{f.id}[/dim]  {f.name}  [cyan]{f.calories} kcal[/cyan]")


@catalog_app.command("match")
def catalog_match(
    have: list[str] = typer.Option(
        ..., "--have", "-i", help="Ingredient on hand (any common name). Repeatable."
    ),
    diet: Optional[DietType] = typer.Option(None, "--diet", help="Only meals this diet accepts"),
    min_score: int = typer.Option(
        25, "--min-score", min=0, max=100, help="Minimum match percentage"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Find meals you can cook from the ingredients you have."""
    as_json = use_json(json_output)
    with handle_errors(as_json):
        matches = find_matching_meals(get_catalog(), have, min_score / 100, diet)
        if as_json:
            print(JSONFormatter().format_matches(matches))
        elif matches:
            TableFormatter(console).format_matches(matches)
        else:
            console.print("[yellow]No meals match those ingredients.[/yellow]")


@catalog_app.command("ingredients")
def catalog_ingredients_cmd(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List every ingredient used in the catalog."""
    as_json = use_json(json_output)
    with handle_errors(as_json):
        names = catalog_ingredients(get_catalog())
        if as_json:
            output_json(names)
        else:
            console.print(", ".join(names))


if __name__ == "__main__":
    app()
