"""Output formatters for meal plans."""

from __future__ import annotations

import json
from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from desimeal.data.models import SLOT_ORDER, MealRecord
from desimeal.planner.models import DailyMealPlan, WeeklyPlan
from desimeal.planner.nutrition import (
    calculate_totals,
    calculate_week_totals,
    summarize_progress,
)
from desimeal.planner.pantry import PantryMatch
from desimeal.planner.serialization import (
    meal_to_dict,
    plan_to_dict,
    totals_to_dict,
    weekly_plan_to_dict,
)
from desimeal.profiles.user_profile import UserProfile


def _meal_name(meal: Optional[MealRecord]) -> str:
    return meal.name if meal else "-"


def _bar(percent: float, width: int = 20) -> str:
    filled = round(percent / 100 * width)
    return "#" * filled + "-" * (width - filled)


class TableFormatter:
    """Format plans as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format_plan(self, plan: DailyMealPlan, profile: UserProfile) -> None:
        """Print a daily plan with totals and progress against targets."""
        self.console.print(
            Panel(
                f"[bold]MEAL PLAN[/bold] - {plan.date.isoformat()}\n"
                f"Goal: {profile.goal.value} | Diet: {profile.diet.value} | "
                f"Budget: Rs {profile.budget:.0f} | Skill: {profile.cooking_skill.value}",
                title="Today",
            )
        )

        table = Table(title="Meals")
        table.add_column("Slot", style="bold")
        table.add_column("Meal", style="cyan", max_width=40)
        table.add_column("kcal", justify="right")
        table.add_column("Protein", justify="right")
        table.add_column("Cost", justify="right", style="green")
        table.add_column("Time", justify="right")

        for slot in SLOT_ORDER:
            meal = plan.meal_for(slot)
            if meal is None:
                table.add_row(slot.value.title(), "[dim]no match[/dim]", "-", "-", "-", "-")
                continue
            table.add_row(
                slot.value.title(),
                f"{meal.name} [dim]({meal.id})[/dim]",
                f"{meal.calories}",
                f"{meal.protein:.0f}g",
                f"Rs {meal.cost_per_serving:.0f}",
                f"{meal.total_time} min",
            )

        for entry in plan.outside_foods:
            table.add_row(
                "[yellow]Outside[/yellow]",
                entry.name,
                f"{entry.calories}",
                f"{entry.protein:.0f}g",
                "-",
                "-",
            )

        self.console.print(table)

        totals = calculate_totals(plan)
        progress = summarize_progress(totals, profile)

        summary = Table(title="Nutrition Summary")
        summary.add_column("")
        summary.add_column("Amount", justify="right")
        summary.add_column("Target", justify="right")
        summary.add_column("Progress")

        cal_style = "red" if progress.is_over_calories else "green"
        budget_style = "red" if progress.is_over_budget else "green"
        summary.add_row(
            "Calories",
            f"{totals.calories:.0f}",
            f"{profile.target_calories}",
            f"[{cal_style}]{_bar(progress.calorie_percent)}[/{cal_style}]",
        )
        summary.add_row(
            "Protein",
            f"{totals.protein:.0f}g",
            f"{profile.target_protein}g",
            _bar(progress.protein_percent),
        )
        summary.add_row("Carbs", f"{totals.carbs:.0f}g", "-", "")
        summary.add_row("Fat", f"{totals.fat:.0f}g", "-", "")
        summary.add_row(
            "Cost",
            f"Rs {totals.cost:.0f}",
            f"Rs {profile.budget:.0f}",
            f"[{budget_style}]{_bar(progress.budget_percent)}[/{budget_style}]",
        )
        self.console.print(summary)

    def format_week(self, weekly: WeeklyPlan) -> None:
        """Print one row per day and the weekly totals."""
        table = Table(
            title=f"Week {weekly.start_date.isoformat()} to {weekly.end_date.isoformat()}"
        )
        table.add_column("Date", style="bold")
        for slot in SLOT_ORDER:
            table.add_column(slot.value.title(), style="cyan", max_width=22)
        table.add_column("kcal", justify="right")
        table.add_column("Cost", justify="right", style="green")

        for day in weekly.days:
            totals = calculate_totals(day)
            names = [_meal_name(day.meal_for(slot)) for slot in SLOT_ORDER]
            table.add_row(
                day.date.strftime("%a %d %b"),
                *names,
                f"{totals.calories:.0f}",
                f"Rs {totals.cost:.0f}",
            )

        week_totals = calculate_week_totals(weekly)
        table.add_row(
            "[bold]TOTAL[/bold]",
            "", "", "", "",
            f"[bold]{week_totals.calories:.0f}[/bold]",
            f"[bold]Rs {week_totals.cost:.0f}[/bold]",
        )
        self.console.print(table)

    def format_meals(self, meals: Iterable[MealRecord], title: str = "Meals") -> None:
        """Print a list of catalog meals."""
        table = Table(title=title)
        table.add_column("ID", style="dim")
        table.add_column("Meal", style="cyan", max_width=36)
        table.add_column("Slot")
        table.add_column("Diet")
        table.add_column("kcal", justify="right")
        table.add_column("Protein", justify="right")
        table.add_column("Cost", justify="right", style="green")
        table.add_column("Difficulty")
        table.add_column("Badges", style="magenta")

        for meal in meals:
            name = meal.name
            if meal.name_hindi:
                name += f"\n[dim]{meal.name_hindi}[/dim]"
            table.add_row(
                meal.id,
                name,
                meal.meal_type.value,
                meal.diet.value,
                f"{meal.calories}",
                f"{meal.protein:.0f}g",
                f"Rs {meal.cost_per_serving:.0f}",
                meal.difficulty.value,
                ", ".join(meal.badges),
            )
        self.console.print(table)

    def format_matches(self, matches: Iterable[PantryMatch]) -> None:
        """Print pantry matches with what is still missing."""
        table = Table(title="Meals From Your Pantry")
        table.add_column("ID", style="dim")
        table.add_column("Meal", style="cyan", max_width=30)
        table.add_column("Slot")
        table.add_column("Match", justify="right")
        table.add_column("Have", style="green")
        table.add_column("Missing", style="yellow")

        for match in matches:
            table.add_row(
                match.meal.id,
                match.meal.name,
                match.meal.meal_type.value,
                f"{match.score}%",
                ", ".join(match.matched),
                ", ".join(match.missing) or "-",
            )
        self.console.print(table)


class JSONFormatter:
    """Format plans as JSON for programmatic use."""

    def format_plan(self, plan: DailyMealPlan, profile: UserProfile) -> str:
        totals = calculate_totals(plan)
        progress = summarize_progress(totals, profile)
        data = {
            "plan": plan_to_dict(plan, include_meals=True),
            "totals": totals_to_dict(totals),
            "targets": {
                "calories": profile.target_calories,
                "protein": profile.target_protein,
                "budget": profile.budget,
            },
            "progress": {
                "calorie_percent": round(progress.calorie_percent, 1),
                "protein_percent": round(progress.protein_percent, 1),
                "budget_percent": round(progress.budget_percent, 1),
                "is_over_calories": progress.is_over_calories,
                "is_over_budget": progress.is_over_budget,
            },
        }
        return json.dumps(data, indent=2, ensure_ascii=False)

    def format_week(self, weekly: WeeklyPlan) -> str:
        data = weekly_plan_to_dict(weekly)
        data["daily_totals"] = [totals_to_dict(calculate_totals(d)) for d in weekly.days]
        data["totals"] = totals_to_dict(calculate_week_totals(weekly))
        return json.dumps(data, indent=2, ensure_ascii=False)

    def format_meals(self, meals: Iterable[MealRecord]) -> str:
        return json.dumps([meal_to_dict(m) for m in meals], indent=2, ensure_ascii=False)

    def format_matches(self, matches: Iterable[PantryMatch]) -> str:
        data = [
            {
                "meal": meal_to_dict(m.meal),
                "score": m.score,
                "matched": list(m.matched),
                "missing": list(m.missing),
            }
            for m in matches
        ]
        return json.dumps(data, indent=2, ensure_ascii=False)


def format_plan(
    plan: DailyMealPlan,
    profile: UserProfile,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format a daily plan in the specified format.

    Args:
        plan: Plan to format
        profile: Profile whose targets the plan is compared against
        output_format: One of 'table', 'json'
        console: Rich console (for table format)

    Returns:
        Formatted string for json, None for table (prints directly)
    """
    if output_format == "table":
        TableFormatter(console).format_plan(plan, profile)
        return None
    elif output_format == "json":
        return JSONFormatter().format_plan(plan, profile)
    else:
        raise ValueError(f"Unknown output format: {output_format}")
