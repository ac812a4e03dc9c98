"""Load the meal catalog from CSV files.

The bundled catalog covers common Indian home meals and a list of popular
outside foods for quick logging. Both are plain CSV files so that a custom
catalog can be dropped in through the settings file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from desimeal.data.models import (
    DietType,
    Difficulty,
    MealRecord,
    MealType,
    OutsideFoodItem,
    is_diet_compatible,
)
from desimeal.exceptions import CatalogError, MealNotFoundError

DATA_DIR = Path(__file__).parent
DEFAULT_MEALS_PATH = DATA_DIR / "meals.csv"
DEFAULT_OUTSIDE_FOODS_PATH = DATA_DIR / "outside_foods.csv"

MEAL_COLUMNS = [
    "id", "name", "type", "diet", "calories", "protein", "carbs", "fat",
    "cost_per_serving", "difficulty",
]
OUTSIDE_FOOD_COLUMNS = ["id", "name", "calories", "protein", "carbs", "fat"]

# Separator for list-valued columns (ingredients, badges)
LIST_SEPARATOR = "|"


class MealCatalog:
    """Read-only collection of meals and outside-food presets."""

    def __init__(
        self,
        meals: Iterable[MealRecord],
        outside_foods: Iterable[OutsideFoodItem] = (),
    ):
        """Initialize the catalog.

        Args:
            meals: Meal records, in catalog order
            outside_foods: Quick-log outside food presets

        Raises:
            CatalogError: If two meals share an id
        """
        self._meals: tuple[MealRecord, ...] = tuple(meals)
        self._outside_foods: tuple[OutsideFoodItem, ...] = tuple(outside_foods)
        self._by_id: dict[str, MealRecord] = {}
        for meal in self._meals:
            if meal.id in self._by_id:
                raise CatalogError(f"Duplicate meal id '{meal.id}'", {"meal_id": meal.id})
            self._by_id[meal.id] = meal

    def __len__(self) -> int:
        return len(self._meals)

    def __iter__(self):
        return iter(self._meals)

    def __contains__(self, meal_id: object) -> bool:
        return meal_id in self._by_id

    @property
    def meals(self) -> tuple[MealRecord, ...]:
        return self._meals

    @property
    def outside_foods(self) -> tuple[OutsideFoodItem, ...]:
        return self._outside_foods

    def get(self, meal_id: str) -> Optional[MealRecord]:
        """Look up a meal by id, returning None if absent."""
        return self._by_id.get(meal_id)

    def require(self, meal_id: str) -> MealRecord:
        """Look up a meal by id.

        Raises:
            MealNotFoundError: If the id is not in the catalog
        """
        meal = self._by_id.get(meal_id)
        if meal is None:
            raise MealNotFoundError(meal_id)
        return meal

    def by_type(self, meal_type: MealType, diet: DietType) -> list[MealRecord]:
        """Meals for a slot that are acceptable for a diet preference."""
        return [
            m for m in self._meals
            if m.meal_type == meal_type and is_diet_compatible(diet, m.diet)
        ]

    def get_outside_food(self, food_id: str) -> Optional[OutsideFoodItem]:
        for food in self._outside_foods:
            if food.id == food_id:
                return food
        return None

    def search_outside_foods(self, text: str = "") -> list[OutsideFoodItem]:
        """Case-insensitive substring search over outside food names."""
        needle = text.lower()
        return [f for f in self._outside_foods if needle in f.name.lower()]


def _split_list(value: str) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(LIST_SEPARATOR) if part.strip())


def _require_columns(df: pd.DataFrame, columns: list[str], path: Path) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise CatalogError(
            f"Catalog file {path} is missing columns: {', '.join(missing)}",
            {"path": str(path), "missing": missing},
        )


def _read_csv(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}", {"path": str(path)})
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def _row_to_meal(row: pd.Series) -> MealRecord:
    """Convert a CSV row into a MealRecord."""
    try:
        return MealRecord(
            id=row["id"],
            name=row["name"],
            meal_type=MealType(row["type"]),
            diet=DietType(row["diet"]),
            calories=int(float(row["calories"])),
            protein=float(row["protein"]),
            carbs=float(row["carbs"]),
            fat=float(row["fat"]),
            cost_per_serving=float(row["cost_per_serving"]),
            difficulty=Difficulty(row["difficulty"]),
            prep_time=int(float(row.get("prep_time") or 0)),
            cook_time=int(float(row.get("cook_time") or 0)),
            portion=row.get("portion", ""),
            ingredients=_split_list(row.get("ingredients", "")),
            description=row.get("description", ""),
            fiber=float(row.get("fiber") or 0),
            badges=_split_list(row.get("badges", "")),
            name_hindi=row.get("name_hindi") or None,
        )
    except ValueError as e:
        raise CatalogError(
            f"Invalid catalog row for meal '{row['id']}': {e}",
            {"meal_id": row["id"]},
        ) from e


def load_meals(path: Path) -> list[MealRecord]:
    """Load meal records from a catalog CSV.

    Args:
        path: CSV with one meal per row

    Returns:
        List of MealRecord in file order
    """
    df = _read_csv(path)
    _require_columns(df, MEAL_COLUMNS, path)
    return [_row_to_meal(row) for _, row in df.iterrows()]


def load_outside_foods(path: Path) -> list[OutsideFoodItem]:
    """Load outside food presets from CSV."""
    df = _read_csv(path)
    _require_columns(df, OUTSIDE_FOOD_COLUMNS, path)

    foods = []
    for _, row in df.iterrows():
        try:
            foods.append(
                OutsideFoodItem(
                    id=row["id"],
                    name=row["name"],
                    calories=int(float(row["calories"])),
                    protein=float(row["protein"]),
                    carbs=float(row["carbs"]),
                    fat=float(row["fat"]),
                )
            )
        except ValueError as e:
            raise CatalogError(
                f"Invalid outside food row '{row['id']}': {e}",
                {"food_id": row["id"]},
            ) from e
    return foods


def load_catalog(
    meals_path: Optional[Path] = None,
    outside_foods_path: Optional[Path] = None,
) -> MealCatalog:
    """Load a catalog, falling back to the bundled CSV files.

    Args:
        meals_path: Meal CSV. If None, uses the bundled catalog.
        outside_foods_path: Outside food CSV. If None, uses the bundled list.

    Returns:
        MealCatalog instance
    """
    meals = load_meals(meals_path or DEFAULT_MEALS_PATH)
    outside = load_outside_foods(outside_foods_path or DEFAULT_OUTSIDE_FOODS_PATH)
    return MealCatalog(meals, outside)
