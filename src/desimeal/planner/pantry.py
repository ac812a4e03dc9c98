"""Match catalog meals against ingredients the user has on hand.

Ingredient names are normalized through a synonym table of common Indian
ingredient names (Hindi and regional names, plural and compound forms), then
each meal is scored by the share of its ingredients found in the pantry with
a penalty per missing ingredient.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from desimeal.data.catalog import MealCatalog
from desimeal.data.models import DietType, MealRecord, is_diet_compatible

logger = logging.getLogger(__name__)

# Canonical name -> names that normalize to it. Checked in order; the first
# entry whose synonym overlaps the input wins.
INGREDIENT_SYNONYMS: dict[str, tuple[str, ...]] = {
    "onion": ("pyaz", "pyaaz", "kanda"),
    "tomato": ("tamatar",),
    "potato": ("aloo", "aaloo"),
    "paneer": ("cottage cheese", "indian cheese"),
    "dal": ("lentils", "daal", "toor dal", "moong dal", "yellow dal", "urad dal"),
    "rice": ("chawal", "bhaat", "basmati rice"),
    "wheat": ("atta", "gehu", "wheat flour", "flour"),
    "ginger": ("adrak",),
    "garlic": ("lahsun", "lehsun", "ginger-garlic"),
    "turmeric": ("haldi",),
    "cumin": ("jeera", "zeera"),
    "coriander": ("dhania", "cilantro"),
    "chili": ("mirchi", "mirch", "green chili", "red chili"),
    "mustard": ("sarson", "rai", "mustard seeds"),
    "capsicum": ("shimla mirch", "bell pepper", "bell peppers"),
    "cauliflower": ("gobi", "phool gobi"),
    "spinach": ("palak",),
    "eggplant": ("baingan", "brinjal"),
    "okra": ("bhindi", "ladyfinger"),
    "peas": ("matar", "mutter"),
    "carrot": ("gajar",),
    "cabbage": ("patta gobi", "band gobi"),
    "cucumber": ("kheera", "kakdi"),
    "chickpeas": ("chana", "chole"),
    "kidney beans": ("rajma",),
    "black gram": ("urad dal", "urad"),
    "moong": ("mung", "green gram", "moong dal"),
    "egg": ("anda", "eggs"),
    "chicken": ("murgh", "murg"),
    "mutton": ("gosht",),
    "fish": ("machli", "macchi"),
    "curd": ("dahi", "yogurt", "yoghurt"),
    "milk": ("doodh",),
    "cream": ("malai",),
    "butter": ("makhan",),
    "ghee": ("clarified butter",),
    "oil": ("tel",),
    "semolina": ("rava", "sooji", "suji"),
    "poha": ("flattened rice", "beaten rice"),
    "vegetables": ("mixed vegetables", "mixed veggies", "sabzi"),
}

# Score lost per missing ingredient, and the most that can be lost that way
MISSING_PENALTY = 0.08
MAX_MISSING_PENALTY = 0.3
DEFAULT_MIN_SCORE = 0.25


@dataclass(frozen=True)
class PantryMatch:
    """A catalog meal scored against the pantry.

    Attributes:
        meal: The matched meal
        score: Match score as a whole percentage (0-100)
        matched: Normalized meal ingredients found in the pantry
        missing: Normalized meal ingredients not in the pantry
    """

    meal: MealRecord
    score: int
    matched: tuple[str, ...]
    missing: tuple[str, ...]


def normalize_ingredient(name: str) -> str:
    """Map an ingredient name to its canonical form.

    Names with no synonym entry are returned lower-cased and stripped.
    """
    lower = name.lower().strip()
    if not lower:
        return lower
    for canonical, synonyms in INGREDIENT_SYNONYMS.items():
        if lower == canonical or any(s in lower or lower in s for s in synonyms):
            return canonical
    return lower


def _in_pantry(ingredient: str, pantry: list[str]) -> bool:
    return any(p == ingredient or p in ingredient or ingredient in p for p in pantry)


def score_ingredients(
    pantry: Iterable[str],
    ingredients: Iterable[str],
) -> tuple[float, list[str], list[str]]:
    """Score one ingredient list against the pantry.

    Returns:
        (score in 0..1, matched ingredients, missing ingredients), with
        ingredient names normalized
    """
    have = [n for n in (normalize_ingredient(p) for p in pantry) if n]
    needed = [normalize_ingredient(i) for i in ingredients]

    matched: list[str] = []
    missing: list[str] = []
    for ingredient in needed:
        if _in_pantry(ingredient, have):
            matched.append(ingredient)
        else:
            missing.append(ingredient)

    ratio = len(matched) / max(len(needed), 1)
    penalty = min(len(missing) * MISSING_PENALTY, MAX_MISSING_PENALTY)
    return max(0.0, ratio - penalty), matched, missing


def find_matching_meals(
    catalog: MealCatalog,
    pantry: Iterable[str],
    min_score: float = DEFAULT_MIN_SCORE,
    diet: Optional[DietType] = None,
) -> list[PantryMatch]:
    """Rank catalog meals by how much of each the pantry covers.

    Args:
        catalog: Meal catalog
        pantry: Ingredient names on hand, in any supported naming
        min_score: Minimum score (0..1) for a meal to be returned
        diet: If given, only meals this diet preference accepts

    Returns:
        Matches ordered by score, best first; ties keep catalog order.
    """
    pantry = list(pantry)
    matches = []
    for meal in catalog:
        if diet is not None and not is_diet_compatible(diet, meal.diet):
            continue
        score, matched, missing = score_ingredients(pantry, meal.ingredients)
        if score >= min_score:
            matches.append(
                PantryMatch(
                    meal=meal,
                    score=int(score * 100 + 0.5),
                    matched=tuple(matched),
                    missing=tuple(missing),
                )
            )

    logger.debug("%d of %d meals match pantry %s", len(matches), len(catalog), pantry)
    matches.sort(key=lambda m: m.score, reverse=True)
    return matches


def catalog_ingredients(catalog: MealCatalog) -> list[str]:
    """All distinct ingredient names used in the catalog, lower-cased and sorted."""
    return sorted({i.lower() for meal in catalog for i in meal.ingredients})
