"""User profile and the fixed lookups derived from it.

Daily calorie and protein targets come from a fixed table keyed by goal.
The cooking skill tier determines which meal difficulties may be planned;
tiers are inclusive, so every skill level can cook what the levels below it
can.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from desimeal.data.models import DietType, Difficulty
from desimeal.exceptions import ProfileError


class Goal(Enum):
    """Body weight goal."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


class CookingSkill(Enum):
    """Cooking skill tier."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


# (calories kcal, protein g) per day
GOAL_TARGETS: dict[Goal, tuple[int, int]] = {
    Goal.LOSE: (1600, 80),
    Goal.MAINTAIN: (2000, 60),
    Goal.GAIN: (2400, 100),
}

SKILL_DIFFICULTIES: dict[CookingSkill, frozenset[Difficulty]] = {
    CookingSkill.BEGINNER: frozenset({Difficulty.NO_COOK, Difficulty.EASY}),
    CookingSkill.INTERMEDIATE: frozenset(
        {Difficulty.NO_COOK, Difficulty.EASY, Difficulty.MEDIUM}
    ),
    CookingSkill.ADVANCED: frozenset(
        {Difficulty.NO_COOK, Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD}
    ),
}


def allowed_difficulties(skill: CookingSkill) -> frozenset[Difficulty]:
    """Difficulties a cook of the given skill tier may be planned."""
    return SKILL_DIFFICULTIES[skill]


def _parse_enum(enum_cls: type[Enum], field_name: str, value: Any) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ProfileError(field_name, value, [m.value for m in enum_cls]) from None


def _parse_number(field_name: str, value: Any, cast: type) -> Any:
    """Convert a numeric profile field, rejecting negatives."""
    choices = ["a non-negative number"]
    if isinstance(value, bool):
        raise ProfileError(field_name, value, choices)
    try:
        number = cast(value)
    except (TypeError, ValueError):
        raise ProfileError(field_name, value, choices) from None
    if number < 0:
        raise ProfileError(field_name, value, choices)
    return number


@dataclass(frozen=True)
class UserProfile:
    """Planning inputs for one user.

    Attributes:
        goal: Weight goal
        diet: Diet preference
        budget: Daily food budget (INR)
        cooking_skill: Cooking skill tier
        target_calories: Daily calorie target (kcal)
        target_protein: Daily protein target (g)
    """

    goal: Goal
    diet: DietType
    budget: float
    cooking_skill: CookingSkill
    target_calories: int
    target_protein: int

    @classmethod
    def for_goal(
        cls,
        goal: Goal,
        diet: DietType = DietType.VEG,
        budget: float = 150,
        cooking_skill: CookingSkill = CookingSkill.BEGINNER,
    ) -> "UserProfile":
        """Create a profile with targets looked up from the goal."""
        calories, protein = GOAL_TARGETS[goal]
        return cls(
            goal=goal,
            diet=diet,
            budget=budget,
            cooking_skill=cooking_skill,
            target_calories=calories,
            target_protein=protein,
        )

    def with_goal(self, goal: Goal) -> "UserProfile":
        """Return a copy with a new goal and re-derived targets."""
        calories, protein = GOAL_TARGETS[goal]
        return replace(self, goal=goal, target_calories=calories, target_protein=protein)

    @property
    def allowed_difficulties(self) -> frozenset[Difficulty]:
        return allowed_difficulties(self.cooking_skill)

    def to_dict(self) -> dict[str, Any]:
        return {
            "goal": self.goal.value,
            "diet": self.diet.value,
            "budget": self.budget,
            "cooking_skill": self.cooking_skill.value,
            "target_calories": self.target_calories,
            "target_protein": self.target_protein,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserProfile":
        """Build a profile from a dict such as a loaded YAML file.

        Missing targets are derived from the goal.

        Raises:
            ProfileError: If the data is not a mapping, or a field holds an
                invalid choice or a negative or non-numeric value
        """
        if not isinstance(data, dict):
            raise ProfileError(
                "profile",
                type(data).__name__,
                [],
                message=f"Profile must be a mapping of fields, not {type(data).__name__}",
            )

        goal = _parse_enum(Goal, "goal", data.get("goal", DEFAULT_PROFILE.goal.value))
        diet = _parse_enum(DietType, "diet", data.get("diet", DEFAULT_PROFILE.diet.value))
        skill = _parse_enum(
            CookingSkill,
            "cooking_skill",
            data.get("cooking_skill", DEFAULT_PROFILE.cooking_skill.value),
        )

        budget = _parse_number("budget", data.get("budget", DEFAULT_PROFILE.budget), float)
        calories, protein = GOAL_TARGETS[goal]
        target_calories = _parse_number(
            "target_calories", data.get("target_calories", calories), int
        )
        target_protein = _parse_number(
            "target_protein", data.get("target_protein", protein), int
        )

        return cls(
            goal=goal,
            diet=diet,
            budget=budget,
            cooking_skill=skill,
            target_calories=target_calories,
            target_protein=target_protein,
        )


DEFAULT_PROFILE = UserProfile.for_goal(Goal.MAINTAIN)
