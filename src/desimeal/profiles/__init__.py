"""User profiles and goal/skill lookups."""

from __future__ import annotations

from desimeal.profiles.user_profile import (
    DEFAULT_PROFILE,
    GOAL_TARGETS,
    SKILL_DIFFICULTIES,
    CookingSkill,
    Goal,
    UserProfile,
    allowed_difficulties,
)

__all__ = [
    "DEFAULT_PROFILE",
    "GOAL_TARGETS",
    "SKILL_DIFFICULTIES",
    "CookingSkill",
    "Goal",
    "UserProfile",
    "allowed_difficulties",
]
