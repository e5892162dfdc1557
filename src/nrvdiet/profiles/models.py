"""Person attributes, goals and energy targets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from nrvdiet.catalog.models import Macros


class Sex(Enum):
    """Biological sex (accepted, not used by the lean-mass BMR formula)."""
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """Activity level for the TDEE multiplier."""
    SEDENTARY = "sedentary"          # Little or no exercise
    LIGHT = "light"                  # Light exercise 1-3 days/week
    MODERATE = "moderate"            # Moderate exercise 3-5 days/week
    VERY = "very"                    # Hard exercise 6-7 days/week


class Goal(Enum):
    """Body composition goal."""
    BUILD_MUSCLE = "build-muscle"    # Calorie surplus
    LOSE_FAT = "lose-fat"            # Calorie deficit with a safety floor
    MAINTAIN = "maintain"            # TDEE


@dataclass(frozen=True)
class PersonAttributes:
    """Physiological inputs for the energy model."""

    sex: Sex
    age: int
    body_weight_kg: float
    body_fat_percentage: float
    activity_level: ActivityLevel


@dataclass(frozen=True)
class TargetMacros:
    """Macro split as percentages of daily calories.

    Not renormalized: the caller is responsible for a sensible split.
    """

    protein_percentage: float
    carbs_percentage: float
    fat_percentage: float


@dataclass(frozen=True)
class EnergyTargets:
    """Calculated energy and macro targets."""

    tdee: float
    calories: float
    macros: Macros
    goal: Goal

    def to_dict(self) -> dict:
        return {
            "goal": self.goal.value,
            "tdee": round(self.tdee, 1),
            "calories": round(self.calories, 1),
            "macros": {k: round(v, 1) for k, v in self.macros.as_dict().items()},
        }
