"""Person profiles and the energy model."""

from nrvdiet.profiles.energy import (
    adjust_for_goal,
    calculate_target_macros,
    calculate_targets,
    calculate_tdee,
)
from nrvdiet.profiles.models import (
    ActivityLevel,
    EnergyTargets,
    Goal,
    PersonAttributes,
    Sex,
    TargetMacros,
)

__all__ = [
    "ActivityLevel",
    "EnergyTargets",
    "Goal",
    "PersonAttributes",
    "Sex",
    "TargetMacros",
    "adjust_for_goal",
    "calculate_target_macros",
    "calculate_targets",
    "calculate_tdee",
]
