"""Energy model: TDEE, goal-adjusted calories and macro gram targets.

Uses the Katch-McArdle equation, which works from lean body mass and is the
better fit when body fat percentage is known.
"""

from __future__ import annotations

from typing import Optional

from nrvdiet.catalog.models import (
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
    Macros,
)
from nrvdiet.config.settings import EnergyConfig
from nrvdiet.profiles.models import (
    ActivityLevel,
    EnergyTargets,
    Goal,
    PersonAttributes,
    Sex,
    TargetMacros,
)


def calculate_lean_mass(body_weight_kg: float, body_fat_percentage: float) -> float:
    """Body weight minus estimated fat mass, in kg."""
    return body_weight_kg * (1 - body_fat_percentage / 100)


def calculate_bmr(lean_mass_kg: float, config: Optional[EnergyConfig] = None) -> float:
    """Basal Metabolic Rate: 370 + 21.6 * lean mass."""
    config = config or EnergyConfig()
    return config.bmr_intercept + config.bmr_per_kg_lean_mass * lean_mass_kg


def calculate_tdee(
    sex: Sex,
    age: int,
    body_weight_kg: float,
    body_fat_percentage: float,
    activity_level: ActivityLevel,
    config: Optional[EnergyConfig] = None,
) -> float:
    """Calculate Total Daily Energy Expenditure.

    ``sex`` and ``age`` are accepted for interface completeness; the lean-mass
    formula does not use them.

    Args:
        sex: Biological sex
        age: Age in years
        body_weight_kg: Body weight in kg
        body_fat_percentage: Body fat percent (0-100)
        activity_level: Activity level
        config: Alternate energy tables

    Returns:
        TDEE in kcal per day
    """
    config = config or EnergyConfig()
    lean_mass = calculate_lean_mass(body_weight_kg, body_fat_percentage)
    bmr = calculate_bmr(lean_mass, config)
    return bmr * config.activity_multipliers[activity_level]


def adjust_for_goal(
    tdee: float,
    goal: Goal,
    body_weight_kg: float,
    config: Optional[EnergyConfig] = None,
) -> float:
    """Adjust TDEE for the body composition goal.

    Args:
        tdee: Total Daily Energy Expenditure
        goal: Body composition goal
        body_weight_kg: Body weight, selects the minimum safe intake
        config: Alternate energy tables

    Returns:
        Target calories per day
    """
    config = config or EnergyConfig()

    if goal is Goal.BUILD_MUSCLE:
        return tdee * config.build_muscle_factor
    if goal is Goal.LOSE_FAT:
        if body_weight_kg < config.min_intake_weight_threshold_kg:
            min_intake = config.min_intake_below_threshold
        else:
            min_intake = config.min_intake_at_or_above_threshold
        return max(tdee * config.lose_fat_factor, min_intake)
    if goal is Goal.MAINTAIN:
        return tdee

    raise ValueError(f"Unsupported goal: {goal!r}")


def calculate_target_macros(calories: float, target_macros: TargetMacros) -> Macros:
    """Convert calorie percentages into gram targets.

    Percentages are used as given; no renormalization to 100.
    """
    return Macros(
        protein=calories * target_macros.protein_percentage / 100 / KCAL_PER_G_PROTEIN,
        carbs=calories * target_macros.carbs_percentage / 100 / KCAL_PER_G_CARBS,
        fat=calories * target_macros.fat_percentage / 100 / KCAL_PER_G_FAT,
    )


def calculate_targets(
    person: PersonAttributes,
    goal: Goal,
    target_macros: TargetMacros,
    config: Optional[EnergyConfig] = None,
) -> EnergyTargets:
    """Calculate TDEE, target calories and macro grams in one call."""
    tdee = calculate_tdee(
        person.sex,
        person.age,
        person.body_weight_kg,
        person.body_fat_percentage,
        person.activity_level,
        config,
    )
    calories = adjust_for_goal(tdee, goal, person.body_weight_kg, config)
    macros = calculate_target_macros(calories, target_macros)
    return EnergyTargets(tdee=tdee, calories=calories, macros=macros, goal=goal)
