"""Post-selection macro balancing.

Runs once on the greedy result. A selection well short of its calorie target
is scaled up in one step; otherwise amounts of ingredients dominated by an
under-target macro are nudged up 5% per pass for a bounded number of passes.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from nrvdiet.catalog.models import IngredientKind, KindLimits, Macros
from nrvdiet.config.settings import BalancerConfig, Settings
from nrvdiet.optimizer.greedy import MACRO_NAMES
from nrvdiet.optimizer.models import IngredientSelection, total_macros


def dominant_macro(macros: Macros) -> Optional[str]:
    """Name of the macro strictly larger than the other two, if any."""
    values = {name: getattr(macros, name) for name in MACRO_NAMES}
    for name, value in values.items():
        if all(value > other for other_name, other in values.items() if other_name != name):
            return name
    return None


def scale_to_calories(
    selections: Sequence[IngredientSelection],
    target_calories: float,
    limits: dict[IngredientKind, KindLimits],
    config: Optional[BalancerConfig] = None,
) -> list[IngredientSelection]:
    """Scale every amount by target/current calories, within per-kind ceilings.

    Supplements are scaled by at most ``supplement_max_scale``.
    """
    config = config or BalancerConfig()
    current_calories = total_macros(list(selections)).calories
    if current_calories <= 0:
        return list(selections)

    scale = target_calories / current_calories
    scaled = []
    for selection in selections:
        ingredient = selection.ingredient
        factor = scale
        if ingredient.is_supplement:
            factor = min(scale, config.supplement_max_scale)
        amount = min(limits[ingredient.kind].max_grams, selection.amount * factor)
        scaled.append(replace(selection, amount=amount))
    return scaled


def balance_macros(
    selections: Sequence[IngredientSelection],
    target_macros: Macros,
    target_calories: float,
    settings: Optional[Settings] = None,
) -> list[IngredientSelection]:
    """Refine selected amounts toward the calorie and macro targets.

    Args:
        selections: Greedy selection (ingredient -> total grams)
        target_macros: Macro gram targets
        target_calories: Daily calorie target
        settings: Alternate limit and balancer tables

    Returns:
        New selection list in the same order; the input is not modified
    """
    settings = settings or Settings()
    config = settings.balancer
    limits = settings.limits

    current = total_macros(list(selections))
    if target_calories - current.calories > target_calories * config.calorie_tolerance:
        return scale_to_calories(selections, target_calories, limits, config)

    balanced = list(selections)
    for _ in range(config.max_passes):
        gaps = target_macros - current
        gap_by_name = {name: getattr(gaps, name) for name in MACRO_NAMES}

        adjusted = []
        for selection in balanced:
            ingredient = selection.ingredient
            name = dominant_macro(ingredient.macros)
            if name is not None and gap_by_name[name] > config.gap_tolerance_grams:
                amount = min(
                    limits[ingredient.kind].max_grams,
                    selection.amount * (1 + config.step),
                )
                selection = replace(selection, amount=amount)
            adjusted.append(selection)

        balanced = adjusted
        current = total_macros(balanced)

        if all(abs(gap) < config.gap_tolerance_grams for gap in gap_by_name.values()):
            break

    return balanced
