"""Greedy nutrient-density selector.

Repeatedly picks the catalog ingredient that best covers the nutrients still
below their NRV while nudging the macro ratio toward target, adds a bounded
amount of it, and stops once every NRV is met or the calorie budget is nearly
used.

Scoring per candidate:
    score = sum over deficient nutrients of
                (amount_per_100g / kcal_per_100g) * (100 - pct_of_nrv) * 10
            + macro_balance_score * 5

Coverage is not guaranteed: the calorie ceiling usually ends the run first.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Sequence

from nrvdiet.catalog.models import Ingredient, KindLimits, Macros, Nutrient
from nrvdiet.config.settings import GreedyConfig, Settings
from nrvdiet.optimizer.tracking import FULL_NRV_PERCENTAGE, NutrientLedger, SelectionState

logger = logging.getLogger(__name__)

MACRO_NAMES = ("protein", "carbs", "fat")


def _ratios(macros: Macros) -> Optional[dict[str, float]]:
    total = macros.total_grams
    if total <= 0:
        return None
    return {name: getattr(macros, name) / total for name in MACRO_NAMES}


def calculate_macro_score(
    ingredient_macros: Macros,
    current_macros: Macros,
    target_macros: Macros,
    gap_weight: float = 2.0,
) -> float:
    """Score how well an ingredient pulls the current macro ratio toward target.

    A macro earns ``(ingredient_ratio - current_ratio) * gap_weight`` when the
    current ratio is below target and the ingredient is richer in it than the
    running total. With nothing eaten yet every ingredient scores 1.

    Args:
        ingredient_macros: Ingredient macros per 100g
        current_macros: Macros accumulated so far
        target_macros: Macro gram targets
        gap_weight: Multiplier on each rewarded gap

    Returns:
        Non-negative macro balance score
    """
    current = _ratios(current_macros)
    if current is None:
        return 1.0

    ingredient = _ratios(ingredient_macros)
    if ingredient is None:
        return 0.0

    target = _ratios(target_macros) or {name: 0.0 for name in MACRO_NAMES}

    score = 0.0
    for name in MACRO_NAMES:
        if current[name] < target[name] and ingredient[name] > current[name]:
            score += (ingredient[name] - current[name]) * gap_weight
    return score


def calculate_ingredient_score(
    ingredient: Ingredient,
    ledger: NutrientLedger,
    current_macros: Macros,
    target_macros: Macros,
    remaining_calories: float,
    config: Optional[GreedyConfig] = None,
) -> float:
    """Score an ingredient against current deficiencies and macro balance."""
    config = config or GreedyConfig()
    calories_per_100g = ingredient.calories_per_100g

    if calories_per_100g > remaining_calories:
        return config.over_budget_score

    score = 0.0
    # Density is undefined for calorie-free ingredients; they earn nothing here
    if calories_per_100g > 0:
        for content in ingredient.nutrients:
            name = content.nutrient.name
            if ledger.is_deficient(name):
                deficiency = FULL_NRV_PERCENTAGE - ledger.percentage(name)
                density = content.amount / calories_per_100g
                score += density * deficiency * config.density_weight

    macro_score = calculate_macro_score(
        ingredient.macros, current_macros, target_macros, config.macro_gap_weight
    )
    return score + macro_score * config.macro_weight


def find_best_ingredient(
    ingredients: Sequence[Ingredient],
    state: SelectionState,
    target_macros: Macros,
    remaining_calories: float,
    config: Optional[GreedyConfig] = None,
    excluded: Optional[set[str]] = None,
) -> Optional[tuple[Ingredient, float]]:
    """Return the highest-scoring ingredient and its score.

    Ties go to the ingredient seen first in catalog order.
    """
    excluded = excluded or set()
    best: Optional[Ingredient] = None
    best_score = float("-inf")

    for ingredient in ingredients:
        if ingredient.name in excluded:
            continue
        score = calculate_ingredient_score(
            ingredient,
            state.ledger,
            state.macros,
            target_macros,
            remaining_calories,
            config,
        )
        if score > best_score:
            best_score = score
            best = ingredient

    if best is None:
        return None
    return best, best_score


def calculate_macro_limited_amount(
    ingredient_macros: Macros,
    current_macros: Macros,
    target_macros: Macros,
    config: Optional[GreedyConfig] = None,
) -> float:
    """Largest grams addable before any macro target is exceeded, plus a buffer."""
    config = config or GreedyConfig()
    limits = []

    for name in MACRO_NAMES:
        per_100g = getattr(ingredient_macros, name)
        if per_100g > 0:
            limit = (getattr(target_macros, name) - getattr(current_macros, name)) / per_100g * 100
            if limit > 0:
                limits.append(limit)

    if not limits:
        return config.default_macro_limit_grams
    return min(limits) * config.macro_buffer


def calculate_optimal_amount(
    ingredient: Ingredient,
    state: SelectionState,
    target_macros: Macros,
    remaining_calories: float,
    limits: KindLimits,
    config: Optional[GreedyConfig] = None,
) -> float:
    """Grams of ``ingredient`` to add this iteration.

    Starts from a share of the remaining calorie budget, is capped by the most
    limiting deficient nutrient (with overshoot allowance) and by the macro
    targets, then clamped to the kind's practical bounds and to whatever
    headroom is left under ``limits.max_grams`` for this ingredient.

    Returns:
        Whole grams; 0 when the headroom is below ``limits.min_grams``
    """
    config = config or GreedyConfig()
    calories_per_100g = ingredient.calories_per_100g

    if calories_per_100g > 0:
        amount = remaining_calories * config.budget_share / (calories_per_100g / 100)
    else:
        amount = limits.max_grams

    ledger = state.ledger
    for content in ingredient.nutrients:
        name = content.nutrient.name
        if ledger.is_deficient(name) and content.amount > 0:
            amount_to_meet_need = ledger.remaining(name) / content.amount * 100
            amount = min(amount, amount_to_meet_need * config.nutrient_overshoot)

    amount = min(
        amount,
        calculate_macro_limited_amount(ingredient.macros, state.macros, target_macros, config),
    )

    amount = max(limits.min_grams, min(limits.max_grams, round(amount)))

    headroom = limits.max_grams - state.selected_amount(ingredient.name)
    if headroom < limits.min_grams:
        return 0
    return min(amount, headroom)


def iter_selection_states(
    ingredients: Sequence[Ingredient],
    nutrients: Sequence[Nutrient],
    target_macros: Macros,
    target_calories: float,
    settings: Optional[Settings] = None,
) -> Iterator[SelectionState]:
    """Run the greedy loop, yielding the initial state and every state after a pick."""
    settings = settings or Settings()
    config = settings.greedy

    state = SelectionState.start(nutrients)
    excluded: set[str] = set()
    yield state

    for iteration in range(config.max_iterations):
        if state.ledger.all_met():
            logger.debug("All NRVs met after %d iterations", iteration)
            return
        if state.calories >= target_calories * config.calorie_fill_ratio:
            logger.debug("Calorie budget reached after %d iterations", iteration)
            return

        remaining_calories = target_calories - state.calories
        best = find_best_ingredient(
            ingredients, state, target_macros, remaining_calories, config, excluded
        )
        if best is None:
            logger.debug("No candidate ingredients left")
            return

        ingredient, score = best
        kind_limits = settings.limits[ingredient.kind]
        amount = calculate_optimal_amount(
            ingredient, state, target_macros, remaining_calories, kind_limits, config
        )

        if amount <= 0:
            # Re-picking it would stall the loop
            excluded.add(ingredient.name)
            continue

        logger.debug("Picked %s (score %.2f): %sg", ingredient.name, score, amount)
        state = state.add(ingredient, amount)
        yield state

    logger.warning(
        "Greedy selection stopped at the %d-iteration cap", config.max_iterations
    )


def select_ingredients(
    ingredients: Sequence[Ingredient],
    nutrients: Sequence[Nutrient],
    target_macros: Macros,
    target_calories: float,
    settings: Optional[Settings] = None,
) -> SelectionState:
    """Run the greedy loop to completion and return the final state."""
    state = None
    for state in iter_selection_states(
        ingredients, nutrients, target_macros, target_calories, settings
    ):
        pass
    return state
