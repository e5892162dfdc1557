"""Distribute a flat ingredient selection into meals.

Uses simple name keywords to put breakfast-style foods early and dinner-style
foods late, then fills each meal up to its share of the daily calories from
the remaining pool of every ingredient. Anything left afterwards goes to the
largest meal.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from nrvdiet.catalog.models import Ingredient, Meal
from nrvdiet.config.settings import DistributionConfig, Settings
from nrvdiet.optimizer.models import (
    Diet,
    DietMeal,
    DietMealIngredient,
    IngredientSelection,
)

logger = logging.getLogger(__name__)

BREAKFAST_RANK = 0
ANYTIME_RANK = 1
DINNER_RANK = 2


def get_meal_timing_rank(name: str, config: Optional[DistributionConfig] = None) -> int:
    """Rank a food by typical meal timing (0 early, 1 anytime, 2 late).

    Args:
        name: Ingredient name
        config: Keyword tables

    Returns:
        Sort rank; breakfast keywords win over dinner keywords
    """
    config = config or DistributionConfig()
    name_lower = name.lower()

    if any(keyword in name_lower for keyword in config.breakfast_keywords):
        return BREAKFAST_RANK
    if any(keyword in name_lower for keyword in config.dinner_keywords):
        return DINNER_RANK
    return ANYTIME_RANK


def sort_by_meal_timing(
    selections: Sequence[IngredientSelection],
    config: Optional[DistributionConfig] = None,
) -> list[IngredientSelection]:
    """Stable sort: breakfast foods first, dinner foods last."""
    return sorted(
        selections,
        key=lambda s: get_meal_timing_rank(s.ingredient.name, config),
    )


def _add_to_meal(diet_meal: DietMeal, ingredient: Ingredient, grams: float) -> None:
    """Add grams to a meal, merging with an existing entry for the ingredient."""
    for i, item in enumerate(diet_meal.ingredients):
        if item.ingredient.name == ingredient.name:
            diet_meal.ingredients[i] = replace(item, amount=item.amount + grams)
            return
    diet_meal.ingredients.append(DietMealIngredient(ingredient=ingredient, amount=grams))


def _amount_in_meal(diet_meal: DietMeal, ingredient: Ingredient) -> float:
    return sum(
        item.amount for item in diet_meal.ingredients
        if item.ingredient.name == ingredient.name
    )


def distribute_to_meals(
    selections: Sequence[IngredientSelection],
    meals: Sequence[Meal],
    target_calories: float,
    settings: Optional[Settings] = None,
) -> Diet:
    """Split a flat selection into per-meal allocations.

    Algorithm:
    1. Sort the selection by meal timing keywords
    2. For each meal (in input order), take from each ingredient's remaining
       pool the portion that fits the meal's remaining calorie budget, skipping
       portions of 10% or less of what remains; cap supplements per meal
    3. Stop filling a meal once it reaches 95% of its budget
    4. Put leftovers above the kind's minimum into the largest meal;
       supplement leftovers that would break the per-meal cap spill into the
       other meals, largest first

    Args:
        selections: Ingredient -> total grams
        meals: Meals with their percentage of daily calories
        target_calories: Daily calorie target
        settings: Alternate limit and distribution tables

    Returns:
        Diet with one entry per meal, in input order
    """
    settings = settings or Settings()
    config = settings.distribution
    limits = settings.limits

    if not meals:
        return Diet()

    ordered = sort_by_meal_timing(selections, config)
    pool = [s.amount for s in ordered]
    diet_meals = [DietMeal(meal=meal) for meal in meals]

    for diet_meal in diet_meals:
        meal_calories = target_calories * diet_meal.meal.kcal_percentage / 100
        current_calories = 0.0

        for i, selection in enumerate(ordered):
            if current_calories >= meal_calories * config.meal_fill_ratio:
                break

            remaining = pool[i]
            if remaining <= 0:
                continue

            ingredient = selection.ingredient
            calories_per_100g = ingredient.calories_per_100g
            ingredient_calories = remaining / 100 * calories_per_100g

            if ingredient_calories > 0:
                portion = min(1.0, (meal_calories - current_calories) / ingredient_calories)
            else:
                portion = 1.0

            if portion <= config.min_portion_ratio:
                continue

            amount = remaining * portion
            per_meal_cap = limits[ingredient.kind].per_meal_max_grams
            if per_meal_cap is not None:
                amount = min(amount, per_meal_cap)

            grams = round(amount)
            if grams <= 0:
                continue

            diet_meal.ingredients.append(DietMealIngredient(ingredient=ingredient, amount=grams))
            current_calories += grams / 100 * calories_per_100g
            pool[i] -= grams

    # Leftovers: largest meal first (first one wins ties), then by size
    largest = max(range(len(meals)), key=lambda idx: meals[idx].kcal_percentage)
    others = sorted(
        (idx for idx in range(len(meals)) if idx != largest),
        key=lambda idx: -meals[idx].kcal_percentage,
    )
    spill_order = [largest] + others

    for i, selection in enumerate(ordered):
        ingredient = selection.ingredient
        kind_limits = limits[ingredient.kind]
        if pool[i] <= kind_limits.min_grams:
            continue

        leftover = round(pool[i])
        per_meal_cap = kind_limits.per_meal_max_grams

        if per_meal_cap is None:
            _add_to_meal(diet_meals[largest], ingredient, leftover)
            continue

        for idx in spill_order:
            room = int(per_meal_cap - _amount_in_meal(diet_meals[idx], ingredient))
            if room <= 0:
                continue
            grams = min(leftover, room)
            _add_to_meal(diet_meals[idx], ingredient, grams)
            leftover -= grams
            if leftover <= 0:
                break

        if leftover > 0:
            logger.warning(
                "Dropped %sg of %s: every meal is at its per-meal cap",
                leftover,
                ingredient.name,
            )

    return Diet(meals=diet_meals)
