"""Summarize diets and compare selection strategies side by side."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from nrvdiet.catalog.models import (
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
    Catalog,
    Macros,
    Nutrient,
)
from nrvdiet.config.settings import Settings
from nrvdiet.optimizer.models import Diet
from nrvdiet.optimizer.planner import SelectionStrategy, StrategyName, plan_diet
from nrvdiet.optimizer.tracking import FULL_NRV_PERCENTAGE
from nrvdiet.profiles.models import EnergyTargets


@dataclass
class DietStats:
    """Totals for one diet across all of its meals."""

    calories: float
    macros: Macros
    macro_percentages: dict[str, float]
    nutrient_totals: dict[str, float]
    nrv_percentages: dict[str, float]
    nrv_met: int
    unique_ingredients: int
    total_grams: float
    ingredient_names: list[str]


@dataclass
class StrategyRun:
    """A diet produced by one strategy, with how long it took."""

    strategy: str
    diet: Diet
    stats: DietStats
    elapsed_seconds: float


@dataclass
class DietComparison:
    """Comparison between two strategy runs."""

    run_a: StrategyRun
    run_b: StrategyRun
    calorie_difference: float
    protein_difference: float
    nrv_met_difference: int
    ingredients_only_in_a: list[str]
    ingredients_only_in_b: list[str]
    ingredients_in_both: list[str]


def diet_stats(diet: Diet, nutrients: Sequence[Nutrient]) -> DietStats:
    """Compute totals for a diet.

    Args:
        diet: Diet to summarize
        nutrients: Catalog nutrients; only these are totalled

    Returns:
        DietStats with macro calorie shares (all 0 for an empty diet)
    """
    macros = Macros()
    totals = {n.name: 0.0 for n in nutrients}
    total_grams = 0.0
    names: list[str] = []

    for diet_meal in diet.meals:
        for item in diet_meal.ingredients:
            factor = item.amount / 100
            macros = macros + item.ingredient.macros.scaled(factor)
            total_grams += item.amount
            if item.ingredient.name not in names:
                names.append(item.ingredient.name)
            for content in item.ingredient.nutrients:
                if content.nutrient.name in totals:
                    totals[content.nutrient.name] += content.amount * factor

    calories = macros.calories
    if calories > 0:
        macro_percentages = {
            "protein": macros.protein * KCAL_PER_G_PROTEIN / calories * 100,
            "carbs": macros.carbs * KCAL_PER_G_CARBS / calories * 100,
            "fat": macros.fat * KCAL_PER_G_FAT / calories * 100,
        }
    else:
        macro_percentages = {"protein": 0.0, "carbs": 0.0, "fat": 0.0}

    nrv_percentages = {n.name: totals[n.name] / n.nrv * 100 for n in nutrients}
    nrv_met = sum(1 for pct in nrv_percentages.values() if pct >= FULL_NRV_PERCENTAGE)

    return DietStats(
        calories=calories,
        macros=macros,
        macro_percentages=macro_percentages,
        nutrient_totals=totals,
        nrv_percentages=nrv_percentages,
        nrv_met=nrv_met,
        unique_ingredients=len(names),
        total_grams=total_grams,
        ingredient_names=names,
    )


def run_strategy(
    catalog: Catalog,
    targets: EnergyTargets,
    strategy: Union[str, StrategyName, SelectionStrategy],
    settings: Optional[Settings] = None,
) -> StrategyRun:
    """Plan a diet with one strategy and time it."""
    start_time = time.time()
    diet = plan_diet(catalog, targets, strategy, settings)
    elapsed = time.time() - start_time

    if isinstance(strategy, (str, StrategyName)):
        label = StrategyName(strategy).value
    else:
        label = strategy.name.value

    return StrategyRun(
        strategy=label,
        diet=diet,
        stats=diet_stats(diet, catalog.nutrients),
        elapsed_seconds=elapsed,
    )


def compare_diets(run_a: StrategyRun, run_b: StrategyRun) -> DietComparison:
    """Compare two runs; differences are b minus a."""
    names_a = set(run_a.stats.ingredient_names)
    names_b = set(run_b.stats.ingredient_names)

    return DietComparison(
        run_a=run_a,
        run_b=run_b,
        calorie_difference=run_b.stats.calories - run_a.stats.calories,
        protein_difference=run_b.stats.macros.protein - run_a.stats.macros.protein,
        nrv_met_difference=run_b.stats.nrv_met - run_a.stats.nrv_met,
        ingredients_only_in_a=sorted(names_a - names_b),
        ingredients_only_in_b=sorted(names_b - names_a),
        ingredients_in_both=sorted(names_a & names_b),
    )


def compare_strategies(
    catalog: Catalog,
    targets: EnergyTargets,
    settings: Optional[Settings] = None,
    strategy_a: Union[str, StrategyName, SelectionStrategy] = StrategyName.GREEDY,
    strategy_b: Union[str, StrategyName, SelectionStrategy] = StrategyName.LP,
) -> DietComparison:
    """Run two strategies on the same inputs and compare the results."""
    settings = settings or Settings()
    return compare_diets(
        run_strategy(catalog, targets, strategy_a, settings),
        run_strategy(catalog, targets, strategy_b, settings),
    )


def _format_run(run: StrategyRun) -> dict[str, Any]:
    stats = run.stats
    return {
        "strategy": run.strategy,
        "elapsed_seconds": round(run.elapsed_seconds, 3),
        "calories": round(stats.calories, 0),
        "protein": round(stats.macros.protein, 1),
        "carbs": round(stats.macros.carbs, 1),
        "fat": round(stats.macros.fat, 1),
        "macro_percentages": {k: round(v, 1) for k, v in stats.macro_percentages.items()},
        "nrv_met": stats.nrv_met,
        "unique_ingredients": stats.unique_ingredients,
        "total_grams": round(stats.total_grams, 0),
    }


def format_diet_comparison(comparison: DietComparison) -> dict[str, Any]:
    """Format a comparison for JSON output."""
    return {
        "run_a": _format_run(comparison.run_a),
        "run_b": _format_run(comparison.run_b),
        "differences": {
            "calories": round(comparison.calorie_difference, 0),
            "protein": round(comparison.protein_difference, 1),
            "nrv_met": comparison.nrv_met_difference,
        },
        "ingredients": {
            "only_in_a": comparison.ingredients_only_in_a,
            "only_in_b": comparison.ingredients_only_in_b,
            "in_both": comparison.ingredients_in_both,
            "overlap_count": len(comparison.ingredients_in_both),
        },
    }
