"""Tests for diet statistics and strategy comparison."""

from __future__ import annotations

import pytest

from nrvdiet.catalog import Ingredient, IngredientNutrient, Macros, Meal
from nrvdiet.explore import (
    StrategyRun,
    compare_diets,
    compare_strategies,
    diet_stats,
    format_diet_comparison,
)
from nrvdiet.optimizer.models import Diet, DietMeal, DietMealIngredient
from nrvdiet.profiles import EnergyTargets, Goal


@pytest.fixture
def chicken(iron):
    """156.4 kcal/100g."""
    return Ingredient(
        name="Chicken Breast",
        macros=Macros(protein=31, carbs=0, fat=3.6),
        nutrients=(IngredientNutrient(nutrient=iron, amount=1.0),),
    )


def _diet(*meals):
    return Diet(
        meals=[
            DietMeal(
                meal=Meal(name, pct),
                ingredients=[DietMealIngredient(i, grams) for i, grams in items],
            )
            for name, pct, items in meals
        ]
    )


class TestDietStats:
    """Tests for diet totals."""

    def test_totals(self, iron, vitamin_c, chicken, orange):
        diet = _diet(
            ("Lunch", 60, [(chicken, 200), (orange, 100)]),
            ("Dinner", 40, [(chicken, 100)]),
        )
        stats = diet_stats(diet, [iron, vitamin_c])

        assert stats.macros.protein == pytest.approx(94)
        assert stats.calories == pytest.approx(3 * 156.4 + 53.8)
        assert stats.nutrient_totals == pytest.approx({"Iron": 3.0, "Vitamin C": 53.0})
        assert stats.nrv_percentages["Vitamin C"] == pytest.approx(66.25)
        assert stats.nrv_met == 0
        assert stats.unique_ingredients == 2
        assert stats.ingredient_names == ["Chicken Breast", "Orange"]
        assert stats.total_grams == 400
        assert sum(stats.macro_percentages.values()) == pytest.approx(100)

    def test_nrv_met(self, iron, lean_protein):
        stats = diet_stats(_diet(("Lunch", 100, [(lean_protein, 600)])), [iron])
        assert stats.nrv_met == 1

    def test_empty_diet(self, iron):
        stats = diet_stats(Diet(), [iron])
        assert stats.calories == 0
        assert stats.macro_percentages == {"protein": 0.0, "carbs": 0.0, "fat": 0.0}
        assert stats.unique_ingredients == 0


class TestCompare:
    """Tests for comparing two runs."""

    def test_differences(self, iron, vitamin_c, chicken, orange):
        nutrients = [iron, vitamin_c]
        diet_a = _diet(("Lunch", 100, [(chicken, 100)]))
        diet_b = _diet(("Lunch", 100, [(chicken, 200), (orange, 200)]))
        run_a = StrategyRun("greedy", diet_a, diet_stats(diet_a, nutrients), 0.01)
        run_b = StrategyRun("lp", diet_b, diet_stats(diet_b, nutrients), 0.02)

        comparison = compare_diets(run_a, run_b)

        assert comparison.protein_difference == pytest.approx(33)
        assert comparison.nrv_met_difference == 1
        assert comparison.ingredients_only_in_b == ["Orange"]
        assert comparison.ingredients_only_in_a == []
        assert comparison.ingredients_in_both == ["Chicken Breast"]

        formatted = format_diet_comparison(comparison)
        assert formatted["run_a"]["strategy"] == "greedy"
        assert formatted["ingredients"]["overlap_count"] == 1

    def test_compare_strategies(self, sample_catalog):
        targets = EnergyTargets(
            tdee=2300, calories=2300, macros=Macros(150, 250, 70), goal=Goal.MAINTAIN
        )
        comparison = compare_strategies(sample_catalog, targets)

        assert comparison.run_a.strategy == "greedy"
        assert comparison.run_b.strategy == "lp"
        assert comparison.run_a.elapsed_seconds >= 0
        assert len(comparison.run_b.diet.meals) == 4
