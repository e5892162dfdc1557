"""Ingredient selection engine for diet planning."""

from nrvdiet.optimizer.models import (
    Diet,
    DietMeal,
    DietMealIngredient,
    IngredientSelection,
)
from nrvdiet.optimizer.planner import (
    GreedyStrategy,
    LinearProgramStrategy,
    SelectionStrategy,
    StrategyName,
    get_strategy,
    optimize,
    plan_diet,
)

__all__ = [
    "Diet",
    "DietMeal",
    "DietMealIngredient",
    "GreedyStrategy",
    "IngredientSelection",
    "LinearProgramStrategy",
    "SelectionStrategy",
    "StrategyName",
    "get_strategy",
    "optimize",
    "plan_diet",
]
