"""Optimizer entry point and interchangeable selection strategies."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol, Union

from nrvdiet.catalog.models import Catalog
from nrvdiet.config.settings import Settings
from nrvdiet.optimizer.balancer import balance_macros
from nrvdiet.optimizer.greedy import select_ingredients
from nrvdiet.optimizer.lp import select_ingredients_lp
from nrvdiet.optimizer.models import Diet, IngredientSelection
from nrvdiet.profiles.energy import calculate_targets
from nrvdiet.profiles.models import EnergyTargets, Goal, PersonAttributes, TargetMacros


class StrategyName(Enum):
    """Available selection strategies."""

    GREEDY = "greedy"
    LP = "lp"


class SelectionStrategy(Protocol):
    """Turns energy targets and a catalog into ingredient -> total grams."""

    name: StrategyName

    def select(
        self, catalog: Catalog, targets: EnergyTargets, settings: Settings
    ) -> list[IngredientSelection]:
        ...


class GreedyStrategy:
    """Greedy nutrient-density selection followed by macro balancing."""

    name = StrategyName.GREEDY

    def select(
        self, catalog: Catalog, targets: EnergyTargets, settings: Settings
    ) -> list[IngredientSelection]:
        state = select_ingredients(
            catalog.ingredients,
            catalog.nutrients,
            targets.macros,
            targets.calories,
            settings,
        )
        return balance_macros(
            state.selections, targets.macros, targets.calories, settings
        )


class LinearProgramStrategy:
    """LP selection with the fallback diet when the solve is unusable."""

    name = StrategyName.LP

    def select(
        self, catalog: Catalog, targets: EnergyTargets, settings: Settings
    ) -> list[IngredientSelection]:
        return select_ingredients_lp(
            catalog.ingredients,
            catalog.nutrients,
            targets.macros,
            targets.calories,
            settings,
        )


STRATEGIES: dict[StrategyName, type] = {
    StrategyName.GREEDY: GreedyStrategy,
    StrategyName.LP: LinearProgramStrategy,
}


def get_strategy(name: Union[str, StrategyName]) -> SelectionStrategy:
    """Look up a strategy by name ("greedy" or "lp")."""
    return STRATEGIES[StrategyName(name)]()


def plan_diet(
    catalog: Catalog,
    targets: EnergyTargets,
    strategy: Union[str, StrategyName, SelectionStrategy] = StrategyName.GREEDY,
    settings: Optional[Settings] = None,
) -> Diet:
    """Select ingredients for precomputed targets and split them into meals."""
    # Imported here: the distributor imports optimizer.models
    from nrvdiet.export.meal_distributor import distribute_to_meals

    settings = settings or Settings()
    if isinstance(strategy, (str, StrategyName)):
        strategy = get_strategy(strategy)

    selections = strategy.select(catalog, targets, settings)
    return distribute_to_meals(selections, catalog.meals, targets.calories, settings)


def optimize(
    person: PersonAttributes,
    goal: Goal,
    target_macros: TargetMacros,
    catalog: Catalog,
    strategy: Union[str, StrategyName, SelectionStrategy] = StrategyName.GREEDY,
    settings: Optional[Settings] = None,
) -> Diet:
    """Compute a one-day diet for a person.

    Args:
        person: Physiological inputs
        goal: Body composition goal
        target_macros: Macro split as calorie percentages
        catalog: Nutrients, ingredients and meals
        strategy: "greedy", "lp" or any object with a matching ``select``
        settings: Alternate configuration tables

    Returns:
        Diet with one entry per catalog meal, in catalog order. An empty
        catalog yields meals without ingredients rather than an error.
    """
    settings = settings or Settings()
    targets = calculate_targets(person, goal, target_macros, settings.energy)
    return plan_diet(catalog, targets, strategy, settings)
