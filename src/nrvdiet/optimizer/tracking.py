"""Per-run accumulators for nutrient intake, macros and selections.

All state here is immutable: each update returns the next state, so one
selection run threads a single ``SelectionState`` through its loop and nothing
is shared across runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from nrvdiet.catalog.models import Ingredient, Macros, Nutrient
from nrvdiet.optimizer.models import IngredientSelection

FULL_NRV_PERCENTAGE = 100.0


@dataclass(frozen=True)
class NutrientLedger:
    """Cumulative nutrient intake against NRVs, keyed by nutrient name."""

    nutrients: dict[str, Nutrient] = field(default_factory=dict)
    consumed: dict[str, float] = field(default_factory=dict)

    @classmethod
    def start(cls, nutrients: Iterable[Nutrient]) -> NutrientLedger:
        by_name = {n.name: n for n in nutrients}
        return cls(nutrients=by_name, consumed={name: 0.0 for name in by_name})

    def percentage(self, name: str) -> float:
        """Percent of NRV consumed so far; always derived from consumed."""
        return self.consumed[name] / self.nutrients[name].nrv * 100

    def percentages(self) -> dict[str, float]:
        return {name: self.percentage(name) for name in self.nutrients}

    def remaining(self, name: str) -> float:
        return self.nutrients[name].nrv - self.consumed[name]

    def is_tracked(self, name: str) -> bool:
        return name in self.nutrients

    def is_deficient(self, name: str) -> bool:
        return name in self.nutrients and self.percentage(name) < FULL_NRV_PERCENTAGE

    def all_met(self) -> bool:
        return all(self.percentage(name) >= FULL_NRV_PERCENTAGE for name in self.nutrients)

    def with_ingredient(self, ingredient: Ingredient, grams: float) -> NutrientLedger:
        """Return the ledger after eating ``grams`` of ``ingredient``.

        Nutrients the ledger does not track are ignored.
        """
        factor = grams / 100
        consumed = dict(self.consumed)
        for content in ingredient.nutrients:
            name = content.nutrient.name
            if name in consumed:
                consumed[name] += content.amount * factor
        return NutrientLedger(nutrients=self.nutrients, consumed=consumed)


@dataclass(frozen=True)
class SelectionState:
    """Everything a selection run has accumulated so far."""

    ledger: NutrientLedger
    macros: Macros = Macros()
    selections: tuple[IngredientSelection, ...] = ()

    @classmethod
    def start(cls, nutrients: Iterable[Nutrient]) -> SelectionState:
        return cls(ledger=NutrientLedger.start(nutrients))

    @property
    def calories(self) -> float:
        return self.macros.calories

    def selected_amount(self, name: str) -> float:
        for selection in self.selections:
            if selection.ingredient.name == name:
                return selection.amount
        return 0.0

    def add(self, ingredient: Ingredient, grams: float) -> SelectionState:
        """Return the state after adding ``grams`` of ``ingredient``.

        Repeat picks of the same ingredient (by name) accumulate into one entry.
        """
        selections = list(self.selections)
        for i, selection in enumerate(selections):
            if selection.ingredient.name == ingredient.name:
                selections[i] = IngredientSelection(
                    ingredient=selection.ingredient,
                    amount=selection.amount + grams,
                )
                break
        else:
            selections.append(IngredientSelection(ingredient=ingredient, amount=grams))

        return SelectionState(
            ledger=self.ledger.with_ingredient(ingredient, grams),
            macros=self.macros + ingredient.macros.scaled(grams / 100),
            selections=tuple(selections),
        )
