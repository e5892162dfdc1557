"""Data models for selections and diets."""

from __future__ import annotations

from dataclasses import dataclass, field

from nrvdiet.catalog.models import Ingredient, Macros, Meal


@dataclass(frozen=True)
class IngredientSelection:
    """Total grams of one ingredient chosen by a selector."""

    ingredient: Ingredient
    amount: float  # grams

    @property
    def macros(self) -> Macros:
        return self.ingredient.macros.scaled(self.amount / 100)

    @property
    def calories(self) -> float:
        return self.macros.calories


@dataclass(frozen=True)
class DietMealIngredient:
    """An ingredient portion inside one meal."""

    ingredient: Ingredient
    amount: float  # grams


@dataclass
class DietMeal:
    """A meal with its allocated ingredients."""

    meal: Meal
    ingredients: list[DietMealIngredient] = field(default_factory=list)

    @property
    def macros(self) -> Macros:
        total = Macros()
        for item in self.ingredients:
            total = total + item.ingredient.macros.scaled(item.amount / 100)
        return total

    @property
    def calories(self) -> float:
        return self.macros.calories


@dataclass
class Diet:
    """Final plan: one entry per input meal, in input order."""

    meals: list[DietMeal] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return all(not m.ingredients for m in self.meals)

    def to_dict(self) -> dict:
        return {
            "meals": [
                {
                    "name": dm.meal.name,
                    "kcal_percentage": dm.meal.kcal_percentage,
                    "calories": round(dm.calories, 0),
                    "ingredients": [
                        {"name": item.ingredient.name, "grams": item.amount}
                        for item in dm.ingredients
                    ],
                }
                for dm in self.meals
            ]
        }


def total_macros(selections: list[IngredientSelection]) -> Macros:
    """Sum macros over a flat selection list."""
    total = Macros()
    for selection in selections:
        total = total + selection.macros
    return total
