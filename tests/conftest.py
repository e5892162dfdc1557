"""Pytest fixtures for nrvdiet tests."""

from __future__ import annotations

import pytest

from nrvdiet.catalog import (
    Catalog,
    Ingredient,
    IngredientKind,
    IngredientNutrient,
    Macros,
    Meal,
    Nutrient,
    build_sample_catalog,
)
from nrvdiet.config import Settings


@pytest.fixture
def iron():
    return Nutrient(name="Iron", nrv=14, unit="mg")


@pytest.fixture
def vitamin_c():
    return Nutrient(name="Vitamin C", nrv=80, unit="mg")


@pytest.fixture
def lean_protein(iron):
    """125 kcal/100g: 20g protein, 5g fat, 2.8mg iron."""
    return Ingredient(
        name="Lean Protein",
        macros=Macros(protein=20, carbs=0, fat=5),
        nutrients=(IngredientNutrient(nutrient=iron, amount=2.8),),
    )


@pytest.fixture
def orange(vitamin_c):
    return Ingredient(
        name="Orange",
        macros=Macros(protein=1, carbs=12, fat=0.2),
        nutrients=(IngredientNutrient(nutrient=vitamin_c, amount=53),),
    )


@pytest.fixture
def iron_supplement(iron):
    """Calorie-free supplement: 1400mg iron per 100g (14mg per gram)."""
    return Ingredient(
        name="Iron Supplement",
        macros=Macros(),
        nutrients=(IngredientNutrient(nutrient=iron, amount=1400),),
        kind=IngredientKind.SUPPLEMENT,
    )


@pytest.fixture
def omega3():
    return Nutrient(name="Omega-3 fatty acids", nrv=250, unit="mg")


@pytest.fixture
def omega3_supplement(omega3):
    """Fish oil capsule built from its name only: 9 kcal and 300mg omega-3 per 100g."""
    return Ingredient(
        name="Omega-3 Supplement",
        macros=Macros(fat=1),
        nutrients=(IngredientNutrient(nutrient=omega3, amount=300),),
    )


@pytest.fixture
def small_catalog(iron, vitamin_c, lean_protein, orange, iron_supplement):
    """Three ingredients, two nutrients and two meals."""
    return Catalog(
        nutrients=[iron, vitamin_c],
        ingredients=[lean_protein, orange, iron_supplement],
        meals=[Meal("Breakfast", 40), Meal("Dinner", 60)],
    )


@pytest.fixture
def sample_catalog():
    return build_sample_catalog()


@pytest.fixture
def settings():
    return Settings()


def _food(name: str, protein: float, carbs: float, fat: float) -> Ingredient:
    return Ingredient(name=name, macros=Macros(protein=protein, carbs=carbs, fat=fat))


def _supplement(name: str) -> Ingredient:
    return Ingredient(name=name, macros=Macros(), kind=IngredientKind.SUPPLEMENT)


@pytest.fixture
def make_food():
    """Factory for nutrient-free foods: make_food(name, protein, carbs, fat)."""
    return _food


@pytest.fixture
def make_supplement():
    """Factory for calorie-free, nutrient-free supplements."""
    return _supplement
