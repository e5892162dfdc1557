"""Built-in sample catalog.

EU nutrient reference values plus a small set of common whole foods described
as "% of NRV per 100g", the standard supplements and a four-meal day. Figures
are rounded approximations intended for demos and tests.
"""

from __future__ import annotations

from nrvdiet.catalog.builders import (
    create_supplement_ingredients,
    ingredient_from_nrv_percentages,
)
from nrvdiet.catalog.models import Catalog, Macros, Meal, Nutrient

# (name, nrv, unit)
SAMPLE_NUTRIENTS: list[tuple[str, float, str]] = [
    ("Vitamin A", 800, "µg"),
    ("Vitamin C", 80, "mg"),
    ("Vitamin D", 5, "µg"),
    ("Vitamin E", 12, "mg"),
    ("Vitamin K", 75, "µg"),
    ("Thiamine (B1)", 1.1, "mg"),
    ("Riboflavin (B2)", 1.4, "mg"),
    ("Niacin (B3)", 16, "mg"),
    ("Vitamin B6", 1.4, "mg"),
    ("Folate", 200, "µg"),
    ("Vitamin B12", 2.5, "µg"),
    ("Calcium", 800, "mg"),
    ("Iron", 14, "mg"),
    ("Magnesium", 375, "mg"),
    ("Zinc", 10, "mg"),
    ("Iodine", 150, "µg"),
    ("Potassium", 2000, "mg"),
    ("Omega-3 fatty acids", 250, "mg"),
]

# (name, protein, carbs, fat, {nutrient: % NRV per 100g})
SAMPLE_FOODS: list[tuple[str, float, float, float, dict[str, float]]] = [
    ("Rolled Oats", 13, 60, 7, {
        "Thiamine (B1)": 41, "Iron": 30, "Magnesium": 36, "Zinc": 36,
        "Vitamin B6": 9, "Potassium": 18,
    }),
    ("Whole Eggs", 13, 1, 10, {
        "Vitamin A": 20, "Vitamin D": 40, "Riboflavin (B2)": 32,
        "Vitamin B12": 44, "Folate": 24, "Iodine": 33, "Vitamin E": 9,
    }),
    ("Semi-Skimmed Milk", 3.4, 5, 1.7, {
        "Calcium": 15, "Riboflavin (B2)": 16, "Vitamin B12": 36,
        "Iodine": 20, "Potassium": 8,
    }),
    ("Greek Yogurt", 10, 4, 5, {
        "Calcium": 14, "Vitamin B12": 30, "Riboflavin (B2)": 18, "Iodine": 15,
    }),
    ("Chicken Breast", 31, 0, 3.6, {
        "Niacin (B3)": 86, "Vitamin B6": 43, "Zinc": 10, "Potassium": 13,
    }),
    ("Salmon Fillet", 20, 0, 13, {
        "Vitamin D": 220, "Vitamin B12": 128, "Omega-3 fatty acids": 880,
        "Niacin (B3)": 50, "Vitamin B6": 45, "Iodine": 20, "Potassium": 18,
    }),
    ("Lean Beef", 26, 0, 10, {
        "Iron": 19, "Zinc": 58, "Vitamin B12": 104, "Niacin (B3)": 34,
        "Vitamin B6": 29,
    }),
    ("Lentils", 9, 20, 0.4, {
        "Folate": 90, "Iron": 24, "Magnesium": 10, "Potassium": 18,
        "Thiamine (B1)": 15, "Zinc": 13,
    }),
    ("Brown Rice", 2.6, 23, 0.9, {
        "Magnesium": 12, "Thiamine (B1)": 9, "Niacin (B3)": 10,
        "Vitamin B6": 11,
    }),
    ("Sweet Potato", 1.6, 20, 0.1, {
        "Vitamin A": 89, "Vitamin C": 3, "Potassium": 17, "Vitamin B6": 14,
    }),
    ("Spinach", 2.9, 3.6, 0.4, {
        "Vitamin A": 59, "Vitamin C": 35, "Vitamin K": 644, "Folate": 97,
        "Iron": 19, "Magnesium": 21, "Calcium": 12, "Potassium": 28,
        "Vitamin E": 17,
    }),
    ("Broccoli", 2.8, 7, 0.4, {
        "Vitamin C": 111, "Vitamin K": 135, "Folate": 32, "Potassium": 16,
        "Calcium": 6, "Vitamin A": 4,
    }),
    ("Kale", 4.3, 9, 0.9, {
        "Vitamin A": 30, "Vitamin C": 150, "Vitamin K": 520, "Calcium": 19,
        "Potassium": 25,
    }),
    ("Banana", 1.1, 23, 0.3, {
        "Vitamin B6": 26, "Vitamin C": 11, "Potassium": 18, "Magnesium": 7,
    }),
    ("Almonds", 21, 22, 49, {
        "Vitamin E": 214, "Magnesium": 72, "Riboflavin (B2)": 81,
        "Calcium": 34, "Iron": 27, "Zinc": 31,
    }),
    ("Olive Oil", 0, 0, 100, {"Vitamin E": 120, "Vitamin K": 80}),
    ("Walnuts", 15, 14, 65, {
        "Omega-3 fatty acids": 3600, "Magnesium": 42, "Vitamin B6": 38,
        "Folate": 49, "Zinc": 31,
    }),
]

# (name, % of daily calories)
SAMPLE_MEALS: list[tuple[str, float]] = [
    ("Breakfast", 25),
    ("Lunch", 35),
    ("Dinner", 30),
    ("Snack", 10),
]


def build_sample_catalog(include_supplements: bool = True) -> Catalog:
    """Build the built-in catalog.

    Args:
        include_supplements: Append the standard supplements after the foods

    Returns:
        Catalog with nutrients, ingredients and meals
    """
    nutrients = [Nutrient(name=n, nrv=nrv, unit=unit) for n, nrv, unit in SAMPLE_NUTRIENTS]
    by_name = {n.name: n for n in nutrients}

    ingredients = [
        ingredient_from_nrv_percentages(
            name=name,
            macros=Macros(protein=protein, carbs=carbs, fat=fat),
            percentages=percentages,
            nutrients=by_name,
        )
        for name, protein, carbs, fat, percentages in SAMPLE_FOODS
    ]
    if include_supplements:
        ingredients.extend(create_supplement_ingredients(nutrients))

    meals = [Meal(name=name, kcal_percentage=pct) for name, pct in SAMPLE_MEALS]

    return Catalog(nutrients=nutrients, ingredients=ingredients, meals=meals)
