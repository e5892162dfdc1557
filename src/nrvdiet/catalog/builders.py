"""Build ingredients from NRV-percentage tables and standard supplements."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from nrvdiet.catalog.models import (
    Ingredient,
    IngredientKind,
    IngredientNutrient,
    Macros,
    Nutrient,
    infer_kind,
)


def ingredient_from_nrv_percentages(
    name: str,
    macros: Macros,
    percentages: Mapping[str, float],
    nutrients: Mapping[str, Nutrient],
    kind: Optional[IngredientKind] = None,
) -> Ingredient:
    """Create an ingredient from "% of NRV per 100g" figures.

    Args:
        name: Ingredient name
        macros: Protein/carbs/fat per 100g
        percentages: Nutrient name -> percent of NRV per 100g
        nutrients: Known nutrients keyed by exact name
        kind: Explicit kind; inferred from the name when omitted

    Returns:
        Ingredient with absolute per-100g nutrient amounts. Names not found in
        ``nutrients`` are dropped.
    """
    content = []
    for nutrient_name, pct in percentages.items():
        nutrient = nutrients.get(nutrient_name)
        if nutrient is None:
            continue
        content.append(IngredientNutrient(nutrient=nutrient, amount=pct / 100 * nutrient.nrv))

    return Ingredient(
        name=name,
        macros=macros,
        nutrients=tuple(content),
        kind=kind if kind is not None else infer_kind(name),
    )


def _content(
    nutrients: Mapping[str, Nutrient], amounts: Iterable[tuple[str, float]]
) -> tuple[IngredientNutrient, ...]:
    return tuple(
        IngredientNutrient(nutrient=nutrients[name], amount=amount)
        for name, amount in amounts
        if name in nutrients
    )


def create_supplement_ingredients(nutrients: Iterable[Nutrient]) -> list[Ingredient]:
    """Standard supplements, sized per 100g like every other ingredient.

    A supplement is omitted when none of its nutrients exist in the catalog.
    """
    by_name = {n.name: n for n in nutrients}

    # Roughly 50% NRV per unit for most vitamins
    multivitamin = Ingredient(
        name="Multivitamin Supplement",
        macros=Macros(protein=0, carbs=0.5, fat=0),
        nutrients=_content(
            by_name,
            [
                ("Vitamin A", 400),
                ("Vitamin C", 40),
                ("Vitamin D", 2.5),
                ("Vitamin E", 6),
                ("Thiamine (B1)", 0.55),
                ("Riboflavin (B2)", 0.7),
                ("Niacin (B3)", 8),
                ("Vitamin B6", 0.7),
                ("Folate", 100),
                ("Vitamin B12", 1.25),
                ("Zinc", 5),
                ("Iodine", 75),
            ],
        ),
        kind=IngredientKind.SUPPLEMENT,
    )

    omega3 = Ingredient(
        name="Omega-3 Supplement (Fish Oil)",
        macros=Macros(protein=0, carbs=0, fat=1),
        nutrients=_content(by_name, [("Omega-3 fatty acids", 300)]),
        kind=IngredientKind.SUPPLEMENT,
    )

    vitamin_d = Ingredient(
        name="Vitamin D3 Supplement",
        macros=Macros(protein=0, carbs=0.1, fat=0),
        nutrients=_content(by_name, [("Vitamin D", 25)]),
        kind=IngredientKind.SUPPLEMENT,
    )

    return [s for s in (multivitamin, omega3, vitamin_d) if s.nutrients]
