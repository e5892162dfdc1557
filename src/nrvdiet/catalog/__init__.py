"""Reference catalog: nutrients, ingredients and meals."""

from nrvdiet.catalog.builders import (
    create_supplement_ingredients,
    ingredient_from_nrv_percentages,
)
from nrvdiet.catalog.models import (
    DEFAULT_KIND_LIMITS,
    Catalog,
    Ingredient,
    IngredientKind,
    IngredientNutrient,
    KindLimits,
    Macros,
    Meal,
    Nutrient,
    infer_kind,
)
from nrvdiet.catalog.sample import build_sample_catalog

__all__ = [
    "DEFAULT_KIND_LIMITS",
    "Catalog",
    "Ingredient",
    "IngredientKind",
    "IngredientNutrient",
    "KindLimits",
    "Macros",
    "Meal",
    "Nutrient",
    "build_sample_catalog",
    "create_supplement_ingredients",
    "infer_kind",
    "ingredient_from_nrv_percentages",
]
