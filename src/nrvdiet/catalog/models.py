"""Reference data types for nutrients, ingredients and meals."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

# Atwater factors (kcal per gram)
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


class IngredientKind(Enum):
    """Whether an ingredient is a whole food or a dosed supplement."""

    FOOD = "food"
    SUPPLEMENT = "supplement"


@dataclass(frozen=True)
class KindLimits:
    """Practical gram limits for one ingredient kind.

    per_meal_max_grams of None means no per-meal cap.
    """

    min_grams: float
    max_grams: float
    lp_max_grams: float
    per_meal_max_grams: Optional[float]
    lp_cost: float


DEFAULT_KIND_LIMITS: dict[IngredientKind, KindLimits] = {
    IngredientKind.FOOD: KindLimits(
        min_grams=5,
        max_grams=500,
        lp_max_grams=300,
        per_meal_max_grams=None,
        lp_cost=1,
    ),
    IngredientKind.SUPPLEMENT: KindLimits(
        min_grams=1,
        max_grams=10,
        lp_max_grams=10,
        per_meal_max_grams=5,
        lp_cost=5,
    ),
}


@dataclass(frozen=True)
class Macros:
    """Protein, carbs and fat in grams.

    Used for per-100g content, running totals and gram targets.
    """

    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    @property
    def calories(self) -> float:
        return (
            self.protein * KCAL_PER_G_PROTEIN
            + self.carbs * KCAL_PER_G_CARBS
            + self.fat * KCAL_PER_G_FAT
        )

    @property
    def total_grams(self) -> float:
        return self.protein + self.carbs + self.fat

    def scaled(self, factor: float) -> Macros:
        return Macros(
            protein=self.protein * factor,
            carbs=self.carbs * factor,
            fat=self.fat * factor,
        )

    def __add__(self, other: Macros) -> Macros:
        return Macros(
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )

    def __sub__(self, other: Macros) -> Macros:
        return Macros(
            protein=self.protein - other.protein,
            carbs=self.carbs - other.carbs,
            fat=self.fat - other.fat,
        )

    def as_dict(self) -> dict[str, float]:
        return {"protein": self.protein, "carbs": self.carbs, "fat": self.fat}


@dataclass(frozen=True)
class Nutrient:
    """A vitamin or mineral with its Nutrient Reference Value."""

    name: str
    nrv: float
    unit: str


@dataclass(frozen=True)
class IngredientNutrient:
    """Amount of one nutrient per 100g of an ingredient."""

    nutrient: Nutrient
    amount: float


@dataclass(frozen=True)
class Ingredient:
    """A catalog ingredient with per-100g macros and nutrient content.

    When ``kind`` is omitted it is inferred from the name, so
    "Omega-3 Supplement" is dosed as a supplement.
    """

    name: str
    macros: Macros
    nutrients: tuple[IngredientNutrient, ...] = ()
    kind: Optional[IngredientKind] = None

    def __post_init__(self) -> None:
        if self.kind is None:
            object.__setattr__(self, "kind", infer_kind(self.name))

    @property
    def calories_per_100g(self) -> float:
        return self.macros.calories

    @property
    def is_supplement(self) -> bool:
        return self.kind is IngredientKind.SUPPLEMENT


@dataclass(frozen=True)
class Meal:
    """A meal slot and its share of daily calories (percent)."""

    name: str
    kcal_percentage: float


@dataclass
class Catalog:
    """Everything the selectors need, already materialized in memory."""

    nutrients: list[Nutrient] = field(default_factory=list)
    ingredients: list[Ingredient] = field(default_factory=list)
    meals: list[Meal] = field(default_factory=list)

    def nutrient_by_name(self) -> dict[str, Nutrient]:
        return {n.name: n for n in self.nutrients}


def infer_kind(name: str) -> IngredientKind:
    """Classify a legacy ingredient name ("... Supplement ...")."""
    if "Supplement" in name:
        return IngredientKind.SUPPLEMENT
    return IngredientKind.FOOD
