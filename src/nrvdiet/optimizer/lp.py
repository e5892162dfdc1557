"""Linear-programming ingredient selector with a deterministic fallback.

One decision variable per catalog ingredient (grams). Objective: minimize a
cost proxy where supplements cost more than whole foods. Constraints:
    0.9 * kcal_target <= kcal <= 1.1 * kcal_target
    protein, carbs, fat >= 0.7 * gram target
    each critical nutrient >= 0.5 * NRV
    0 <= grams <= per-kind LP cap

Non-critical nutrients are unconstrained. Optionally each one gets a coverage
variable s in [0, 1] with s * nrv <= intake, rewarded in the objective.

If the solve fails or selects too few ingredients, a short hand-built list
(protein, carb, vegetable, fat, multivitamin) is returned instead.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional, Sequence

import numpy as np
from scipy.optimize import linprog

from nrvdiet.catalog.models import Ingredient, Macros, Nutrient
from nrvdiet.config.settings import LPConfig, Settings
from nrvdiet.optimizer.models import IngredientSelection

logger = logging.getLogger(__name__)


def solve_lp(
    costs: np.ndarray,
    constraint_matrix: np.ndarray,
    constraint_mins: np.ndarray,
    constraint_maxs: np.ndarray,
    bounds: list[tuple[float, float]],
    time_limit: Optional[float] = None,
) -> dict[str, Any]:
    """Solve linear programming problem using scipy.optimize.linprog with HiGHS.

    Objective: min c'x
    Subject to:
        Ax >= mins
        Ax <= maxs
        lower <= x <= upper

    Args:
        costs: Cost per unit of each variable, shape (n_vars,)
        constraint_matrix: Coefficients per unit, shape (n_vars, n_constraints)
        constraint_mins: Lower bound per constraint (-inf if none)
        constraint_maxs: Upper bound per constraint (inf if none)
        bounds: List of (min, max) for each variable
        time_limit: Solver wall-clock limit in seconds

    Returns:
        Dict with solution info
    """
    n_constraints = constraint_matrix.shape[1]
    start_time = time.time()

    # Build inequality constraints: A_ub @ x <= b_ub
    # For min constraints: -Ax <= -min  (i.e., Ax >= min)
    # For max constraints: Ax <= max
    A_ub_rows = []
    b_ub_rows = []

    for j in range(n_constraints):
        col = constraint_matrix[:, j]

        if constraint_mins[j] > -np.inf:
            A_ub_rows.append(-col)
            b_ub_rows.append(-constraint_mins[j])

        if constraint_maxs[j] < np.inf:
            A_ub_rows.append(col)
            b_ub_rows.append(constraint_maxs[j])

    A_ub = np.array(A_ub_rows) if A_ub_rows else None
    b_ub = np.array(b_ub_rows) if b_ub_rows else None

    options: dict[str, Any] = {"presolve": True}
    if time_limit is not None:
        options["time_limit"] = time_limit

    result = linprog(
        c=costs,
        A_ub=A_ub,
        b_ub=b_ub,
        bounds=bounds,
        method="highs",
        options=options,
    )

    elapsed = time.time() - start_time

    return {
        "success": result.success,
        "status": result.status,
        "x": result.x if result.success else None,
        "fun": result.fun if result.success else None,
        "message": result.message,
        "iterations": getattr(result, "nit", None),
        "elapsed_seconds": elapsed,
    }


def _safe_name(name: str) -> str:
    return "".join(ch if ch.isalnum() else "_" for ch in name)


class LPModelBuilder:
    """Builds the matrices for the diet LP from an in-memory catalog."""

    def __init__(
        self,
        ingredients: Sequence[Ingredient],
        nutrients: Sequence[Nutrient],
        target_macros: Macros,
        target_calories: float,
        settings: Optional[Settings] = None,
    ):
        """Initialize the model builder.

        Args:
            ingredients: Candidate ingredients, one variable each
            nutrients: Catalog nutrients with NRVs
            target_macros: Macro gram targets
            target_calories: Daily calorie target
            settings: Alternate LP and limit tables
        """
        self.ingredients = list(ingredients)
        self.nutrients = list(nutrients)
        self.target_macros = target_macros
        self.target_calories = target_calories
        self.settings = settings or Settings()
        self.config: LPConfig = self.settings.lp

    def build(self) -> dict[str, Any]:
        """Build all matrices and vectors needed for the solve.

        Returns:
            Dict with:
                - ingredient_names: list[str] - one per ingredient variable
                - n_ingredients: int - ingredient variables come first
                - coverage_nutrients: list[str] - one per coverage variable
                - costs: np.ndarray - shape (n_vars,)
                - constraint_matrix: np.ndarray - shape (n_vars, n_constraints)
                - constraint_mins / constraint_maxs: np.ndarray - (n_constraints,)
                - constraint_names: list[str]
                - bounds: list[tuple] - (min, max) for each variable
        """
        critical = set(self.config.critical_nutrients)
        critical_nutrients = [n for n in self.nutrients if n.name in critical]
        coverage_nutrients = []
        if self.config.coverage_weight > 0:
            coverage_nutrients = [n for n in self.nutrients if n.name not in critical]

        n_ingredients = len(self.ingredients)
        n_vars = n_ingredients + len(coverage_nutrients)

        columns: list[np.ndarray] = []
        mins: list[float] = []
        maxs: list[float] = []
        names: list[str] = []

        def add_column(name: str, coefficients: np.ndarray, lo: float, hi: float) -> None:
            columns.append(coefficients)
            mins.append(lo)
            maxs.append(hi)
            names.append(name)

        calories = self._ingredient_column(lambda i: i.calories_per_100g, n_vars)
        add_column(
            "calories",
            calories,
            self.target_calories * self.config.calorie_min_factor,
            self.target_calories * self.config.calorie_max_factor,
        )

        for macro in ("protein", "carbs", "fat"):
            add_column(
                macro,
                self._ingredient_column(lambda i, m=macro: getattr(i.macros, m), n_vars),
                getattr(self.target_macros, macro) * self.config.macro_min_factor,
                np.inf,
            )

        for nutrient in critical_nutrients:
            add_column(
                f"n_{_safe_name(nutrient.name)}",
                self._nutrient_column(nutrient.name, n_vars),
                nutrient.nrv * self.config.critical_min_factor,
                np.inf,
            )

        # Coverage link: intake - nrv * s >= 0
        for k, nutrient in enumerate(coverage_nutrients):
            col = self._nutrient_column(nutrient.name, n_vars)
            col[n_ingredients + k] = -nutrient.nrv
            add_column(f"coverage_{_safe_name(nutrient.name)}", col, 0.0, np.inf)

        limits = self.settings.limits
        costs = [limits[i.kind].lp_cost for i in self.ingredients]
        costs += [-self.config.coverage_weight] * len(coverage_nutrients)

        bounds = [(0.0, limits[i.kind].lp_max_grams) for i in self.ingredients]
        bounds += [(0.0, 1.0)] * len(coverage_nutrients)

        if columns:
            constraint_matrix = np.column_stack(columns)
        else:
            constraint_matrix = np.zeros((n_vars, 0))

        return {
            "ingredient_names": [i.name for i in self.ingredients],
            "n_ingredients": n_ingredients,
            "coverage_nutrients": [n.name for n in coverage_nutrients],
            "costs": np.array(costs, dtype=float),
            "constraint_matrix": constraint_matrix,
            "constraint_mins": np.array(mins, dtype=float),
            "constraint_maxs": np.array(maxs, dtype=float),
            "constraint_names": names,
            "bounds": bounds,
        }

    def _ingredient_column(self, per_100g, n_vars: int) -> np.ndarray:
        """Per-gram coefficients for the ingredient variables, zero elsewhere."""
        col = np.zeros(n_vars)
        for idx, ingredient in enumerate(self.ingredients):
            col[idx] = per_100g(ingredient) / 100
        return col

    def _nutrient_column(self, nutrient_name: str, n_vars: int) -> np.ndarray:
        def amount(ingredient: Ingredient) -> float:
            return sum(
                c.amount for c in ingredient.nutrients if c.nutrient.name == nutrient_name
            )

        return self._ingredient_column(amount, n_vars)


def solve_selection(
    ingredients: Sequence[Ingredient],
    nutrients: Sequence[Nutrient],
    target_macros: Macros,
    target_calories: float,
    settings: Optional[Settings] = None,
) -> Optional[list[IngredientSelection]]:
    """Solve the diet LP and convert it into a selection.

    Returns:
        Selections with more than ``min_selected_grams`` (rounded to whole
        grams), or None when the model could not be solved
    """
    settings = settings or Settings()
    if not ingredients:
        logger.info("No ingredients to optimize over")
        return None

    model = LPModelBuilder(
        ingredients, nutrients, target_macros, target_calories, settings
    ).build()

    logger.info(
        "Solving LP model: %d variables, %d constraints",
        len(model["costs"]),
        len(model["constraint_names"]),
    )
    try:
        result = solve_lp(
            costs=model["costs"],
            constraint_matrix=model["constraint_matrix"],
            constraint_mins=model["constraint_mins"],
            constraint_maxs=model["constraint_maxs"],
            bounds=model["bounds"],
            time_limit=settings.lp.time_limit_seconds,
        )
    except ValueError as e:
        logger.warning("LP model rejected by solver: %s", e)
        return None

    if not result["success"]:
        logger.info("LP not solved: %s", result["message"])
        return None

    logger.info("LP solved in %.3fs", result["elapsed_seconds"])

    x = result["x"]
    selections = []
    for idx, ingredient in enumerate(ingredients):
        grams = float(x[idx])
        if grams > settings.lp.min_selected_grams:
            selections.append(IngredientSelection(ingredient=ingredient, amount=round(grams)))
    return selections


def build_fallback_selection(
    ingredients: Sequence[Ingredient],
    config: Optional[LPConfig] = None,
) -> list[IngredientSelection]:
    """Hand-built diet: first catalog match for each food group.

    Protein food, carb food, leafy/green vegetable, fat source and a
    multivitamin, each included only when the catalog has a match.
    """
    config = config or LPConfig()

    def first(predicate) -> Optional[Ingredient]:
        return next((i for i in ingredients if predicate(i)), None)

    picks = [
        (
            first(lambda i: i.macros.protein > config.fallback_protein_threshold
                  and not i.is_supplement),
            config.fallback_protein_grams,
        ),
        (
            first(lambda i: i.macros.carbs > config.fallback_carbs_threshold
                  and not i.is_supplement),
            config.fallback_carbs_grams,
        ),
        (
            first(lambda i: any(k in i.name.lower() for k in config.fallback_vegetable_keywords)),
            config.fallback_vegetable_grams,
        ),
        (
            first(lambda i: i.macros.fat > config.fallback_fat_threshold
                  and not i.is_supplement),
            config.fallback_fat_grams,
        ),
        (
            first(lambda i: config.fallback_multivitamin_keyword in i.name.lower()),
            config.fallback_multivitamin_grams,
        ),
    ]

    return [
        IngredientSelection(ingredient=ingredient, amount=grams)
        for ingredient, grams in picks
        if ingredient is not None
    ]


def select_ingredients_lp(
    ingredients: Sequence[Ingredient],
    nutrients: Sequence[Nutrient],
    target_macros: Macros,
    target_calories: float,
    settings: Optional[Settings] = None,
) -> list[IngredientSelection]:
    """LP selection, replaced by the fallback diet when unusable."""
    settings = settings or Settings()
    selections = solve_selection(
        ingredients, nutrients, target_macros, target_calories, settings
    )

    if selections is None or len(selections) < settings.lp.min_ingredients:
        logger.warning(
            "Using fallback selection (%s)",
            "no solution" if selections is None else f"only {len(selections)} ingredients",
        )
        return build_fallback_selection(ingredients, settings.lp)

    return selections
