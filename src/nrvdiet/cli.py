"""CLI interface using Typer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from nrvdiet.catalog import build_sample_catalog
from nrvdiet.config import Settings, reload_settings
from nrvdiet.errors import DietPlanError, InsufficientCatalogError, InvalidConfigError
from nrvdiet.explore.compare import (
    DietComparison,
    compare_strategies,
    diet_stats,
    format_diet_comparison,
)
from nrvdiet.optimizer import Diet, StrategyName, plan_diet
from nrvdiet.profiles import (
    ActivityLevel,
    EnergyTargets,
    Goal,
    PersonAttributes,
    Sex,
    TargetMacros,
    calculate_targets,
)

app = typer.Typer(
    help="Daily diet planning against calorie, macro and NRV targets",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


# ============================================================================
# Shared options
# ============================================================================

SEX_OPTION = typer.Option(Sex.MALE, "--sex", help="Biological sex")
AGE_OPTION = typer.Option(30, "--age", min=1, help="Age in years")
WEIGHT_OPTION = typer.Option(75.0, "--weight", min=1.0, help="Body weight in kg")
BODY_FAT_OPTION = typer.Option(
    15.0, "--body-fat", min=0.0, max=99.0, help="Body fat percentage"
)
ACTIVITY_OPTION = typer.Option(ActivityLevel.MODERATE, "--activity", help="Activity level")
GOAL_OPTION = typer.Option(Goal.MAINTAIN, "--goal", help="Body composition goal")
PROTEIN_OPTION = typer.Option(30.0, "--protein", help="Protein share of calories (%)")
CARBS_OPTION = typer.Option(40.0, "--carbs", help="Carbs share of calories (%)")
FAT_OPTION = typer.Option(30.0, "--fat", help="Fat share of calories (%)")
CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to config.yaml")
JSON_OPTION = typer.Option(False, "--json", help="Output as JSON")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Plan a day of meals from the built-in ingredient catalog."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def fail(command: str, error: DietPlanError, json_output: bool) -> None:
    """Report an error and exit with status 1."""
    if json_output:
        output_json({
            "success": False,
            "command": command,
            "errors": [str(error)],
        })
    else:
        console.print(f"[red]{error}[/red]")
    raise typer.Exit(1)


def load_settings(config_path: Optional[Path]) -> Settings:
    """Reload the global settings, treating an explicit missing path as an error."""
    if config_path is not None and not config_path.exists():
        raise InvalidConfigError(f"Config file not found: {config_path}")
    return reload_settings(config_path)


def build_targets(
    sex: Sex,
    age: int,
    weight: float,
    body_fat: float,
    activity: ActivityLevel,
    goal: Goal,
    protein: float,
    carbs: float,
    fat: float,
    settings: Settings,
) -> EnergyTargets:
    person = PersonAttributes(
        sex=sex,
        age=age,
        body_weight_kg=weight,
        body_fat_percentage=body_fat,
        activity_level=activity,
    )
    split = TargetMacros(
        protein_percentage=protein,
        carbs_percentage=carbs,
        fat_percentage=fat,
    )
    return calculate_targets(person, goal, split, settings.energy)


def print_diet(diet: Diet, targets: EnergyTargets, title: str) -> None:
    """Print one table per meal and a totals line."""
    for diet_meal in diet.meals:
        meal_target = targets.calories * diet_meal.meal.kcal_percentage / 100
        table = Table(
            title=f"{diet_meal.meal.name} ({diet_meal.meal.kcal_percentage:g}%)",
            title_justify="left",
        )
        table.add_column("Ingredient")
        table.add_column("Grams", justify="right", style="cyan")
        table.add_column("kcal", justify="right")
        table.add_column("Protein", justify="right", style="green")
        table.add_column("Carbs", justify="right", style="yellow")
        table.add_column("Fat", justify="right", style="magenta")

        for item in diet_meal.ingredients:
            m = item.ingredient.macros.scaled(item.amount / 100)
            table.add_row(
                item.ingredient.name,
                f"{item.amount:g}",
                f"{m.calories:.0f}",
                f"{m.protein:.1f}",
                f"{m.carbs:.1f}",
                f"{m.fat:.1f}",
            )

        console.print(table)
        console.print(f"[dim]{diet_meal.calories:.0f} / {meal_target:.0f} kcal[/dim]\n")

    calories = sum(dm.calories for dm in diet.meals)
    console.print(
        f"[bold]{title}:[/bold] {calories:.0f} kcal of {targets.calories:.0f} target"
    )


def print_comparison(comparison: DietComparison) -> None:
    table = Table(title="Strategy comparison")
    table.add_column("Metric")
    table.add_column(comparison.run_a.strategy, justify="right")
    table.add_column(comparison.run_b.strategy, justify="right")

    a, b = comparison.run_a.stats, comparison.run_b.stats
    rows = [
        ("Calories", f"{a.calories:.0f}", f"{b.calories:.0f}"),
        ("Protein (g)", f"{a.macros.protein:.1f}", f"{b.macros.protein:.1f}"),
        ("Carbs (g)", f"{a.macros.carbs:.1f}", f"{b.macros.carbs:.1f}"),
        ("Fat (g)", f"{a.macros.fat:.1f}", f"{b.macros.fat:.1f}"),
        ("NRVs met", str(a.nrv_met), str(b.nrv_met)),
        ("Ingredients", str(a.unique_ingredients), str(b.unique_ingredients)),
        ("Total grams", f"{a.total_grams:.0f}", f"{b.total_grams:.0f}"),
        (
            "Time (s)",
            f"{comparison.run_a.elapsed_seconds:.3f}",
            f"{comparison.run_b.elapsed_seconds:.3f}",
        ),
    ]
    for row in rows:
        table.add_row(*row)

    console.print(table)
    if comparison.ingredients_in_both:
        console.print(f"[dim]Shared: {', '.join(comparison.ingredients_in_both)}[/dim]")


# ============================================================================
# Commands
# ============================================================================


@app.command()
def targets(
    sex: Sex = SEX_OPTION,
    age: int = AGE_OPTION,
    weight: float = WEIGHT_OPTION,
    body_fat: float = BODY_FAT_OPTION,
    activity: ActivityLevel = ACTIVITY_OPTION,
    goal: Goal = GOAL_OPTION,
    protein: float = PROTEIN_OPTION,
    carbs: float = CARBS_OPTION,
    fat: float = FAT_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Show TDEE, target calories and macro grams."""
    try:
        settings = load_settings(config)
        result = build_targets(
            sex, age, weight, body_fat, activity, goal, protein, carbs, fat, settings
        )
    except DietPlanError as e:
        fail("targets", e, json_output)
        return

    if json_output:
        output_json({
            "success": True,
            "command": "targets",
            "data": result.to_dict(),
            "human_summary": (
                f"TDEE {result.tdee:.0f} kcal, target {result.calories:.0f} kcal "
                f"for goal '{goal.value}'"
            ),
        })
        return

    table = Table(title=f"Targets ({goal.value})")
    table.add_column("Metric")
    table.add_column("Value", justify="right", style="cyan")
    table.add_row("TDEE (kcal)", f"{result.tdee:.0f}")
    table.add_row("Target (kcal)", f"{result.calories:.0f}")
    table.add_row("Protein (g)", f"{result.macros.protein:.1f}")
    table.add_row("Carbs (g)", f"{result.macros.carbs:.1f}")
    table.add_row("Fat (g)", f"{result.macros.fat:.1f}")
    console.print(table)


@app.command()
def plan(
    strategy: StrategyName = typer.Option(
        StrategyName.GREEDY, "--strategy", "-s", help="Selection strategy"
    ),
    supplements: bool = typer.Option(
        True, "--supplements/--no-supplements", help="Include the standard supplements"
    ),
    sex: Sex = SEX_OPTION,
    age: int = AGE_OPTION,
    weight: float = WEIGHT_OPTION,
    body_fat: float = BODY_FAT_OPTION,
    activity: ActivityLevel = ACTIVITY_OPTION,
    goal: Goal = GOAL_OPTION,
    protein: float = PROTEIN_OPTION,
    carbs: float = CARBS_OPTION,
    fat: float = FAT_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Plan one day of meals."""
    try:
        settings = load_settings(config)
        result = build_targets(
            sex, age, weight, body_fat, activity, goal, protein, carbs, fat, settings
        )
        catalog = build_sample_catalog(include_supplements=supplements)
        diet = plan_diet(catalog, result, strategy, settings)
        if diet.is_empty:
            raise InsufficientCatalogError(
                "No ingredients could be selected from the catalog",
                strategy=strategy.value,
            )
    except DietPlanError as e:
        fail("plan", e, json_output)
        return

    stats = diet_stats(diet, catalog.nutrients)

    if json_output:
        data = diet.to_dict()
        data["strategy"] = strategy.value
        data["targets"] = result.to_dict()
        data["totals"] = {
            "calories": round(stats.calories, 0),
            "protein": round(stats.macros.protein, 1),
            "carbs": round(stats.macros.carbs, 1),
            "fat": round(stats.macros.fat, 1),
            "nrv_met": stats.nrv_met,
            "nrv_tracked": len(catalog.nutrients),
        }
        output_json({
            "success": True,
            "command": "plan",
            "data": data,
            "human_summary": (
                f"{len(diet.meals)} meals, {stats.unique_ingredients} ingredients, "
                f"{stats.calories:.0f} kcal, {stats.nrv_met}/{len(catalog.nutrients)} NRVs met"
            ),
        })
        return

    print_diet(diet, result, f"Plan ({strategy.value})")
    console.print(f"NRVs met: {stats.nrv_met}/{len(catalog.nutrients)}")


@app.command()
def compare(
    sex: Sex = SEX_OPTION,
    age: int = AGE_OPTION,
    weight: float = WEIGHT_OPTION,
    body_fat: float = BODY_FAT_OPTION,
    activity: ActivityLevel = ACTIVITY_OPTION,
    goal: Goal = GOAL_OPTION,
    protein: float = PROTEIN_OPTION,
    carbs: float = CARBS_OPTION,
    fat: float = FAT_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Run the greedy and LP strategies and compare their diets."""
    try:
        settings = load_settings(config)
        result = build_targets(
            sex, age, weight, body_fat, activity, goal, protein, carbs, fat, settings
        )
        comparison = compare_strategies(build_sample_catalog(), result, settings)
    except DietPlanError as e:
        fail("compare", e, json_output)
        return

    if json_output:
        output_json({
            "success": True,
            "command": "compare",
            "data": format_diet_comparison(comparison),
            "human_summary": (
                f"{comparison.run_a.strategy}: {comparison.run_a.stats.nrv_met} NRVs met, "
                f"{comparison.run_b.strategy}: {comparison.run_b.stats.nrv_met} NRVs met"
            ),
        })
        return

    print_comparison(comparison)


if __name__ == "__main__":
    app()
