"""Diet statistics and strategy comparison."""

from nrvdiet.explore.compare import (
    DietComparison,
    DietStats,
    StrategyRun,
    compare_diets,
    compare_strategies,
    diet_stats,
    format_diet_comparison,
    run_strategy,
)

__all__ = [
    "DietComparison",
    "DietStats",
    "StrategyRun",
    "compare_diets",
    "compare_strategies",
    "diet_stats",
    "format_diet_comparison",
    "run_strategy",
]
