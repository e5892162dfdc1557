"""Meal distribution of selector output."""

from nrvdiet.export.meal_distributor import distribute_to_meals, get_meal_timing_rank

__all__ = ["distribute_to_meals", "get_meal_timing_rank"]
