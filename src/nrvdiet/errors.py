"""Exceptions raised by nrvdiet."""

from __future__ import annotations


class DietPlanError(Exception):
    """Base exception for nrvdiet errors."""

    pass


class InvalidConfigError(DietPlanError):
    """Raised when a configuration file holds unknown keys or bad values."""

    pass


class InsufficientCatalogError(DietPlanError):
    """Raised when a catalog cannot produce any ingredients for a plan."""

    def __init__(self, message: str, strategy: str = ""):
        super().__init__(message)
        self.strategy = strategy
