"""Configuration management."""

from nrvdiet.config.settings import (
    BalancerConfig,
    DistributionConfig,
    EnergyConfig,
    GreedyConfig,
    LPConfig,
    Settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "BalancerConfig",
    "DistributionConfig",
    "EnergyConfig",
    "GreedyConfig",
    "LPConfig",
    "Settings",
    "get_settings",
    "reload_settings",
]
