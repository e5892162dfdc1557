"""Application settings and configuration management.

Every constant table the planner relies on (activity multipliers, per-kind
gram limits, critical nutrients, meal-timing keywords) lives here so that
components can be handed alternate tables.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import yaml

from nrvdiet.catalog.models import DEFAULT_KIND_LIMITS, IngredientKind, KindLimits
from nrvdiet.errors import InvalidConfigError

if TYPE_CHECKING:
    from nrvdiet.profiles.models import ActivityLevel


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".nrvdiet"


def _default_activity_multipliers() -> dict[ActivityLevel, float]:
    # Imported here: the profiles package imports this module
    from nrvdiet.profiles.models import ActivityLevel

    return {
        ActivityLevel.SEDENTARY: 1.2,
        ActivityLevel.LIGHT: 1.375,
        ActivityLevel.MODERATE: 1.55,
        ActivityLevel.VERY: 1.725,
    }


@dataclass
class EnergyConfig:
    """TDEE and goal adjustment tables."""

    activity_multipliers: dict[ActivityLevel, float] = field(
        default_factory=_default_activity_multipliers
    )
    bmr_intercept: float = 370.0
    bmr_per_kg_lean_mass: float = 21.6
    build_muscle_factor: float = 1.15
    lose_fat_factor: float = 0.8
    # Minimum safe intake: lighter people get the lower floor
    min_intake_below_threshold: float = 1200.0
    min_intake_at_or_above_threshold: float = 1500.0
    min_intake_weight_threshold_kg: float = 70.0


@dataclass
class GreedyConfig:
    """Greedy selector tuning."""

    calorie_fill_ratio: float = 0.95
    budget_share: float = 0.15
    density_weight: float = 10.0
    macro_weight: float = 5.0
    macro_gap_weight: float = 2.0
    over_budget_score: float = -1000.0
    nutrient_overshoot: float = 1.2
    macro_buffer: float = 1.1
    default_macro_limit_grams: float = 500.0
    max_iterations: int = 500


@dataclass
class BalancerConfig:
    """Macro balancer tuning."""

    calorie_tolerance: float = 0.05
    supplement_max_scale: float = 1.5
    max_passes: int = 10
    step: float = 0.05
    gap_tolerance_grams: float = 5.0


def _default_critical_nutrients() -> list[str]:
    return [
        "Vitamin D",
        "Vitamin B12",
        "Iron",
        "Calcium",
        "Omega-3 fatty acids",
    ]


@dataclass
class LPConfig:
    """Linear-programming selector and fallback diet settings."""

    critical_nutrients: list[str] = field(default_factory=_default_critical_nutrients)
    calorie_min_factor: float = 0.9
    calorie_max_factor: float = 1.1
    macro_min_factor: float = 0.7
    critical_min_factor: float = 0.5
    min_selected_grams: float = 1.0
    min_ingredients: int = 5
    time_limit_seconds: Optional[float] = 10.0
    # Reward per unit of non-critical nutrient coverage; 0 disables the term
    coverage_weight: float = 0.0

    # Fallback diet
    fallback_protein_threshold: float = 20.0
    fallback_carbs_threshold: float = 20.0
    fallback_fat_threshold: float = 40.0
    fallback_vegetable_keywords: list[str] = field(
        default_factory=lambda: ["spinach", "broccoli", "kale"]
    )
    fallback_multivitamin_keyword: str = "multivitamin"
    fallback_protein_grams: float = 200.0
    fallback_carbs_grams: float = 150.0
    fallback_vegetable_grams: float = 200.0
    fallback_fat_grams: float = 30.0
    fallback_multivitamin_grams: float = 2.0


@dataclass
class DistributionConfig:
    """Meal distribution heuristics."""

    breakfast_keywords: list[str] = field(default_factory=lambda: ["oat", "egg", "milk"])
    dinner_keywords: list[str] = field(default_factory=lambda: ["rice", "meat", "fish"])
    min_portion_ratio: float = 0.1
    meal_fill_ratio: float = 0.95


@dataclass
class Settings:
    """Main application settings."""

    energy: EnergyConfig = field(default_factory=EnergyConfig)
    limits: dict[IngredientKind, KindLimits] = field(
        default_factory=lambda: dict(DEFAULT_KIND_LIMITS)
    )
    greedy: GreedyConfig = field(default_factory=GreedyConfig)
    balancer: BalancerConfig = field(default_factory=BalancerConfig)
    lp: LPConfig = field(default_factory=LPConfig)
    distribution: DistributionConfig = field(default_factory=DistributionConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.nrvdiet/config.yaml

        Returns:
            Settings instance

        Raises:
            InvalidConfigError: If the file holds unknown keys or bad values
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise InvalidConfigError(f"Cannot parse {config_path}: {e}") from e

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settings":
        """Build settings from a parsed YAML mapping, starting from defaults."""
        settings = cls()
        if not isinstance(data, dict):
            raise InvalidConfigError("Config file must contain a mapping of sections")

        for key, section_data in data.items():
            if key == "limits":
                settings.limits = _parse_limits(section_data, settings.limits)
            elif key in ("energy", "greedy", "balancer", "lp", "distribution"):
                _apply_section(key, getattr(settings, key), section_data)
            else:
                raise InvalidConfigError(f"Unknown config section '{key}'")

        return settings

    def to_dict(self) -> dict[str, Any]:
        energy = asdict(self.energy)
        energy["activity_multipliers"] = {
            level.value: mult for level, mult in self.energy.activity_multipliers.items()
        }
        return {
            "energy": energy,
            "limits": {kind.value: asdict(lim) for kind, lim in self.limits.items()},
            "greedy": asdict(self.greedy),
            "balancer": asdict(self.balancer),
            "lp": asdict(self.lp),
            "distribution": asdict(self.distribution),
        }

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.nrvdiet/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def _apply_section(name: str, section: Any, data: Optional[dict[str, Any]]) -> None:
    """Overwrite dataclass fields of one section from YAML data."""
    if not data:
        return
    if not isinstance(data, dict):
        raise InvalidConfigError(f"Section '{name}' must be a mapping")

    known = {f.name: f for f in fields(section)}
    for key, value in data.items():
        if key not in known:
            raise InvalidConfigError(f"Unknown key '{name}.{key}'")

        if name == "energy" and key == "activity_multipliers":
            from nrvdiet.profiles.models import ActivityLevel

            try:
                value = {ActivityLevel(k): float(v) for k, v in value.items()}
            except (ValueError, AttributeError, TypeError) as e:
                raise InvalidConfigError(f"Invalid activity multipliers: {e}") from e
            merged = dict(section.activity_multipliers)
            merged.update(value)
            value = merged
        else:
            current = getattr(section, key)
            value = _coerce(f"{name}.{key}", current, value)

        setattr(section, key, value)


def _coerce(path: str, current: Any, value: Any) -> Any:
    """Coerce a YAML scalar to the type of the current default."""
    if value is None or isinstance(current, (list, str)) or current is None:
        if isinstance(current, list) and not isinstance(value, list):
            raise InvalidConfigError(f"'{path}' must be a list")
        return value
    try:
        if isinstance(current, bool):
            return bool(value)
        if isinstance(current, int):
            return int(value)
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfigError(f"Invalid value for '{path}': {value!r}") from e


def _parse_limits(
    data: Optional[dict[str, Any]],
    current: dict[IngredientKind, KindLimits],
) -> dict[IngredientKind, KindLimits]:
    """Parse per-kind limits, e.g. ``{"supplement": {"max_grams": 8}}``."""
    limits = dict(current)
    if not data:
        return limits

    for kind_name, overrides in data.items():
        try:
            kind = IngredientKind(kind_name)
        except ValueError as e:
            raise InvalidConfigError(f"Unknown ingredient kind '{kind_name}'") from e

        known = {f.name for f in fields(KindLimits)}
        unknown = set(overrides or {}) - known
        if unknown:
            raise InvalidConfigError(
                f"Unknown keys for limits.{kind_name}: {', '.join(sorted(unknown))}"
            )
        try:
            values = {
                k: (None if v is None else float(v)) for k, v in (overrides or {}).items()
            }
        except (TypeError, ValueError) as e:
            raise InvalidConfigError(f"Invalid limits for '{kind_name}': {e}") from e
        limits[kind] = replace(limits[kind], **values)

    return limits


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
