"""Tests for configuration loading."""

from __future__ import annotations

import pytest

from nrvdiet.catalog import IngredientKind
from nrvdiet.config import Settings, get_settings, reload_settings
from nrvdiet.config import settings as settings_module
from nrvdiet.errors import InvalidConfigError
from nrvdiet.profiles import ActivityLevel


class TestDefaults:
    """Tests for default values."""

    def test_kind_limits(self):
        settings = Settings()
        food = settings.limits[IngredientKind.FOOD]
        supplement = settings.limits[IngredientKind.SUPPLEMENT]

        assert (food.min_grams, food.max_grams, food.lp_max_grams) == (5, 500, 300)
        assert food.per_meal_max_grams is None
        assert (supplement.min_grams, supplement.max_grams) == (1, 10)
        assert supplement.per_meal_max_grams == 5

    def test_instances_independent(self):
        a = Settings()
        a.lp.critical_nutrients.append("Zinc")
        assert "Zinc" not in Settings().lp.critical_nutrients

    def test_missing_file_gives_defaults(self, tmp_path):
        settings = Settings.load(tmp_path / "absent.yaml")
        assert settings.greedy.max_iterations == 500


class TestLoad:
    """Tests for YAML overrides."""

    def test_overrides(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "greedy:\n"
            "  max_iterations: 50\n"
            "lp:\n"
            "  time_limit_seconds: 2\n"
            "  critical_nutrients: [Iron]\n"
            "energy:\n"
            "  activity_multipliers:\n"
            "    very: 1.9\n"
            "limits:\n"
            "  supplement:\n"
            "    max_grams: 8\n"
        )
        settings = Settings.load(path)

        assert settings.greedy.max_iterations == 50
        assert settings.lp.time_limit_seconds == 2.0
        assert settings.lp.critical_nutrients == ["Iron"]
        assert settings.energy.activity_multipliers[ActivityLevel.VERY] == 1.9
        assert settings.energy.activity_multipliers[ActivityLevel.LIGHT] == 1.375
        assert settings.limits[IngredientKind.SUPPLEMENT].max_grams == 8
        assert settings.limits[IngredientKind.SUPPLEMENT].per_meal_max_grams == 5

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert Settings.load(path).balancer.max_passes == 10

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "nested" / "config.yaml"
        settings = Settings()
        settings.distribution.meal_fill_ratio = 0.9
        settings.save(path)

        reloaded = Settings.load(path)
        assert reloaded.distribution.meal_fill_ratio == 0.9
        assert reloaded.limits == settings.limits
        assert reloaded.energy.activity_multipliers == settings.energy.activity_multipliers


class TestInvalid:
    """Tests for configuration errors."""

    @pytest.mark.parametrize(
        "data",
        [
            {"solver": {}},
            {"greedy": {"max_iteration": 5}},
            {"greedy": {"max_iterations": "many"}},
            {"greedy": [1, 2]},
            {"limits": {"powder": {"max_grams": 5}}},
            {"limits": {"food": {"ceiling": 5}}},
            {"energy": {"activity_multipliers": {"extreme": 2.0}}},
            {"lp": {"critical_nutrients": "Iron"}},
        ],
    )
    def test_rejected(self, data):
        with pytest.raises(InvalidConfigError):
            Settings.from_dict(data)

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- greedy\n- lp\n")
        with pytest.raises(InvalidConfigError):
            Settings.load(path)

    def test_unparseable_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("greedy: [unclosed\n")
        with pytest.raises(InvalidConfigError):
            Settings.load(path)


class TestGlobalSettings:
    """Tests for the lazily loaded global instance."""

    @pytest.fixture(autouse=True)
    def isolated_home(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings_module, "_settings", None)
        monkeypatch.setattr(settings_module, "_default_config_dir", lambda: tmp_path)

    def test_loaded_once(self, tmp_path):
        (tmp_path / "config.yaml").write_text("greedy:\n  max_iterations: 40\n")

        first = get_settings()
        (tmp_path / "config.yaml").write_text("greedy:\n  max_iterations: 80\n")

        assert first.greedy.max_iterations == 40
        assert get_settings() is first

    def test_reload_replaces_instance(self, tmp_path):
        first = get_settings()
        path = tmp_path / "other.yaml"
        path.write_text("balancer:\n  max_passes: 3\n")

        reloaded = reload_settings(path)

        assert reloaded is not first
        assert reloaded.balancer.max_passes == 3
        assert get_settings() is reloaded
