"""Tests for the energy model."""

from __future__ import annotations

import pytest

from nrvdiet.config import EnergyConfig
from nrvdiet.profiles import (
    ActivityLevel,
    Goal,
    PersonAttributes,
    Sex,
    TargetMacros,
    adjust_for_goal,
    calculate_target_macros,
    calculate_targets,
    calculate_tdee,
)
from nrvdiet.profiles.energy import calculate_bmr, calculate_lean_mass


class TestTDEE:
    """Tests for Katch-McArdle TDEE."""

    def test_lean_mass(self):
        assert calculate_lean_mass(75, 15) == pytest.approx(63.75)

    def test_bmr(self):
        assert calculate_bmr(63.75) == pytest.approx(1747.0)

    def test_moderate_male(self):
        """75kg at 15% body fat, moderately active."""
        tdee = calculate_tdee(Sex.MALE, 30, 75, 15, ActivityLevel.MODERATE)
        assert tdee == pytest.approx(2707.85)

    def test_sex_and_age_do_not_change_result(self):
        a = calculate_tdee(Sex.MALE, 25, 80, 20, ActivityLevel.LIGHT)
        b = calculate_tdee(Sex.FEMALE, 60, 80, 20, ActivityLevel.LIGHT)
        assert a == b

    @pytest.mark.parametrize(
        "level,multiplier",
        [
            (ActivityLevel.SEDENTARY, 1.2),
            (ActivityLevel.LIGHT, 1.375),
            (ActivityLevel.MODERATE, 1.55),
            (ActivityLevel.VERY, 1.725),
        ],
    )
    def test_activity_multipliers(self, level, multiplier):
        tdee = calculate_tdee(Sex.FEMALE, 40, 60, 25, level)
        assert tdee == pytest.approx((370 + 21.6 * 45) * multiplier)

    def test_custom_multiplier_table(self):
        config = EnergyConfig()
        config.activity_multipliers[ActivityLevel.VERY] = 2.0
        tdee = calculate_tdee(Sex.MALE, 30, 75, 15, ActivityLevel.VERY, config)
        assert tdee == pytest.approx(1747.0 * 2.0)

    def test_unknown_activity_string_rejected(self):
        with pytest.raises(ValueError):
            ActivityLevel("extreme")


class TestGoalAdjustment:
    """Tests for goal-adjusted calories."""

    def test_build_muscle_surplus(self):
        assert adjust_for_goal(2707.85, Goal.BUILD_MUSCLE, 75) == pytest.approx(3114.0275)

    def test_maintain_unchanged(self):
        assert adjust_for_goal(2500, Goal.MAINTAIN, 75) == 2500

    def test_lose_fat_deficit(self):
        assert adjust_for_goal(2500, Goal.LOSE_FAT, 80) == pytest.approx(2000)

    def test_lose_fat_floor_light_person(self):
        """50kg at 30% body fat, sedentary: 0.8 * 1351.2 falls below 1200."""
        tdee = calculate_tdee(Sex.FEMALE, 30, 50, 30, ActivityLevel.SEDENTARY)
        assert tdee == pytest.approx(1351.2)
        assert adjust_for_goal(tdee, Goal.LOSE_FAT, 50) == 1200

    def test_lose_fat_floor_heavier_person(self):
        assert adjust_for_goal(1700, Goal.LOSE_FAT, 70) == 1500

    def test_goal_parsing(self):
        assert Goal("build-muscle") is Goal.BUILD_MUSCLE
        with pytest.raises(ValueError):
            Goal("bulk")

    def test_non_goal_rejected(self):
        with pytest.raises(ValueError):
            adjust_for_goal(2000, "maintain", 75)


class TestTargets:
    """Tests for macro gram targets."""

    def test_gram_conversion(self):
        macros = calculate_target_macros(2000, TargetMacros(30, 45, 25))
        assert macros.protein == pytest.approx(150)
        assert macros.carbs == pytest.approx(225)
        assert macros.fat == pytest.approx(55.56, abs=0.01)

    def test_percentages_not_renormalized(self):
        macros = calculate_target_macros(2000, TargetMacros(50, 50, 50))
        assert macros.calories == pytest.approx(3000)

    def test_calculate_targets_bundle(self):
        person = PersonAttributes(
            sex=Sex.MALE,
            age=30,
            body_weight_kg=75,
            body_fat_percentage=15,
            activity_level=ActivityLevel.MODERATE,
        )
        targets = calculate_targets(person, Goal.MAINTAIN, TargetMacros(30, 40, 30))

        assert targets.tdee == pytest.approx(2707.85)
        assert targets.calories == pytest.approx(2707.85)
        assert targets.macros.protein == pytest.approx(2707.85 * 0.3 / 4)
        assert targets.to_dict()["goal"] == "maintain"
