"""
Tests for config.py - ProbabilityConfig, StrainConfig
"""

import pytest

from skillcurve.config import ProbabilityConfig, StrainConfig
from skillcurve.numerics.hit_probability import get_hit_probability
from skillcurve.skills.probability_skill import ProbabilitySkill
from skillcurve.skills.strain_accumulator import StrainAccumulator


class TestProbabilityConfig:

    def test_defaults_are_valid(self):
        config = ProbabilityConfig()
        config.validate()

        assert config.fc_probability == 0.02
        assert config.bin_threshold == 64
        assert config.penalty_fractions[0] == 1.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"fc_probability": 0.0},
            {"fc_probability": 1.0},
            {"bin_count": 0},
            {"root_accuracy": 0.0},
            {"upper_bound_multiplier": -1.0},
            {"miss_search_lower": 10.0, "miss_search_upper": 5.0},
            {"penalty_fractions": (0.9, 0.5, 0.0)},
            {"penalty_fractions": (1.0, 0.5, 0.6)},
            {"penalty_fractions": (1.0,)},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            ProbabilityConfig(**kwargs).validate()

    def test_skill_validates_config(self, erf_hit):
        with pytest.raises(ValueError):
            ProbabilitySkill(erf_hit, config=ProbabilityConfig(bin_count=0))

    def test_from_dict(self):
        config = ProbabilityConfig.from_dict({"bin_count": 16, "penalty_fractions": [1.0, 0.5, 0.0]})

        assert config.bin_count == 16
        assert config.penalty_fractions == (1.0, 0.5, 0.0)

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="Unknown"):
            ProbabilityConfig.from_dict({"bins": 16})


class TestStrainConfig:

    def test_defaults_are_valid(self):
        StrainConfig().validate()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"strain_decay_base": 1.0},
            {"decay_weight": 0.0},
            {"peak_decay": 1.5},
            {"section_length": 0.0},
            {"normalized_peak": -1.0},
            {"length_bonus_weight": -0.1},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            StrainConfig(**kwargs).validate()

    def test_accumulator_validates_config(self):
        with pytest.raises(ValueError):
            StrainAccumulator(lambda obj: 1.0, config=StrainConfig(decay_weight=2.0))

    def test_from_dict(self):
        assert StrainConfig.from_dict({"strain_decay_base": 0.15}).strain_decay_base == 0.15


class TestHitProbabilityRegistry:

    def test_known_models(self):
        assert get_hit_probability("linear")(1.0, 2.0) == 0.5
        assert get_hit_probability("erf")(0.0, 1.0) == 0.0
        assert get_hit_probability("erf")(1.0, 0.0) == 1.0

    def test_unknown_model(self):
        with pytest.raises(ValueError):
            get_hit_probability("logistic")
