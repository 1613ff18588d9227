from typing import Optional

from skillcurve.config import ProbabilityConfig, StrainConfig
from skillcurve.numerics.hit_probability import get_hit_probability
from skillcurve.protocols.evaluator import StrainEvaluator
from skillcurve.skills.probability_skill import ProbabilitySkill
from skillcurve.skills.strain_accumulator import StrainAccumulator
from skillcurve.skills.windowed_strain import WindowedStrainEvaluator


class SkillFactory:
    """
    Responsible ONLY for constructing concrete implementations.
    No execution logic.
    """

    def __init__(
        self,
        probability_config: Optional[ProbabilityConfig] = None,
        strain_config: Optional[StrainConfig] = None,
    ):
        self.probability_config = probability_config or ProbabilityConfig()
        self.strain_config = strain_config or StrainConfig()

    # -------------------------------------------------
    # Evaluators
    # -------------------------------------------------

    def build_strain_evaluator(self, skill_multiplier: float = 1.0) -> StrainEvaluator:
        return WindowedStrainEvaluator(skill_multiplier=skill_multiplier)

    # -------------------------------------------------
    # Skills
    # -------------------------------------------------

    def build_probability_skill(self, hit_model: str = "erf") -> ProbabilitySkill:
        return ProbabilitySkill(
            get_hit_probability(hit_model),
            strain_value_at=lambda obj: obj.difficulty,
            config=self.probability_config,
        )

    def build_strain_accumulator(self, skill_multiplier: float = 1.0) -> StrainAccumulator:
        return StrainAccumulator(
            self.build_strain_evaluator(skill_multiplier),
            config=self.strain_config,
        )
