# src/skillcurve/orchestration/runner.py

import json
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from time import time
from typing import Any, Dict, List, Optional, Sequence

from tqdm import tqdm

from skillcurve.custom_types import TimedObject
from skillcurve.dataset.loader import load_objects
from skillcurve.numerics.miss_curve import MissPenaltyCurve
from skillcurve.orchestration.factory import SkillFactory
from skillcurve.reporting.strain_report import plot_miss_penalty_curve, plot_strain_peaks
from skillcurve.skills.probability_skill import ProbabilitySkill
from skillcurve.skills.strain_accumulator import StrainAccumulator

logger = logging.getLogger(__name__)


@dataclass
class SkillRunResult:
    probability_skill: ProbabilitySkill
    strain_skill: StrainAccumulator
    miss_penalty_curve: MissPenaltyCurve

    def to_dict(self, penalty_fractions: Sequence[float]) -> Dict[str, Any]:
        return {
            "probability": self.probability_skill.attributes().to_dict(),
            "strain": self.strain_skill.attributes().to_dict(),
            "miss_counts": {
                f"{fraction:.2f}": self.miss_penalty_curve.miss_count(fraction)
                for fraction in penalty_fractions
            },
        }


class SkillRunner:
    """
    Orchestration layer.

    Responsible for:
        - Loading objects
        - Feeding them through both skills
        - Writing the report and plots

    No aggregation math here.
    """

    def __init__(self, factory: Optional[SkillFactory] = None):
        self.factory = factory or SkillFactory()

    def evaluate(
        self,
        objects: List[TimedObject],
        *,
        hit_model: str = "erf",
        skill_multiplier: float = 1.0,
        show_progress: bool = False,
    ) -> SkillRunResult:
        probability_skill = self.factory.build_probability_skill(hit_model)
        strain_skill = self.factory.build_strain_accumulator(skill_multiplier)

        for obj in tqdm(objects, desc="Processing", disable=not show_progress):
            probability_skill.process(obj)
            strain_skill.process(obj)

        return SkillRunResult(
            probability_skill=probability_skill,
            strain_skill=strain_skill,
            miss_penalty_curve=probability_skill.get_miss_penalty_curve(),
        )

    def run(
        self,
        *,
        in_path: Path,
        out_report: Path,
        hit_model: str = "erf",
        skill_multiplier: float = 1.0,
        plot_dir: Optional[Path] = None,
    ) -> Dict[str, Any]:
        start_time = time()
        run_id = str(uuid.uuid4())

        logger.info(f"Starting skill run {run_id}")

        objects = load_objects(in_path)
        result = self.evaluate(
            objects,
            hit_model=hit_model,
            skill_multiplier=skill_multiplier,
            show_progress=True,
        )

        report = {
            "run_id": run_id,
            "input": str(in_path),
            "hit_model": hit_model,
            "object_count": len(objects),
            **result.to_dict(self.factory.probability_config.penalty_fractions),
        }

        out_report = Path(out_report)
        out_report.parent.mkdir(parents=True, exist_ok=True)
        out_report.write_text(json.dumps(report, indent=2), encoding="utf-8")
        logger.info(f"Report written to {out_report}")

        if plot_dir is not None:
            plot_dir = Path(plot_dir)
            plot_dir.mkdir(parents=True, exist_ok=True)
            plot_strain_peaks(
                result.probability_skill.get_current_strain_peaks(),
                plot_dir / "difficulty.png",
                title="Object Difficulty",
            )
            plot_strain_peaks(result.strain_skill.get_current_strain_peaks(), plot_dir / "strain.png")
            plot_miss_penalty_curve(result.miss_penalty_curve, plot_dir / "miss_penalty.png")
            logger.info(f"Plots written to {plot_dir}")

        logger.info(f"Run completed in {time() - start_time:.2f}s")
        return report
