#!/usr/bin/env python3
"""
estimate_skill.py: full combo skill, miss penalty curve and decayed strain
for one sequence of timed objects.

Input is JSONL, one object per line:
    {"delta_time": 180.0, "difficulty": 1.7}

Optional --config is a JSON file with "probability" and/or "strain"
sections overriding the defaults.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from skillcurve.config import ProbabilityConfig, StrainConfig
from skillcurve.numerics.hit_probability import HIT_PROBABILITIES
from skillcurve.orchestration.factory import SkillFactory
from skillcurve.orchestration.runner import SkillRunner


def load_factory(config_path: Path | None) -> SkillFactory:
    if config_path is None:
        return SkillFactory()

    raw = json.loads(Path(config_path).read_text(encoding="utf-8"))
    return SkillFactory(
        probability_config=ProbabilityConfig.from_dict(raw.get("probability", {})),
        strain_config=StrainConfig.from_dict(raw.get("strain", {})),
    )


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--in_path", type=Path, required=True)
    ap.add_argument("--out_report", type=Path, required=True)
    ap.add_argument("--config", type=Path, default=None)
    ap.add_argument("--hit_model", default="erf", choices=sorted(HIT_PROBABILITIES.keys()))
    ap.add_argument("--skill_multiplier", type=float, default=1.0)
    ap.add_argument("--plot_dir", type=Path, default=None)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    runner = SkillRunner(load_factory(args.config))
    report = runner.run(
        in_path=args.in_path,
        out_report=args.out_report,
        hit_model=args.hit_model,
        skill_multiplier=args.skill_multiplier,
        plot_dir=args.plot_dir,
    )

    print(f"Full combo skill: {report['probability']['difficulty_value']:.4f}")
    print(f"Strain value:     {report['strain']['difficulty_value']:.4f}")


if __name__ == "__main__":
    main()
