# src/skillcurve/dataset/loader.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List

from skillcurve.custom_types import TimedObject

logger = logging.getLogger(__name__)


def iter_jsonl(path: Path) -> Iterator[tuple[int, Dict[str, Any]]]:
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                yield line_no, json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"{path}:{line_no}: malformed JSON ({e.msg})") from e


def load_objects(path: Path) -> List[TimedObject]:
    """
    Read timed objects from JSONL.

    Each row needs `difficulty` and either `delta_time` or `start_time`
    (ms); the missing one is derived from the previous row.
    """
    path = Path(path)
    objects: List[TimedObject] = []
    prev_start = 0.0

    for line_no, row in iter_jsonl(path):
        if not isinstance(row, dict):
            raise ValueError(f"{path}:{line_no}: expected an object, got {type(row).__name__}")
        if "difficulty" not in row:
            raise ValueError(f"{path}:{line_no}: missing 'difficulty'")

        if "delta_time" in row:
            delta_time = float(row["delta_time"])
            start_time = float(row.get("start_time", prev_start + delta_time))
        elif "start_time" in row:
            start_time = float(row["start_time"])
            delta_time = start_time - prev_start if objects else 0.0
        else:
            raise ValueError(f"{path}:{line_no}: needs 'delta_time' or 'start_time'")

        objects.append(
            TimedObject(
                index=len(objects),
                start_time=start_time,
                delta_time=delta_time,
                difficulty=float(row["difficulty"]),
            )
        )
        prev_start = start_time

    logger.info(f"Loaded {len(objects)} objects from {path}")
    return objects
