"""Capture data model shared by the comparators."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclass
class Capture:
    """One recorded simulation run."""

    name: str
    extrinsic: Dict[str, Dict[str, List[float]]]
    intrinsic: Any
    logs: List[str] = field(default_factory=list)
    duration: float = 0.0
    overlap: float = 0.0
    memory: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], name: str | None = None) -> "Capture":
        """Build a capture from its serialized mapping form."""

        return cls(
            name=data.get("name", name),
            extrinsic=data.get("extrinsic", {}),
            intrinsic=data.get("intrinsic"),
            logs=list(data.get("logs", [])),
            duration=data.get("duration", 0.0),
            overlap=data.get("overlap", 0.0),
            memory=data.get("memory", 0.0),
        )


CaptureSet = Dict[str, Capture]


def capture_set_from_dict(data: Mapping[str, Mapping[str, Any]]) -> CaptureSet:
    """Convert ``{name: capture-mapping}`` into a CaptureSet."""

    return {name: Capture.from_dict(entry, name=name) for name, entry in data.items()}


def load_capture_set(path: Path) -> CaptureSet:
    """Load a CaptureSet serialized by the simulation harness."""

    with open(path, "r", encoding="utf-8") as f:
        captures = capture_set_from_dict(json.load(f))
    logger.debug("Loaded %d captures from %s", len(captures), path)
    return captures


def validate_capture_sets(dev: CaptureSet, build: CaptureSet) -> None:
    """Both runs must cover exactly the same capture names."""

    missing = sorted(set(dev) - set(build))
    extra = sorted(set(build) - set(dev))
    if missing or extra:
        raise ValueError(
            f"Capture sets differ: missing from build {missing}, missing from dev {extra}"
        )
