"""Aggregate performance, memory, overlap and filesize deltas across captures."""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from config import config
from .capture import CaptureSet
from .similarity import noise_threshold

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class AggregateMetrics:
    """Whole-set totals and relative changes of dev against build."""

    total_time_dev: float
    total_time_build: float
    total_overlap_dev: float
    total_overlap_build: float
    total_memory_dev: float
    total_memory_build: float
    dev_size: float
    build_size: float
    perf_change: float
    memory_change: float
    overlap_change: float
    filesize_change: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def aggregate_metrics(
    current_captures: CaptureSet,
    reference_captures: CaptureSet,
    dev_size: float,
    build_size: float,
    noise: Optional[float] = None,
) -> AggregateMetrics:
    """
    Sum per-capture samples and derive the relative deltas.

    Sign conventions:
        perf_change > 0      dev is faster
        memory_change > 0    dev uses more memory
        overlap_change > 0   dev has more overlap
        filesize_change > 0  dev output is larger

    Raises:
        ValueError: If a build baseline (time, memory, size) is zero or a
            delta is not finite.
    """

    noise = config.thresholds.noise if noise is None else noise

    time_dev = time_build = 0.0
    overlap_dev = overlap_build = 0.0
    memory_dev = memory_build = 0.0

    for name, current in current_captures.items():
        reference = reference_captures[name]
        time_dev += current.duration
        time_build += reference.duration
        overlap_dev += current.overlap
        overlap_build += reference.overlap
        memory_dev += current.memory
        memory_build += reference.memory

    if time_build == 0:
        raise ValueError("Build total time is zero; cannot compute performance change")
    if memory_build == 0:
        raise ValueError("Build total memory is zero; cannot compute memory change")
    if build_size == 0:
        raise ValueError("Build size is zero; cannot compute filesize change")

    metrics = AggregateMetrics(
        total_time_dev=time_dev,
        total_time_build=time_build,
        total_overlap_dev=overlap_dev,
        total_overlap_build=overlap_build,
        total_memory_dev=memory_dev,
        total_memory_build=memory_build,
        dev_size=dev_size,
        build_size=build_size,
        perf_change=noise_threshold(1 - time_dev / time_build, noise),
        memory_change=noise_threshold(memory_dev / memory_build - 1, noise),
        overlap_change=overlap_dev / (overlap_build or 1) - 1,
        filesize_change=dev_size / build_size - 1,
    )

    for key in ("perf_change", "memory_change", "overlap_change", "filesize_change"):
        if not math.isfinite(getattr(metrics, key)):
            raise ValueError(f"Non-finite {key}: {getattr(metrics, key)}")

    logger.debug("Aggregate metrics: %s", metrics)
    return metrics
