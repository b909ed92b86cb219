"""Extrinsic (positional) state comparison between two capture runs."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from config import config
from .capture import Capture, CaptureSet
from .similarity import similarity

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def world_vectors(current: Capture, reference: Capture) -> Tuple[List[float], List[float]]:
    """
    Flatten the extrinsic state of both captures into aligned vectors.

    Object types and ids are walked in the insertion order of ``current``;
    ``reference`` is looked up by the same keys so components line up.
    """

    world: List[float] = []
    world_ref: List[float] = []

    for object_type, objects in current.extrinsic.items():
        reference_objects = reference.extrinsic[object_type]
        for object_id, components in objects.items():
            world.extend(components)
            world_ref.extend(reference_objects[object_id])

    return world, world_ref


def capture_similarity_extrinsic(
    current_captures: CaptureSet, reference_captures: CaptureSet
) -> Dict[str, float]:
    """Score every current capture against its reference by name."""

    result: Dict[str, float] = {}
    for name, current in current_captures.items():
        world, world_ref = world_vectors(current, reference_captures[name])
        result[name] = similarity(world, world_ref)

    logger.debug("Extrinsic similarity scores: %s", result)
    return result


def matches_extrinsics(
    current_captures: CaptureSet,
    reference_captures: CaptureSet,
    threshold: Optional[float] = None,
) -> Tuple[bool, Dict[str, float]]:
    """Positions and velocities pass only if every capture clears the threshold."""

    threshold = config.thresholds.equality if threshold is None else threshold
    scores = capture_similarity_extrinsic(current_captures, reference_captures)
    passed = all(score >= threshold for score in scores.values())

    if not passed:
        failing = sorted(name for name, score in scores.items() if score < threshold)
        logger.warning(
            "Expected positions and velocities to match between builds: %s", failing
        )
    return passed, scores
