"""Scalar scoring primitives for capture comparison."""

from __future__ import annotations

from typing import Sequence

import numpy as np


def similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Similarity of ``b`` to the reference vector ``a`` in (0, 1].

    Missing trailing components of the shorter vector count as zero. The
    Euclidean distance is normalized by the length of ``a`` only, so the
    score is not symmetric in its arguments. An empty ``a`` scores 1.
    """

    if len(a) == 0:
        return 1.0
    size = max(len(a), len(b))

    current = np.zeros(size, dtype=float)
    reference = np.zeros(size, dtype=float)
    current[: len(a)] = a
    reference[: len(b)] = b

    distance = float(np.linalg.norm(current - reference))
    return 1 / (1 + distance / len(a))


def noise_threshold(value: float, threshold: float) -> float:
    """Zero out deltas within ``threshold`` and rescale the rest continuously."""

    sign = -1 if value < 0 else 1
    magnitude = abs(value)
    return sign * max(0.0, magnitude - threshold) / (1 - threshold)
