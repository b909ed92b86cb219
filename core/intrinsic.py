"""
Intrinsic State Comparison
==========================

Intrinsic state (configuration, internal counters, anything that is not a
position or velocity) must be exactly invariant between builds. Values are
compared with an explicit recursive equality over three variants:

- keyed mappings: same key set, recursively equal values
- ordered sequences: same length, recursively equal items in order
- scalars: exact equality (``NaN`` equals ``NaN``, booleans are not numbers)

Any error raised while comparing counts as a change.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from numbers import Number
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np

from config import config
from .capture import CaptureSet

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

_SEQUENCE_TYPES = (list, tuple)


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _scalar_equal(a: Any, b: Any) -> bool:
    if _is_number(a) and _is_number(b):
        if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
            return True
        return a == b
    if type(a) is not type(b):
        return False
    return bool(a == b)


def deep_equal(a: Any, b: Any) -> bool:
    """Structural equality of two nested intrinsic values."""

    if isinstance(a, np.ndarray):
        a = a.tolist()
    if isinstance(b, np.ndarray):
        b = b.tolist()

    try:
        if isinstance(a, Mapping) or isinstance(b, Mapping):
            if not (isinstance(a, Mapping) and isinstance(b, Mapping)):
                return False
            if set(a.keys()) != set(b.keys()):
                return False
            return all(deep_equal(a[key], b[key]) for key in a)

        if isinstance(a, _SEQUENCE_TYPES) or isinstance(b, _SEQUENCE_TYPES):
            if not (isinstance(a, _SEQUENCE_TYPES) and isinstance(b, _SEQUENCE_TYPES)):
                return False
            if len(a) != len(b):
                return False
            return all(deep_equal(x, y) for x, y in zip(a, b))

        return _scalar_equal(a, b)
    except Exception as exc:
        logger.debug("Intrinsic values not comparable (%s); treating as changed", exc)
        return False


@dataclass
class IntrinsicChanges:
    """Changed flags for every capture plus capped verbatim payloads."""

    changed: Dict[str, bool] = field(default_factory=dict)
    dev: Dict[str, Any] = field(default_factory=dict)
    build: Dict[str, Any] = field(default_factory=dict)

    @property
    def changed_count(self) -> int:
        return sum(1 for flag in self.changed.values() if flag)

    @property
    def any_changed(self) -> bool:
        return any(self.changed.values())


def compare_intrinsics(
    current_captures: CaptureSet,
    reference_captures: CaptureSet,
    cap: Optional[int] = None,
) -> IntrinsicChanges:
    """
    Flag intrinsic changes for every capture.

    Only the first ``cap`` changed captures keep their full dev and build
    intrinsic values, which bounds the size of reports and saved diffs.
    """

    cap = config.thresholds.intrinsic_diff_cap if cap is None else cap
    changes = IntrinsicChanges()

    for name, current in current_captures.items():
        reference = reference_captures[name]
        is_changed = not deep_equal(current.intrinsic, reference.intrinsic)
        changes.changed[name] = is_changed

        if is_changed and len(changes.dev) < cap:
            changes.dev[name] = current.intrinsic
            changes.build[name] = reference.intrinsic

    logger.debug(
        "Intrinsic changes in %d of %d captures", changes.changed_count, len(changes.changed)
    )
    return changes


def matches_intrinsics(
    current_captures: CaptureSet, reference_captures: CaptureSet
) -> Tuple[bool, IntrinsicChanges]:
    """Intrinsic properties pass only if no capture changed."""

    changes = compare_intrinsics(current_captures, reference_captures)
    passed = not changes.any_changed
    if not passed:
        logger.warning("Expected intrinsic properties to match between builds.")
    return passed, changes
