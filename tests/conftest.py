import copy
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from core.capture import Capture  # noqa: E402


def make_capture(name, offset=0.0, intrinsic=None, duration=10.0, overlap=1.0, memory=100.0, logs=None):
    """Two bodies and one constraint, positions shifted by ``offset``."""

    return Capture(
        name=name,
        extrinsic={
            "body": {
                "1": [0.0 + offset, 10.0, 0.5, -0.25],
                "2": [25.0, 40.0, 0.0, 0.0],
            },
            "constraint": {
                "3": [12.5, 20.0],
            },
        },
        intrinsic=intrinsic if intrinsic is not None else {"mass": 1.0, "label": name, "parts": [1, 2]},
        logs=list(logs or []),
        duration=duration,
        overlap=overlap,
        memory=memory,
    )


NAMES = ["stack", "bridge", "avalanche", "pyramid", "newtonsCradle", "chains", "car"]


@pytest.fixture()
def captures_build():
    return {name: make_capture(name) for name in NAMES}


@pytest.fixture()
def captures_dev(captures_build):
    return copy.deepcopy(captures_build)
