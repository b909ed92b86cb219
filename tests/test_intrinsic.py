import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from core.intrinsic import compare_intrinsics, deep_equal, matches_intrinsics  # noqa: E402


class Incomparable:
    def __eq__(self, other):
        raise TypeError("cannot compare")

    __hash__ = object.__hash__


class Exploding:
    def __eq__(self, other):
        raise RuntimeError("boom")

    __hash__ = object.__hash__


class TestDeepEqual:

    @pytest.mark.parametrize(
        "a, b",
        [
            ({"a": [1, {"b": "x"}]}, {"a": [1, {"b": "x"}]}),
            (1, 1.0),
            (float("nan"), float("nan")),
            ((1, 2), [1, 2]),
            (None, None),
            ({}, {}),
        ],
    )
    def test_equal(self, a, b):
        assert deep_equal(a, b)

    @pytest.mark.parametrize(
        "a, b",
        [
            ([1, 2], [2, 1]),
            ([1, 2], [1, 2, 3]),
            ({"a": 1}, {"a": 1, "b": 2}),
            ({"a": 1}, {"b": 1}),
            ({"a": {"b": 1}}, {"a": {"b": 2}}),
            (True, 1),
            ("1", 1),
            ([1], {"0": 1}),
            (None, 0),
        ],
    )
    def test_not_equal(self, a, b):
        assert not deep_equal(a, b)

    def test_comparison_error_counts_as_changed(self):
        value = Incomparable()
        assert not deep_equal({"x": value}, {"x": value})

    def test_any_error_type_counts_as_changed(self):
        value = Exploding()
        assert not deep_equal({"x": [value]}, {"x": [value]})


def test_no_changes(captures_dev, captures_build):
    changes = compare_intrinsics(captures_dev, captures_build)

    assert not changes.any_changed
    assert changes.changed_count == 0
    assert changes.dev == {} and changes.build == {}
    assert matches_intrinsics(captures_dev, captures_build)[0]


def test_payload_capped_but_every_change_flagged(captures_dev, captures_build):
    for name in ("stack", "bridge", "avalanche", "car"):
        captures_dev[name].intrinsic["mass"] = 2.0

    changes = compare_intrinsics(captures_dev, captures_build)

    assert changes.changed_count == 4
    assert [name for name, flag in changes.changed.items() if flag] == [
        "stack", "bridge", "avalanche", "car",
    ]
    assert list(changes.dev) == ["stack", "bridge"]
    assert list(changes.build) == ["stack", "bridge"]
    assert changes.dev["stack"]["mass"] == 2.0
    assert changes.build["stack"]["mass"] == 1.0

    passed, _ = matches_intrinsics(captures_dev, captures_build)
    assert not passed


def test_cap_override(captures_dev, captures_build):
    for name in captures_dev:
        captures_dev[name].intrinsic["label"] = "renamed"

    assert len(compare_intrinsics(captures_dev, captures_build, cap=0).dev) == 0
    assert len(compare_intrinsics(captures_dev, captures_build, cap=5).dev) == 5


def test_captures_are_not_mutated(captures_dev, captures_build):
    captures_dev["chains"].intrinsic["parts"].append(3)
    compare_intrinsics(captures_dev, captures_build)

    assert not hasattr(captures_dev["chains"], "changed_intrinsics")
    assert captures_build["chains"].intrinsic["parts"] == [1, 2]


def test_comparison_error_does_not_abort(captures_dev, captures_build):
    captures_dev["car"].intrinsic["solver"] = Exploding()
    captures_build["car"].intrinsic["solver"] = captures_dev["car"].intrinsic["solver"]

    changes = compare_intrinsics(captures_dev, captures_build)

    assert changes.changed["car"]
    assert changes.changed_count == 1
