import re
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from config import config  # noqa: E402
from core.comparison import compare_captures  # noqa: E402
from core.report import (  # noqa: E402
    LEGEND,
    AnsiFormatter,
    Color,
    PlainFormatter,
    ReportBuilder,
    log_report,
    to_fixed,
    to_percent,
    to_percent_round,
    to_precision,
)

PLAIN = PlainFormatter()
ANSI = AnsiFormatter()
SORTED_NAMES = ["avalanche", "bridge", "car", "chains", "newtonsCradle", "pyramid", "stack"]


def _report(dev, build, dev_size=2048, build_size=2048, fmt=PLAIN, **kwargs):
    result = compare_captures(dev, build, dev_size, build_size)
    return ReportBuilder(result, "0.19.0", **kwargs).render(fmt)


def _markers(report):
    return re.findall(r"(\w+) ([·●]) ([·◆]) ", report)


class TestFormatting:

    def test_ansi_wraps_text(self):
        assert ANSI.format("x", Color.GREEN) == "\x1b[32mx\x1b[0m"
        assert ANSI.format("x") == "x"

    def test_plain_is_identity(self):
        assert PLAIN.format("x", Color.YELLOW) == "x"

    @pytest.mark.parametrize(
        "value, expected",
        [
            (12.3456, "12.35"),
            (1.5, "1.500"),
            (0.9765625, "0.9766"),
            (9.9996, "10.00"),
            (12345.6, "1.235e+4"),
            (0.000123456, "0.0001235"),
            (0, "0.000"),
        ],
    )
    def test_to_precision(self, value, expected):
        assert to_precision(value, 4) == expected

    @pytest.mark.parametrize(
        "value, digits, expected",
        [
            (0.0625, 3, "0.063"),
            (2.5, 0, "3"),
            (51.171875, 3, "51.172"),
            (100.0, 3, "100.000"),
            (0.0, 3, "0.000"),
        ],
    )
    def test_fixed_point_ties_round_up(self, value, digits, expected):
        assert to_fixed(value, digits) == expected

    def test_percent_uses_half_up_fixed_point(self):
        assert to_percent(0.125) == "12.500"
        assert to_percent(1.0) == "100.000"

    def test_percent_rounds_half_up(self):
        assert to_percent_round(0.125) == "13"
        assert to_percent_round(0.0) == "0"


class TestReportBuilder:

    def test_identical_runs(self, captures_dev, captures_build):
        report = _report(captures_dev, captures_build)

        assert report.startswith(
            "Output comparison of 7 examples against previous release matter-js@0.19.0"
        )
        assert "Similarity  100.000%" in report
        assert "Overlap  +0.000%" in report
        assert "Performance ~  +0%" in report
        assert "Memory ~  +0%" in report
        assert "Filesize  +0.000%  2.000 KB" in report
        assert f"\n\n{LEGEND}\n" in report
        assert "▶" not in report
        assert "\x1b[" not in report

    def test_markers_sorted_and_counted(self, captures_dev, captures_build):
        markers = _markers(_report(captures_dev, captures_build))

        assert [name for name, _, _ in markers] == SORTED_NAMES
        assert all(ext == "·" and intr == "·" for _, ext, intr in markers)

    def test_line_break_every_five(self, captures_dev, captures_build):
        report = _report(captures_dev, captures_build)
        assert "pyramid · · \nstack · · " in report

        unbroken = _report(captures_dev, captures_build, break_every=0)
        assert "pyramid · · stack · · " in unbroken

    def test_extrinsic_change(self, captures_dev, captures_build):
        captures_dev["bridge"].extrinsic["body"]["1"][0] += 100.0
        captures_dev["car"].extrinsic["body"]["1"][0] += 1.0

        report = _report(captures_dev, captures_build)
        markers = {name: (ext, intr) for name, ext, intr in _markers(report)}

        assert markers["bridge"] == ("●", "·")
        assert markers["car"] == ("●", "·")
        assert markers["stack"] == ("·", "·")
        assert f"{config.report.compare_command}=120#bridge" in report
        assert "Similarity  100.000%" not in report

    def test_average_below_one_is_yellow(self, captures_dev, captures_build):
        captures_dev["bridge"].extrinsic["body"]["1"][0] += 100.0
        report = _report(captures_dev, captures_build, fmt=ANSI)

        assert re.search(r"\x1b\[33m\d+\.\d{3}\x1b\[0m%", report)
        assert "\x1b[33m●\x1b[0m" in report

    def test_intrinsic_change_suggests_saving(self, captures_dev, captures_build):
        captures_dev["car"].intrinsic["label"] = "changed"

        report = _report(captures_dev, captures_build)
        markers = {name: (ext, intr) for name, ext, intr in _markers(report)}

        assert markers["car"] == ("·", "◆")
        assert config.report.diff_save_command in report
        assert config.report.diff_command not in report

        saved = _report(captures_dev, captures_build, save=True)
        assert config.report.diff_command in saved
        assert config.report.diff_save_command not in saved

    def test_polarities(self, captures_dev, captures_build):
        for capture in captures_dev.values():
            capture.duration = 9.0
            capture.memory = 110.0
            capture.overlap = 2.0

        report = _report(captures_dev, captures_build, dev_size=1000, fmt=ANSI)

        # faster dev is green, more memory and overlap are yellow
        assert "\x1b[32m+9\x1b[0m%" in report
        assert "\x1b[33m+9\x1b[0m%" in report
        assert "\x1b[33m+100.000\x1b[0m%" in report
        # smaller file is green
        assert "\x1b[32m-51.172\x1b[0m%" in report
        assert "\x1b[37m0.9766 KB\x1b[0m" in report

    def test_regressions(self, captures_dev, captures_build):
        for capture in captures_dev.values():
            capture.duration = 12.0
            capture.memory = 80.0
            capture.overlap = 0.5

        report = _report(captures_dev, captures_build, dev_size=4096, fmt=ANSI)

        assert "\x1b[33m-19\x1b[0m%" in report
        assert "\x1b[32m-19\x1b[0m%" in report
        assert "\x1b[32m-50.000\x1b[0m%" in report
        assert "\x1b[33m+100.000\x1b[0m%" in report


def test_log_report(captures_build):
    captures_build["car"].logs = ["warning: sleeping body woke", "done"]

    report = log_report(captures_build, "0.19.0", PLAIN)

    assert report == (
        "Output logs from 0.19.0 build on last run\n\n"
        "  car\n"
        "    warning: sleeping body woke\n"
        "    done\n"
    )


def test_log_report_without_logs(captures_build):
    report = log_report(captures_build, "0.19.0", ANSI)

    assert report.endswith("  None\n")
    assert "\x1b[33m0.19.0\x1b[0m" in report
