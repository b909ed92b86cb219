"""
Comparison Report Rendering
===========================

Turns the outputs of the extrinsic, intrinsic and metrics comparators into a
single text summary. Styling is injected through a ``Formatter`` so the same
layout renders as plain text (saved reports, tests) or with ANSI colors
(terminal output).
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal
from enum import IntEnum
from typing import TYPE_CHECKING, Iterable, List, Optional

from config import config
from .capture import CaptureSet

if TYPE_CHECKING:
    from .comparison import ComparisonResult


class Color(IntEnum):
    """ANSI foreground color codes."""

    RED = 31
    GREEN = 32
    YELLOW = 33
    WHITE = 37
    BRIGHT_WHITE = 90
    BRIGHT_CYAN = 36


class Formatter(ABC):
    """Output styling strategy."""

    @abstractmethod
    def format(self, text: str, color: Optional[Color] = None) -> str:
        """Return ``text`` styled with ``color``."""


class PlainFormatter(Formatter):
    """Leave text untouched."""

    def format(self, text: str, color: Optional[Color] = None) -> str:
        return text


class AnsiFormatter(Formatter):
    """Wrap text in ANSI color escapes."""

    def format(self, text: str, color: Optional[Color] = None) -> str:
        if not color:
            return text
        return f"\x1b[{int(color)}m{text}\x1b[0m"


LEGEND = "where  · no change  ● extrinsics changed  ◆ intrinsics changed"


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point text with exact ties rounded away from zero."""

    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def to_percent(value: float) -> str:
    return to_fixed(100 * value, 3)


def to_percent_round(value: float) -> str:
    # Half-up rounding, not Python's banker's rounding
    return str(math.floor(100 * value + 0.5))


def to_precision(value: float, digits: int) -> str:
    """Format ``value`` with ``digits`` significant figures, keeping trailing zeros."""

    if value == 0:
        return f"{0:.{digits - 1}f}"

    mantissa, exponent = f"{value:.{digits - 1}e}".split("e")
    exponent = int(exponent)
    if exponent < -6 or exponent >= digits:
        return f"{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"
    return f"{value:.{max(0, digits - 1 - exponent)}f}"


def signed(value: float, number_format=to_percent) -> str:
    return ("+" if value >= 0 else "-") + number_format(abs(value))


def sort_names(names: Iterable[str]) -> List[str]:
    """Alphabetical, case-insensitive first."""

    return sorted(names, key=lambda name: (name.lower(), name))


class ReportBuilder:
    """Render the comparison summary for one dev/build pair."""

    def __init__(
        self,
        result: "ComparisonResult",
        build_version: str,
        save: bool = False,
        break_every: Optional[int] = None,
    ):
        self.result = result
        self.build_version = build_version
        self.save = save
        self.break_every = (
            config.report.break_every if break_every is None else break_every
        )

    @property
    def similarity_average(self) -> float:
        scores = self.result.similarities
        if not scores:
            return 1.0
        return sum(scores.values()) / len(scores)

    @property
    def worst_capture(self) -> Optional[str]:
        """Name of the lowest scoring capture (first on ties)."""

        ranked = sorted(self.result.similarities.items(), key=lambda entry: entry[1])
        return ranked[0][0] if ranked else None

    def similarity_marker(self, name: str, fmt: Formatter) -> str:
        if self.result.similarities[name] < config.thresholds.equality:
            return fmt.format("●", Color.YELLOW)
        return "·"

    def change_marker(self, name: str, fmt: Formatter) -> str:
        if self.result.intrinsics.changed.get(name, False):
            return fmt.format("◆", Color.WHITE)
        return "·"

    def marker_block(self, fmt: Formatter) -> str:
        output = "\n\n"
        names = sort_names(self.result.similarities)
        for i, name in enumerate(names):
            output += f"{name} "
            output += f"{self.similarity_marker(name, fmt)} "
            output += f"{self.change_marker(name, fmt)} "
            if i > 0 and self.break_every > 0 and i % self.break_every == 0:
                output += "\n"
        return output

    def render(self, fmt: Formatter) -> str:
        """Compose the report with the given styling strategy."""

        metrics = self.result.metrics
        average = self.similarity_average
        count = len(self.result.similarities)
        report = config.report
        label = f"{report.version_prefix}{self.build_version}"

        overlap = metrics.overlap_change
        perf = metrics.perf_change
        memory = metrics.memory_change
        filesize = metrics.filesize_change

        segments = [
            f"Output comparison of {count} examples against previous release "
            f"{fmt.format(label, Color.YELLOW)}",
            f"\n\n{fmt.format('Similarity', Color.WHITE)}",
            f"{fmt.format(to_percent(average), Color.GREEN if average == 1 else Color.YELLOW)}%",
            fmt.format("Overlap", Color.WHITE),
            f"{fmt.format(signed(overlap), Color.GREEN if overlap <= 0 else Color.YELLOW)}%",
            fmt.format("Performance ~", Color.WHITE),
            f"{fmt.format(signed(perf, to_percent_round), Color.GREEN if perf >= 0 else Color.YELLOW)}%",
            fmt.format("Memory ~", Color.WHITE),
            f"{fmt.format(signed(memory, to_percent_round), Color.GREEN if memory <= 0 else Color.YELLOW)}%",
            self.marker_block(fmt),
            f"\n\n{LEGEND}\n",
        ]

        if average < 1:
            command = f"{report.compare_command}={report.compare_position}#{self.worst_capture}"
            segments.append(
                f"\n{fmt.format('▶', Color.WHITE)} {fmt.format(command, Color.BRIGHT_CYAN)}"
            )
        else:
            segments.append("")

        if self.result.intrinsics.any_changed:
            command = report.diff_command if self.save else report.diff_save_command
            segments.append(
                f"\n{fmt.format('▶', Color.WHITE)} {fmt.format(command, Color.BRIGHT_CYAN)}"
            )
        else:
            segments.append("")

        segments.extend(
            [
                f"\n\n{fmt.format('Filesize', Color.WHITE)}",
                f"{fmt.format(signed(filesize), Color.GREEN if filesize <= 0 else Color.YELLOW)}%",
                fmt.format(f"{to_precision(metrics.dev_size / 1024, 4)} KB", Color.WHITE),
            ]
        )

        return "  ".join(segments)


def log_report(captures: CaptureSet, version: str, fmt: Optional[Formatter] = None) -> str:
    """List the log output of every capture that produced any."""

    fmt = fmt or AnsiFormatter()
    report = ""

    for capture in captures.values():
        if not capture.logs:
            continue

        report += f"  {capture.name}\n"
        for log in capture.logs:
            report += f"    {log}\n"

    header = f"Output logs from {fmt.format(version, Color.YELLOW)} build on last run\n\n"
    return header + (report or "  None\n")
