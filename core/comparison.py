"""Dev vs. build capture comparison and report generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from config import config
from .artifacts import ArtifactWriter
from .capture import CaptureSet, validate_capture_sets
from .extrinsic import capture_similarity_extrinsic
from .intrinsic import IntrinsicChanges, compare_intrinsics
from .metrics import AggregateMetrics, aggregate_metrics
from .report import AnsiFormatter, Formatter, PlainFormatter, ReportBuilder

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class ComparisonResult:
    """Everything the report needs, computed once per comparison."""

    similarities: Dict[str, float]
    intrinsics: IntrinsicChanges
    metrics: AggregateMetrics

    @property
    def extrinsics_passed(self) -> bool:
        threshold = config.thresholds.equality
        return all(score >= threshold for score in self.similarities.values())

    @property
    def intrinsics_passed(self) -> bool:
        return not self.intrinsics.any_changed

    @property
    def passed(self) -> bool:
        return self.extrinsics_passed and self.intrinsics_passed


def compare_captures(
    captures_dev: CaptureSet,
    captures_build: CaptureSet,
    dev_size: float,
    build_size: float,
) -> ComparisonResult:
    """Run the extrinsic, intrinsic and metrics comparators over both runs."""

    validate_capture_sets(captures_dev, captures_build)

    return ComparisonResult(
        similarities=capture_similarity_extrinsic(captures_dev, captures_build),
        intrinsics=compare_intrinsics(captures_dev, captures_build),
        metrics=aggregate_metrics(captures_dev, captures_build, dev_size, build_size),
    )


def render_comparison(
    result: ComparisonResult,
    build_version: str,
    save: bool = False,
    writer: Optional[ArtifactWriter] = None,
    formatter: Optional[Formatter] = None,
) -> str:
    """
    Render the report for an existing comparison.

    In save mode the capped intrinsic snapshots and the plain-text report are
    persisted through ``writer`` before the styled report is returned.
    """

    builder = ReportBuilder(result, build_version, save=save)

    if save:
        names = config.artifacts
        writer = writer or ArtifactWriter()
        writer.write_result(names.dev_name, result.intrinsics.dev)
        writer.write_result(names.build_name, result.intrinsics.build)
        writer.write_result(names.report_name, builder.render(PlainFormatter()))

    if not result.passed:
        logger.warning(
            "Captures diverged: extrinsics %s, intrinsics %s",
            "pass" if result.extrinsics_passed else "fail",
            "pass" if result.intrinsics_passed else "fail",
        )

    return builder.render(formatter or AnsiFormatter())


def comparison_report(
    captures_dev: CaptureSet,
    captures_build: CaptureSet,
    dev_size: float,
    build_size: float,
    build_version: str,
    save: bool = False,
    writer: Optional[ArtifactWriter] = None,
    formatter: Optional[Formatter] = None,
) -> str:
    """Compare both runs and render the report (ANSI colors by default)."""

    result = compare_captures(captures_dev, captures_build, dev_size, build_size)
    return render_comparison(
        result, build_version, save=save, writer=writer, formatter=formatter
    )
