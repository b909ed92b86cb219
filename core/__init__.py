# Capture Compare Core Module
from .capture import Capture, CaptureSet, load_capture_set
from .similarity import similarity, noise_threshold
from .extrinsic import capture_similarity_extrinsic, matches_extrinsics
from .intrinsic import IntrinsicChanges, compare_intrinsics, deep_equal, matches_intrinsics
from .metrics import AggregateMetrics, aggregate_metrics
from .report import AnsiFormatter, Formatter, PlainFormatter, ReportBuilder, log_report
from .artifacts import ArtifactWriter, compact_dumps
from .comparison import ComparisonResult, compare_captures, comparison_report, render_comparison

__all__ = [
    "Capture",
    "CaptureSet",
    "load_capture_set",
    "similarity",
    "noise_threshold",
    "capture_similarity_extrinsic",
    "matches_extrinsics",
    "IntrinsicChanges",
    "compare_intrinsics",
    "deep_equal",
    "matches_intrinsics",
    "AggregateMetrics",
    "aggregate_metrics",
    "AnsiFormatter",
    "Formatter",
    "PlainFormatter",
    "ReportBuilder",
    "log_report",
    "ArtifactWriter",
    "compact_dumps",
    "ComparisonResult",
    "compare_captures",
    "comparison_report",
    "render_comparison",
]
