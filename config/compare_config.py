"""
Capture Compare: Single Source of Truth (SSOT)
==============================================

This configuration file defines ALL tolerances, report commands and artifact
locations used by the comparison engine. NEVER hard-code thresholds elsewhere.
Regression gates, report formatting and saved diffs derive from these values.

Regression Mandate: the extrinsic equality threshold is 0.99999.
Loosening it hides drift in positions and velocities between builds.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass
class ThresholdParams:
    """Numeric tolerances for scoring and aggregation."""

    # === EXTRINSIC STATE ===
    equality: float = 0.99999             # Minimum similarity for a passing capture

    # === AGGREGATE METRICS ===
    noise: float = 0.01                   # Perf/memory deltas below 1% are noise

    # === INTRINSIC DIFFS ===
    intrinsic_diff_cap: int = 2           # Verbatim payloads kept for reporting


@dataclass
class ReportParams:
    """Report layout and follow-up command hints."""

    break_every: int = 5                  # Captures per marker line
    compare_position: int = 120           # Query-string position for the browser compare view
    compare_command: str = "open http://localhost:8000/?compare"
    diff_save_command: str = "npm run test-save"
    diff_command: str = (
        "code -n -d test/__compare__/examples-build.json "
        "test/__compare__/examples-dev.json"
    )
    version_prefix: str = "matter-js@"    # Prefix for the reference build label


@dataclass
class ArtifactParams:
    """Locations and names of persisted comparison results."""

    compare_path: Path = field(default_factory=lambda: Path("test/__compare__"))
    json_max_length: int = 100            # Line length bound for saved JSON
    dev_name: str = "examples-dev"
    build_name: str = "examples-build"
    report_name: str = "examples-report"


@dataclass
class CompareConfig:
    """
    Master configuration singleton.

    ALL downstream modules import this. Changes here propagate through:
    - Extrinsic and intrinsic regression gates
    - Aggregate performance/memory noise filtering
    - Report layout and follow-up commands
    - Saved diff artifacts
    """

    thresholds: ThresholdParams = field(default_factory=ThresholdParams)
    report: ReportParams = field(default_factory=ReportParams)
    artifacts: ArtifactParams = field(default_factory=ArtifactParams)

    # Project metadata
    project_name: str = "Capture Compare"
    version: str = "0.1.0"

    def validate(self) -> List[str]:
        """Validate configuration for internally consistent tolerances."""
        errors = []

        if not 0 < self.thresholds.equality <= 1:
            errors.append(
                f"THRESHOLD VIOLATION: Equality threshold ({self.thresholds.equality}) "
                "must lie in (0, 1]."
            )

        # Noise filter divides by (1 - t)
        if not 0 <= self.thresholds.noise < 1:
            errors.append(
                f"THRESHOLD VIOLATION: Noise threshold ({self.thresholds.noise}) "
                "must lie in [0, 1)."
            )

        if self.thresholds.intrinsic_diff_cap < 0:
            errors.append("REPORT VIOLATION: Intrinsic diff cap cannot be negative.")

        if self.report.break_every < 0:
            errors.append("REPORT VIOLATION: Marker break interval cannot be negative.")

        if self.artifacts.json_max_length <= 0:
            errors.append("ARTIFACT VIOLATION: JSON line length must be positive.")

        return errors

    def summary(self) -> str:
        """Generate human-readable configuration summary."""
        return f"""
Capture Compare Configuration Summary
=====================================
Version: {self.version}

THRESHOLDS
----------
Extrinsic Equality: {self.thresholds.equality}
Noise: {self.thresholds.noise:.1%}
Intrinsic Diff Cap: {self.thresholds.intrinsic_diff_cap}

REPORT
------
Break Every: {self.report.break_every}
Version Prefix: {self.report.version_prefix}

ARTIFACTS
---------
Compare Path: {self.artifacts.compare_path}
JSON Max Length: {self.artifacts.json_max_length}
"""


# Singleton instance - import this throughout the project
config = CompareConfig()

# Validate on import
_errors = config.validate()
if _errors:
    import warnings
    for err in _errors:
        warnings.warn(err, UserWarning)
