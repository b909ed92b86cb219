# Capture Compare Configuration Module
from .compare_config import (
    CompareConfig, config, ThresholdParams,
    ReportParams, ArtifactParams
)

__all__ = [
    "CompareConfig", "config", "ThresholdParams",
    "ReportParams", "ArtifactParams"
]
