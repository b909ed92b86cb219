#!/usr/bin/env python3
"""
Capture Compare: Main Entry Point
=================================

Usage:
    python main.py --dev dev.json --build build.json --version 0.19.0
                                  Print the comparison report
    python main.py ... --save     Also write diff snapshots and the plain report
    python main.py ... --logs     Append captured log output of the build run
    python main.py --summary      Show configuration summary

"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from config import config  # noqa: E402
from core.artifacts import ArtifactWriter  # noqa: E402
from core.capture import load_capture_set  # noqa: E402
from core.comparison import compare_captures, render_comparison  # noqa: E402
from core.report import AnsiFormatter, PlainFormatter, log_report  # noqa: E402


def validate_config() -> bool:
    """Validate comparison configuration."""
    errors = config.validate()

    if errors:
        print("\nCONFIGURATION ERRORS:")
        for err in errors:
            print(f"  [!] {err}")
        return False

    return True


def resolve_size(size, artifact) -> float:
    """Explicit size wins; otherwise measure the artifact on disk."""
    if size is not None:
        return size
    if artifact is not None:
        return float(Path(artifact).stat().st_size)
    raise ValueError("Provide either a size or an artifact path for each build")


def run_comparison(args: argparse.Namespace) -> int:
    """Compare dev against build, print the report and return the exit code."""
    captures_dev = load_capture_set(args.dev)
    captures_build = load_capture_set(args.build)
    dev_size = resolve_size(args.dev_size, args.dev_artifact)
    build_size = resolve_size(args.build_size, args.build_artifact)
    formatter = PlainFormatter() if args.plain else AnsiFormatter()

    writer = ArtifactWriter(args.output) if args.output else None
    result = compare_captures(captures_dev, captures_build, dev_size, build_size)
    print(
        render_comparison(
            result, args.version, save=args.save, writer=writer, formatter=formatter
        )
    )

    if args.logs:
        print()
        print(log_report(captures_build, args.version, formatter))

    return 0 if result.passed else 1


def main():
    parser = argparse.ArgumentParser(description="Capture Compare Environment")
    parser.add_argument("--dev", type=Path, help="Dev capture set (JSON)")
    parser.add_argument("--build", type=Path, help="Build capture set (JSON)")
    parser.add_argument("--version", default="latest", help="Reference build version label")
    parser.add_argument("--dev-size", type=float, help="Dev output size in bytes")
    parser.add_argument("--build-size", type=float, help="Build output size in bytes")
    parser.add_argument("--dev-artifact", type=Path, help="Dev output file to measure")
    parser.add_argument("--build-artifact", type=Path, help="Build output file to measure")
    parser.add_argument(
        "--save", action="store_true", help="Write diff snapshots and plain report"
    )
    parser.add_argument("--output", type=Path, help="Directory for saved results")
    parser.add_argument("--plain", action="store_true", help="Disable ANSI colors")
    parser.add_argument("--logs", action="store_true", help="Print build capture logs")
    parser.add_argument(
        "--summary", action="store_true", help="Show configuration summary"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    if len(sys.argv) == 1:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.summary:
        print(config.summary())
        return 0

    if not validate_config():
        print("\nAborting due to configuration errors.")
        return 1

    if args.dev is None or args.build is None:
        parser.error("--dev and --build are required for a comparison")

    try:
        return run_comparison(args)
    except Exception as exc:
        print(f"[error] Comparison failed: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
