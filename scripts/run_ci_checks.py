"""CI entrypoint for Capture Compare.

Runs config validation and gates on the dev vs. build capture comparison.
"""
# ruff: noqa: E402
from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config import config
from core.capture import load_capture_set
from core.extrinsic import matches_extrinsics
from core.intrinsic import matches_intrinsics


def run_config_validation() -> int:
    errors = config.validate()
    if errors:
        print("Configuration validation failed:")
        for err in errors:
            print(f" - {err}")
        return 1

    print("Configuration validation passed.")
    return 0


def run_capture_gate(dev_path: Path, build_path: Path) -> int:
    captures_dev = load_capture_set(dev_path)
    captures_build = load_capture_set(build_path)

    exit_code = 0
    extrinsics_ok, scores = matches_extrinsics(captures_dev, captures_build)
    if not extrinsics_ok:
        print("Expected positions and velocities to match between builds:")
        for name, score in sorted(scores.items(), key=lambda entry: entry[1]):
            if score < config.thresholds.equality:
                print(f" - {name}: {score:.6f}")
        exit_code = 1

    intrinsics_ok, changes = matches_intrinsics(captures_dev, captures_build)
    if not intrinsics_ok:
        print("Expected intrinsic properties to match between builds:")
        for name, changed in sorted(changes.changed.items()):
            if changed:
                print(f" - {name}")
        exit_code = 1

    if exit_code == 0:
        print(f"Capture comparison passed for {len(scores)} capture(s).")
    return exit_code


def main() -> int:
    parser = argparse.ArgumentParser(description="Run CI checks")
    parser.add_argument("--dev", type=Path, help="Dev capture set (JSON)")
    parser.add_argument("--build", type=Path, help="Build capture set (JSON)")
    args = parser.parse_args()

    exit_codes = [run_config_validation()]
    if args.dev and args.build:
        exit_codes.append(run_capture_gate(args.dev, args.build))

    return 1 if any(code != 0 for code in exit_codes) else 0


if __name__ == "__main__":
    sys.exit(main())
