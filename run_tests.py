#!/usr/bin/env python
"""Test runner script for resource-monitor.

Wraps pytest with the marker selections used in this repo.
"""
from __future__ import annotations

import argparse
import subprocess
import sys


def main() -> int:
    parser = argparse.ArgumentParser(description="Run resource-monitor tests")
    selection = parser.add_mutually_exclusive_group()
    selection.add_argument(
        "--windows",
        action="store_true",
        help="Run only tests exercising the Windows code paths",
    )
    selection.add_argument(
        "--integration",
        action="store_true",
        help="Run only end-to-end CLI tests",
    )
    selection.add_argument(
        "--unit",
        action="store_true",
        help="Skip end-to-end CLI tests",
    )
    parser.add_argument(
        "--coverage",
        action="store_true",
        help="Run with coverage report",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-k",
        dest="keyword",
        help="Only run tests matching the given keyword expression",
    )
    parser.add_argument(
        "--file",
        help="Run specific test file",
    )
    parser.add_argument(
        "--install",
        action="store_true",
        help="Install test dependencies first",
    )
    args = parser.parse_args()

    if args.install:
        print("Installing test dependencies...")
        result = subprocess.run(
            [sys.executable, "-m", "pip", "install", "-e", ".[test]"],
            check=False,
        )
        if result.returncode != 0:
            print("Failed to install dependencies")
            return 1
        print()

    cmd = [sys.executable, "-m", "pytest"]
    if args.verbose:
        cmd.append("-v")
    if args.windows:
        cmd.extend(["-m", "windows"])
    elif args.integration:
        cmd.extend(["-m", "integration"])
    elif args.unit:
        cmd.extend(["-m", "not integration"])
    if args.keyword:
        cmd.extend(["-k", args.keyword])
    if args.coverage:
        cmd.extend(["--cov=resource_monitor", "--cov-report=term-missing"])
    cmd.append(args.file or "tests")

    print(f"Running: {' '.join(cmd)}")
    print()
    result = subprocess.run(cmd, check=False)
    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
