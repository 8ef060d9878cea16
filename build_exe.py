#!/usr/bin/env python3
"""
Build script for the resource-monitor Windows executable.

Usage:
    python build_exe.py [--clean] [--onedir]

Options:
    --clean     Clean build artifacts before building
    --onedir    Create a one-folder bundle instead of single executable
"""

import argparse
import os
import shutil
import subprocess
import sys
from pathlib import Path

APP_NAME = "resource-monitor"
HIDDEN_IMPORTS = ["psutil", "colorlog", "jsonschema", "referencing", "referencing.jsonschema", "rpds"]


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Build the resource-monitor Windows executable"
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Clean build artifacts before building",
    )
    parser.add_argument(
        "--onedir",
        action="store_true",
        help="Create a one-folder bundle instead of single executable",
    )
    args = parser.parse_args()

    project_root = Path(__file__).parent
    dist_dir = project_root / "dist"
    build_dir = project_root / "build"
    schemas_dir = project_root / "resource_monitor" / "schemas"

    try:
        import PyInstaller  # noqa: F401
    except ImportError:
        print("ERROR: PyInstaller is not installed.")
        print("Install it with: pip install -e '.[build]'")
        return 1

    if args.clean:
        print("Cleaning build artifacts...")
        for directory in (dist_dir, build_dir):
            if directory.exists():
                shutil.rmtree(directory)
        print("Clean complete.")

    cmd = [
        sys.executable, "-m", "PyInstaller",
        "--noconfirm",
        "--clean",
        "--onedir" if args.onedir else "--onefile",
        "--name", APP_NAME,
        "--add-data", f"{schemas_dir}{os.pathsep}resource_monitor/schemas",
        "--console",
    ]
    for module in HIDDEN_IMPORTS:
        cmd.extend(["--hidden-import", module])
    cmd.append(str(project_root / "resource_monitor" / "__main__.py"))

    print("Building executable...")
    print(f"Command: {' '.join(cmd)}")
    print()

    result = subprocess.run(cmd, cwd=project_root)
    if result.returncode != 0:
        print("ERROR: Build failed!")
        return 1

    if args.onedir:
        exe_path = dist_dir / APP_NAME / f"{APP_NAME}.exe"
    else:
        exe_path = dist_dir / f"{APP_NAME}.exe"

    if exe_path.exists():
        print()
        print("=" * 60)
        print("Build successful!")
        print(f"Executable: {exe_path}")
        print(f"Size: {exe_path.stat().st_size / 1024 / 1024:.1f} MB")
        print("=" * 60)
        print()
        print("Usage:")
        print(f"  {exe_path} --once --summary")
        print(f"  {exe_path} --enable-startup")
        print()
    else:
        print("WARNING: Build completed but executable not found at expected path.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
