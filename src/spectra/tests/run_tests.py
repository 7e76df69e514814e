#!/usr/bin/env python3
"""
Test runner for Spectra

Discovers and runs the unittest modules in this directory. Pass a module
name fragment to run a subset:

    python run_tests.py            # everything
    python run_tests.py cli        # test_cli*.py
    python run_tests.py --imports  # import each package module
"""

import os
import sys
import time
import unittest

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

PACKAGE_MODULES = [
    'spectra.core',
    'spectra.cli',
    'spectra.mcp',
    'spectra.gui',
]


def run_tests(fragment: str = "") -> int:
    """Discover and run tests whose module name contains ``fragment``."""
    pattern = f"test_*{fragment}*.py" if fragment else "test_*.py"
    started = time.time()

    print("=" * 80)
    print(f"Running Spectra tests ({pattern})")
    print("=" * 80)

    suite = unittest.TestLoader().discover(os.path.dirname(os.path.abspath(__file__)), pattern=pattern)
    result = unittest.TextTestRunner(verbosity=2).run(suite)

    problems = len(result.failures) + len(result.errors)
    print("\n" + "=" * 80)
    print(f"{result.testsRun} tests in {time.time() - started:.2f}s: "
          f"{result.testsRun - problems} passed, {len(result.failures)} failed, {len(result.errors)} errors, "
          f"{len(result.skipped)} skipped")
    print("=" * 80)
    return 0 if problems == 0 else 1


def check_imports() -> int:
    """Import every package; native window backends load lazily and are not needed."""
    failed = 0
    for module in PACKAGE_MODULES:
        try:
            __import__(module)
            print(f"✓ {module}")
        except Exception as e:
            failed += 1
            print(f"✗ {module}: {str(e)}")
    return 1 if failed else 0


if __name__ == "__main__":
    args = sys.argv[1:]
    if args and args[0] == "--imports":
        sys.exit(check_imports())
    sys.exit(run_tests(args[0] if args else ""))
