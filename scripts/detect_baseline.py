#!/usr/bin/env python3
"""Detect which baseline directory to use for upgrade safety validation.

Precedence:
1. <baseline-path> if it directly holds at least one .sol file
2. <upgrades-path>/previous if it directly holds at least one .sol file
3. NO_BASELINE (initial deployment, upgrade validation is skipped)

Usage:
    python3 scripts/detect_baseline.py [baseline-path] [upgrades-path]
"""

from __future__ import annotations

import argparse
import os
from pathlib import Path

import foundry_ci_utils
from foundry_ci_utils import append_github_output, has_solidity_sources

NO_BASELINE = "NO_BASELINE"
FALLBACK_DIRNAME = "previous"


def locate(
    baseline_path: str | os.PathLike[str] | None = None,
    upgrades_path: str | os.PathLike[str] | None = None,
) -> str | None:
    """Return the baseline directory to compare against, or None if there is none.

    The result is the caller's path text, unnormalized, so CI steps can compare
    it against their own inputs.
    """
    if baseline_path is None:
        baseline_path = foundry_ci_utils.DEFAULT_BASELINE_DIR
    if upgrades_path is None:
        upgrades_path = foundry_ci_utils.DEFAULT_UPGRADES_DIR
    baseline = os.fspath(baseline_path)
    upgrades = os.fspath(upgrades_path)

    if has_solidity_sources(Path(baseline)):
        return baseline
    fallback = f"{upgrades.rstrip('/')}/{FALLBACK_DIRNAME}"
    if has_solidity_sources(Path(fallback)):
        return fallback
    return None


def _path_text_or_default(raw: str) -> str | None:
    # An empty argument means "use the default", like ${1:-default} in shell.
    return raw or None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "baseline_path",
        nargs="?",
        type=_path_text_or_default,
        default=None,
        help="Primary baseline directory (default: test/upgrades/baseline)",
    )
    parser.add_argument(
        "upgrades_path",
        nargs="?",
        type=_path_text_or_default,
        default=None,
        help="Upgrades root holding the previous/ fallback (default: test/upgrades)",
    )
    parser.add_argument(
        "--github-output",
        type=Path,
        default=None,
        help="Append has_baseline/baseline_dir step outputs here (default: $GITHUB_OUTPUT)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    resolved = locate(args.baseline_path, args.upgrades_path)

    output_file = args.github_output
    if output_file is None and os.environ.get("GITHUB_OUTPUT"):
        output_file = Path(os.environ["GITHUB_OUTPUT"])
    if output_file is not None:
        append_github_output(
            output_file,
            {
                "has_baseline": "true" if resolved is not None else "false",
                "baseline_dir": resolved if resolved is not None else "",
            },
        )

    if resolved is None:
        print(NO_BASELINE)
        return 1
    print(resolved)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
