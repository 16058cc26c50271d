#!/usr/bin/env python3
"""Shared paths and reporting helpers for the Foundry CI scripts."""

from __future__ import annotations

import re
import sys
from pathlib import Path

# Path constants
ROOT = Path(__file__).resolve().parents[1]

# Defaults are relative to the caller's working directory (the Foundry project).
FOUNDRY_TOML = Path("foundry.toml")
DEFAULT_BASELINE_DIR = Path("test/upgrades/baseline")
DEFAULT_UPGRADES_DIR = Path("test/upgrades")

COMMENT_LINE_RE = re.compile(r"^\s*#")


def strip_comment_lines(text: str) -> list[str]:
    """Return the lines of a TOML-like document, minus whole-line comments.

    Only lines whose first non-whitespace character is ``#`` are dropped.
    Trailing inline comments stay part of their line.
    """
    return [line for line in text.splitlines() if not COMMENT_LINE_RE.match(line)]


def has_solidity_sources(directory: Path) -> bool:
    """True when ``directory`` exists and directly contains a ``*.sol`` entry."""
    if not directory.is_dir():
        return False
    return any(entry.name.endswith(".sol") for entry in directory.iterdir())


def append_github_output(path: Path, values: dict[str, str]) -> None:
    """Append ``key=value`` step outputs to a GitHub Actions output file."""
    with path.open("a", encoding="utf-8") as fh:
        for key, value in values.items():
            fh.write(f"{key}={value}\n")


def die(msg: str) -> None:
    """Print error message and exit with status 1.

    Args:
        msg: Error message to print.
    """
    print(f"error: {msg}", file=sys.stderr)
    raise SystemExit(1)


def report_errors(errors: list[str], message: str) -> None:
    """Print error list to stderr and exit with code 1.

    Args:
        errors: List of error messages to report.
        message: Header message to print before error list.
    """
    if errors:
        print(f"{message}:", file=sys.stderr)
        for item in errors:
            print(f"  - {item}", file=sys.stderr)
        raise SystemExit(1)
