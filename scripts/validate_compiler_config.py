#!/usr/bin/env python3
"""Validate that foundry.toml pins deterministic bytecode settings.

Checks (whole-line `#` comments are ignored, inline comments are not):
1. bytecode_hash = "none"
2. cbor_metadata = false

Usage:
    python3 scripts/validate_compiler_config.py [path/to/foundry.toml]
"""

from __future__ import annotations

import argparse
import re
from dataclasses import dataclass
from pathlib import Path

import foundry_ci_utils
from foundry_ci_utils import die, strip_comment_lines


@dataclass(frozen=True)
class RequiredSetting:
    key: str
    expected: str
    pattern: re.Pattern[str]

    def is_satisfied(self, lines: list[str]) -> bool:
        return any(self.pattern.search(line) for line in lines)


REQUIRED_SETTINGS = (
    RequiredSetting(
        key="bytecode_hash",
        expected='bytecode_hash = "none"',
        pattern=re.compile(r"(?<![A-Za-z0-9_])bytecode_hash\s*=\s*(?P<q>[\"'])none(?P=q)"),
    ),
    RequiredSetting(
        key="cbor_metadata",
        expected="cbor_metadata = false",
        pattern=re.compile(r"(?<![A-Za-z0-9_])cbor_metadata\s*=\s*false(?![A-Za-z0-9_])"),
    ),
)


def find_violations(text: str) -> list[RequiredSetting]:
    """Return every required setting the document fails to satisfy.

    Each setting is checked independently so one failure never masks another.
    """
    lines = strip_comment_lines(text)
    return [setting for setting in REQUIRED_SETTINGS if not setting.is_satisfied(lines)]


def validate(path: Path | None = None) -> list[RequiredSetting]:
    """Validate a foundry.toml file; an empty result means the config is valid.

    Raises:
        FileNotFoundError: If ``path`` is not a regular file.
    """
    if path is None:
        path = foundry_ci_utils.FOUNDRY_TOML
    if not path.is_file():
        raise FileNotFoundError(f"{path} not found")
    # Undecodable bytes (e.g. Latin-1 comments) must not hide the ASCII settings.
    return find_violations(path.read_text(encoding="utf-8", errors="replace"))


def _path_or_default(raw: str) -> Path | None:
    # An empty argument means "use the default", like ${1:-default} in shell.
    return Path(raw) if raw else None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "foundry_toml",
        nargs="?",
        type=_path_or_default,
        default=None,
        help="Path to foundry.toml (default: ./foundry.toml)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        violations = validate(args.foundry_toml)
    except FileNotFoundError as exc:
        die(str(exc))

    for setting in REQUIRED_SETTINGS:
        if setting in violations:
            print(f"✗ foundry.toml must set {setting.expected} for deterministic bytecode")
        else:
            print(f"✓ {setting.expected}")

    if violations:
        print("")
        print("Required foundry.toml settings for CI/CD:")
        print("  [profile.default]")
        for setting in REQUIRED_SETTINGS:
            print(f"  {setting.expected}")
        return 1

    print("Compiler config validated successfully")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
