#!/usr/bin/env python3
"""Ensure reusable workflows invoke their scripts and scripts/README.md documents them.

Validates:
1. Each reusable workflow job runs the script it is built around
2. Every script a reusable workflow invokes exists under scripts/
3. The README "Workflow entry points" list matches the invoked scripts, in order
4. Script arguments come from env: variables, never inline ${{ }} expressions

Usage:
    python3 scripts/check_workflow_script_sync.py
"""

from __future__ import annotations

import re

from foundry_ci_utils import ROOT, report_errors
from workflow_jobs import (
    compare_lists,
    extract_job_body,
    extract_run_commands_from_job_body,
    extract_script_invocations,
)

WORKFLOWS_DIR = ROOT / ".github" / "workflows"
SCRIPTS_DIR = ROOT / "scripts"
SCRIPTS_README = ROOT / "scripts" / "README.md"

# Reusable workflows check this repository out under .etherform/ in the caller's workspace.
TOOLS_SCRIPTS_DIR = ".etherform/scripts"

# (workflow file, job, script the job must run)
ENTRY_POINTS = (
    ("_foundry-ci.yml", "build", "validate_compiler_config.py"),
    ("_foundry-upgrade-safety.yml", "upgrade-safety", "detect_baseline.py"),
)


def _job_invocations(workflow: str, job: str) -> list[list[str]]:
    path = WORKFLOWS_DIR / workflow
    body = extract_job_body(path.read_text(encoding="utf-8"), job, path)
    commands = extract_run_commands_from_job_body(body, source=path, context=job)
    return extract_script_invocations(commands, source=path, scripts_dir=TOOLS_SCRIPTS_DIR)


def _extract_readme_entry_points(text: str) -> list[str]:
    section = re.search(
        r"^\*\*Workflow entry points\*\*.*?\n(?P<body>(?:^\d+\.\s.*\n?)+)",
        text,
        flags=re.MULTILINE,
    )
    if not section:
        raise ValueError(f"Could not locate '**Workflow entry points**' numbered list in {SCRIPTS_README}")

    scripts: list[str] = []
    for line in section.group("body").splitlines():
        m = re.search(r"\(`([A-Za-z0-9_]+\.py)`\)", line)
        if not m:
            raise ValueError(f"Could not parse script name from README line: {line!r}")
        scripts.append(m.group(1))
    return scripts


def collect_errors() -> list[str]:
    errors: list[str] = []
    invoked: list[str] = []

    for workflow, job, script in ENTRY_POINTS:
        try:
            invocations = _job_invocations(workflow, job)
        except (OSError, ValueError) as exc:
            errors.append(str(exc))
            continue
        scripts = [tokens[0] for tokens in invocations]
        if script not in scripts:
            errors.append(f"{workflow} job {job!r} does not run {TOOLS_SCRIPTS_DIR}/{script}")
        for name in scripts:
            if not (SCRIPTS_DIR / name).is_file():
                errors.append(f"{workflow} job {job!r} runs missing script scripts/{name}")
            if name not in invoked:
                invoked.append(name)
        for name, *args in invocations:
            # Inputs expanded inline are spliced into the shell source before quoting applies.
            if any("${{" in arg for arg in args):
                errors.append(
                    f"{workflow} job {job!r} passes a ${{{{ }}}} expression to {name} inline; "
                    "route it through env: and quote the variable"
                )

    try:
        documented = _extract_readme_entry_points(SCRIPTS_README.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        errors.append(str(exc))
    else:
        errors.extend(compare_lists("reusable workflows", invoked, "scripts/README.md", documented))

    return errors


def main() -> None:
    errors = collect_errors()
    report_errors(errors, "Workflow/script sync check failed")
    print(f"Workflow/script sync check passed ({len(ENTRY_POINTS)} reusable workflow entry points).")


if __name__ == "__main__":
    main()
