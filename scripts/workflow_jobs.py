"""Helpers for extracting and comparing GitHub Actions workflow data."""

from __future__ import annotations

import re
import shlex
from pathlib import Path

_JOB_KEY_RE = re.compile(
    r"""^  (?P<key>(?:[A-Za-z0-9_-]+)|(?:"[^"\n]+")|(?:'[^'\n]+')):\s*(?:#.*)?$"""
)
_RUN_RE = re.compile(r"^(?P<indent>\s*)(?:-\s*)?run:\s*(?P<payload>.*?)\s*$")
_STEPS_RE = re.compile(r"^\s*steps:\s*(?:#.*)?$")


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _unquote(raw: str) -> str:
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in {"'", '"'}:
        return raw[1:-1]
    return raw


def _job_headers(lines: list[str], source: Path) -> list[tuple[str, int]]:
    jobs_idx = next((i for i, line in enumerate(lines) if line.rstrip() == "jobs:"), None)
    if jobs_idx is None:
        raise ValueError(f"Could not locate jobs section in {source}")

    headers: list[tuple[str, int]] = []
    for i in range(jobs_idx + 1, len(lines)):
        line = lines[i]
        if line and not line.startswith(" "):
            break
        m = _JOB_KEY_RE.match(line)
        if m:
            headers.append((_unquote(m.group("key")), i))

    if not headers:
        raise ValueError(f"Could not locate any top-level jobs in {source}")
    return headers


def extract_top_level_jobs(text: str, source: Path) -> list[str]:
    return [name for name, _ in _job_headers(text.splitlines(), source)]


def extract_job_body(text: str, job_name: str, source: Path) -> str:
    lines = text.splitlines()
    headers = _job_headers(lines, source)

    for idx, (name, line_idx) in enumerate(headers):
        if name != job_name:
            continue
        body_end = headers[idx + 1][1] if idx + 1 < len(headers) else len(lines)
        # A non-indented line closes the jobs mapping.
        for j in range(line_idx + 1, body_end):
            if lines[j] and not lines[j].startswith(" "):
                body_end = j
                break
        body = "\n".join(lines[line_idx + 1 : body_end])
        return body + ("\n" if body else "")

    raise ValueError(f"Could not locate job {job_name!r} in {source}")


def _steps_lines(body: str, *, source: Path, context: str) -> list[str]:
    lines = body.splitlines()
    steps_idx = next((i for i, line in enumerate(lines) if _STEPS_RE.match(line)), None)
    if steps_idx is None:
        raise ValueError(f"Could not locate {context}.steps in {source}")

    steps_indent = _indent_of(lines[steps_idx])
    out: list[str] = []
    for line in lines[steps_idx + 1 :]:
        if line.strip() and _indent_of(line) <= steps_indent:
            break
        out.append(line)
    return out


def _fold_scalar(scalar_lines: list[str]) -> list[str]:
    # Folded scalars keep command boundaries; flag-like fragments join the previous line.
    folded: list[str] = []
    current: str | None = None
    for raw in scalar_lines:
        part = raw.strip()
        if not part:
            if current is not None:
                folded.append(current)
                current = None
            continue
        if current is not None and part.startswith(("-", "&&", "||", "|", ";")):
            current += " " + part
            continue
        if current is not None:
            folded.append(current)
        current = part
    if current is not None:
        folded.append(current)
    return folded


def extract_run_commands_from_job_body(body: str, *, source: Path, context: str) -> list[str]:
    """Extract executable shell command lines from `run:` steps in a job body.

    Only the `steps:` section is parsed; comment and blank lines are dropped.
    """

    step_lines = _steps_lines(body, source=source, context=context)
    commands: list[str] = []
    i = 0
    while i < len(step_lines):
        m = _RUN_RE.match(step_lines[i])
        if not m:
            i += 1
            continue

        indent = len(m.group("indent"))
        payload = m.group("payload")
        i += 1
        if not payload.startswith(("|", ">")):
            block = [payload]
        else:
            scalar_lines: list[str] = []
            while i < len(step_lines):
                nxt = step_lines[i]
                if nxt.strip() and _indent_of(nxt) <= indent:
                    break
                scalar_lines.append(nxt[indent + 2 :] if nxt.strip() else "")
                i += 1
            block = _fold_scalar(scalar_lines) if payload.startswith(">") else scalar_lines

        for raw in block:
            stripped = raw.strip()
            if stripped and not stripped.startswith("#"):
                commands.append(stripped)

    if not commands:
        raise ValueError(f"Could not locate executable run commands in {context} job in {source}")
    return commands


def _strip_shell_inline_comment(raw: str) -> str:
    out: list[str] = []
    quote: str | None = None
    escaped = False
    for idx, ch in enumerate(raw):
        if escaped:
            out.append(ch)
            escaped = False
            continue
        if ch == "\\":
            out.append(ch)
            escaped = True
            continue
        if quote is None and ch in {"'", '"'}:
            quote = ch
        elif quote is not None and ch == quote:
            quote = None
        elif quote is None and ch == "#" and (idx == 0 or raw[idx - 1].isspace()):
            break
        out.append(ch)
    return "".join(out).rstrip()


def extract_script_invocations(
    run_commands: list[str],
    *,
    source: Path,
    scripts_dir: str = "scripts",
) -> list[list[str]]:
    """Return `python3 <scripts_dir>/<name>.py ...` invocations as token lists.

    The first token of each result is the script file name, the rest are its
    arguments. Shell line continuations and inline comments are handled.
    """

    prefix = f"{scripts_dir.rstrip('/')}/"
    invocations: list[list[str]] = []
    i = 0
    while i < len(run_commands):
        cmd = _strip_shell_inline_comment(run_commands[i].strip())
        first = run_commands[i].strip()
        while cmd.endswith("\\"):
            cmd = cmd[:-1].rstrip()
            i += 1
            if i >= len(run_commands):
                raise ValueError(f"Trailing line-continuation in {source}: {first!r}")
            continuation = _strip_shell_inline_comment(run_commands[i].strip())
            if continuation:
                cmd += " " + continuation
        i += 1

        try:
            tokens = shlex.split(cmd, posix=True)
        except ValueError as exc:
            raise ValueError(f"Malformed shell quoting in {source}: {first!r}") from exc
        if len(tokens) < 2 or tokens[0] != "python3":
            continue
        if not tokens[1].startswith(prefix) or not tokens[1].endswith(".py"):
            continue
        invocations.append([tokens[1][len(prefix) :], *tokens[2:]])

    return invocations


def compare_lists(
    reference_name: str,
    reference: list[str],
    other_name: str,
    other: list[str],
) -> list[str]:
    """Compare two ordered lists and return human-readable error descriptions.

    Detects missing items, extra items, and order-only mismatches.
    Returns an empty list when the lists are identical.
    """
    if reference == other:
        return []

    errors: list[str] = []
    ref_set = set(reference)
    other_set = set(other)

    missing = [item for item in reference if item not in other_set]
    extra = [item for item in other if item not in ref_set]

    if missing:
        errors.append(f"{other_name} is missing entries present in {reference_name}:")
        errors.extend([f"  - {m}" for m in missing])
    if extra:
        errors.append(f"{other_name} has entries not present in {reference_name}:")
        errors.extend([f"  - {e}" for e in extra])
    if not missing and not extra:
        errors.append(
            f"{other_name} contains the same entries as {reference_name} but in a different order."
        )
    return errors
