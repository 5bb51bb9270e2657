"""GitHub Actions runtime context: inputs, event payload, outputs, annotations.

Everything ambient is read here so the renderer and locator only see plain values.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

SHORT_SHA_LEN = 7


def info(message: str) -> None:
    """Info."""
    print(message, file=sys.stderr)


def notice(message: str) -> None:
    """Notice."""
    print(f"::notice::{message}", file=sys.stderr)


def warn(message: str) -> None:
    """Warn."""
    print(f"::warning::{message}", file=sys.stderr)


def error(message: str) -> None:
    """Error."""
    print(f"::error::{message}", file=sys.stderr)


def action_input(name: str, default: str = "") -> str:
    """Read an action input from INPUT_<NAME>.

    The runner keeps hyphens in the variable name; composite actions in this
    repo map inputs with underscores. Both spellings are accepted.
    """
    upper = name.upper()
    for key in (f"INPUT_{upper.replace('-', '_')}", f"INPUT_{upper}"):
        value = os.environ.get(key)
        if value is not None and value.strip():
            return value.strip()
    return default


def load_event(path: str | None = None) -> dict:
    """Load the triggering event payload; empty when unavailable."""
    event_path = path or os.environ.get("GITHUB_EVENT_PATH") or ""
    if not event_path:
        return {}
    try:
        data = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except OSError as exc:
        warn(f"unable to read event payload {event_path}: {exc}")
        return {}
    except json.JSONDecodeError as exc:
        warn(f"invalid JSON in event payload {event_path}: {exc}")
        return {}
    return data if isinstance(data, dict) else {}


def pull_request_number(event: dict) -> int | None:
    """PR number of the triggering event, or None for non-PR events."""
    pr = event.get("pull_request")
    if not isinstance(pr, dict):
        return None
    number = pr.get("number")
    if isinstance(number, bool) or not isinstance(number, int):
        return None
    return number


def repository(value: str | None = None) -> str:
    """Resolve owner/repo; empty string if not known."""
    repo = (value or os.environ.get("GITHUB_REPOSITORY") or "").strip()
    return repo if "/" in repo else ""


def commit_context(commit_sha: str | None = None) -> tuple[str, str]:
    """Resolve (branch, sha) for the comment metadata line.

    An explicit commit SHA is shown as given; the ambient one is shortened.
    """
    branch = (os.environ.get("GITHUB_HEAD_REF") or "").strip()
    if not branch:
        ref = (os.environ.get("GITHUB_REF") or "").strip()
        branch = ref.removeprefix("refs/heads/")
    sha = (commit_sha or "").strip()
    if not sha:
        sha = (os.environ.get("GITHUB_SHA") or "").strip()[:SHORT_SHA_LEN]
    return branch, sha


def write_outputs(outputs: dict[str, str], path: str | None = None) -> None:
    """Append key=value lines to $GITHUB_OUTPUT when it is configured."""
    output_path = path or os.environ.get("GITHUB_OUTPUT") or ""
    if not output_path:
        return
    with open(output_path, "a", encoding="utf-8") as fh:
        for key, value in outputs.items():
            fh.write(f"{key}={value}\n")
