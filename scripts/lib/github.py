"""GitHub PR comment utilities.

Provides create-or-update of the deployment summary comment, keyed by the
environment header on the comment's first line.
"""
from __future__ import annotations

import json
import os
import subprocess

from lib.action_context import warn
from lib.markdown import comment_header


class CommentPermissionError(Exception):
    """Token lacks pull-requests: write permission."""


class GitHubCommandError(Exception):
    """gh CLI exited non-zero for a reason other than permissions."""

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr


def _gh_env(token: str | None) -> dict[str, str] | None:
    if not token:
        return None
    return {**os.environ, "GH_TOKEN": token}


def _run_gh(args: list[str], *, token: str | None = None) -> subprocess.CompletedProcess[str]:
    """Run a gh CLI command.

    Args:
        args: Arguments to pass to gh CLI
        token: GitHub token exported to gh as GH_TOKEN (default: inherit env)

    Returns:
        CompletedProcess result from the gh command

    Raises:
        CommentPermissionError: Token lacks pull-requests: write permission
        GitHubCommandError: Any other gh CLI failure
    """
    result = subprocess.run(
        ["gh", *args], capture_output=True, text=True, check=False, env=_gh_env(token)
    )
    if result.returncode == 0:
        return result

    stderr = result.stderr or ""
    lower_stderr = stderr.lower()
    if any(s in lower_stderr for s in ("403", "resource not accessible", "insufficient")):
        raise CommentPermissionError(
            "GitHub API denied access to PR comments: token lacks pull-requests: write permission.\n"
            "Add this to your workflow:\n"
            "permissions:\n"
            "  contents: read\n"
            "  pull-requests: write"
        )
    raise GitHubCommandError(
        f"gh {' '.join(args[:2])} failed (exit {result.returncode}): {stderr.strip()}",
        stderr=stderr,
    )


def fetch_comments(
    repo: str,
    pr_number: int,
    *,
    token: str | None = None,
    per_page: int = 100,
    max_pages: int = 20,
) -> list[dict]:
    """Fetch all issue comments for a PR (paginated).

    Args:
        repo: Repository in owner/repo format
        pr_number: Pull request number
        token: GitHub token for gh
        per_page: Number of comments per page (max 100)
        max_pages: Maximum number of pages to fetch

    Returns:
        List of comment dictionaries in API order
    """
    comments: list[dict] = []
    for page in range(1, max_pages + 1):
        endpoint = f"repos/{repo}/issues/{pr_number}/comments?per_page={per_page}&page={page}"
        result = _run_gh(["api", endpoint], token=token)
        try:
            payload = json.loads(result.stdout or "[]")
        except json.JSONDecodeError:
            break
        if not isinstance(payload, list) or not payload:
            break
        comments.extend([c for c in payload if isinstance(c, dict)])
        if len(payload) < per_page:
            break
    return comments


def find_comment_by_header(comments: list[dict], environment: str | None) -> dict | None:
    """Find the first comment whose body starts with the environment header.

    Comments without a string body or an integer id are skipped; later
    duplicates are never returned.
    """
    header = comment_header(environment)
    for comment in comments:
        body = comment.get("body")
        if not isinstance(body, str) or not body.startswith(header):
            continue
        comment_id = comment.get("id")
        if isinstance(comment_id, int) and not isinstance(comment_id, bool):
            return comment
    return None


def find_existing_comment(
    repo: str,
    pr_number: int,
    environment: str | None,
    *,
    token: str | None = None,
) -> dict | None:
    """Locate the summary comment for this environment.

    A failed fetch is reported as a warning and treated as "not found", so the
    caller falls through to creating a new comment.
    """
    try:
        comments = fetch_comments(repo, pr_number, token=token)
    except (CommentPermissionError, GitHubCommandError, OSError) as exc:
        warn(f"Could not fetch existing comments: {exc}")
        return None
    return find_comment_by_header(comments, environment)


def _comment_id_from(result: subprocess.CompletedProcess[str]) -> int | None:
    try:
        payload = json.loads(result.stdout or "{}")
    except json.JSONDecodeError:
        return None
    comment_id = payload.get("id") if isinstance(payload, dict) else None
    return comment_id if isinstance(comment_id, int) else None


def create_comment(
    *, repo: str, pr_number: int, body_file: str, token: str | None = None
) -> int | None:
    """Create a PR comment; return its id when the API reports one."""
    result = _run_gh(
        [
            "api",
            f"repos/{repo}/issues/{pr_number}/comments",
            "-F", f"body=@{body_file}",
        ],
        token=token,
    )
    return _comment_id_from(result)


def update_comment(
    *, repo: str, comment_id: int, body_file: str, token: str | None = None
) -> int:
    """Replace the body of an existing PR comment."""
    _run_gh(
        [
            "api",
            f"repos/{repo}/issues/comments/{comment_id}",
            "-X", "PATCH",
            "-F", f"body=@{body_file}",
        ],
        token=token,
    )
    return comment_id


def upsert_deployment_comment(
    *,
    repo: str,
    pr_number: int,
    environment: str | None,
    body_file: str,
    token: str | None = None,
    comments: list[dict] | None = None,
) -> tuple[str, int | None]:
    """Update the environment's summary comment in place, or create it.

    If comments is provided, searches that list instead of fetching from API.

    Returns:
        ("updated" | "created", comment id or None)

    Raises:
        CommentPermissionError: Token lacks pull-requests: write permission.
        GitHubCommandError: Other gh CLI failures on the write.
    """
    if comments is None:
        existing = find_existing_comment(repo, pr_number, environment, token=token)
    else:
        existing = find_comment_by_header(comments, environment)

    if existing is not None:
        comment_id = update_comment(
            repo=repo, comment_id=existing["id"], body_file=body_file, token=token
        )
        return "updated", comment_id

    return "created", create_comment(
        repo=repo, pr_number=pr_number, body_file=body_file, token=token
    )
