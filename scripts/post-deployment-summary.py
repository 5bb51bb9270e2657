#!/usr/bin/env python3
"""Post or update the Vercel deployment summary comment on a pull request.

One comment per environment: the comment whose first line is the environment
header is edited in place, otherwise a new one is created.
"""

from __future__ import annotations

import argparse
import os
import tempfile
from pathlib import Path

from lib.action_context import (
    action_input,
    commit_context,
    error,
    info,
    load_event,
    notice,
    pull_request_number,
    repository,
    warn,
    write_outputs,
)
from lib.deployments import ENVIRONMENTS, DeploymentInputError, load_deployments, normalize_environment
from lib.github import CommentPermissionError, GitHubCommandError, upsert_deployment_comment
from lib.render_deployment_comment import render_comment

SUMMARY_TMP = Path(os.environ.get("RUNNER_TEMP") or tempfile.gettempdir())


def fail(message: str, code: int = 1) -> int:
    """Fail."""
    error(f"Action failed: {message}")
    return code


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse args."""
    p = argparse.ArgumentParser(description="Create or update the Vercel deployment summary PR comment.")
    p.add_argument("--github-token", default=None, help="GitHub token (default: env INPUT_GITHUB_TOKEN)")
    p.add_argument("--deployments", default=None, help="JSON array of {name, status, url?} (default: env INPUT_DEPLOYMENTS)")
    p.add_argument("--environment", default=None, help="production or preview (default: env INPUT_ENVIRONMENT, then preview)")
    p.add_argument("--commit-sha", default=None, help="Displayed SHA (default: env INPUT_COMMIT_SHA, then GITHUB_SHA[:7])")
    p.add_argument("--repo", default=None, help="owner/repo (default: env GITHUB_REPOSITORY)")
    p.add_argument("--event-path", default=None, help="Event payload JSON (default: env GITHUB_EVENT_PATH)")
    p.add_argument(
        "--body-file",
        default=str(SUMMARY_TMP / "deployment-comment.md"),
        help="Where to write the rendered comment body before posting.",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main."""
    args = parse_args(argv)

    token = args.github_token or action_input("github-token")
    raw_deployments = args.deployments if args.deployments is not None else action_input("deployments")
    raw_environment = args.environment or action_input("environment")
    environment = normalize_environment(raw_environment)

    info("Running Vercel deployment summary")
    info(f"Environment: {environment}")
    if raw_environment and raw_environment.strip().lower() not in ENVIRONMENTS:
        warn(f"Unknown environment {raw_environment!r}; using {environment}")

    if not token:
        return fail("github-token is required")

    try:
        deployments = load_deployments(raw_deployments)
    except DeploymentInputError as exc:
        return fail(str(exc))
    info(f"Deployments: {len(deployments)}")

    pr_number = pull_request_number(load_event(args.event_path))
    if pr_number is None:
        notice("Not a pull request event, skipping comment")
        return 0

    repo = repository(args.repo)
    if not repo:
        return fail("missing repository (set --repo or GITHUB_REPOSITORY)")
    info(f"PR Number: {pr_number}")
    info(f"Repository: {repo}")

    branch, sha = commit_context(args.commit_sha or action_input("commit-sha"))
    body = render_comment(deployments, environment, branch=branch, sha=sha)

    body_file = Path(args.body_file)
    try:
        body_file.write_text(body, encoding="utf-8")
    except OSError as exc:
        return fail(f"unable to write {body_file}: {exc}")

    try:
        mode, comment_id = upsert_deployment_comment(
            repo=repo,
            pr_number=pr_number,
            environment=environment,
            body_file=str(body_file),
            token=token,
        )
    except (CommentPermissionError, GitHubCommandError, OSError) as exc:
        return fail(str(exc))

    if mode == "updated":
        info(f"Comment updated successfully! (ID: {comment_id})")
    else:
        info("Comment created successfully!")

    write_outputs({"mode": mode, "comment-id": "" if comment_id is None else str(comment_id)})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
