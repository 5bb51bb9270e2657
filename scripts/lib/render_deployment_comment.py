"""Render the deployment summary PR comment."""

from __future__ import annotations

import argparse
import os
import sys
import tempfile
from collections.abc import Sequence
from pathlib import Path

from lib.action_context import action_input, commit_context
from lib.deployments import (
    BUILDING,
    FAILED,
    Deployment,
    DeploymentInputError,
    load_deployments,
)
from lib.markdown import comment_header, link, status_icon

SUMMARY_TMP = Path(os.environ.get("RUNNER_TEMP") or tempfile.gettempdir())

FOOTER = "<sub>Deployed with [Vercel](https://vercel.com)</sub>"


def fail(message: str, code: int = 2) -> int:
    """Fail."""
    print(f"render-deployment-comment: {message}", file=sys.stderr)
    return code


def status_line(deployment: Deployment) -> str:
    """Status line."""
    if deployment.status == BUILDING:
        return "**Building...**"
    if deployment.status == FAILED:
        return "**Deployment Failed**"
    if deployment.url:
        return f"🔗 **{link('Visit Deployment', deployment.url)}**"
    return "**Deployment Successful**"


def render_deployment(deployment: Deployment) -> list[str]:
    """Render deployment."""
    return [
        f"### {status_icon(deployment.status)} {deployment.name}",
        status_line(deployment),
    ]


def render_comment(
    deployments: Sequence[Deployment],
    environment: str | None,
    *,
    branch: str,
    sha: str,
) -> str:
    """Render the full comment body.

    Deployments keep their input order. Same arguments, same bytes.
    """
    lines = [
        comment_header(environment),
        "",
        f"{branch} • {sha}",
    ]
    for deployment in deployments:
        lines.append("")
        lines.extend(render_deployment(deployment))
    lines.extend(["", "---", "", FOOTER])
    return "\n".join(lines) + "\n"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse args."""
    parser = argparse.ArgumentParser(description="Render the Vercel deployment summary comment markdown.")
    parser.add_argument(
        "--deployments",
        default=None,
        help="JSON array of {name, status, url?} (default: env INPUT_DEPLOYMENTS).",
    )
    parser.add_argument(
        "--environment",
        default=None,
        help="production or preview (default: env INPUT_ENVIRONMENT, then preview).",
    )
    parser.add_argument(
        "--commit-sha",
        default=None,
        help="Displayed SHA (default: env INPUT_COMMIT_SHA, then GITHUB_SHA[:7]).",
    )
    parser.add_argument(
        "--output",
        default=str(SUMMARY_TMP / "deployment-comment.md"),
        help="Output markdown file path.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main."""
    args = parse_args(argv)
    raw = args.deployments if args.deployments is not None else action_input("deployments")
    environment = args.environment or action_input("environment")

    try:
        deployments = load_deployments(raw)
    except DeploymentInputError as exc:
        return fail(str(exc))

    branch, sha = commit_context(args.commit_sha or action_input("commit-sha"))
    markdown = render_comment(deployments, environment, branch=branch, sha=sha)

    output_path = Path(args.output)
    try:
        output_path.write_text(markdown, encoding="utf-8")
    except OSError as exc:
        return fail(f"unable to write {output_path}: {exc}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
