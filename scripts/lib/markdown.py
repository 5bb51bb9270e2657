"""Markdown helpers for deployment summary comments.

Keep surface area small: status badges, environment branding, the comment header.
"""

from __future__ import annotations

from lib.deployments import BUILDING, FAILED, PREVIEW, PRODUCTION, SUCCESSFUL, normalize_environment

_STATUS_ICON = {
    BUILDING: "⏳",
    FAILED: "❌",
    SUCCESSFUL: "✅",
}

_ENVIRONMENT_BRANDING = {
    PRODUCTION: ("🚀", "Production"),
    PREVIEW: ("🔍", "Preview"),
}


def status_icon(status: str) -> str:
    """Status icon."""
    return _STATUS_ICON[status]


def environment_branding(environment: str | None) -> tuple[str, str]:
    """Return (emoji, display name); anything but production is preview."""
    return _ENVIRONMENT_BRANDING[normalize_environment(environment)]


def comment_header(environment: str | None) -> str:
    """First line of the summary comment.

    Also the lookup key for the existing comment, so it must stay stable per environment.
    """
    emoji, env_name = environment_branding(environment)
    return f"## {emoji} Vercel {env_name} Deployments"


def link(label: str, url: str) -> str:
    """Markdown link; parentheses in the url are percent-encoded so they can't close it."""
    return f"[{label}]({url.replace('(', '%28').replace(')', '%29')})"
