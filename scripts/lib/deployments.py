"""Typed loader for the `deployments` action input.

Validation happens here, once, so the renderer can assume every status is known.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

BUILDING = "building"
FAILED = "failed"
SUCCESSFUL = "successful"

STATUSES = (BUILDING, FAILED, SUCCESSFUL)

PRODUCTION = "production"
PREVIEW = "preview"

ENVIRONMENTS = (PRODUCTION, PREVIEW)
DEFAULT_ENVIRONMENT = PREVIEW


class DeploymentInputError(ValueError):
    """The deployments payload is malformed."""


@dataclass(frozen=True)
class Deployment:
    """One app's deployment outcome for this run."""
    name: str
    status: str
    url: str | None = None


def _require_mapping(value: Any, ctx: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DeploymentInputError(f"{ctx}: expected object")
    return value


def _require_name(value: Any, ctx: str) -> str:
    if value is None:
        raise DeploymentInputError(f"{ctx}: is required")
    if not isinstance(value, str):
        raise DeploymentInputError(f"{ctx}: expected string")
    s = value.strip()
    if not s:
        raise DeploymentInputError(f"{ctx}: must be non-empty")
    if "\n" in s or "\r" in s:
        raise DeploymentInputError(f"{ctx}: must be a single line")
    return s


def _require_status(value: Any, ctx: str) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise DeploymentInputError(f"{ctx}: is required")
    status = str(value).strip().lower()
    if status not in STATUSES:
        raise DeploymentInputError(
            f"{ctx}: invalid value {value!r} (expected one of: {', '.join(STATUSES)})"
        )
    return status


def _optional_url(value: Any, ctx: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise DeploymentInputError(f"{ctx}: expected string")
    s = value.strip()
    if any(ch.isspace() for ch in s):
        raise DeploymentInputError(f"{ctx}: must not contain whitespace")
    return s or None


def parse_deployment(raw: Any, ctx: str) -> Deployment:
    """Parse deployment."""
    data = _require_mapping(raw, ctx)
    return Deployment(
        name=_require_name(data.get("name"), f"{ctx}.name"),
        status=_require_status(data.get("status"), f"{ctx}.status"),
        url=_optional_url(data.get("url"), f"{ctx}.url"),
    )


def parse_deployments(raw: Any) -> list[Deployment]:
    """Validate an already-decoded deployments list, preserving input order."""
    if not isinstance(raw, list):
        raise DeploymentInputError("deployments: expected a JSON array")
    if not raw:
        raise DeploymentInputError("deployments: must contain at least one deployment")
    return [parse_deployment(item, f"deployments[{idx}]") for idx, item in enumerate(raw)]


def load_deployments(text: str) -> list[Deployment]:
    """Decode and validate the JSON-encoded `deployments` input."""
    if not (text or "").strip():
        raise DeploymentInputError("deployments: input is required")
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DeploymentInputError(f"deployments: invalid JSON: {exc}") from exc
    return parse_deployments(raw)


def normalize_environment(value: str | None) -> str:
    """Map the `environment` input onto production/preview.

    Anything other than "production" renders as preview.
    """
    text = str(value or "").strip().lower()
    return PRODUCTION if text == PRODUCTION else DEFAULT_ENVIRONMENT
