"""URI fragments and defaults for the SonarCloud web API."""

from __future__ import annotations

DEFAULT_SCHEME = "https://"
DEFAULT_HOST = "sonarcloud.io"
DEFAULT_API = "/api"
DEFAULT_TIMEOUT = 10.0

PROJECT_SEARCH = "/projects/search"
PROJECT_CREATE = "/projects/create"
PROJECT_DELETE = "/projects/delete"

TOKEN_SEARCH = "/user_tokens/search"
TOKEN_CREATE = "/user_tokens/generate"
TOKEN_REVOKE = "/user_tokens/revoke"

BADGE_METRIC = "/project_badges/measure"
QUALITY_GATE = "/project_badges/quality_gate"

# Project keys are global across organizations on SonarCloud.
KEY_PREFIX = "PavedRoad_"

__all__ = [
    "DEFAULT_SCHEME",
    "DEFAULT_HOST",
    "DEFAULT_API",
    "DEFAULT_TIMEOUT",
    "PROJECT_SEARCH",
    "PROJECT_CREATE",
    "PROJECT_DELETE",
    "TOKEN_SEARCH",
    "TOKEN_CREATE",
    "TOKEN_REVOKE",
    "BADGE_METRIC",
    "QUALITY_GATE",
    "KEY_PREFIX",
]
