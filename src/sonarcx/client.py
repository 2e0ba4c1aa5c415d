"""Client for the SonarCloud project, token, and badge APIs."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx

from . import constants
from .errors import ConfigurationError, TokenRequiredError
from .http_client import HttpClient
from .models import (
    Metric,
    NewProject,
    ProjectSearchResponse,
    TokenSearchResponse,
    parse_response,
)

logger = logging.getLogger(__name__)


def _normalize_host(host: str) -> str:
    """Accept ``sonarcloud.io`` or ``https://sonarcloud.io/``; the scheme is always https."""

    value = host.strip().rstrip("/")
    if value.lower().startswith(constants.DEFAULT_SCHEME):
        value = value[len(constants.DEFAULT_SCHEME) :]
    if not value or "/" in value or "@" in value:
        raise ConfigurationError(f"Invalid SonarCloud host '{host}'; expected a bare host name")
    return value


class SonarCloudClient:
    """HTTP client for SonarCloud.

    Every operation returns the raw :class:`httpx.Response`. Mutating calls raise
    :class:`~sonarcx.errors.BadRequestError` when SonarCloud answers 400; any other
    status is left for the caller to check.
    """

    def __init__(
        self,
        token: str,
        timeout: float = constants.DEFAULT_TIMEOUT,
        *,
        host: str | None = None,
        api_version: str | None = None,
        key_prefix: str = constants.KEY_PREFIX,
        verify: bool = True,
    ) -> None:
        if not token:
            raise TokenRequiredError()

        self.host = _normalize_host(host) if host else constants.DEFAULT_HOST
        self.api_version = api_version or constants.DEFAULT_API
        self.token = token
        self.key_prefix = key_prefix
        # https://token@host
        self.uri = f"{constants.DEFAULT_SCHEME}{quote(token, safe='')}@{self.host}"
        self.http = HttpClient(self.uri, timeout=timeout, verify=verify)

    def __repr__(self) -> str:
        return f"SonarCloudClient(host={self.host!r}, api_version={self.api_version!r})"

    def close(self) -> None:
        """Close the underlying HTTP client."""

        self.http.close()

    def __enter__(self) -> SonarCloudClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _path(self, endpoint: str) -> str:
        return f"{self.api_version.rstrip('/')}{endpoint}"

    def project_key(self, key: str) -> str:
        """Return ``key`` with the namespace prefix used at creation time."""

        return self.key_prefix + key

    # Projects ------------------------------------------------------------------
    def get_project(self, organization: str, key: str) -> httpx.Response:
        """Search ``organization`` for the project ``key``."""

        params = {"projects": key, "organization": organization}
        return self.http.get(self._path(constants.PROJECT_SEARCH), params=params)

    def search_projects(self, organization: str, key: str) -> ProjectSearchResponse:
        return parse_response(ProjectSearchResponse, self.get_project(organization, key))

    def create_project(self, project: NewProject) -> httpx.Response:
        """Create a project; the key is namespaced with :attr:`key_prefix`."""

        form = project.to_form(self.key_prefix)
        logger.info("Creating project %s in %s", form["project"], project.organization)
        return self.http.post_form(self._path(constants.PROJECT_CREATE), form)

    def delete_project(self, key: str) -> httpx.Response:
        """Delete the project created from ``key``; SonarCloud replies 204."""

        form = {"project": self.project_key(key)}
        logger.info("Deleting project %s", form["project"])
        return self.http.post_form(self._path(constants.PROJECT_DELETE), form)

    # Tokens --------------------------------------------------------------------
    def create_token(self, name: str) -> httpx.Response:
        """Generate a user token. The secret is only present in this response."""

        return self.http.post_form(self._path(constants.TOKEN_CREATE), {"name": name})

    def revoke_token(self, name: str) -> httpx.Response:
        return self.http.post_form(self._path(constants.TOKEN_REVOKE), {"name": name})

    def get_tokens(self, login: str = "") -> httpx.Response:
        """List tokens of ``login``, or of the authenticated user when empty."""

        params: dict[str, Any] = {}
        if login:
            params["login"] = login
        return self.http.get(self._path(constants.TOKEN_SEARCH), params=params or None)

    def list_tokens(self, login: str = "") -> TokenSearchResponse:
        return parse_response(TokenSearchResponse, self.get_tokens(login))

    # Badges --------------------------------------------------------------------
    def get_metric(self, metric: Metric, project: str, branch: str = "") -> httpx.Response:
        """Fetch the SVG badge for ``metric`` on ``project``."""

        params = {"metric": Metric(metric).metric_name, "project": project}
        if branch:
            params["branch"] = branch
        return self.http.get(self._path(constants.BADGE_METRIC), params=params)

    def get_quality_gate(self, project: str, branch: str = "") -> httpx.Response:
        """Fetch the SVG quality gate badge for ``project``."""

        params = {"project": project}
        if branch:
            params["branch"] = branch
        return self.http.get(self._path(constants.QUALITY_GATE), params=params)


__all__ = ["SonarCloudClient"]
