from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from . import constants
from .client import SonarCloudClient
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

TOKEN_ENV = "SONARCLOUD_TOKEN"
HOST_ENV = "SONARCLOUD_HOST"
API_ENV = "SONARCLOUD_API"
TIMEOUT_ENV = "SONARCLOUD_TIMEOUT"
ORGANIZATION_ENV = "SONARCLOUD_ORGANIZATION"
KEY_PREFIX_ENV = "SONARCLOUD_KEY_PREFIX"
INSECURE_ENV = "SONARCLOUD_INSECURE"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class ClientSettings:
    token: str | None = None
    host: str = constants.DEFAULT_HOST
    api_version: str = constants.DEFAULT_API
    timeout: float = constants.DEFAULT_TIMEOUT
    organization: str | None = None
    key_prefix: str = constants.KEY_PREFIX
    verify: bool = True

    def create_client(self) -> SonarCloudClient:
        """Build a :class:`~sonarcx.client.SonarCloudClient` from these settings."""

        return SonarCloudClient(
            self.token or "",
            self.timeout,
            host=self.host,
            api_version=self.api_version,
            key_prefix=self.key_prefix,
            verify=self.verify,
        )


def validate_timeout(value: float, source: str = "timeout") -> float:
    if value <= 0:
        raise ConfigurationError(f"{source} must be positive, got '{value:g}'")
    return value


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{TIMEOUT_ENV} must be a number, got '{raw}'") from None
    return validate_timeout(value, TIMEOUT_ENV)


def load_settings(environ: Mapping[str, str] | None = None) -> ClientSettings:
    """Resolve :class:`ClientSettings` from ``environ`` (defaults to ``os.environ``).

    Unset or blank variables fall back to the SonarCloud defaults. The token is
    not validated here; the client rejects an empty token when it is built.
    """

    env = os.environ if environ is None else environ

    def _get(name: str) -> str | None:
        value = env.get(name)
        if value is None:
            return None
        value = value.strip()
        return value or None

    timeout_raw = _get(TIMEOUT_ENV)
    verify = (_get(INSECURE_ENV) or "").lower() not in _TRUTHY
    if not verify:
        logger.warning("%s is set; TLS certificates will not be verified.", INSECURE_ENV)

    return ClientSettings(
        token=_get(TOKEN_ENV),
        host=_get(HOST_ENV) or constants.DEFAULT_HOST,
        api_version=_get(API_ENV) or constants.DEFAULT_API,
        timeout=_parse_timeout(timeout_raw) if timeout_raw else constants.DEFAULT_TIMEOUT,
        organization=_get(ORGANIZATION_ENV),
        key_prefix=env.get(KEY_PREFIX_ENV, constants.KEY_PREFIX),
        verify=verify,
    )


__all__ = [
    "ClientSettings",
    "load_settings",
    "validate_timeout",
    "TOKEN_ENV",
    "HOST_ENV",
    "API_ENV",
    "TIMEOUT_ENV",
    "ORGANIZATION_ENV",
    "KEY_PREFIX_ENV",
    "INSECURE_ENV",
]
