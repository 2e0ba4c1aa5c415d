"""sonarcx: a thin client for the SonarCloud web API."""

from .client import SonarCloudClient
from .config import ClientSettings, load_settings
from .errors import (
    BadRequestError,
    ConfigurationError,
    HttpError,
    SonarCloudError,
    TokenRequiredError,
    TransportError,
)
from .models import (
    Metric,
    NewProject,
    NewProjectResponse,
    NewTokenResponse,
    ProjectSearchResponse,
    TokenSearchResponse,
    parse_response,
)

__version__ = "0.1.0"

__all__ = [
    "BadRequestError",
    "ClientSettings",
    "ConfigurationError",
    "HttpError",
    "Metric",
    "NewProject",
    "NewProjectResponse",
    "NewTokenResponse",
    "ProjectSearchResponse",
    "SonarCloudClient",
    "SonarCloudError",
    "TokenRequiredError",
    "TokenSearchResponse",
    "TransportError",
    "load_settings",
    "parse_response",
]
