"""Typed models for SonarCloud project, token, and badge payloads."""

from __future__ import annotations

from enum import IntEnum
from typing import Literal, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .constants import KEY_PREFIX

Visibility = Literal["public", "private"]


class Metric(IntEnum):
    """Metrics that SonarCloud can render as a project badge."""

    BUGS = 0
    CODE_SMELLS = 1
    COVERAGE = 2
    DUPLICATED_LINES_DENSITY = 3
    NCLOC = 4
    SQALE_RATING = 5
    ALERT_STATUS = 6
    RELIABILITY_RATING = 7
    SECURITY_RATING = 8
    SQALE_INDEX = 9
    VULNERABILITIES = 10

    @property
    def metric_name(self) -> str:
        """Name used in the ``metric`` query parameter."""

        return self.name.lower()

    @classmethod
    def from_name(cls, value: str) -> Metric:
        """Resolve ``bugs``, ``code-smells`` or ``CODE_SMELLS`` style names."""

        normalized = value.strip().replace("-", "_").upper()
        try:
            return cls[normalized]
        except KeyError:
            raise ValueError(f"Unknown metric '{value}'") from None


class Paging(BaseModel):
    index: int = Field(default=0, alias="pageIndex")
    size: int = Field(default=0, alias="pageSize")
    total: int = 0

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Component(BaseModel):
    """A project entry returned by ``projects/search``."""

    organization: str | None = None
    key: str
    name: str | None = None
    qualifier: str | None = None
    last_analysis_date: str | None = Field(default=None, alias="lastAnalysisDate")
    revision: str | None = None
    visibility: str | None = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ProjectSearchResponse(BaseModel):
    paging: Paging = Field(default_factory=Paging)
    components: list[Component] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class NewProject(BaseModel):
    """Request payload for creating a project.

    ``project`` is the caller's key; the namespace prefix is added when the form
    body is built.
    """

    organization: str
    name: str
    project: str
    visibility: Visibility = "public"

    model_config = ConfigDict(populate_by_name=True)

    def to_form(self, key_prefix: str = KEY_PREFIX) -> dict[str, str]:
        return {
            "name": self.name,
            "project": key_prefix + self.project,
            "organization": self.organization,
            "visibility": self.visibility,
        }


class ProjectInfo(BaseModel):
    key: str
    name: str | None = None
    qualifier: str | None = None
    visibility: str | None = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class NewProjectResponse(BaseModel):
    """``projects/create`` wraps the created project in a ``project`` object."""

    project: ProjectInfo

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class NewTokenResponse(BaseModel):
    login: str | None = None
    name: str
    token: str
    created_at: str | None = Field(default=None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class UserToken(BaseModel):
    name: str
    created_at: str | None = Field(default=None, alias="createdAt")
    last_connection_date: str | None = Field(default=None, alias="lastConnectionDate")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class TokenSearchResponse(BaseModel):
    login: str | None = None
    user_tokens: list[UserToken] = Field(default_factory=list, alias="userTokens")

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def names(self) -> list[str]:
        return [token.name for token in self.user_tokens]


ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_response(model: type[ModelT], response: httpx.Response) -> ModelT:
    """Validate a JSON response body into ``model``."""

    return model.model_validate(response.json())


__all__ = [
    "Component",
    "Metric",
    "NewProject",
    "NewProjectResponse",
    "NewTokenResponse",
    "Paging",
    "ProjectInfo",
    "ProjectSearchResponse",
    "TokenSearchResponse",
    "UserToken",
    "Visibility",
    "parse_response",
]
