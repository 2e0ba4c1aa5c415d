from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from .errors import BadRequestError, TransportError

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class HttpClient:
    """Thin httpx wrapper: joins paths onto the base URI and classifies failures.

    Credentials travel in the userinfo part of ``base_url``; httpx turns them into
    a basic ``Authorization`` header. Calls are one-shot, there is no retry.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        verify: bool = True,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(timeout=timeout, verify=verify)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        data: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        raise_on_bad_request: bool = False,
    ) -> httpx.Response:
        url = self._url(path)
        logger.debug("%s %s", method, path)
        try:
            resp = self._client.request(
                method, url, params=params, data=data, headers=headers
            )
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportError(str(e)) from e

        if raise_on_bad_request and resp.status_code == 400:
            logger.warning("%s %s rejected: %s", method, path, resp.text)
            raise BadRequestError(resp.text, response=resp)
        return resp

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", path, **kwargs)

    def post_form(
        self, path: str, form: dict[str, str], **kwargs: Any
    ) -> httpx.Response:
        """POST ``form`` url-encoded; a 400 reply becomes :class:`BadRequestError`."""

        kwargs.setdefault("raise_on_bad_request", True)
        headers = {"Content-Type": FORM_CONTENT_TYPE}
        return self.request("POST", path, data=form, headers=headers, **kwargs)

    def close(self) -> None:
        """Close the underlying :class:`httpx.Client`."""

        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
