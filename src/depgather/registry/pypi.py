"""PyPI JSON API lookups used for one-level requirements expansion."""

from __future__ import annotations

import logging
from typing import Protocol
from urllib.parse import quote

import requests
from requests import Response
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from ..config import Settings
from ..errors import RegistryLookupError

logger = logging.getLogger(__name__)

USER_AGENT = "depgather (+https://pypi.org/project/depgather/)"


class RegistryLookup(Protocol):
    """Anything able to list the requirements declared by one exact release."""

    def requires_dist(self, name: str, version: str) -> list[str]:
        """Return raw requirement strings, or raise RegistryLookupError."""
        ...


class PyPIRegistry:
    """Fetch ``requires_dist`` for a release from the PyPI JSON API."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self._get = retry(
            reraise=True,
            retry=retry_if_exception_type(requests.RequestException),
            stop=stop_after_attempt(self.settings.retry_attempts),
            wait=wait_fixed(self.settings.retry_wait),
        )(self._http_get)

    def release_url(self, name: str, version: str) -> str:
        base = self.settings.pypi_url.rstrip("/")
        return f"{base}/{quote(name, safe='')}/{quote(version, safe='')}/json"

    def _http_get(self, url: str) -> Response:
        return requests.get(
            url,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=self.settings.request_timeout,
        )

    def requires_dist(self, name: str, version: str) -> list[str]:
        url = self.release_url(name, version)
        logger.debug("Fetching %s", url)

        try:
            response = self._get(url)
        except requests.RequestException as exc:
            raise RegistryLookupError(f"Failed to fetch PyPI data for {name}@{version}: {exc}") from exc

        if response.status_code == 404:
            raise RegistryLookupError(f"{name}@{version} not found on PyPI")
        if response.status_code != 200:
            raise RegistryLookupError(
                f"Unexpected status code {response.status_code} fetching {name}@{version}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise RegistryLookupError(f"Invalid JSON from PyPI for {name}@{version}") from exc

        info = payload.get("info") if isinstance(payload, dict) else None
        if not isinstance(info, dict):
            raise RegistryLookupError(f"PyPI response for {name}@{version} has no 'info' object")

        requires = info.get("requires_dist") or []
        if not isinstance(requires, list):
            raise RegistryLookupError(f"PyPI 'requires_dist' for {name}@{version} is not a list")

        return [str(item) for item in requires]
