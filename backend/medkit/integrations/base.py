"""
Base HTTP client for the third-party platforms the COD workflow calls.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class IntegrationError(RuntimeError):
    """Raised when a platform call fails or the platform is not configured."""

    def __init__(self, message: str, *, platform: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.platform = platform
        self.status_code = status_code


class BaseIntegrationClient:
    """
    Synchronous JSON client. Every call blocks the request that triggered it.
    """
    PLATFORM_NAME: str = "base"

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not base_url:
            raise IntegrationError(
                f"{self.PLATFORM_NAME} integration is not configured",
                platform=self.PLATFORM_NAME,
            )
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def default_headers(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    def _log_api_call(self, method: str, path: str, status_code: Optional[int]) -> None:
        logger.info("[%s] %s %s -> %s", self.PLATFORM_NAME, method, path, status_code)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Issue one call and return the decoded JSON body ({} when empty).

        Raises IntegrationError on transport failures and non-2xx responses.
        """
        with httpx.Client(
            base_url=self.base_url,
            headers=self.default_headers(),
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                response = client.request(method, path, params=params, json=json)
            except httpx.HTTPError as exc:
                self._log_api_call(method, path, None)
                raise IntegrationError(
                    f"{self.PLATFORM_NAME} request failed: {exc}",
                    platform=self.PLATFORM_NAME,
                ) from exc

        self._log_api_call(method, path, response.status_code)

        if not response.is_success:
            logger.warning(
                "[%s] %s %s rejected: %s", self.PLATFORM_NAME, method, path, response.text[:500]
            )
            raise IntegrationError(
                f"{self.PLATFORM_NAME} API error ({response.status_code})",
                platform=self.PLATFORM_NAME,
                status_code=response.status_code,
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {"raw": response.text}
