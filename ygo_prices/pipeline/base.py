"""
YGO Prices — Shared async HTTP client plumbing.

Every remote service is reached through a subclass of ServiceClient, used
as an async context manager that owns one httpx.AsyncClient for all calls
of a run. Failures are logged and re-raised as ServiceError; there is no
retry.
"""

from __future__ import annotations

from typing import Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from ygo_prices.config import settings
from ygo_prices.errors import ServiceError

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ServiceClient:
    """Base async client. Subclasses set SERVICE and pass a base URL."""

    SERVICE = "service"

    def __init__(self, base_url: str, timeout: float | None = None):
        self._base_url = base_url
        self._timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> Any:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Accept": "application/json"},
            timeout=self._timeout,
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _send(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """GET a path, mapping transport failures to ServiceError."""
        assert self._client is not None, "Client not initialized. Use 'async with'."

        try:
            return await self._client.get(path, params=params)
        except httpx.RequestError as e:
            logger.error(
                f"{self.SERVICE}_request_error",
                error=str(e),
                path=path,
            )
            raise ServiceError(self.SERVICE, f"request failed: {e}", details={"path": path}) from e

    def _decode(self, response: httpx.Response, model: type[ModelT]) -> ModelT:
        """Raise for HTTP errors, then validate the JSON body into a model."""
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"{self.SERVICE}_http_error",
                status_code=e.response.status_code,
                path=response.request.url.path,
            )
            raise ServiceError(
                self.SERVICE,
                f"HTTP {e.response.status_code}",
                details={"status_code": e.response.status_code},
            ) from e

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(
                f"{self.SERVICE}_malformed_response",
                error=str(e),
                path=response.request.url.path,
            )
            raise ServiceError(self.SERVICE, f"malformed response: {e}") from e
