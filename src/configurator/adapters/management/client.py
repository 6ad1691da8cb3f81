"""Management interface client for components and features."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from configurator.adapters.http_resilience import ResilientClient
from configurator.domain.ports.errors import BackendError

from .schema import ComponentStatus, FeatureStatus

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from types import TracebackType

    from pydantic import BaseModel

    from configurator.config.http_resilience import ResilienceConfig
    from configurator.config.management import ManagementConfig

log = getLogger(__name__)


class ManagementAPIError(BackendError):
    """Raised when the management interface rejects a request or is unreachable."""


class ManagementClient:
    """Blocking client for the management REST interface.

    Implements both the ``ComponentRuntime`` and ``FeatureService`` ports. Every call
    runs on one private event loop and shares one HTTP client, so the configured
    rate limit applies across calls. Call :meth:`close` when done.
    """

    def __init__(
        self,
        *,
        config: ManagementConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._runner = asyncio.Runner()
        self._client: ResilientClient | None = None

    def __enter__(self) -> ManagementClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._runner.run(self._client.aclose())
            self._client = None
        self._runner.close()

    def _run[T](self, coro: Coroutine[object, object, T]) -> T:
        return self._runner.run(coro)

    # ComponentRuntime ---------------------------------------------------------

    def component_status(self, name: str) -> ComponentStatus:
        return self._run(self._get(f"components/{quote(name, safe='')}", ComponentStatus))

    def is_active(self, name: str) -> bool:
        return self.component_status(name).active

    def start(self, name: str) -> None:
        self._run(self._post(f"components/{quote(name, safe='')}/start"))

    def stop(self, name: str) -> None:
        self._run(self._post(f"components/{quote(name, safe='')}/stop"))

    # FeatureService -----------------------------------------------------------

    def feature_status(self, name: str) -> FeatureStatus:
        return self._run(self._get(f"features/{quote(name, safe='')}", FeatureStatus))

    def is_installed(self, name: str) -> bool:
        return self.feature_status(name).installed

    def install(self, name: str) -> None:
        self._run(self._post(f"features/{quote(name, safe='')}/install"))

    def uninstall(self, name: str) -> None:
        self._run(self._post(f"features/{quote(name, safe='')}/uninstall"))

    # Requests -----------------------------------------------------------------

    async def _get[TModel: BaseModel](self, path: str, model: type[TModel]) -> TModel:
        response = await self._perform_request("GET", path)
        try:
            payload = response.json()
        except ValueError as exc:
            raise ManagementAPIError(f"Invalid JSON returned for {path}") from exc
        if not isinstance(payload, dict):
            raise ManagementAPIError(f"Unexpected management response payload for {path}")
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise ManagementAPIError(f"Unexpected management response for {path}: {exc}") from exc

    async def _post(self, path: str) -> None:
        await self._perform_request("POST", path)

    def _http_client(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        return self._client

    async def _perform_request(self, method: str, path: str) -> httpx.Response:
        if self._resilience.base_url is None:
            raise ManagementAPIError("Missing management base_url in resilience configuration")
        log.debug("Management request: %s %s", method, path)
        try:
            response = await self._http_client().request(method, path)
        except httpx.HTTPError as exc:
            raise ManagementAPIError(f"{method} {path} failed: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            raise ManagementAPIError(f"{path} not found")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ManagementAPIError(
                f"{method} {path} returned HTTP {response.status_code}"
            ) from exc
        return response
