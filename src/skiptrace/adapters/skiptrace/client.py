"""Skip-trace search service client."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from skiptrace.adapters.http_resilience import ResilientClient

from .translator import translate_request

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from skiptrace.config.http_resilience import ResilienceConfig
    from skiptrace.config.skiptrace import SkipTraceConfig
    from skiptrace.domain.search import SearchRequest

log = getLogger(__name__)


class SkipTraceAPIError(RuntimeError):
    """Raised when the search service rejects or fails a batch submission."""


class SkipTraceClient:
    """Submits search rows; results come back asynchronously as webhook payloads."""

    def __init__(
        self,
        *,
        config: SkipTraceConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    async def submit(self, requests: Sequence[SearchRequest]) -> None:
        rows = [
            translate_request(request).model_dump(by_alias=True, exclude_none=True)
            for request in requests
        ]
        async with self._client_factory(self._resilience) as client:
            try:
                response = await client.post(
                    self._config.submit_path,
                    json={"rows": rows},
                    headers={"Authorization": f"Bearer {self._config.api_key}"},
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                raise SkipTraceAPIError(
                    f"Search submission rejected with HTTP {exc.response.status_code}"
                ) from exc
            except httpx.HTTPError as exc:
                raise SkipTraceAPIError(f"Search submission failed: {exc}") from exc
        log.info("Submitted %d row(s) to the search service", len(rows))

    def submit_sync(self, requests: Sequence[SearchRequest]) -> None:
        asyncio.run(self.submit(requests))
