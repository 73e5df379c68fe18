"""Phone number lookup client."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError

from skiptrace.adapters.http_resilience import ResilientClient
from skiptrace.domain.ports.providers import RATE_LIMIT_STATUS, LookupResponse

from .schema import NumberLookupErrorResponse, NumberLookupResponse
from .translator import translate_lookup

if TYPE_CHECKING:
    from collections.abc import Callable

    from skiptrace.config.http_resilience import ResilienceConfig
    from skiptrace.config.lookup import PhoneLookupConfig

log = getLogger(__name__)

LOOKUP_TYPES: Final[tuple[str, ...]] = ("carrier", "caller-name")


class PhoneLookupClient:
    """Carrier and caller-name lookup for a single E.164 number.

    Provider failures are reported through ``LookupResponse``; nothing is raised
    for HTTP errors, timeouts or malformed payloads.
    """

    def __init__(
        self,
        *,
        config: PhoneLookupConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    async def lookup(self, phone_number: str) -> LookupResponse:
        params = [("type", lookup_type) for lookup_type in LOOKUP_TYPES]
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Accept": "application/json",
        }
        async with self._client_factory(self._resilience) as client:
            try:
                response = await client.get(
                    f"number_lookup/{phone_number}", params=params, headers=headers
                )
            except httpx.TimeoutException:
                log.warning("Lookup for %s timed out", phone_number)
                return LookupResponse(success=False, error="Request timed out")
            except httpx.HTTPError as exc:
                log.warning("Lookup for %s failed: %s", phone_number, exc)
                return LookupResponse(success=False, error=str(exc) or type(exc).__name__)
        return self._parse(phone_number, response)

    def lookup_sync(self, phone_number: str) -> LookupResponse:
        return asyncio.run(self.lookup(phone_number))

    @staticmethod
    def _parse(phone_number: str, response: httpx.Response) -> LookupResponse:
        if response.is_success:
            try:
                payload = NumberLookupResponse.model_validate_json(response.content)
            except ValidationError as exc:
                log.warning("Unexpected lookup payload for %s: %s", phone_number, exc)
                return LookupResponse(
                    success=False,
                    error="Malformed lookup response",
                    status_code=response.status_code,
                )
            return LookupResponse(
                success=True,
                data=translate_lookup(payload.data),
                status_code=response.status_code,
            )

        message: str | None = None
        try:
            message = NumberLookupErrorResponse.model_validate_json(response.content).message
        except ValidationError:
            message = None
        if message is None:
            message = (
                "Too many requests"
                if response.status_code == RATE_LIMIT_STATUS
                else f"HTTP {response.status_code}"
            )
        return LookupResponse(success=False, error=message, status_code=response.status_code)
