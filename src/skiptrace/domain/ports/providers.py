"""Ports for the external search and phone lookup providers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from skiptrace.domain.search import SearchRequest

RATE_LIMIT_MARKERS: Final[tuple[str, ...]] = ("too many requests", "exceeded the maximum")
RATE_LIMIT_STATUS: Final[int] = 429


@dataclass(frozen=True, slots=True)
class LookupData:
    """Flattened carrier, caller-name and portability data for one number."""

    caller_name: str | None = None
    caller_name_error_code: str | None = None
    carrier_name: str | None = None
    carrier_type: str | None = None
    carrier_error_code: str | None = None
    mobile_country_code: str | None = None
    mobile_network_code: str | None = None
    country_code: str | None = None
    national_format: str | None = None
    phone_number: str | None = None
    record_type: str | None = None
    line_type: str | None = None
    lrn: str | None = None
    ocn: str | None = None
    ported_date: str | None = None
    ported_status: str | None = None
    spid: str | None = None
    spid_carrier_name: str | None = None
    spid_carrier_type: str | None = None
    altspid: str | None = None
    altspid_carrier_name: str | None = None
    altspid_carrier_type: str | None = None
    portability_city: str | None = None
    portability_state: str | None = None


@dataclass(frozen=True, slots=True)
class LookupResponse:
    success: bool
    data: LookupData | None = None
    error: str | None = None
    status_code: int | None = None

    @property
    def is_rate_limited(self) -> bool:
        if self.success:
            return False
        if self.status_code == RATE_LIMIT_STATUS:
            return True
        message = (self.error or "").lower()
        return any(marker in message for marker in RATE_LIMIT_MARKERS)


@runtime_checkable
class PhoneLookupProvider(Protocol):
    """Phone intelligence lookup; failures are returned, never raised."""

    async def lookup(self, phone_number: str) -> LookupResponse: ...


@runtime_checkable
class SearchProvider(Protocol):
    """Skip-trace provider accepting batches of identity searches."""

    async def submit(self, requests: Sequence[SearchRequest]) -> None: ...
