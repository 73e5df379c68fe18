"""Number lookup API response schemas."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)


class NumberLookupBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "Number lookup %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class CallerName(NumberLookupBaseModel):
    caller_name: str | None = None
    error_code: str | None = None


class Carrier(NumberLookupBaseModel):
    error_code: str | None = None
    mobile_country_code: str | None = None
    mobile_network_code: str | None = None
    name: str | None = None
    type: str | None = None


class Portability(NumberLookupBaseModel):
    altspid: str | None = None
    altspid_carrier_name: str | None = None
    altspid_carrier_type: str | None = None
    city: str | None = None
    line_type: str | None = None
    lrn: str | None = None
    ocn: str | None = None
    ported_date: str | None = None
    ported_status: str | None = None
    spid: str | None = None
    spid_carrier_name: str | None = None
    spid_carrier_type: str | None = None
    state: str | None = None


class NumberLookupData(NumberLookupBaseModel):
    caller_name: CallerName | None = None
    carrier: Carrier | None = None
    country_code: str | None = None
    national_format: str | None = None
    phone_number: str | None = None
    portability: Portability | None = None
    record_type: str | None = None


class NumberLookupResponse(NumberLookupBaseModel):
    data: NumberLookupData


class NumberLookupErrorDetail(NumberLookupBaseModel):
    code: str | None = None
    title: str | None = None
    detail: str | None = None


class NumberLookupErrorResponse(NumberLookupBaseModel):
    errors: list[NumberLookupErrorDetail] = Field(default_factory=list[NumberLookupErrorDetail])

    @property
    def message(self) -> str | None:
        for error in self.errors:
            if error.detail or error.title:
                return error.detail or error.title
        return None
