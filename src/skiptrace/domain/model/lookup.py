"""Shared phone lookup results keyed by E.164 number."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from skiptrace.domain.model.base import Entity

if TYPE_CHECKING:
    from skiptrace.domain.model.enums import CallerIdLabel
    from skiptrace.domain.ports.providers import LookupData


@dataclass(eq=False, kw_only=True)
class Lookup(Entity):
    phone_number: str
    caller_id_label: CallerIdLabel | None = None
    caller_name: str | None = None
    caller_name_error_code: str | None = None
    carrier_name: str | None = None
    carrier_type: str | None = None
    carrier_error_code: str | None = None
    mobile_country_code: str | None = None
    mobile_network_code: str | None = None
    country_code: str | None = None
    national_format: str | None = None
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

    @classmethod
    def from_data(
        cls,
        phone_number: str,
        data: LookupData,
        *,
        label: CallerIdLabel,
    ) -> Lookup:
        values = {
            item.name: getattr(data, item.name)
            for item in fields(data)
            if item.name in LOOKUP_DATA_FIELDS
        }
        return cls(phone_number=phone_number, caller_id_label=label, **values)


LOOKUP_DATA_FIELDS: frozenset[str] = frozenset(
    item.name
    for item in fields(Lookup)
    if item.name not in {"id", "created_at", "updated_at", "phone_number", "caller_id_label"}
)
