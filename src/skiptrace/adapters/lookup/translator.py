"""Flatten number lookup payloads into domain lookup data."""

from __future__ import annotations

from typing import TYPE_CHECKING

from skiptrace.domain.ports.providers import LookupData

if TYPE_CHECKING:
    from .schema import NumberLookupData


def translate_lookup(payload: NumberLookupData) -> LookupData:
    caller = payload.caller_name
    carrier = payload.carrier
    portability = payload.portability
    return LookupData(
        caller_name=caller.caller_name if caller else None,
        caller_name_error_code=caller.error_code if caller else None,
        carrier_name=carrier.name if carrier else None,
        carrier_type=carrier.type if carrier else None,
        carrier_error_code=carrier.error_code if carrier else None,
        mobile_country_code=carrier.mobile_country_code if carrier else None,
        mobile_network_code=carrier.mobile_network_code if carrier else None,
        country_code=payload.country_code,
        national_format=payload.national_format,
        phone_number=payload.phone_number,
        record_type=payload.record_type,
        line_type=portability.line_type if portability else None,
        lrn=portability.lrn if portability else None,
        ocn=portability.ocn if portability else None,
        ported_date=portability.ported_date if portability else None,
        ported_status=portability.ported_status if portability else None,
        spid=portability.spid if portability else None,
        spid_carrier_name=portability.spid_carrier_name if portability else None,
        spid_carrier_type=portability.spid_carrier_type if portability else None,
        altspid=portability.altspid if portability else None,
        altspid_carrier_name=portability.altspid_carrier_name if portability else None,
        altspid_carrier_type=portability.altspid_carrier_type if portability else None,
        portability_city=portability.city if portability else None,
        portability_state=portability.state if portability else None,
    )
