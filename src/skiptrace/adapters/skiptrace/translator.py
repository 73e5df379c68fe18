"""Translate skip-trace payloads into domain search values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from skiptrace.domain.search import (
    AddressRecord,
    CandidateIdentity,
    NameRecord,
    PhoneRecord,
    RelativeRecord,
    SearchInput,
    SearchResponse,
    SearchResult,
)

from .schema import SkipTraceRow

if TYPE_CHECKING:
    from collections.abc import Iterable

    from skiptrace.domain.search import SearchRequest

    from .schema import (
        SkipTraceContact,
        SkipTracePhone,
        SkipTraceSearchResponse,
        SkipTraceWebhook,
    )


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _phones(payload: Iterable[SkipTracePhone]) -> tuple[PhoneRecord, ...]:
    return tuple(
        PhoneRecord(number=number, phone_type=_clean(phone.phonetype))
        for phone in payload
        if (number := _clean(phone.phonenumber)) is not None
    )


def translate_contact(contact: SkipTraceContact) -> CandidateIdentity:
    return CandidateIdentity(
        names=tuple(
            NameRecord(
                first_name=_clean(name.firstname),
                last_name=_clean(name.lastname),
                age=_clean(name.age),
                deceased=_clean(name.deceased),
            )
            for name in contact.names
            if _clean(name.firstname) or _clean(name.lastname)
        ),
        phones=_phones(contact.phones),
        emails=tuple(email for entry in contact.emails if (email := _clean(entry.email))),
        confirmed_addresses=tuple(
            AddressRecord(
                street=_clean(address.street),
                city=_clean(address.city),
                state=_clean(address.state),
                zip=_clean(address.zip),
            )
            for address in contact.confirmed_address
        ),
        relatives=tuple(
            RelativeRecord(name=name, age=_clean(relative.age), phones=_phones(relative.phones))
            for relative in contact.relatives
            if (name := _clean(relative.name)) is not None
        ),
    )


def translate_response(payload: SkipTraceSearchResponse) -> SearchResponse:
    echoed = payload.input
    status_error = payload.status.error if payload.status else None
    return SearchResponse(
        input=SearchInput(
            first_name=_clean(echoed.firstname),
            last_name=_clean(echoed.lastname),
            address=_clean(echoed.address),
            city=_clean(echoed.city),
            state=_clean(echoed.state),
            zip=_clean(echoed.zip),
            property_address=_clean(echoed.property_address),
            property_city=_clean(echoed.property_city),
            property_state=_clean(echoed.property_state),
            property_zip=_clean(echoed.property_zip),
        ),
        candidates=tuple(translate_contact(contact) for contact in payload.contacts),
        status_error=str(status_error) if status_error not in (None, False, "") else None,
        result_code=_clean(payload.result_code.result_code) if payload.result_code else None,
    )


def translate_webhook(payload: SkipTraceWebhook) -> SearchResult:
    return SearchResult(
        owner_id=payload.owner_id,
        property_id=payload.property_id,
        response=translate_response(payload.response),
        identity_key=_clean(payload.identity_key),
        po_box_address=_clean(payload.po_box_address),
    )


def translate_request(request: SearchRequest) -> SkipTraceRow:
    custom1, custom2, custom3 = request.custom_fields
    return SkipTraceRow(
        first_name=request.first_name,
        last_name=request.last_name,
        mailing_address=request.mailing_address,
        mailing_city=request.mailing_city,
        mailing_state=request.mailing_state,
        mailing_zip=request.mailing_zip,
        property_address=request.property_address,
        property_city=request.property_city,
        property_state=request.property_state,
        property_zip=request.property_zip,
        identity_key=request.identity_key,
        custom_field1=custom1,
        custom_field2=custom2,
        custom_field3=custom3,
    )
