"""Primary and second-owner resolution for a property."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from skiptrace.domain.identity import names_match, split_full_name
from skiptrace.domain.model import OwnershipType
from skiptrace.domain.phones import last_ten_digits
from skiptrace.domain.pipeline.persistence import MailingAddress
from skiptrace.domain.search import PhoneRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

    from skiptrace.domain.model import Contact, Phone
    from skiptrace.domain.pipeline.persistence import ContactPersister
    from skiptrace.domain.ports.sources import OwnerIdentity
    from skiptrace.domain.search import SearchResponse

log = getLogger(__name__)

UNKNOWN_PHONE_TYPE = "Unknown"


@dataclass(frozen=True, slots=True)
class OwnerLink:
    contact: Contact
    ownership_type: OwnershipType
    is_primary: bool


@dataclass(frozen=True, slots=True)
class OwnershipResolution:
    owners: tuple[OwnerLink, ...]
    co_owner: Contact | None = None
    co_owner_phones: tuple[PhoneRecord, ...] = ()

    @property
    def co_owner_has_phones(self) -> bool:
        return bool(self.co_owner_phones)


def _dedupe_by_suffix(phones: Iterable[PhoneRecord]) -> list[PhoneRecord]:
    seen: set[str] = set()
    unique: list[PhoneRecord] = []
    for phone in phones:
        suffix = last_ten_digits(phone.number)
        if not suffix or suffix in seen:
            continue
        seen.add(suffix)
        unique.append(phone)
    return unique


def find_person_phones(
    response: SearchResponse,
    *,
    first_name: str | None,
    last_name: str | None,
) -> list[PhoneRecord]:
    """Collect phones for a person named anywhere in the response.

    Top-level candidates are scanned first, then every candidate's relatives.
    Every matching occurrence contributes, so the result is the union of both
    lists, de-duplicated by last 10 digits in encounter order.
    """

    collected: list[PhoneRecord] = []
    for candidate in response.candidates:
        if any(
            names_match(first_name, last_name, name.first_name, name.last_name)
            for name in candidate.names
        ):
            collected.extend(candidate.phones)
    for candidate in response.candidates:
        for relative in candidate.relatives:
            if names_match(first_name, last_name, *split_full_name(relative.name)):
                collected.extend(relative.phones)
                break
    return _dedupe_by_suffix(collected)


def _with_default_type(phone: PhoneRecord) -> PhoneRecord:
    if phone.phone_type:
        return phone
    return PhoneRecord(number=phone.number, phone_type=UNKNOWN_PHONE_TYPE)


def resolve_ownership(
    persister: ContactPersister,
    *,
    owner: OwnerIdentity | None,
    primary: Contact,
    response: SearchResponse,
) -> OwnershipResolution:
    """Determine who owns the property and which second-owner phones to validate."""

    primary_link = OwnerLink(contact=primary, ownership_type=OwnershipType.OWNER, is_primary=True)
    if owner is None or not owner.has_co_owner:
        return OwnershipResolution(owners=(primary_link,))

    search_input = response.input
    mailing = MailingAddress(
        address=owner.mailing_address or search_input.address,
        city=owner.mailing_city or search_input.city,
        state=owner.mailing_state or search_input.state,
        zip=owner.mailing_zip or search_input.zip,
    )
    co_owner = persister.upsert_contact(
        first_name=owner.owner2_first_name,
        last_name=owner.owner2_last_name,
        mailing=mailing,
    )
    co_owner_link = OwnerLink(
        contact=co_owner, ownership_type=OwnershipType.CO_OWNER, is_primary=False
    )

    found = [
        _with_default_type(phone)
        for phone in find_person_phones(
            response,
            first_name=owner.owner2_first_name,
            last_name=owner.owner2_last_name,
        )
    ]
    saved: list[Phone] = persister.save_phones(co_owner, found)
    log.debug(
        "Co-owner %s: %d phones found, %d saved", co_owner.id, len(found), len(saved)
    )
    queued = tuple(found[: persister.config.max_co_owner_validations])
    return OwnershipResolution(
        owners=(primary_link, co_owner_link),
        co_owner=co_owner,
        co_owner_phones=queued,
    )
