"""Find-or-create persistence for contacts, phones, relations and properties."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from skiptrace.domain.errors import InvalidPhoneNumberError
from skiptrace.domain.identity import (
    contact_identity_key,
    normalize_part,
    property_identity_key,
    split_full_name,
)
from skiptrace.domain.model import (
    PROPERTY_ATTRIBUTES,
    Contact,
    Phone,
    PropertyDetails,
    Relation,
    SearchStatus,
)
from skiptrace.domain.phones import DOMESTIC_LENGTH, normalize_phone

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from skiptrace.config.pipeline import PipelineConfig
    from skiptrace.domain.model import Ownership, OwnershipType
    from skiptrace.domain.phones import NormalizedPhone
    from skiptrace.domain.pipeline.context import ResolutionRun
    from skiptrace.domain.ports.persistence import PhoneRepository
    from skiptrace.domain.ports.sources import OwnerIdentity, PropertyIdentity
    from skiptrace.domain.ports.unit_of_work import PipelineRepositories
    from skiptrace.domain.resolution import ResolvedIdentity
    from skiptrace.domain.search import (
        CandidateIdentity,
        PhoneRecord,
        RelativeRecord,
        SearchResult,
    )

log = getLogger(__name__)

DEFAULT_DECEASED = "N"
AIR_CONDITION_MARKER = "AIR CONDITION"


@dataclass(frozen=True, slots=True)
class MailingAddress:
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None


@dataclass(frozen=True, slots=True)
class PersistedRelative:
    record: RelativeRecord
    contact: Contact
    position: int  # index in the provider's relative list


@dataclass(frozen=True, slots=True)
class PersistedCandidate:
    candidate: CandidateIdentity
    contact: Contact
    relatives: tuple[PersistedRelative, ...]


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _first_filled(*values: str | None) -> str | None:
    for value in values:
        if not _blank(value):
            return value
    return None


def find_contact_phone(
    phones: PhoneRepository, contact_id: UUID, normalized: NormalizedPhone
) -> Phone | None:
    """Match on the last ten digits; numbers shorter than that only match exactly."""

    if len(normalized.last_ten) == DOMESTIC_LENGTH:
        return phones.find_by_suffix(contact_id, normalized.last_ten)
    for phone in phones.list_for_contact(contact_id):
        if phone.number == normalized.e164:
            return phone
    return None


class ContactPersister:
    """Writes resolved identities through the repositories of one unit of work.

    Contacts touched earlier in the same run keep their first field values; later
    occurrences only contribute phones and relatives.
    """

    def __init__(
        self,
        repositories: PipelineRepositories,
        *,
        config: PipelineConfig,
        run: ResolutionRun,
    ) -> None:
        self.repositories = repositories
        self.config = config
        self.run = run

    # Contacts ------------------------------------------------------------------

    def upsert_contact(
        self,
        *,
        first_name: str | None,
        last_name: str | None,
        mailing: MailingAddress,
        age: str | None = None,
        deceased: str | None = None,
        status: SearchStatus | None = None,
    ) -> Contact:
        contacts = self.repositories.contacts
        identity_key = contact_identity_key(first_name, last_name, mailing.address)
        contact = contacts.find_by_identity_key(identity_key)
        if contact is None:
            contact = Contact(
                identity_key=identity_key,
                first_name=normalize_part(first_name),
                last_name=normalize_part(last_name),
                mailing_address=mailing.address,
                mailing_city=mailing.city,
                mailing_state=mailing.state,
                mailing_zip=mailing.zip,
                age=age,
                deceased=deceased,
            )
            if status is not None:
                contact.mark_searched(status, now=self.run.started_at)
            contacts.add(contact)
            self.run.first_visit(contact.id)
            log.debug("Created contact %s (%s)", contact.id, identity_key)
            return contact

        if not self.run.first_visit(contact.id):
            return contact

        updates = {
            "deceased": deceased,
            "age": age,
            "mailing_city": mailing.city,
            "mailing_state": mailing.state,
            "mailing_zip": mailing.zip,
        }
        for attribute, value in updates.items():
            if not _blank(value):
                setattr(contact, attribute, value)
        if status is not None:
            contact.mark_searched(status, now=self.run.started_at)
        contact.touch(self.run.started_at)
        return contact

    # Phones --------------------------------------------------------------------

    def save_phones(self, contact: Contact, phones: Sequence[PhoneRecord]) -> list[Phone]:
        """Persist up to the configured number of phones, matching by last 10 digits."""

        saved: list[Phone] = []
        for record in phones[: self.config.max_phones_saved]:
            try:
                normalized = normalize_phone(record.number)
            except InvalidPhoneNumberError:
                log.warning("Skipping malformed phone %r for contact %s", record.number, contact.id)
                continue
            phone = find_contact_phone(self.repositories.phones, contact.id, normalized)
            if phone is None:
                phone = Phone(
                    contact_id=contact.id,
                    number=normalized.e164,
                    phone_type=record.phone_type,
                )
                self.repositories.phones.add(phone)
            else:
                phone.number = normalized.e164
                if not _blank(record.phone_type):
                    phone.phone_type = record.phone_type
                phone.touch(self.run.started_at)
            saved.append(phone)
        return saved

    # Relatives -----------------------------------------------------------------

    def link_relative(self, contact: Contact, relative: Contact) -> Relation:
        relations = self.repositories.relations
        relation = relations.find_between(contact.id, relative.id)
        if relation is not None:
            relation.confirm(from_contact_id=contact.id, now=self.run.started_at)
            return relation
        relation = Relation(
            from_contact_id=contact.id,
            to_contact_id=relative.id,
            last_confirmed_at=self.run.started_at,
        )
        relations.add(relation)
        return relation

    def persist_relatives(
        self,
        contact: Contact,
        relatives: Sequence[RelativeRecord],
    ) -> tuple[PersistedRelative, ...]:
        mailing = MailingAddress(
            address=contact.mailing_address,
            city=contact.mailing_city,
            state=contact.mailing_state,
            zip=contact.mailing_zip,
        )
        persisted: list[PersistedRelative] = []
        for position, record in enumerate(relatives):
            first_name, last_name = split_full_name(record.name)
            if not first_name:
                continue
            relative = self.upsert_contact(
                first_name=first_name,
                last_name=last_name,
                mailing=mailing,
                age=record.age,
            )
            if relative.id == contact.id:
                continue
            self.save_phones(relative, record.phones)
            self.link_relative(contact, relative)
            persisted.append(PersistedRelative(record=record, contact=relative, position=position))
        return tuple(persisted)

    # Search results ------------------------------------------------------------

    def persist_candidates(
        self,
        result: SearchResult,
        resolved: ResolvedIdentity,
        *,
        owner: OwnerIdentity | None,
    ) -> tuple[PersistedCandidate, ...]:
        """Persist every candidate, using the resolved name for the chosen one.

        The resolved candidate comes first in the returned tuple.
        """

        search_input = result.response.input
        persisted: list[PersistedCandidate] = []
        for index, candidate in enumerate(result.response.candidates):
            name = resolved.name if index == resolved.candidate_index else candidate.primary_name
            if name is None:
                continue
            confirmed = candidate.confirmed_address
            mailing = MailingAddress(
                address=_first_filled(
                    owner.mailing_address if owner else None,
                    confirmed.street if confirmed else None,
                ),
                city=_first_filled(search_input.city, confirmed.city if confirmed else None),
                state=_first_filled(search_input.state, confirmed.state if confirmed else None),
                zip=_first_filled(search_input.zip, confirmed.zip if confirmed else None),
            )
            contact = self.upsert_contact(
                first_name=name.first_name,
                last_name=name.last_name,
                mailing=mailing,
                age=name.age,
                deceased=name.deceased or DEFAULT_DECEASED,
                status=SearchStatus.COMPLETED,
            )
            self.save_phones(contact, candidate.phones)
            relatives = self.persist_relatives(contact, candidate.relatives)
            entry = PersistedCandidate(candidate=candidate, contact=contact, relatives=relatives)
            if index == resolved.candidate_index:
                persisted.insert(0, entry)
            else:
                persisted.append(entry)
        return tuple(persisted)

    def persist_unmatched(
        self,
        result: SearchResult,
        *,
        owner: OwnerIdentity | None,
    ) -> Contact:
        """Build the primary contact from the searched identity when nothing came back."""

        search_input = result.response.input
        mailing = MailingAddress(
            address=_first_filled(
                result.po_box_address,
                search_input.address,
                owner.mailing_address if owner else None,
            ),
            city=_first_filled(search_input.city, owner.mailing_city if owner else None),
            state=_first_filled(search_input.state, owner.mailing_state if owner else None),
            zip=_first_filled(search_input.zip, owner.mailing_zip if owner else None),
        )
        return self.upsert_contact(
            first_name=_first_filled(search_input.first_name, owner.first_name if owner else None),
            last_name=_first_filled(search_input.last_name, owner.last_name if owner else None),
            mailing=mailing,
            status=SearchStatus.FAILED,
        )

    # Properties ----------------------------------------------------------------

    def persist_property(
        self,
        identity: PropertyIdentity,
        *,
        contact: Contact,
    ) -> PropertyDetails:
        properties = self.repositories.properties
        identity_key = property_identity_key(
            identity.address, identity.city, identity.state, identity.zip
        )
        attributes = {name: getattr(identity, name) for name in PROPERTY_ATTRIBUTES}
        if _blank(attributes["air_conditioner"]) and AIR_CONDITION_MARKER in (
            attributes["heating_type"] or ""
        ).upper():
            attributes["air_conditioner"] = "Yes"

        details = properties.find_by_identity_key(identity_key)
        if details is None:
            details = PropertyDetails(
                identity_key=identity_key,
                address=identity.address or "",
                city=identity.city,
                state=identity.state,
                zip=identity.zip,
                contact_id=contact.id,
                **attributes,
            )
            properties.add(details)
        else:
            for name, value in attributes.items():
                if not _blank(value):
                    setattr(details, name, value)
            details.contact_id = contact.id
            details.touch(self.run.started_at)

        for list_name in identity.lists:
            if _blank(list_name):
                continue
            property_list = properties.get_or_create_list(list_name.strip())
            properties.link_list(details.id, property_list.id)
        return details

    def persist_ownership(
        self,
        details: PropertyDetails,
        contact: Contact,
        *,
        is_primary: bool,
        ownership_type: OwnershipType,
    ) -> Ownership:
        return self.repositories.ownerships.upsert(
            property_id=details.id,
            contact_id=contact.id,
            is_primary=is_primary,
            ownership_type=ownership_type,
        )
