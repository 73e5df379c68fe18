"""Typed projection of search-provider requests and responses.

Provider payloads are parsed by the adapter and translated into these frozen
values, so the resolution core never reaches into raw documents.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from skiptrace.domain.identity import normalize_part


@dataclass(frozen=True, slots=True)
class NameRecord:
    first_name: str | None = None
    last_name: str | None = None
    age: str | None = None
    deceased: str | None = None

    @property
    def is_deceased(self) -> bool:
        return normalize_part(self.deceased) == "y"

    @property
    def is_alive(self) -> bool:
        return normalize_part(self.deceased) == "n"


@dataclass(frozen=True, slots=True)
class PhoneRecord:
    number: str
    phone_type: str | None = None


@dataclass(frozen=True, slots=True)
class AddressRecord:
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None


@dataclass(frozen=True, slots=True)
class RelativeRecord:
    name: str
    age: str | None = None
    phones: tuple[PhoneRecord, ...] = ()


@dataclass(frozen=True, slots=True)
class CandidateIdentity:
    """One identity block returned by the search provider."""

    names: tuple[NameRecord, ...] = ()
    phones: tuple[PhoneRecord, ...] = ()
    emails: tuple[str, ...] = ()
    confirmed_addresses: tuple[AddressRecord, ...] = ()
    relatives: tuple[RelativeRecord, ...] = ()

    @property
    def primary_name(self) -> NameRecord | None:
        return self.names[0] if self.names else None

    @property
    def confirmed_address(self) -> AddressRecord | None:
        return self.confirmed_addresses[0] if self.confirmed_addresses else None


@dataclass(frozen=True, slots=True)
class SearchInput:
    """The identity the provider was asked to search, as echoed back."""

    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    property_address: str | None = None
    property_city: str | None = None
    property_state: str | None = None
    property_zip: str | None = None


@dataclass(frozen=True, slots=True)
class SearchResponse:
    input: SearchInput = field(default_factory=SearchInput)
    candidates: tuple[CandidateIdentity, ...] = ()
    status_error: str | None = None
    result_code: str | None = None

    @property
    def has_candidates(self) -> bool:
        return bool(self.candidates)


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A provider response addressed to one pipeline record."""

    owner_id: str
    property_id: str
    response: SearchResponse
    identity_key: str | None = None
    po_box_address: str | None = None


@dataclass(frozen=True, slots=True)
class SearchRequest:
    first_name: str
    last_name: str
    mailing_address: str | None = None
    mailing_city: str | None = None
    mailing_state: str | None = None
    mailing_zip: str | None = None
    property_address: str | None = None
    property_city: str | None = None
    property_state: str | None = None
    property_zip: str | None = None
    identity_key: str | None = None
    custom_fields: tuple[str | None, str | None, str | None] = (None, None, None)
