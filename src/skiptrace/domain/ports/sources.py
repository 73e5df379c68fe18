"""Read-only access to the owner and property candidate pool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from skiptrace.domain.identity import names_match, normalize_part


@dataclass(frozen=True, slots=True)
class OwnerIdentity:
    owner_id: str
    first_name: str | None = None
    last_name: str | None = None
    owner2_first_name: str | None = None
    owner2_last_name: str | None = None
    mailing_address: str | None = None
    mailing_city: str | None = None
    mailing_state: str | None = None
    mailing_zip: str | None = None

    @property
    def has_co_owner(self) -> bool:
        """True when a second owner is named and differs from the primary."""

        if not normalize_part(self.owner2_first_name) and not normalize_part(
            self.owner2_last_name
        ):
            return False
        return not names_match(
            self.owner2_first_name, self.owner2_last_name, self.first_name, self.last_name
        )


@dataclass(frozen=True, slots=True)
class PropertyIdentity:
    property_id: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    bedrooms: str | None = None
    bathrooms: str | None = None
    square_feet: str | None = None
    year_built: str | None = None
    heating_type: str | None = None
    air_conditioner: str | None = None
    building_use_code: str | None = None
    parcel_id: str | None = None
    apn: str | None = None
    last_sale_price: str | None = None
    last_sold: str | None = None
    tax_delinquent_value: str | None = None
    years_behind_on_taxes: str | None = None
    foreclosure_date: str | None = None
    bankruptcy_recording_date: str | None = None
    lien_type: str | None = None
    cdu: str | None = None
    lists: tuple[str, ...] = ()


@runtime_checkable
class RecordSource(Protocol):
    """Candidate-pool lookups; the core does not care which store answers."""

    def find_owner_identity(self, owner_id: str) -> OwnerIdentity | None: ...

    def find_property_identity(self, property_id: str) -> PropertyIdentity | None: ...
