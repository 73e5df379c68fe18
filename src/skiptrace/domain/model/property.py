"""Property details, classification lists and ownership edges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from skiptrace.domain.model.base import Entity
from skiptrace.domain.model.enums import OwnershipType

if TYPE_CHECKING:
    from uuid import UUID

# attributes copied from the property record onto PropertyDetails
PROPERTY_ATTRIBUTES: tuple[str, ...] = (
    "bedrooms",
    "bathrooms",
    "square_feet",
    "year_built",
    "heating_type",
    "air_conditioner",
    "building_use_code",
    "parcel_id",
    "apn",
    "last_sale_price",
    "last_sold",
    "tax_delinquent_value",
    "years_behind_on_taxes",
    "foreclosure_date",
    "bankruptcy_recording_date",
    "lien_type",
    "cdu",
)


@dataclass(eq=False, kw_only=True)
class PropertyDetails(Entity):
    identity_key: str
    address: str
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    contact_id: UUID | None = None
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


@dataclass(eq=False, kw_only=True)
class PropertyList(Entity):
    name: str


@dataclass(eq=False, kw_only=True)
class PropertyListMembership(Entity):
    property_id: UUID
    list_id: UUID


@dataclass(eq=False, kw_only=True)
class Ownership(Entity):
    property_id: UUID
    contact_id: UUID
    is_primary: bool = False
    ownership_type: OwnershipType = OwnershipType.OWNER
