"""Skip-trace provider payload schemas (search rows, responses and webhooks)."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)


class SkipTraceBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True, populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.warning(
            "Skip-trace %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class SkipTraceStatus(SkipTraceBaseModel):
    error: str | bool | None = None


class SkipTraceInput(SkipTraceBaseModel):
    firstname: str | None = None
    lastname: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    property_address: str | None = None
    property_city: str | None = None
    property_state: str | None = None
    property_zip: str | None = None
    custom_field1: str | None = None
    custom_field2: str | None = None
    custom_field3: str | None = None


class SkipTraceResultCode(SkipTraceBaseModel):
    result_code: str | None = None


class SkipTraceName(SkipTraceBaseModel):
    firstname: str | None = None
    lastname: str | None = None
    age: str | None = None
    deceased: str | None = None


class SkipTracePhone(SkipTraceBaseModel):
    phonenumber: str | None = None
    phonetype: str | None = None


class SkipTraceEmail(SkipTraceBaseModel):
    email: str | None = None


class SkipTraceAddress(SkipTraceBaseModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None


class SkipTraceRelative(SkipTraceBaseModel):
    name: str | None = None
    age: str | None = None
    phones: list[SkipTracePhone] = Field(default_factory=list[SkipTracePhone])


class SkipTraceContact(SkipTraceBaseModel):
    names: list[SkipTraceName] = Field(default_factory=list[SkipTraceName])
    phones: list[SkipTracePhone] = Field(default_factory=list[SkipTracePhone])
    emails: list[SkipTraceEmail] = Field(default_factory=list[SkipTraceEmail])
    confirmed_address: list[SkipTraceAddress] = Field(default_factory=list[SkipTraceAddress])
    relatives: list[SkipTraceRelative] = Field(default_factory=list[SkipTraceRelative])


class SkipTraceSearchResponse(SkipTraceBaseModel):
    status: SkipTraceStatus | None = None
    input: SkipTraceInput = Field(default_factory=SkipTraceInput)
    result_code: SkipTraceResultCode | None = None
    contacts: list[SkipTraceContact] = Field(default_factory=list[SkipTraceContact])


class SkipTraceWebhook(SkipTraceBaseModel):
    """Envelope posted back by the search service for one pipeline record."""

    identity_key: str | None = Field(default=None, alias="identityKey")
    owner_id: str = Field(alias="ownerId")
    property_id: str = Field(alias="propertyId")
    po_box_address: str | None = Field(default=None, alias="poBoxAddress")
    response: SkipTraceSearchResponse = Field(default_factory=SkipTraceSearchResponse)


class SkipTraceRow(SkipTraceBaseModel):
    """One search row as submitted to the search service."""

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    mailing_address: str | None = Field(default=None, alias="mailingAddress")
    mailing_city: str | None = Field(default=None, alias="mailingCity")
    mailing_state: str | None = Field(default=None, alias="mailingState")
    mailing_zip: str | None = Field(default=None, alias="mailingZip")
    property_address: str | None = Field(default=None, alias="propertyAddress")
    property_city: str | None = Field(default=None, alias="propertyCity")
    property_state: str | None = Field(default=None, alias="propertyState")
    property_zip: str | None = Field(default=None, alias="propertyZip")
    identity_key: str | None = Field(default=None, alias="identityKey")
    custom_field1: str | None = Field(default=None, alias="customField1")
    custom_field2: str | None = Field(default=None, alias="customField2")
    custom_field3: str | None = Field(default=None, alias="customField3")
