"""Domain model for contacts, properties, lookups and pipeline records."""

from __future__ import annotations

from .base import Entity, new_id, utcnow
from .contact import ACTIVE_PHONE_STATUS, RELATIVE_RELATION, Contact, Phone, Relation
from .enums import (
    CallerIdLabel,
    OwnershipType,
    PhoneSource,
    PipelineStage,
    SearchStatus,
    SkipReason,
    ValidationOutcome,
)
from .lookup import LOOKUP_DATA_FIELDS, Lookup
from .pipeline import STAGE_TRANSITIONS, PipelineRecord, can_transition
from .property import (
    PROPERTY_ATTRIBUTES,
    Ownership,
    PropertyDetails,
    PropertyList,
    PropertyListMembership,
)

__all__ = [
    "ACTIVE_PHONE_STATUS",
    "LOOKUP_DATA_FIELDS",
    "PROPERTY_ATTRIBUTES",
    "RELATIVE_RELATION",
    "STAGE_TRANSITIONS",
    "CallerIdLabel",
    "Contact",
    "Entity",
    "Lookup",
    "Ownership",
    "OwnershipType",
    "Phone",
    "PhoneSource",
    "PipelineRecord",
    "PipelineStage",
    "PropertyDetails",
    "PropertyList",
    "PropertyListMembership",
    "Relation",
    "SearchStatus",
    "SkipReason",
    "ValidationOutcome",
    "can_transition",
    "new_id",
    "utcnow",
]
