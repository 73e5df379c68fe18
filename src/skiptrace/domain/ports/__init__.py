"""Domain ports (protocols) for adapters."""

from __future__ import annotations

from .persistence import (
    ContactRepository,
    LookupRepository,
    OwnershipRepository,
    PhoneRepository,
    PipelineRecordRepository,
    PropertyRepository,
    RelationRepository,
    Repository,
)
from .providers import LookupData, LookupResponse, PhoneLookupProvider, SearchProvider
from .sources import OwnerIdentity, PropertyIdentity, RecordSource
from .unit_of_work import (
    PipelineRepositories,
    PipelineUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "ContactRepository",
    "LookupData",
    "LookupRepository",
    "LookupResponse",
    "OwnerIdentity",
    "OwnershipRepository",
    "PhoneLookupProvider",
    "PhoneRepository",
    "PipelineRecordRepository",
    "PipelineRepositories",
    "PipelineUnitOfWork",
    "PropertyIdentity",
    "PropertyRepository",
    "RecordSource",
    "RelationRepository",
    "Repository",
    "RepositoryCollection",
    "SearchProvider",
    "UnitOfWork",
]
