"""SQLAlchemy adapter package."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyContactRepository,
    SqlAlchemyLookupRepository,
    SqlAlchemyOwnershipRepository,
    SqlAlchemyPhoneRepository,
    SqlAlchemyPipelineRecordRepository,
    SqlAlchemyPropertyRepository,
    SqlAlchemyRelationRepository,
)
from .sources import SqlAlchemyRecordSource
from .unit_of_work import SqlAlchemyUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyContactRepository",
    "SqlAlchemyLookupRepository",
    "SqlAlchemyOwnershipRepository",
    "SqlAlchemyPhoneRepository",
    "SqlAlchemyPipelineRecordRepository",
    "SqlAlchemyPropertyRepository",
    "SqlAlchemyRecordSource",
    "SqlAlchemyRelationRepository",
    "SqlAlchemyUnitOfWork",
    "mapper_registry",
    "shutdown",
    "startup",
    "start_mappers",
]
