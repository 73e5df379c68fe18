"""SQLAlchemy-backed units of work for the search-result pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from skiptrace.adapters.sqlalchemy.mappings import start_mappers
from skiptrace.adapters.sqlalchemy.migrations import upgrade_head
from skiptrace.adapters.sqlalchemy.repositories import (
    SqlAlchemyContactRepository,
    SqlAlchemyLookupRepository,
    SqlAlchemyOwnershipRepository,
    SqlAlchemyPhoneRepository,
    SqlAlchemyPipelineRecordRepository,
    SqlAlchemyPropertyRepository,
    SqlAlchemyRelationRepository,
)
from skiptrace.adapters.sqlalchemy.sources import SqlAlchemyRecordSource
from skiptrace.config.storage import DatabaseConfig, get_database_config
from skiptrace.domain.ports.unit_of_work import PipelineRepositories, RepositoryCollection

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None
    session_factory: sessionmaker[Session] | None = None

    def require_session_factory(self) -> sessionmaker[Session]:
        if self.session_factory is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call skiptrace.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        return self.session_factory


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to an engine, map the entities and migrate the schema to head.

    A second call raises ``StartupError`` unless ``force`` is set, in which case the
    previous engine is replaced (but not disposed).
    """

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    if engine is None:
        database = DatabaseConfig(uri=database_uri) if database_uri else get_database_config()
        engine = create_engine(database.uri, echo=database.echo, future=True)
    start_mappers()
    upgrade_head(engine=engine)
    _STATE.engine = engine
    _STATE.session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    log.debug("SQLAlchemy adapter started on %s", engine.url)


def configured_engine() -> Engine | None:
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None
    _STATE.session_factory = None


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """Generic SQLAlchemy unit of work with pluggable repository collections."""

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STATE.require_session_factory()
        self._session: Session | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        self.session = self.session_factory()
        self._repositories = self._build_repositories(self.session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            log.debug("Rolling back unit of work after %s", exc_type.__name__)
            self.rollback()
        self.session.close()
        self.session = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> TRepositories:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = session


class SqlAlchemyUnitOfWork(BaseSqlAlchemyUnitOfWork[PipelineRepositories]):
    """Unit of work managing SQLAlchemy sessions for search-result processing."""

    def _build_repositories(self, session: Session) -> PipelineRepositories:
        return PipelineRepositories(
            contacts=SqlAlchemyContactRepository(session),
            phones=SqlAlchemyPhoneRepository(session),
            lookups=SqlAlchemyLookupRepository(session),
            relations=SqlAlchemyRelationRepository(session),
            properties=SqlAlchemyPropertyRepository(session),
            ownerships=SqlAlchemyOwnershipRepository(session),
            records=SqlAlchemyPipelineRecordRepository(session),
            sources=SqlAlchemyRecordSource(session),
        )


if TYPE_CHECKING:
    from skiptrace.domain.ports.unit_of_work import PipelineUnitOfWork

    _uow_check: PipelineUnitOfWork = SqlAlchemyUnitOfWork()
