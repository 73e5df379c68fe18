"""Drive search results through resolution, persistence and phone validation."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from skiptrace.config.pipeline import PipelineConfig
from skiptrace.domain.errors import PipelineRecordNotFoundError
from skiptrace.domain.identity import contact_identity_key
from skiptrace.domain.model import PipelineStage
from skiptrace.domain.pipeline.context import ResolutionRun
from skiptrace.domain.pipeline.ownership import resolve_ownership
from skiptrace.domain.pipeline.persistence import ContactPersister
from skiptrace.domain.pipeline.selection import select_phones_for_validation
from skiptrace.domain.pipeline.validation import (
    BackoffPolicy,
    PhoneValidationResult,
    PhoneValidator,
    ValidationRequest,
)
from skiptrace.domain.resolution import resolve_identity

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from skiptrace.domain.pipeline.selection import QueuedPhone
    from skiptrace.domain.pipeline.validation import SleepFunction
    from skiptrace.domain.ports.providers import PhoneLookupProvider
    from skiptrace.domain.ports.unit_of_work import PipelineUnitOfWork
    from skiptrace.domain.search import SearchResult

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RecordOutcome:
    owner_id: str
    property_id: str
    stage: PipelineStage | None = None
    contact_id: UUID | None = None
    property_details_id: UUID | None = None
    validations: tuple[PhoneValidationResult, ...] = ()
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def validated_count(self) -> int:
        return sum(1 for result in self.validations if result.is_validated)


@dataclass(frozen=True, slots=True)
class BatchReport:
    outcomes: tuple[RecordOutcome, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.succeeded

    def outcome_for(self, owner_id: str, property_id: str) -> RecordOutcome | None:
        for outcome in self.outcomes:
            if outcome.owner_id == owner_id and outcome.property_id == property_id:
                return outcome
        return None


@dataclass(slots=True)
class _Progress:
    """How far a record got, kept for the failure report."""

    stage: PipelineStage | None = None
    contact_id: UUID | None = None
    property_details_id: UUID | None = None


@dataclass(frozen=True, slots=True)
class _PreparedRecord:
    """Result of the synchronous resolution/persistence phase of one record."""

    stage: PipelineStage
    contact_id: UUID | None
    property_details_id: UUID | None
    queue: tuple[QueuedPhone, ...]


class SearchResultCoordinator:
    """Processes provider responses, one concurrent task per pipeline record.

    Within a record the steps run strictly in order: stage transition, identity
    resolution and persistence in a single unit of work, then sequential phone
    validation with a fixed delay between lookups. Store work runs in worker threads
    so records progress concurrently. A failure in one record is logged and reported
    without cancelling the others; a record whose validation breaks off is moved to
    ``SEARCH_FAILED`` with whatever ids were resolved.
    """

    def __init__(
        self,
        *,
        unit_of_work_factory: Callable[[], PipelineUnitOfWork],
        lookup_provider: PhoneLookupProvider,
        config: PipelineConfig | None = None,
        sleep: SleepFunction = asyncio.sleep,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._config = config or PipelineConfig()
        self._sleep = sleep
        self._validator = PhoneValidator(
            provider=lookup_provider,
            unit_of_work_factory=unit_of_work_factory,
        )
        self._backoff = BackoffPolicy(
            base_delay=self._config.backoff_base_delay_seconds,
            max_retries=self._config.backoff_max_retries,
            sleep=sleep,
        )

    async def process_batch(self, results: Sequence[SearchResult]) -> BatchReport:
        log.info("Processing %d search result(s)", len(results))
        outcomes = await asyncio.gather(*(self._process_isolated(result) for result in results))
        report = BatchReport(outcomes=tuple(outcomes))
        log.info("Batch finished: succeeded=%d, failed=%d", report.succeeded, report.failed)
        return report

    async def process_result(self, result: SearchResult) -> RecordOutcome:
        return await self._run(result, _Progress())

    async def _run(self, result: SearchResult, progress: _Progress) -> RecordOutcome:
        prepared = await asyncio.to_thread(self._resolve_and_persist, result)
        progress.stage = prepared.stage
        progress.contact_id = prepared.contact_id
        progress.property_details_id = prepared.property_details_id

        validations: list[PhoneValidationResult] = []
        if prepared.queue:
            try:
                for position, queued in enumerate(prepared.queue):
                    if position:
                        await self._sleep(self._config.inter_call_delay_seconds)
                    request = ValidationRequest.from_queued(queued, backoff=self._backoff)
                    validations.append(await self._validator.validate(request))
            except Exception:
                await asyncio.to_thread(
                    self._finish, result, prepared, PipelineStage.SEARCH_FAILED
                )
                progress.stage = PipelineStage.SEARCH_FAILED
                raise
            await asyncio.to_thread(
                self._finish, result, prepared, PipelineStage.VALIDATION_COMPLETED
            )
            progress.stage = PipelineStage.VALIDATION_COMPLETED
        return RecordOutcome(
            owner_id=result.owner_id,
            property_id=result.property_id,
            stage=progress.stage,
            contact_id=prepared.contact_id,
            property_details_id=prepared.property_details_id,
            validations=tuple(validations),
        )

    async def _process_isolated(self, result: SearchResult) -> RecordOutcome:
        progress = _Progress()
        try:
            return await self._run(result, progress)
        except Exception as exc:  # noqa: BLE001
            log.exception(
                "Failed to process search result for owner=%s property=%s",
                result.owner_id,
                result.property_id,
            )
            return RecordOutcome(
                owner_id=result.owner_id,
                property_id=result.property_id,
                stage=progress.stage,
                contact_id=progress.contact_id,
                property_details_id=progress.property_details_id,
                error=f"{type(exc).__name__}: {exc}",
            )

    def _resolve_and_persist(self, result: SearchResult) -> _PreparedRecord:
        response = result.response
        with self._uow_factory() as uow:
            repositories = uow.repositories
            record = repositories.records.get_by_pair(result.owner_id, result.property_id)
            if record is None:
                raise PipelineRecordNotFoundError(result.owner_id, result.property_id)

            stage = (
                PipelineStage.SEARCH_COMPLETED
                if response.has_candidates
                else PipelineStage.SEARCH_FAILED
            )
            record.advance(stage)

            owner = repositories.sources.find_owner_identity(result.owner_id)
            property_identity = repositories.sources.find_property_identity(result.property_id)
            first_name = response.input.first_name or (owner.first_name if owner else None)
            last_name = response.input.last_name or (owner.last_name if owner else None)

            persister = ContactPersister(repositories, config=self._config, run=ResolutionRun())
            resolved = resolve_identity(
                response.candidates, first_name=first_name, last_name=last_name
            )
            if resolved is None:
                primary = persister.persist_unmatched(result, owner=owner)
                relatives = ()
            else:
                persisted = persister.persist_candidates(result, resolved, owner=owner)
                if persisted:
                    primary = persisted[0].contact
                    relatives = persisted[0].relatives
                else:
                    primary = persister.persist_unmatched(result, owner=owner)
                    relatives = ()

            ownership = resolve_ownership(
                persister, owner=owner, primary=primary, response=response
            )

            property_details = None
            if property_identity is not None:
                property_details = persister.persist_property(property_identity, contact=primary)
                for link in ownership.owners:
                    persister.persist_ownership(
                        property_details,
                        link.contact,
                        is_primary=link.is_primary,
                        ownership_type=link.ownership_type,
                    )
            else:
                log.warning("No property record %s; skipping property details", result.property_id)

            queue: list[QueuedPhone] = []
            if resolved is not None and stage is PipelineStage.SEARCH_COMPLETED:
                queue = select_phones_for_validation(
                    primary=primary,
                    primary_deceased=any(name.is_deceased for name in resolved.candidate.names)
                    or resolved.name.is_deceased,
                    primary_phones=resolved.candidate.phones,
                    relatives=relatives,
                    co_owner=ownership.co_owner,
                    co_owner_phones=ownership.co_owner_phones,
                    config=self._config,
                )

            record.identity_key = result.identity_key or record.identity_key or (
                contact_identity_key(first_name, last_name, primary.mailing_address)
            )
            property_details_id = property_details.id if property_details else None
            if queue:
                record.advance(PipelineStage.VALIDATION_PROCESSING)
            else:
                record.attach(contact_id=primary.id, property_details_id=property_details_id)
            uow.commit()
            log.info(
                "Record owner=%s property=%s: %s, score=%s, %d phone(s) queued",
                result.owner_id,
                result.property_id,
                record.stage,
                resolved.score if resolved else None,
                len(queue),
            )
            return _PreparedRecord(
                stage=record.stage,
                contact_id=primary.id,
                property_details_id=property_details_id,
                queue=tuple(queue),
            )

    def _finish(
        self, result: SearchResult, prepared: _PreparedRecord, stage: PipelineStage
    ) -> None:
        """Leave ``VALIDATION_PROCESSING`` and attach the resolved ids."""

        with self._uow_factory() as uow:
            record = uow.repositories.records.get_by_pair(result.owner_id, result.property_id)
            if record is None:
                raise PipelineRecordNotFoundError(result.owner_id, result.property_id)
            record.advance(stage)
            record.attach(
                contact_id=prepared.contact_id,
                property_details_id=prepared.property_details_id,
            )
            uow.commit()
        if stage is PipelineStage.SEARCH_FAILED:
            log.warning(
                "Validation aborted for owner=%s property=%s; record marked %s",
                result.owner_id,
                result.property_id,
                stage,
            )
