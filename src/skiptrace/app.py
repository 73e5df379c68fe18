"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from skiptrace.adapters.lookup import PhoneLookupClient
from skiptrace.adapters.skiptrace import SkipTraceClient, read_search_results
from skiptrace.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from skiptrace.config import get_phone_lookup_config, get_pipeline_config, get_skiptrace_config
from skiptrace.domain.model import PipelineStage
from skiptrace.domain.pipeline import BatchReport, SearchResultCoordinator, submit_for_search
from skiptrace.domain.ports.unit_of_work import PipelineUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from skiptrace.config import PipelineConfig
    from skiptrace.domain.pipeline import SubmissionReport
    from skiptrace.domain.pipeline.validation import SleepFunction
    from skiptrace.domain.ports.providers import PhoneLookupProvider, SearchProvider
    from skiptrace.domain.search import SearchResult

UnitOfWorkFactory = Callable[[], PipelineUnitOfWork]


log = getLogger(__name__)


def _ensure_started(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork


def process_search_results(
    results: Sequence[SearchResult],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    lookup_provider: PhoneLookupProvider | None = None,
    config: PipelineConfig | None = None,
    sleep: SleepFunction | None = None,
) -> BatchReport:
    """Resolve, persist and validate a batch of search results."""

    effective_uow = _ensure_started(unit_of_work_factory)
    effective_provider = lookup_provider or PhoneLookupClient(config=get_phone_lookup_config())
    effective_config = config or get_pipeline_config()
    log.info(
        "Starting result processing: records=%d, inter_call_delay=%.2fs",
        len(results),
        effective_config.inter_call_delay_seconds,
    )
    coordinator = SearchResultCoordinator(
        unit_of_work_factory=effective_uow,
        lookup_provider=effective_provider,
        config=effective_config,
        sleep=sleep or asyncio.sleep,
    )
    report = asyncio.run(coordinator.process_batch(results))
    log.info(
        f"Finished result processing: succeeded={report.succeeded}, failed={report.failed}, "
        f"validated={sum(outcome.validated_count for outcome in report.outcomes)}"
    )
    return report


def process_results_file(
    path: Path,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    lookup_provider: PhoneLookupProvider | None = None,
    config: PipelineConfig | None = None,
) -> BatchReport:
    """Process every valid search result stored in a JSON Lines file."""

    results = list(read_search_results(path))
    log.info("Read %d search result(s) from %s", len(results), path)
    return process_search_results(
        results,
        unit_of_work_factory=unit_of_work_factory,
        lookup_provider=lookup_provider,
        config=config,
    )


def submit_approved(
    pairs: Sequence[tuple[str, str]],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    search_provider: SearchProvider | None = None,
) -> SubmissionReport:
    """Send the given approved owner/property pairs to the search service."""

    effective_uow = _ensure_started(unit_of_work_factory)
    effective_provider = search_provider or SkipTraceClient(config=get_skiptrace_config())
    report = asyncio.run(
        submit_for_search(
            pairs,
            unit_of_work_factory=effective_uow,
            provider=effective_provider,
        )
    )
    log.info(
        "Finished submission: submitted=%d, skipped=%d",
        len(report.submitted),
        len(report.skipped),
    )
    return report


def submit_all_approved(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    search_provider: SearchProvider | None = None,
) -> SubmissionReport:
    """Send every pipeline record still in the approved stage."""

    effective_uow = _ensure_started(unit_of_work_factory)
    with effective_uow() as uow:
        pairs = [
            (record.owner_id, record.property_id)
            for record in uow.repositories.records.list_by_stage(PipelineStage.APPROVED)
        ]
    return submit_approved(
        pairs,
        unit_of_work_factory=effective_uow,
        search_provider=search_provider,
    )
