from __future__ import annotations

import json
from typing import TYPE_CHECKING

from skiptrace.app import process_results_file, submit_all_approved
from skiptrace.config import PipelineConfig
from skiptrace.domain.model import PipelineStage
from tests.helpers.providers import FakeLookupProvider, FakeSearchProvider
from tests.helpers.records import seed_owner, seed_pipeline, seed_property, seed_record

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from skiptrace.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork


def _webhook(owner_id: str, property_id: str, *phones: str) -> str:
    return json.dumps(
        {
            "ownerId": owner_id,
            "propertyId": property_id,
            "response": {
                "input": {"firstname": "John", "lastname": "Smith", "address": "12 Elm St"},
                "contacts": [
                    {
                        "names": [{"firstname": "John", "lastname": "Smith", "deceased": "N"}],
                        "phones": [{"phonenumber": phone} for phone in phones],
                    }
                ],
            },
        }
    )


def test_process_results_file_runs_the_pipeline(
    tmp_path: Path,
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    seed_pipeline(sqlite_engine, sqlite_unit_of_work, "o-1", "p-1")
    path = tmp_path / "results.jsonl"
    path.write_text(
        "\n".join([_webhook("o-1", "p-1", "3305550001"), '{"ownerId": "broken"}']),
        encoding="utf-8",
    )
    provider = FakeLookupProvider({"+13305550001": "SMITH,JOHN"})

    report = process_results_file(
        path,
        unit_of_work_factory=sqlite_unit_of_work,
        lookup_provider=provider,
        config=PipelineConfig(inter_call_delay_seconds=0.0),
    )

    assert report.succeeded == 1
    assert report.failed == 0
    outcome = report.outcome_for("o-1", "p-1")
    assert outcome is not None
    assert outcome.stage is PipelineStage.VALIDATION_COMPLETED
    assert outcome.validated_count == 1


def test_submit_all_approved_picks_approved_records(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    for owner_id, property_id in (("o-1", "p-1"), ("o-2", "p-2")):
        seed_owner(sqlite_engine, owner_id)
        seed_property(sqlite_engine, property_id)
    seed_record(sqlite_unit_of_work, "o-1", "p-1", stage=PipelineStage.APPROVED)
    seed_record(sqlite_unit_of_work, "o-2", "p-2", stage=PipelineStage.SENT_TO_SEARCH)
    provider = FakeSearchProvider()

    report = submit_all_approved(unit_of_work_factory=sqlite_unit_of_work, search_provider=provider)

    assert report.submitted == (("o-1", "p-1"),)
    assert [len(batch) for batch in provider.batches] == [1]
