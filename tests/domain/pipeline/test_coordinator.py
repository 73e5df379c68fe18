from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING

from skiptrace.config import PipelineConfig
from skiptrace.domain.model import (
    CallerIdLabel,
    OwnershipType,
    PhoneSource,
    PipelineStage,
    SearchStatus,
    ValidationOutcome,
)
from skiptrace.domain.pipeline import SearchResultCoordinator
from tests.helpers.providers import FakeLookupProvider, RecordingSleep
from tests.helpers.records import candidate, relative, search_result, seed_pipeline

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine

    from skiptrace.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork
    from skiptrace.domain.pipeline import BatchReport


def _coordinator(
    uow_factory: Callable[[], SqlAlchemyUnitOfWork],
    provider: FakeLookupProvider,
    sleep: RecordingSleep,
) -> SearchResultCoordinator:
    return SearchResultCoordinator(
        unit_of_work_factory=uow_factory,
        lookup_provider=provider,
        config=PipelineConfig(),
        sleep=sleep,
    )


def test_alive_owner_validates_primary_phones_in_order(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    seed_pipeline(sqlite_engine, sqlite_unit_of_work, "o-1", "p-1")
    provider = FakeLookupProvider(
        {
            "+13305550001": "SMITH,JOHN",
            "+13305550002": "WIRELESS CALLER",
            "+13305550003": "OH",
            "+13305550004": "DOE,JANE",
        }
    )
    sleep = RecordingSleep()
    result = search_result(
        "o-1",
        "p-1",
        [
            candidate(
                "John",
                "Smith",
                phones=["3305550001", "3305550002", "3305550003", "3305550004"],
            )
        ],
    )

    outcome = asyncio.run(_coordinator(sqlite_unit_of_work, provider, sleep).process_result(result))

    assert outcome.succeeded
    assert outcome.stage is PipelineStage.VALIDATION_COMPLETED
    assert [(item.tag, item.label) for item in outcome.validations] == [
        ("DS1", CallerIdLabel.IDMATCH),
        ("DS2", CallerIdLabel.WC),
        ("DS3", CallerIdLabel.NO_ID),
    ]
    assert provider.calls == ["+13305550001", "+13305550002", "+13305550003"]
    assert sleep.delays == [0.2, 0.2]
    with sqlite_unit_of_work() as uow:
        record = uow.repositories.records.get_by_pair("o-1", "p-1")
        assert record is not None
        assert record.stage is PipelineStage.VALIDATION_COMPLETED
        assert record.contact_id == outcome.contact_id
        assert record.property_details_id == outcome.property_details_id
        assert record.identity_key == "john|smith|12 elm st"
        contact = uow.repositories.contacts.get(outcome.contact_id)
        phones = uow.repositories.phones.list_for_contact(outcome.contact_id)
    assert contact is not None
    assert contact.search_status is SearchStatus.COMPLETED
    assert contact.deceased == "N"
    assert [phone.validation_tag for phone in phones] == ["DS1", "DS2", "DS3"]


def test_deceased_owner_validates_first_relative_phone(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    seed_pipeline(sqlite_engine, sqlite_unit_of_work, "o-1", "p-1")
    provider = FakeLookupProvider({"+13305551234": "SMITH,JANE"})
    result = search_result(
        "o-1",
        "p-1",
        [
            candidate(
                "John",
                "Smith",
                phones=["3305550001"],
                deceased="Y",
                relatives=[relative("Jane Smith", "3305551234"), relative("Bob Smith", "3305554321")],
            )
        ],
    )

    outcome = asyncio.run(
        _coordinator(sqlite_unit_of_work, provider, RecordingSleep()).process_result(result)
    )

    assert outcome.stage is PipelineStage.VALIDATION_COMPLETED
    assert len(outcome.validations) == 1
    validation = outcome.validations[0]
    assert validation.tag == "R1"
    assert validation.source is PhoneSource.RELATIVE
    assert validation.number == "+13305551234"
    assert validation.label is CallerIdLabel.IDMATCH
    assert provider.calls == ["+13305551234"]
    with sqlite_unit_of_work() as uow:
        owner_phones = uow.repositories.phones.list_for_contact(outcome.contact_id)
        relative_phones = uow.repositories.phones.list_for_contact(validation.contact_id)
        relation = uow.repositories.relations.find_between(
            outcome.contact_id, validation.contact_id
        )
    assert [phone.validation_tag for phone in owner_phones] == [None]
    assert [phone.validation_tag for phone in relative_phones] == ["R1"]
    assert relation is not None


def test_co_owner_phones_found_among_relatives_are_queued(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    seed_pipeline(
        sqlite_engine,
        sqlite_unit_of_work,
        "o-1",
        "p-1",
        owner2_first_name="Mary",
        owner2_last_name="Doe",
    )
    provider = FakeLookupProvider(
        {
            "+13305550001": "SMITH,JOHN",
            "+13305550002": "SMITH,JOHN",
            "+13305559999": "DOE,MARY",
        }
    )
    sleep = RecordingSleep()
    result = search_result(
        "o-1",
        "p-1",
        [
            candidate(
                "John",
                "Smith",
                phones=["3305550001", "3305550002"],
                relatives=[relative("Mary Doe", "3305559999")],
            )
        ],
    )

    outcome = asyncio.run(_coordinator(sqlite_unit_of_work, provider, sleep).process_result(result))

    assert [(item.source, item.tag) for item in outcome.validations] == [
        (PhoneSource.PRIMARY, "DS1"),
        (PhoneSource.PRIMARY, "DS2"),
        (PhoneSource.CO_OWNER, "DS1"),
    ]
    assert all(item.outcome is ValidationOutcome.VALIDATED for item in outcome.validations)
    assert sleep.delays == [0.2, 0.2]
    co_owner_id = outcome.validations[2].contact_id
    assert outcome.property_details_id is not None
    with sqlite_unit_of_work() as uow:
        ownerships = uow.repositories.ownerships.list_for_property(outcome.property_details_id)
        co_owner = uow.repositories.contacts.get(co_owner_id)
        co_owner_phones = uow.repositories.phones.list_for_contact(co_owner_id)
    assert [(item.contact_id, item.ownership_type, item.is_primary) for item in ownerships] == [
        (outcome.contact_id, OwnershipType.OWNER, True),
        (co_owner_id, OwnershipType.CO_OWNER, False),
    ]
    assert co_owner is not None
    assert (co_owner.first_name, co_owner.last_name) == ("mary", "doe")
    assert [(phone.number, phone.validation_tag) for phone in co_owner_phones] == [
        ("+13305559999", "DS1")
    ]


def test_empty_response_marks_search_failed(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    seed_pipeline(sqlite_engine, sqlite_unit_of_work, "o-1", "p-1")
    provider = FakeLookupProvider()

    outcome = asyncio.run(
        _coordinator(sqlite_unit_of_work, provider, RecordingSleep()).process_result(
            search_result("o-1", "p-1", po_box_address="PO Box 77")
        )
    )

    assert outcome.stage is PipelineStage.SEARCH_FAILED
    assert outcome.validations == ()
    assert provider.calls == []
    with sqlite_unit_of_work() as uow:
        record = uow.repositories.records.get_by_pair("o-1", "p-1")
        contact = uow.repositories.contacts.get(outcome.contact_id)
    assert record is not None
    assert record.stage is PipelineStage.SEARCH_FAILED
    assert record.contact_id == outcome.contact_id
    assert contact is not None
    assert contact.search_status is SearchStatus.FAILED
    assert contact.mailing_address == "PO Box 77"


def test_batch_isolates_failing_records(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    seed_pipeline(sqlite_engine, sqlite_unit_of_work, "o-1", "p-1")
    seed_pipeline(
        sqlite_engine, sqlite_unit_of_work, "o-2", "p-2", first_name="Ann", last_name="Lee"
    )
    provider = FakeLookupProvider({"+13305550001": "SMITH,JOHN", "+13305550002": "LEE,ANN"})
    coordinator = _coordinator(sqlite_unit_of_work, provider, RecordingSleep())
    results = [
        search_result("o-1", "p-1", [candidate("John", "Smith", phones=["3305550001"])]),
        search_result("missing", "p-9", [candidate("John", "Smith")]),
        search_result(
            "o-2",
            "p-2",
            [candidate("Ann", "Lee", phones=["3305550002"])],
            first_name="Ann",
            last_name="Lee",
        ),
    ]

    report = asyncio.run(coordinator.process_batch(results))

    assert report.succeeded == 2
    assert report.failed == 1
    missing = report.outcome_for("missing", "p-9")
    assert missing is not None
    assert missing.error is not None
    assert "PipelineRecordNotFoundError" in missing.error
    for owner_id, property_id in (("o-1", "p-1"), ("o-2", "p-2")):
        outcome = report.outcome_for(owner_id, property_id)
        assert outcome is not None
        assert outcome.stage is PipelineStage.VALIDATION_COMPLETED
        assert outcome.validated_count == 1


def test_validation_breaking_off_marks_record_failed(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    seed_pipeline(sqlite_engine, sqlite_unit_of_work, "o-1", "p-1")
    seed_pipeline(
        sqlite_engine, sqlite_unit_of_work, "o-2", "p-2", first_name="Ann", last_name="Lee"
    )
    provider = FakeLookupProvider(
        {"+13305550001": "SMITH,JOHN", "+13305550007": "LEE,ANN"},
        errors={"+13305550002": RuntimeError("connection reset")},
    )
    coordinator = _coordinator(sqlite_unit_of_work, provider, RecordingSleep())
    results = [
        search_result(
            "o-1",
            "p-1",
            [candidate("John", "Smith", phones=["3305550001", "3305550002", "3305550003"])],
        ),
        search_result(
            "o-2",
            "p-2",
            [candidate("Ann", "Lee", phones=["3305550007"])],
            first_name="Ann",
            last_name="Lee",
        ),
    ]

    report = asyncio.run(coordinator.process_batch(results))

    assert report.succeeded == 1
    broken = report.outcome_for("o-1", "p-1")
    assert broken is not None
    assert broken.error == "RuntimeError: connection reset"
    assert broken.stage is PipelineStage.SEARCH_FAILED
    assert broken.contact_id is not None
    assert broken.property_details_id is not None
    healthy = report.outcome_for("o-2", "p-2")
    assert healthy is not None
    assert healthy.stage is PipelineStage.VALIDATION_COMPLETED
    assert "+13305550003" not in provider.calls
    with sqlite_unit_of_work() as uow:
        record = uow.repositories.records.get_by_pair("o-1", "p-1")
        phones = uow.repositories.phones.list_for_contact(broken.contact_id)
    assert record is not None
    assert record.stage is PipelineStage.SEARCH_FAILED
    assert record.contact_id == broken.contact_id
    assert record.property_details_id == broken.property_details_id
    assert [phone.number for phone in phones if phone.lookup_id is not None] == ["+13305550001"]


def test_store_work_runs_off_the_event_loop_thread(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    seed_pipeline(sqlite_engine, sqlite_unit_of_work, "o-1", "p-1")
    provider = FakeLookupProvider({"+13305550001": "SMITH,JOHN"})
    opened_on: list[int] = []

    def tracking_factory() -> SqlAlchemyUnitOfWork:
        opened_on.append(threading.get_ident())
        return sqlite_unit_of_work()

    coordinator = _coordinator(tracking_factory, provider, RecordingSleep())
    result = search_result("o-1", "p-1", [candidate("John", "Smith", phones=["3305550001"])])

    async def run() -> tuple[int, BatchReport]:
        loop_thread = threading.get_ident()
        return loop_thread, await coordinator.process_batch([result])

    loop_thread, report = asyncio.run(run())

    assert report.succeeded == 1
    assert opened_on
    assert loop_thread not in opened_on


def test_reprocessing_a_completed_record_is_rejected(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    seed_pipeline(sqlite_engine, sqlite_unit_of_work, "o-1", "p-1")
    provider = FakeLookupProvider({"+13305550001": "SMITH,JOHN"})
    coordinator = _coordinator(sqlite_unit_of_work, provider, RecordingSleep())
    result = search_result("o-1", "p-1", [candidate("John", "Smith", phones=["3305550001"])])

    first = asyncio.run(coordinator.process_batch([result]))
    second = asyncio.run(coordinator.process_batch([result]))

    assert first.succeeded == 1
    assert second.failed == 1
    outcome = second.outcome_for("o-1", "p-1")
    assert outcome is not None
    assert outcome.error is not None
    assert "InvalidStageTransitionError" in outcome.error
    assert provider.calls == ["+13305550001"]
