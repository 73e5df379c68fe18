from __future__ import annotations

from skiptrace.config import PipelineConfig
from skiptrace.domain.model import Contact, PhoneSource
from skiptrace.domain.pipeline.ownership import find_person_phones
from skiptrace.domain.pipeline.persistence import PersistedRelative
from skiptrace.domain.pipeline.selection import select_phones_for_validation
from skiptrace.domain.search import PhoneRecord, SearchResponse
from tests.helpers.records import candidate, relative


def _contact(first_name: str, last_name: str) -> Contact:
    return Contact(
        identity_key=f"{first_name}|{last_name}|12 elm st",
        first_name=first_name,
        last_name=last_name,
    )


def _phones(*numbers: str) -> tuple[PhoneRecord, ...]:
    return tuple(PhoneRecord(number=number) for number in numbers)


def test_alive_owner_queues_primary_then_co_owner() -> None:
    john = _contact("john", "smith")
    mary = _contact("mary", "doe")

    queue = select_phones_for_validation(
        primary=john,
        primary_deceased=False,
        primary_phones=_phones("3305550001", "3305550002", "3305550003", "3305550004"),
        relatives=(),
        co_owner=mary,
        co_owner_phones=_phones("3305559998", "3305559999"),
        config=PipelineConfig(),
    )

    assert [(item.contact_id, item.tag, item.source) for item in queue] == [
        (john.id, "DS1", PhoneSource.PRIMARY),
        (john.id, "DS2", PhoneSource.PRIMARY),
        (john.id, "DS3", PhoneSource.PRIMARY),
        (mary.id, "DS1", PhoneSource.CO_OWNER),
        (mary.id, "DS2", PhoneSource.CO_OWNER),
    ]


def test_deceased_owner_queues_only_first_relative_phone() -> None:
    john = _contact("john", "smith")
    jane = _contact("jane", "smith")
    bob = _contact("bob", "smith")
    relatives = (
        PersistedRelative(
            record=relative("Jane Smith", "3305551234", "3305551235"), contact=jane, position=0
        ),
        PersistedRelative(record=relative("Bob Smith", "3305554321"), contact=bob, position=1),
    )

    queue = select_phones_for_validation(
        primary=john,
        primary_deceased=True,
        primary_phones=_phones("3305550001"),
        relatives=relatives,
        co_owner=None,
        co_owner_phones=(),
        config=PipelineConfig(),
    )

    assert [(item.contact_id, item.number, item.tag) for item in queue] == [
        (jane.id, "3305551234", "R1")
    ]


def test_deceased_owner_without_relative_phones_queues_nothing() -> None:
    queue = select_phones_for_validation(
        primary=_contact("john", "smith"),
        primary_deceased=True,
        primary_phones=_phones("3305550001"),
        relatives=(
            PersistedRelative(
                record=relative("Jane Smith"), contact=_contact("jane", "smith"), position=0
            ),
        ),
        co_owner=None,
        co_owner_phones=(),
        config=PipelineConfig(),
    )

    assert queue == []


def test_person_phones_union_top_level_and_relatives() -> None:
    response = SearchResponse(
        candidates=(
            candidate("John", "Smith", relatives=[relative("Mary Doe", "330-555-9999")]),
            candidate("MARY", "doe", phones=["3305559999", "3305558888"]),
            candidate("Ann", "Lee", relatives=[relative("Mary Doe", "3305557777")]),
        )
    )

    phones = find_person_phones(response, first_name="Mary", last_name="Doe")

    assert [phone.number for phone in phones] == ["3305559999", "3305558888", "3305557777"]


def test_person_phones_empty_when_nobody_matches() -> None:
    response = SearchResponse(candidates=(candidate("John", "Smith", phones=["3305550001"]),))

    assert find_person_phones(response, first_name="Mary", last_name="Doe") == []


def test_deceased_owner_skips_relatives_after_an_unpersisted_first() -> None:
    queue = select_phones_for_validation(
        primary=_contact("john", "smith"),
        primary_deceased=True,
        primary_phones=_phones("3305550001"),
        relatives=(
            PersistedRelative(
                record=relative("Bob Smith", "3305554321"),
                contact=_contact("bob", "smith"),
                position=1,
            ),
        ),
        co_owner=None,
        co_owner_phones=(),
        config=PipelineConfig(),
    )

    assert queue == []
