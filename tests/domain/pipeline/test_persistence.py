from __future__ import annotations

from typing import TYPE_CHECKING

from skiptrace.config import PipelineConfig
from skiptrace.domain.model import SearchStatus
from skiptrace.domain.pipeline.context import ResolutionRun
from skiptrace.domain.pipeline.persistence import ContactPersister, MailingAddress
from skiptrace.domain.ports.sources import PropertyIdentity
from skiptrace.domain.search import PhoneRecord, RelativeRecord

if TYPE_CHECKING:
    from collections.abc import Callable

    from skiptrace.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

MAILING = MailingAddress(address="12 Elm St", city="Akron", state="OH", zip="44301")


def test_upsert_contact_is_keyed_on_normalized_identity(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        persister = ContactPersister(uow.repositories, config=PipelineConfig(), run=ResolutionRun())
        first = persister.upsert_contact(first_name="John", last_name="Smith", mailing=MAILING)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        persister = ContactPersister(uow.repositories, config=PipelineConfig(), run=ResolutionRun())
        again = persister.upsert_contact(
            first_name=" JOHN ",
            last_name="smith",
            mailing=MailingAddress(address="12 elm st", city="Canton"),
            age="64",
            status=SearchStatus.COMPLETED,
        )
        uow.commit()

    assert again.id == first.id
    assert again.age == "64"
    assert again.mailing_city == "Canton"
    assert again.mailing_state == "OH"
    assert again.search_status is SearchStatus.COMPLETED


def test_later_occurrences_in_one_run_keep_first_values(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        persister = ContactPersister(uow.repositories, config=PipelineConfig(), run=ResolutionRun())
        first = persister.upsert_contact(
            first_name="John", last_name="Smith", mailing=MAILING, age="64"
        )
        second = persister.upsert_contact(
            first_name="John", last_name="Smith", mailing=MAILING, age="99"
        )
        uow.commit()

    assert second is first
    assert first.age == "64"


def test_save_phones_caps_and_dedupes_by_last_ten_digits(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        persister = ContactPersister(uow.repositories, config=PipelineConfig(), run=ResolutionRun())
        contact = persister.upsert_contact(first_name="John", last_name="Smith", mailing=MAILING)
        persister.save_phones(
            contact,
            [
                PhoneRecord("(330) 760-5034", "Wireless"),
                PhoneRecord("+13307605034", None),
                PhoneRecord("n/a", None),
                PhoneRecord("3305550001", "Landline"),
            ],
        )
        uow.commit()

    with sqlite_unit_of_work() as uow:
        phones = uow.repositories.phones.list_for_contact(contact.id)

    assert sorted((phone.number, phone.phone_type) for phone in phones) == [
        ("+13307605034", "Wireless")
    ]


def test_relations_are_stored_once_per_pair(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        persister = ContactPersister(uow.repositories, config=PipelineConfig(), run=ResolutionRun())
        john = persister.upsert_contact(first_name="John", last_name="Smith", mailing=MAILING)
        persisted = persister.persist_relatives(
            john, [RelativeRecord(name="Jane Smith", phones=(PhoneRecord("3305551234"),))]
        )
        uow.commit()
    jane = persisted[0].contact

    with sqlite_unit_of_work() as uow:
        persister = ContactPersister(uow.repositories, config=PipelineConfig(), run=ResolutionRun())
        jane_again = persister.upsert_contact(first_name="Jane", last_name="Smith", mailing=MAILING)
        persister.persist_relatives(jane_again, [RelativeRecord(name="John Smith")])
        uow.commit()

    with sqlite_unit_of_work() as uow:
        forward = uow.repositories.relations.find_between(john.id, jane.id)
        backward = uow.repositories.relations.find_between(jane.id, john.id)
        jane_phones = uow.repositories.phones.list_for_contact(jane.id)

    assert forward is not None
    assert backward is not None
    assert forward.id == backward.id
    assert forward.confirmation_count == 2
    assert forward.confirmed_bidirectional
    assert [phone.number for phone in jane_phones] == ["+13305551234"]


def test_relative_matching_the_contact_is_not_linked(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        persister = ContactPersister(uow.repositories, config=PipelineConfig(), run=ResolutionRun())
        john = persister.upsert_contact(first_name="John", last_name="Smith", mailing=MAILING)
        persisted = persister.persist_relatives(
            john, [RelativeRecord(name="John Smith"), RelativeRecord(name="  ")]
        )
        uow.commit()

    assert persisted == ()


def test_persist_property_infers_air_conditioning_and_links_lists(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    identity = PropertyIdentity(
        property_id="p-1",
        address="1 Main St",
        city="Akron",
        state="OH",
        zip="44301",
        heating_type="Forced Air Conditioning",
        bedrooms="3",
        lists=("Absentee", "Tax Delinquent", "Absentee"),
    )
    with sqlite_unit_of_work() as uow:
        persister = ContactPersister(uow.repositories, config=PipelineConfig(), run=ResolutionRun())
        john = persister.upsert_contact(first_name="John", last_name="Smith", mailing=MAILING)
        details = persister.persist_property(identity, contact=john)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        persister = ContactPersister(uow.repositories, config=PipelineConfig(), run=ResolutionRun())
        john = persister.upsert_contact(first_name="John", last_name="Smith", mailing=MAILING)
        again = persister.persist_property(
            PropertyIdentity(
                property_id="p-1",
                address="1 MAIN ST",
                city="akron",
                state="oh",
                zip="44301",
                bathrooms="2",
            ),
            contact=john,
        )
        uow.commit()
        names = uow.repositories.properties.list_names(details.id)

    assert again.id == details.id
    assert again.identity_key == "1 main st|akron|oh|44301"
    assert again.air_conditioner == "Yes"
    assert again.bedrooms == "3"
    assert again.bathrooms == "2"
    assert names == ["Absentee", "Tax Delinquent"]


def test_persisted_relatives_keep_their_provider_position(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        persister = ContactPersister(uow.repositories, config=PipelineConfig(), run=ResolutionRun())
        john = persister.upsert_contact(first_name="John", last_name="Smith", mailing=MAILING)
        persisted = persister.persist_relatives(
            john,
            [RelativeRecord(name="John Smith"), RelativeRecord(name="Bob Smith")],
        )
        uow.commit()

    assert [(item.record.name, item.position) for item in persisted] == [("Bob Smith", 1)]
