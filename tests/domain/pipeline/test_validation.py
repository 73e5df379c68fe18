from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from skiptrace.domain.model import (
    CallerIdLabel,
    Contact,
    PhoneSource,
    SkipReason,
    ValidationOutcome,
)
from skiptrace.domain.pipeline import BackoffPolicy, PhoneValidator, ValidationRequest
from tests.helpers.providers import FakeLookupProvider, RecordingSleep, lookup_success, rate_limited

if TYPE_CHECKING:
    from collections.abc import Callable

    from skiptrace.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

NUMBER = "+13307605034"


def _add_contact(
    uow_factory: Callable[[], SqlAlchemyUnitOfWork],
    first_name: str = "john",
    last_name: str = "smith",
) -> Contact:
    contact = Contact(
        identity_key=f"{first_name}|{last_name}|12 elm st",
        first_name=first_name,
        last_name=last_name,
        mailing_address="12 Elm St",
    )
    with uow_factory() as uow:
        uow.repositories.contacts.add(contact)
        uow.commit()
    return contact


def _request(
    contact: Contact,
    number: str,
    *,
    tag: str = "DS1",
    backoff: BackoffPolicy | None = None,
) -> ValidationRequest:
    return ValidationRequest(
        contact_id=contact.id,
        first_name=contact.first_name,
        last_name=contact.last_name,
        number=number,
        phone_type="Wireless",
        tag=tag,
        backoff=backoff or BackoffPolicy(sleep=RecordingSleep()),
    )


def test_validation_stores_lookup_and_tags_phone(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    contact = _add_contact(sqlite_unit_of_work)
    provider = FakeLookupProvider({NUMBER: "SMITH,JOHN"})
    validator = PhoneValidator(provider=provider, unit_of_work_factory=sqlite_unit_of_work)

    result = asyncio.run(validator.validate(_request(contact, "(330) 760-5034")))

    assert result.outcome is ValidationOutcome.VALIDATED
    assert result.label is CallerIdLabel.IDMATCH
    assert result.source is PhoneSource.PRIMARY
    assert result.attempts == 1
    assert provider.calls == [NUMBER]
    with sqlite_unit_of_work() as uow:
        phones = uow.repositories.phones.list_for_contact(contact.id)
        lookup = uow.repositories.lookups.find_by_number(NUMBER)
    assert lookup is not None
    assert lookup.caller_name == "SMITH,JOHN"
    assert lookup.carrier_name == "Example Wireless"
    assert [(phone.number, phone.validation_tag, phone.status) for phone in phones] == [
        (NUMBER, "DS1", "active")
    ]
    assert phones[0].lookup_id == lookup.id


def test_differently_formatted_duplicate_is_not_looked_up_again(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    contact = _add_contact(sqlite_unit_of_work)
    provider = FakeLookupProvider({NUMBER: "SMITH,JOHN"})
    validator = PhoneValidator(provider=provider, unit_of_work_factory=sqlite_unit_of_work)

    first = asyncio.run(validator.validate(_request(contact, "(330) 760-5034")))
    second = asyncio.run(validator.validate(_request(contact, "+13307605034", tag="DS2")))

    assert first.outcome is ValidationOutcome.VALIDATED
    assert second.outcome is ValidationOutcome.DUPLICATE
    assert second.phone_id == first.phone_id
    assert provider.calls == [NUMBER]
    with sqlite_unit_of_work() as uow:
        phones = uow.repositories.phones.list_for_contact(contact.id)
    assert len(phones) == 1
    assert phones[0].validation_tag == "DS1"


def test_short_number_is_not_a_duplicate_of_a_longer_one(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    contact = _add_contact(sqlite_unit_of_work)
    provider = FakeLookupProvider({"+13305551234": "SMITH,JOHN", "+5551234": None})
    validator = PhoneValidator(provider=provider, unit_of_work_factory=sqlite_unit_of_work)

    first = asyncio.run(validator.validate(_request(contact, "3305551234")))
    second = asyncio.run(validator.validate(_request(contact, "555-1234", tag="DS2")))
    again = asyncio.run(validator.validate(_request(contact, "555 1234", tag="DS3")))

    assert first.outcome is ValidationOutcome.VALIDATED
    assert second.outcome is ValidationOutcome.VALIDATED
    assert second.phone_id != first.phone_id
    assert again.outcome is ValidationOutcome.DUPLICATE
    assert again.phone_id == second.phone_id
    assert provider.calls == ["+13305551234", "+5551234"]
    with sqlite_unit_of_work() as uow:
        numbers = [phone.number for phone in uow.repositories.phones.list_for_contact(contact.id)]
    assert sorted(numbers) == ["+13305551234", "+5551234"]


def test_lookup_is_shared_between_contacts(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    john = _add_contact(sqlite_unit_of_work)
    mary = _add_contact(sqlite_unit_of_work, "mary", "doe")
    provider = FakeLookupProvider({NUMBER: "SMITH,JOHN"})
    validator = PhoneValidator(provider=provider, unit_of_work_factory=sqlite_unit_of_work)

    first = asyncio.run(validator.validate(_request(john, NUMBER)))
    second = asyncio.run(validator.validate(_request(mary, "330-760-5034")))

    assert first.outcome is ValidationOutcome.VALIDATED
    assert second.outcome is ValidationOutcome.REUSED
    assert second.is_validated
    assert second.label is CallerIdLabel.IDMATCH
    assert len(provider.calls) == 1
    with sqlite_unit_of_work() as uow:
        john_phones = uow.repositories.phones.list_for_contact(john.id)
        mary_phones = uow.repositories.phones.list_for_contact(mary.id)
    assert john_phones[0].lookup_id == mary_phones[0].lookup_id


def test_rate_limited_lookup_backs_off_exponentially(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    contact = _add_contact(sqlite_unit_of_work)
    provider = FakeLookupProvider(
        scripted={NUMBER: [rate_limited(), rate_limited(), lookup_success("WIRELESS CALLER")]}
    )
    sleep = RecordingSleep()
    validator = PhoneValidator(provider=provider, unit_of_work_factory=sqlite_unit_of_work)

    result = asyncio.run(
        validator.validate(_request(contact, NUMBER, backoff=BackoffPolicy(sleep=sleep)))
    )

    assert result.outcome is ValidationOutcome.VALIDATED
    assert result.label is CallerIdLabel.WC
    assert result.attempts == 3
    assert len(provider.calls) == 3
    assert sleep.delays == [2.0, 4.0]


def test_persistent_rate_limit_gives_up_without_storing(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    contact = _add_contact(sqlite_unit_of_work)
    provider = FakeLookupProvider(default=rate_limited())
    sleep = RecordingSleep()
    validator = PhoneValidator(provider=provider, unit_of_work_factory=sqlite_unit_of_work)

    result = asyncio.run(
        validator.validate(
            _request(contact, NUMBER, backoff=BackoffPolicy(base_delay=1.0, sleep=sleep))
        )
    )

    assert result.outcome is ValidationOutcome.SKIPPED
    assert result.reason is SkipReason.LOOKUP_FAILED
    assert result.attempts == 4
    assert sleep.delays == [1.0, 2.0, 4.0]
    with sqlite_unit_of_work() as uow:
        assert uow.repositories.lookups.find_by_number(NUMBER) is None
        assert uow.repositories.phones.list_for_contact(contact.id) == []


def test_failed_lookup_is_not_retried(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    contact = _add_contact(sqlite_unit_of_work)
    provider = FakeLookupProvider()
    validator = PhoneValidator(provider=provider, unit_of_work_factory=sqlite_unit_of_work)

    result = asyncio.run(validator.validate(_request(contact, NUMBER)))

    assert result.outcome is ValidationOutcome.SKIPPED
    assert result.reason is SkipReason.LOOKUP_FAILED
    assert result.detail == "HTTP 404"
    assert provider.calls == [NUMBER]


def test_malformed_number_is_skipped_before_any_lookup(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    contact = _add_contact(sqlite_unit_of_work)
    provider = FakeLookupProvider()
    validator = PhoneValidator(provider=provider, unit_of_work_factory=sqlite_unit_of_work)

    result = asyncio.run(validator.validate(_request(contact, "unknown")))

    assert result.outcome is ValidationOutcome.SKIPPED
    assert result.reason is SkipReason.VALIDATION_ERROR
    assert provider.calls == []


def test_backoff_policy_delays_double() -> None:
    policy = BackoffPolicy(base_delay=0.5, max_retries=3)

    assert [policy.delay_for(retry) for retry in range(3)] == [0.5, 1.0, 2.0]
    assert policy.max_attempts == 4
