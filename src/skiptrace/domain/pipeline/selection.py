"""Which phones of a resolved record get sent to the lookup provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from skiptrace.domain.model import PhoneSource
from skiptrace.domain.phones import primary_tag, relative_tag

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from skiptrace.config.pipeline import PipelineConfig
    from skiptrace.domain.model import Contact
    from skiptrace.domain.pipeline.persistence import PersistedRelative
    from skiptrace.domain.search import PhoneRecord


@dataclass(frozen=True, slots=True)
class QueuedPhone:
    """A phone waiting for validation, detached from any open session."""

    contact_id: UUID
    first_name: str
    last_name: str
    number: str
    phone_type: str | None
    tag: str
    source: PhoneSource


def _queue(
    contact: Contact,
    phones: Sequence[PhoneRecord],
    *,
    source: PhoneSource,
    tags: Sequence[str],
) -> list[QueuedPhone]:
    return [
        QueuedPhone(
            contact_id=contact.id,
            first_name=contact.first_name,
            last_name=contact.last_name,
            number=phone.number,
            phone_type=phone.phone_type,
            tag=tag,
            source=source,
        )
        for phone, tag in zip(phones, tags, strict=False)
    ]


def select_phones_for_validation(
    *,
    primary: Contact,
    primary_deceased: bool,
    primary_phones: Sequence[PhoneRecord],
    relatives: Sequence[PersistedRelative],
    co_owner: Contact | None,
    co_owner_phones: Sequence[PhoneRecord],
    config: PipelineConfig,
) -> list[QueuedPhone]:
    """Build the ordered validation queue for one record.

    A deceased primary contributes nothing of their own; the first phone of the
    provider's first relative stands in (tag ``R1``). When that relative could not
    be persisted, no relative is queued. Otherwise up to the configured number
    of primary phones are queued as ``DS1``.. Second-owner phones are queued in
    both cases with their own ``DS`` numbering.
    """

    co_owner_tags = [primary_tag(i) for i in range(1, config.max_co_owner_validations + 1)]
    co_owner_queue = (
        _queue(co_owner, co_owner_phones, source=PhoneSource.CO_OWNER, tags=co_owner_tags)
        if co_owner is not None
        else []
    )

    if primary_deceased:
        relative_queue: list[QueuedPhone] = []
        first = next((item for item in relatives if item.position == 0), None)
        if first is not None and first.record.phones:
            relative_queue = _queue(
                first.contact,
                first.record.phones[:1],
                source=PhoneSource.RELATIVE,
                tags=[relative_tag(1)],
            )
        return co_owner_queue + relative_queue

    primary_tags = [primary_tag(i) for i in range(1, config.max_primary_validations + 1)]
    primary_queue = _queue(
        primary, primary_phones, source=PhoneSource.PRIMARY, tags=primary_tags
    )
    return primary_queue + co_owner_queue
