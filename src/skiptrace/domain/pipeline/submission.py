"""Send approved pipeline records to the search provider."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from skiptrace.domain.identity import contact_identity_key
from skiptrace.domain.model import PipelineStage
from skiptrace.domain.search import SearchRequest

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from skiptrace.domain.ports.providers import SearchProvider
    from skiptrace.domain.ports.sources import OwnerIdentity, PropertyIdentity
    from skiptrace.domain.ports.unit_of_work import PipelineUnitOfWork

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SubmissionReport:
    submitted: tuple[tuple[str, str], ...]
    skipped: tuple[tuple[str, str], ...]


def build_search_request(
    owner: OwnerIdentity,
    property_identity: PropertyIdentity,
) -> SearchRequest:
    identity_key = contact_identity_key(owner.first_name, owner.last_name, owner.mailing_address)
    return SearchRequest(
        first_name=owner.first_name or "",
        last_name=owner.last_name or "",
        mailing_address=owner.mailing_address,
        mailing_city=owner.mailing_city,
        mailing_state=owner.mailing_state,
        mailing_zip=owner.mailing_zip,
        property_address=property_identity.address,
        property_city=property_identity.city,
        property_state=property_identity.state,
        property_zip=property_identity.zip,
        identity_key=identity_key,
        custom_fields=(owner.owner_id, property_identity.property_id, identity_key),
    )


def _mark_sent(
    pairs: Sequence[tuple[str, str]],
    unit_of_work_factory: Callable[[], PipelineUnitOfWork],
) -> tuple[list[SearchRequest], SubmissionReport]:
    requests: list[SearchRequest] = []
    submitted: list[tuple[str, str]] = []
    skipped: list[tuple[str, str]] = []
    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        for owner_id, property_id in pairs:
            record = repositories.records.get_by_pair(owner_id, property_id)
            if record is None or record.stage is not PipelineStage.APPROVED:
                log.warning(
                    "Skipping owner=%s property=%s: not an approved pipeline record",
                    owner_id,
                    property_id,
                )
                skipped.append((owner_id, property_id))
                continue
            owner = repositories.sources.find_owner_identity(owner_id)
            property_identity = repositories.sources.find_property_identity(property_id)
            if owner is None or property_identity is None:
                log.warning(
                    "Skipping owner=%s property=%s: missing source record", owner_id, property_id
                )
                skipped.append((owner_id, property_id))
                continue
            request = build_search_request(owner, property_identity)
            record.advance(PipelineStage.SENT_TO_SEARCH)
            record.identity_key = request.identity_key
            requests.append(request)
            submitted.append((owner_id, property_id))
        uow.commit()
    return requests, SubmissionReport(submitted=tuple(submitted), skipped=tuple(skipped))


async def submit_for_search(
    pairs: Sequence[tuple[str, str]],
    *,
    unit_of_work_factory: Callable[[], PipelineUnitOfWork],
    provider: SearchProvider,
) -> SubmissionReport:
    """Move approved records to ``SENT_TO_SEARCH`` and hand them to the provider.

    The stage change is committed before the provider call; a provider failure
    propagates to the caller and the records stay in ``SENT_TO_SEARCH``.
    """

    requests, report = await asyncio.to_thread(_mark_sent, pairs, unit_of_work_factory)
    if requests:
        log.info("Submitting %d search request(s)", len(requests))
        await provider.submit(requests)
    return report
