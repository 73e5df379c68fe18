"""Deduplicated, rate-limit aware phone validation."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from skiptrace.domain.errors import InvalidPhoneNumberError
from skiptrace.domain.model import (
    ACTIVE_PHONE_STATUS,
    CallerIdLabel,
    Lookup,
    Phone,
    PhoneSource,
    SkipReason,
    ValidationOutcome,
)
from skiptrace.domain.phones import NormalizedPhone, classify_caller_id, normalize_phone
from skiptrace.domain.pipeline.persistence import find_contact_phone

if TYPE_CHECKING:
    from uuid import UUID

    from skiptrace.domain.pipeline.selection import QueuedPhone
    from skiptrace.domain.ports.providers import LookupResponse, PhoneLookupProvider
    from skiptrace.domain.ports.unit_of_work import PipelineRepositories, PipelineUnitOfWork

log = getLogger(__name__)

type SleepFunction = Callable[[float], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class BackoffPolicy:
    """Exponential backoff applied to rate-limited lookups: base, 2*base, 4*base, ..."""

    base_delay: float = 2.0
    max_retries: int = 3
    sleep: SleepFunction = field(default=asyncio.sleep, compare=False)

    def delay_for(self, retry: int) -> float:
        return self.base_delay * (2**retry)

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


@dataclass(frozen=True, slots=True)
class ValidationRequest:
    contact_id: UUID
    first_name: str | None
    last_name: str | None
    number: str
    phone_type: str | None = None
    tag: str | None = None
    source: PhoneSource = PhoneSource.PRIMARY
    backoff: BackoffPolicy = field(default_factory=BackoffPolicy)

    @classmethod
    def from_queued(cls, queued: QueuedPhone, *, backoff: BackoffPolicy) -> ValidationRequest:
        return cls(
            contact_id=queued.contact_id,
            first_name=queued.first_name,
            last_name=queued.last_name,
            number=queued.number,
            phone_type=queued.phone_type,
            tag=queued.tag,
            source=queued.source,
            backoff=backoff,
        )


@dataclass(frozen=True, slots=True)
class PhoneValidationResult:
    contact_id: UUID
    number: str
    outcome: ValidationOutcome
    tag: str | None = None
    source: PhoneSource | None = None
    label: CallerIdLabel | None = None
    reason: SkipReason | None = None
    detail: str | None = None
    attempts: int = 0
    phone_id: UUID | None = None

    @property
    def is_validated(self) -> bool:
        return self.outcome in {ValidationOutcome.VALIDATED, ValidationOutcome.REUSED}


class PhoneValidator:
    """Validates one phone at a time against the lookup provider.

    Every store access runs in a worker thread, in its own short unit of work, so no
    transaction stays open while a provider call or a backoff sleep is pending.
    """

    def __init__(
        self,
        *,
        provider: PhoneLookupProvider,
        unit_of_work_factory: Callable[[], PipelineUnitOfWork],
    ) -> None:
        self._provider = provider
        self._uow_factory = unit_of_work_factory

    async def validate(self, request: ValidationRequest) -> PhoneValidationResult:
        try:
            normalized = normalize_phone(request.number)
        except InvalidPhoneNumberError as exc:
            log.warning("Contact %s: %s", request.contact_id, exc)
            return self._result(
                request,
                request.number,
                ValidationOutcome.SKIPPED,
                reason=SkipReason.VALIDATION_ERROR,
                detail=str(exc),
            )

        known = await asyncio.to_thread(self._resolve_known, request, normalized)
        if known is not None:
            return known

        response, attempts = await self._lookup_with_backoff(normalized.e164, request.backoff)
        if not response.success or response.data is None:
            log.warning(
                "Lookup failed for %s after %d attempt(s): %s",
                normalized.e164,
                attempts,
                response.error,
            )
            return self._result(
                request,
                normalized.e164,
                ValidationOutcome.SKIPPED,
                reason=SkipReason.LOOKUP_FAILED,
                detail=response.error or "lookup returned no data",
                attempts=attempts,
            )

        label = classify_caller_id(
            response.data.caller_name,
            first_name=request.first_name,
            last_name=request.last_name,
        )
        fresh = Lookup.from_data(normalized.e164, response.data, label=label)
        lookup, phone = await asyncio.to_thread(self._store_lookup, request, normalized, fresh)
        log.info("Validated %s for contact %s: %s", normalized.e164, request.contact_id, label)
        return self._result(
            request,
            normalized.e164,
            ValidationOutcome.VALIDATED,
            label=lookup.caller_id_label,
            attempts=attempts,
            phone_id=phone.id,
        )

    def _resolve_known(
        self, request: ValidationRequest, normalized: NormalizedPhone
    ) -> PhoneValidationResult | None:
        """Answer from the store when the number is a duplicate or already looked up."""

        with self._uow_factory() as uow:
            repositories = uow.repositories
            existing = find_contact_phone(repositories.phones, request.contact_id, normalized)
            if existing is not None and existing.is_validated:
                log.debug(
                    "Contact %s already has %s validated", request.contact_id, normalized.e164
                )
                return self._result(
                    request,
                    normalized.e164,
                    ValidationOutcome.DUPLICATE,
                    phone_id=existing.id,
                )
            lookup = repositories.lookups.find_by_number(normalized.e164)
            if lookup is None:
                return None
            phone = self._store_phone(repositories, request, normalized, lookup)
            uow.commit()
            return self._result(
                request,
                normalized.e164,
                ValidationOutcome.REUSED,
                label=lookup.caller_id_label,
                phone_id=phone.id,
            )

    def _store_lookup(
        self, request: ValidationRequest, normalized: NormalizedPhone, lookup: Lookup
    ) -> tuple[Lookup, Phone]:
        with self._uow_factory() as uow:
            repositories = uow.repositories
            stored = repositories.lookups.upsert(lookup)
            phone = self._store_phone(repositories, request, normalized, stored)
            uow.commit()
        return stored, phone

    async def _lookup_with_backoff(
        self,
        phone_number: str,
        policy: BackoffPolicy,
    ) -> tuple[LookupResponse, int]:
        attempt = 0
        while True:
            attempt += 1
            response = await self._provider.lookup(phone_number)
            if not response.is_rate_limited or attempt >= policy.max_attempts:
                return response, attempt
            delay = policy.delay_for(attempt - 1)
            log.warning(
                "Rate limited looking up %s, retrying in %.1fs (retry %d/%d)",
                phone_number,
                delay,
                attempt,
                policy.max_retries,
            )
            await policy.sleep(delay)

    @staticmethod
    def _store_phone(
        repositories: PipelineRepositories,
        request: ValidationRequest,
        normalized: NormalizedPhone,
        lookup: Lookup,
    ) -> Phone:
        phone = find_contact_phone(repositories.phones, request.contact_id, normalized)
        if phone is None:
            phone = Phone(contact_id=request.contact_id, number=normalized.e164)
            repositories.phones.add(phone)
        phone.number = normalized.e164
        if request.phone_type:
            phone.phone_type = request.phone_type
        phone.status = ACTIVE_PHONE_STATUS
        phone.validation_tag = request.tag
        phone.lookup_id = lookup.id
        phone.touch()
        return phone

    @staticmethod
    def _result(
        request: ValidationRequest,
        number: str,
        outcome: ValidationOutcome,
        *,
        label: CallerIdLabel | None = None,
        reason: SkipReason | None = None,
        detail: str | None = None,
        attempts: int = 0,
        phone_id: UUID | None = None,
    ) -> PhoneValidationResult:
        return PhoneValidationResult(
            contact_id=request.contact_id,
            number=number,
            outcome=outcome,
            tag=request.tag,
            source=request.source,
            label=label,
            reason=reason,
            detail=detail,
            attempts=attempts,
            phone_id=phone_id,
        )
