"""Score-based selection of the provider candidate that best matches an owner."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Final

from skiptrace.domain.identity import normalize_part
from skiptrace.domain.search import NameRecord

if TYPE_CHECKING:
    from collections.abc import Sequence

    from skiptrace.domain.search import CandidateIdentity

EXACT_MATCH_SCORE: Final[int] = 100
FIRST_NAME_SCORE: Final[int] = 70
ALIVE_SCORE: Final[int] = 40
BASE_SCORE: Final[int] = 10


@dataclass(frozen=True, slots=True)
class ResolvedIdentity:
    candidate: CandidateIdentity
    candidate_index: int
    name: NameRecord
    score: int


def score_name(name: NameRecord, *, first_name: str, last_name: str) -> int:
    first_matches = normalize_part(name.first_name) == first_name
    if first_matches and normalize_part(name.last_name) == last_name:
        return EXACT_MATCH_SCORE
    if first_matches:
        return FIRST_NAME_SCORE
    if name.is_alive:
        return ALIVE_SCORE
    return BASE_SCORE


def _resolved_name(
    name: NameRecord,
    score: int,
    *,
    first_name: str | None,
    last_name: str | None,
) -> NameRecord:
    if score == EXACT_MATCH_SCORE:
        return name
    if score == FIRST_NAME_SCORE:
        return replace(name, last_name=last_name)
    # weak matches keep the searched identity and only borrow age/deceased
    return replace(name, first_name=first_name, last_name=last_name)


def resolve_identity(
    candidates: Sequence[CandidateIdentity],
    *,
    first_name: str | None,
    last_name: str | None,
) -> ResolvedIdentity | None:
    """Pick the best (candidate, name) pair for the expected first/last name.

    Returns ``None`` when the provider returned no candidates. Ties keep the first
    pair encountered, so the choice is deterministic for a given input order. The
    provider's records are never modified; the resolved name is a new value.
    """

    expected_first = normalize_part(first_name)
    expected_last = normalize_part(last_name)
    best: ResolvedIdentity | None = None
    for index, candidate in enumerate(candidates):
        names = candidate.names or (NameRecord(first_name=first_name, last_name=last_name),)
        for name in names:
            score = (
                score_name(name, first_name=expected_first, last_name=expected_last)
                if candidate.names
                else BASE_SCORE
            )
            if best is not None and score <= best.score:
                continue
            best = ResolvedIdentity(
                candidate=candidate,
                candidate_index=index,
                name=_resolved_name(name, score, first_name=first_name, last_name=last_name),
                score=score,
            )
    return best
