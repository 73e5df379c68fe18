from __future__ import annotations

from skiptrace.domain.resolution import (
    ALIVE_SCORE,
    BASE_SCORE,
    EXACT_MATCH_SCORE,
    FIRST_NAME_SCORE,
    resolve_identity,
)
from skiptrace.domain.search import CandidateIdentity, NameRecord


def _candidate(*names: NameRecord) -> CandidateIdentity:
    return CandidateIdentity(names=names)


def test_exact_match_beats_earlier_weaker_candidates() -> None:
    weak = _candidate(NameRecord(first_name="Jon", last_name="Smyth", deceased="N"))
    exact = _candidate(NameRecord(first_name="JOHN", last_name="smith", age="64"))

    resolved = resolve_identity([weak, exact], first_name="John", last_name="Smith")

    assert resolved is not None
    assert resolved.candidate is exact
    assert resolved.candidate_index == 1
    assert resolved.score == EXACT_MATCH_SCORE
    assert resolved.name.first_name == "JOHN"
    assert resolved.name.age == "64"


def test_first_name_match_takes_expected_last_name() -> None:
    married = _candidate(NameRecord(first_name="Mary", last_name="Jones", age="41"))

    resolved = resolve_identity([married], first_name="Mary", last_name="Doe")

    assert resolved is not None
    assert resolved.score == FIRST_NAME_SCORE
    assert resolved.name.first_name == "Mary"
    assert resolved.name.last_name == "Doe"
    assert resolved.name.age == "41"
    assert married.names[0].last_name == "Jones"


def test_alive_candidate_outscores_unknown_status() -> None:
    unknown = _candidate(NameRecord(first_name="Bob", last_name="Roe"))
    alive = _candidate(NameRecord(first_name="Rob", last_name="Roe", deceased="N"))

    resolved = resolve_identity([unknown, alive], first_name="John", last_name="Smith")

    assert resolved is not None
    assert resolved.candidate is alive
    assert resolved.score == ALIVE_SCORE
    assert (resolved.name.first_name, resolved.name.last_name) == ("John", "Smith")


def test_candidate_without_names_resolves_to_expected_name() -> None:
    resolved = resolve_identity([CandidateIdentity()], first_name="John", last_name="Smith")

    assert resolved is not None
    assert resolved.score == BASE_SCORE
    assert resolved.name == NameRecord(first_name="John", last_name="Smith")


def test_ties_keep_the_first_candidate() -> None:
    first = _candidate(NameRecord(first_name="John", last_name="Smith"))
    second = _candidate(NameRecord(first_name="John", last_name="Smith"))

    resolved = resolve_identity([first, second], first_name="John", last_name="Smith")

    assert resolved is not None
    assert resolved.candidate is first


def test_no_candidates_resolves_to_nothing() -> None:
    assert resolve_identity([], first_name="John", last_name="Smith") is None
