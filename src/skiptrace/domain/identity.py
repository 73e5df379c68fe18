"""Deterministic identity keys and name comparison helpers."""

from __future__ import annotations

from typing import Final

KEY_SEPARATOR: Final[str] = "|"


def normalize_part(value: str | None) -> str:
    return (value or "").strip().lower()


def make_identity_key(*parts: str | None) -> str:
    """Build a matching key from three or four free-text fields.

    Each part is trimmed and lowercased, so keys are insensitive to case and to
    surrounding whitespace. Missing parts become empty components.
    """

    if not 3 <= len(parts) <= 4:  # noqa: PLR2004
        raise ValueError(f"Identity keys take 3 or 4 parts, got {len(parts)}")
    return KEY_SEPARATOR.join(normalize_part(part) for part in parts)


def contact_identity_key(
    first_name: str | None,
    last_name: str | None,
    mailing_address: str | None,
) -> str:
    return make_identity_key(first_name, last_name, mailing_address)


def property_identity_key(
    address: str | None,
    city: str | None,
    state: str | None,
    zip_code: str | None,
) -> str:
    return make_identity_key(address, city, state, zip_code)


def names_match(
    first_name: str | None,
    last_name: str | None,
    other_first_name: str | None,
    other_last_name: str | None,
) -> bool:
    first = normalize_part(first_name)
    last = normalize_part(last_name)
    if not first and not last:
        return False
    return first == normalize_part(other_first_name) and last == normalize_part(other_last_name)


def split_full_name(name: str | None) -> tuple[str, str]:
    """Split "First Middle Last" into ("First", "Middle Last")."""

    tokens = (name or "").split()
    if not tokens:
        return "", ""
    return tokens[0], " ".join(tokens[1:])
