"""Phone number normalization, caller-ID classification and tag ordering."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from skiptrace.domain.errors import InvalidPhoneNumberError
from skiptrace.domain.identity import normalize_part
from skiptrace.domain.model.enums import CallerIdLabel

_NON_DIGITS = re.compile(r"\D+")
_TOKEN_SPLIT = re.compile(r"[,\s]+")

DOMESTIC_LENGTH: Final[int] = 10
NANP_LENGTH: Final[int] = 11
NANP_PREFIX: Final[str] = "1"

PRIMARY_TAG_PREFIX: Final[str] = "DS"
RELATIVE_TAG_PREFIX: Final[str] = "R"

US_STATE_CODES: Final[frozenset[str]] = frozenset(
    """
    al ak az ar ca co ct de fl ga hi id il in ia ks ky la me md ma mi mn ms mo mt ne nv nh
    nj nm ny nc nd oh ok or pa ri sc sd tn tx ut vt va wa wv wi wy dc pr vi gu as mp
    """.split()
)

US_STATE_NAMES: Final[frozenset[tuple[str, ...]]] = frozenset(
    tuple(name.split())
    for name in (
        "alabama",
        "alaska",
        "arizona",
        "arkansas",
        "california",
        "colorado",
        "connecticut",
        "delaware",
        "florida",
        "georgia",
        "hawaii",
        "idaho",
        "illinois",
        "indiana",
        "iowa",
        "kansas",
        "kentucky",
        "louisiana",
        "maine",
        "maryland",
        "massachusetts",
        "michigan",
        "minnesota",
        "mississippi",
        "missouri",
        "montana",
        "nebraska",
        "nevada",
        "new hampshire",
        "new jersey",
        "new mexico",
        "new york",
        "north carolina",
        "north dakota",
        "ohio",
        "oklahoma",
        "oregon",
        "pennsylvania",
        "rhode island",
        "south carolina",
        "south dakota",
        "tennessee",
        "texas",
        "utah",
        "vermont",
        "virginia",
        "washington",
        "west virginia",
        "wisconsin",
        "wyoming",
        "district of columbia",
        "puerto rico",
    )
)

_LONGEST_STATE_NAME = max(len(name) for name in US_STATE_NAMES)


@dataclass(frozen=True, slots=True)
class NormalizedPhone:
    digits: str
    is_standard: bool

    @property
    def e164(self) -> str:
        return f"+{self.digits}"

    @property
    def last_ten(self) -> str:
        return self.digits[-DOMESTIC_LENGTH:]


def digits_only(raw: str | None) -> str:
    return _NON_DIGITS.sub("", raw or "")


def normalize_phone(raw: str | None) -> NormalizedPhone:
    """Normalize a free-form US phone number.

    Ten digits are treated as domestic and get the ``1`` country code. Eleven digits
    with a leading ``1`` pass through. Anything else passes through unchanged and is
    flagged non-standard.
    """

    digits = digits_only(raw)
    if not digits:
        raise InvalidPhoneNumberError(raw)
    if len(digits) == DOMESTIC_LENGTH:
        return NormalizedPhone(digits=NANP_PREFIX + digits, is_standard=True)
    if len(digits) == NANP_LENGTH and digits.startswith(NANP_PREFIX):
        return NormalizedPhone(digits=digits, is_standard=True)
    return NormalizedPhone(digits=digits, is_standard=False)


def last_ten_digits(raw: str | None) -> str:
    return digits_only(raw)[-DOMESTIC_LENGTH:]


def same_number(first: str | None, second: str | None) -> bool:
    suffix = last_ten_digits(first)
    return bool(suffix) and suffix == last_ten_digits(second)


def caller_name_tokens(caller_name: str | None) -> list[str]:
    return [token for token in _TOKEN_SPLIT.split(normalize_part(caller_name)) if token]


def _only_state_tokens(tokens: list[str]) -> bool:
    position = 0
    while position < len(tokens):
        for width in range(min(_LONGEST_STATE_NAME, len(tokens) - position), 0, -1):
            window = tuple(tokens[position : position + width])
            if window in US_STATE_NAMES or (width == 1 and window[0] in US_STATE_CODES):
                position += width
                break
        else:
            return False
    return True


def classify_caller_id(
    caller_name: str | None,
    *,
    first_name: str | None,
    last_name: str | None,
) -> CallerIdLabel:
    tokens = caller_name_tokens(caller_name)
    names = {normalize_part(first_name), normalize_part(last_name)} - {""}
    if any(token in names for token in tokens):
        return CallerIdLabel.IDMATCH
    if "wireless" in tokens and "caller" in tokens:
        return CallerIdLabel.WC
    if not tokens or _only_state_tokens(tokens):
        return CallerIdLabel.NO_ID
    return CallerIdLabel.WRONG_NUMBER


def primary_tag(position: int) -> str:
    """Tag for the ``position``-th (1-based) owner phone."""

    return f"{PRIMARY_TAG_PREFIX}{position}"


def relative_tag(position: int) -> str:
    return f"{RELATIVE_TAG_PREFIX}{position}"


def tag_ordinal(tag: str | None) -> tuple[int, int]:
    """Sort key placing DS1 < DS2 < DS3 < R1 < untagged."""

    if tag:
        for rank, prefix in enumerate((PRIMARY_TAG_PREFIX, RELATIVE_TAG_PREFIX)):
            suffix = tag[len(prefix) :]
            if tag.startswith(prefix) and suffix.isdigit():
                return rank, int(suffix)
    return 2, 0
