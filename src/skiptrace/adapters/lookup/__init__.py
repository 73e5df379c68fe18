"""Phone number lookup adapter."""

from __future__ import annotations

from .client import PhoneLookupClient
from .schema import NumberLookupData, NumberLookupResponse
from .translator import translate_lookup

__all__ = [
    "NumberLookupData",
    "NumberLookupResponse",
    "PhoneLookupClient",
    "translate_lookup",
]
