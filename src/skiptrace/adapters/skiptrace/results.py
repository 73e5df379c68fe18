"""Parse search results delivered by the search service."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from .schema import SkipTraceWebhook
from .translator import translate_webhook

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from pathlib import Path

    from skiptrace.domain.search import SearchResult

log = getLogger(__name__)


def parse_search_result(payload: Mapping[str, object] | str | bytes) -> SearchResult:
    """Validate one webhook envelope (decoded or raw JSON) into a ``SearchResult``."""

    if isinstance(payload, str | bytes):
        webhook = SkipTraceWebhook.model_validate_json(payload)
    else:
        webhook = SkipTraceWebhook.model_validate(payload)
    return translate_webhook(webhook)


def read_search_results(path: Path) -> Iterator[SearchResult]:
    """Yield results from a JSON Lines file, skipping lines that fail validation."""

    with path.open(encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            if not line.strip():
                continue
            try:
                yield parse_search_result(line)
            except ValidationError:
                log.exception("Invalid search result on line %d of %s", line_number, path)
