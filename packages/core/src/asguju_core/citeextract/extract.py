from __future__ import annotations

import logging
from dataclasses import dataclass

from asguju_core.types import CitationCode, CitationKey

from .regex_rules import LOOSE_PASAL, STRICT_PASAL

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 200_000


@dataclass(frozen=True)
class PasalMatch:
    start: int
    end: int
    citation: CitationKey


def _normalize_code(token: str | None) -> CitationCode:
    if not token:
        return CitationCode.KUHP
    lowered = token.lower()
    if lowered == "kuhap" or "acara" in lowered:
        return CitationCode.KUHAP
    return CitationCode.KUHP


def _bounded(text: str | None, max_chars: int | None) -> str:
    if not text:
        return ""
    limit = DEFAULT_MAX_CHARS if max_chars is None else max(0, max_chars)
    if len(text) > limit:
        logger.debug("Truncating pasal scan from %d to %d characters", len(text), limit)
        return text[:limit]
    return text


def strict_pass(text: str) -> list[PasalMatch]:
    matches: list[PasalMatch] = []
    for match in STRICT_PASAL.finditer(text):
        number = int(match.group("number"))
        if number <= 0:
            continue
        citation = CitationKey(number=number, code=_normalize_code(match.group("code")))
        matches.append(PasalMatch(start=match.start(), end=match.end(), citation=citation))
    return matches


def loose_pass(text: str, consumed: frozenset[int] = frozenset()) -> list[PasalMatch]:
    """Bare "Pasal N" mentions, always read as KUHP.

    ``consumed`` holds start offsets already claimed by the strict pass.
    Inside ``extract_pasal_citations`` this is a safety net that adds nothing
    while the strict pattern keeps the code token optional.
    """
    matches: list[PasalMatch] = []
    for match in LOOSE_PASAL.finditer(text):
        if match.start() in consumed:
            continue
        number = int(match.group("number"))
        if number <= 0:
            continue
        matches.append(
            PasalMatch(start=match.start(), end=match.end(), citation=CitationKey(number=number))
        )
    return matches


def extract_pasal_citations(text: str | None, *, max_chars: int | None = None) -> list[CitationKey]:
    scanned = _bounded(text, max_chars)
    if not scanned:
        return []

    strict = strict_pass(scanned)
    loose = loose_pass(scanned, frozenset(m.start for m in strict))

    seen: set[str] = set()
    citations: list[CitationKey] = []
    for match in (*strict, *loose):
        key = match.citation.key
        if key in seen:
            continue
        seen.add(key)
        citations.append(match.citation)
    return citations
