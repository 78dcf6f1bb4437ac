from __future__ import annotations

from typing import Any

import httpx

from .citeextract.extract import extract_pasal_citations
from .config import VerificationSettings
from .types import CitationKey, VerificationResult
from .verify import build_verifier, verify_all


def extract_citations(text: str | None, settings: VerificationSettings | None = None) -> list[CitationKey]:
    settings = settings or VerificationSettings()
    return extract_pasal_citations(text, max_chars=settings.extract_max_chars)


async def verify_text(
    text: str | None,
    settings: VerificationSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[VerificationResult]:
    settings = settings or VerificationSettings()
    citations = extract_citations(text, settings)
    if not citations:
        return []

    if client is not None:
        return await verify_all(citations, build_verifier(settings, client))

    async with httpx.AsyncClient(follow_redirects=True) as owned_client:
        return await verify_all(citations, build_verifier(settings, owned_client))


async def check_text(
    text: str | None,
    settings: VerificationSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[dict[str, Any]]:
    results = await verify_text(text, settings=settings, client=client)
    return [result.to_payload() for result in results]
