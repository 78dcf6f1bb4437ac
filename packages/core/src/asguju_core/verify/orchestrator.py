from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from asguju_core.types import CitationKey, VerificationResult

from .verifier import CitationVerifier

logger = logging.getLogger(__name__)


async def _verify_isolated(verifier: CitationVerifier, citation: CitationKey) -> VerificationResult:
    try:
        return await verifier.verify(citation)
    except Exception:
        logger.warning("Verification of %s failed; reporting unverified", citation.key, exc_info=True)
        return VerificationResult.unverified(citation)


async def verify_all(
    citations: Sequence[CitationKey],
    verifier: CitationVerifier,
) -> list[VerificationResult]:
    if not citations:
        return []
    results = await asyncio.gather(
        *(_verify_isolated(verifier, citation) for citation in citations)
    )
    return list(results)
