from __future__ import annotations

import asyncio
import logging
from typing import Sequence

import httpx

from asguju_core.config import VerificationSettings
from asguju_core.types import CitationKey, SourceHit, VerificationResult

from .providers import (
    BpkSearchProvider,
    GoogleSearchProvider,
    MahkamahAgungSearchProvider,
    SearchProvider,
)

logger = logging.getLogger(__name__)


class CitationVerifier:
    """Probes providers in order and stops at the first matching response.

    A result marked verified is corroborating evidence only. A probe that
    times out or fails counts as no match.
    """

    def __init__(
        self,
        providers: Sequence[SearchProvider],
        client: httpx.AsyncClient,
        *,
        timeout_seconds: float = 8.0,
    ) -> None:
        self.providers = tuple(providers)
        self.client = client
        self.timeout_seconds = max(0.001, timeout_seconds)

    async def _probe(self, provider: SearchProvider, citation: CitationKey, url: str) -> bool:
        try:
            body = await asyncio.wait_for(
                provider.search(self.client, url, self.timeout_seconds),
                timeout=self.timeout_seconds,
            )
        except (httpx.HTTPError, TimeoutError) as exc:
            logger.debug("Probe failed for %s at %s: %r", citation.key, url, exc)
            return False
        return provider.matches(body, citation)

    async def verify(self, citation: CitationKey) -> VerificationResult:
        for provider in self.providers:
            for query in provider.queries(citation):
                url = provider.build_url(query)
                if await self._probe(provider, citation, url):
                    return VerificationResult(
                        citation=citation,
                        verified=True,
                        sources=[SourceHit(site=provider.site, url=url, snippet=provider.snippet)],
                    )
        return VerificationResult.unverified(citation)


def default_providers(settings: VerificationSettings) -> list[SearchProvider]:
    providers: list[SearchProvider] = [
        BpkSearchProvider(user_agent=settings.verify_user_agent),
        MahkamahAgungSearchProvider(user_agent=settings.verify_user_agent),
    ]
    if settings.enable_fallback_search:
        providers.append(GoogleSearchProvider())
    return providers


def build_verifier(settings: VerificationSettings, client: httpx.AsyncClient) -> CitationVerifier:
    return CitationVerifier(
        default_providers(settings),
        client,
        timeout_seconds=settings.timeout_seconds,
    )
