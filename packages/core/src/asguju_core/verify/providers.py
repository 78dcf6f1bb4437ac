from __future__ import annotations

from urllib.parse import quote, urlencode

import httpx

from asguju_core.types import CitationCode, CitationKey, SourceSite

BPK_SEARCH_URL = "https://peraturan.bpk.go.id/Search/Peraturan"
MAHKAMAH_AGUNG_SEARCH_URL = "https://putusan.mahkamahagung.go.id/search"
GOOGLE_SEARCH_URL = "https://www.google.com/search"

CODE_FULL_NAMES: dict[CitationCode, str] = {
    CitationCode.KUHP: "Kitab Undang Undang Hukum Pidana",
    CitationCode.KUHAP: "Kitab Undang Undang Hukum Acara Pidana",
}


class SearchProvider:
    """One external search site probed during verification.

    Subclasses set the endpoint and decide which query variants to send.
    Matching is a loose substring check on the raw response body.
    """

    site: SourceSite
    search_url: str
    query_param: str = "q"
    snippet: str = "Found in search results (HTML match)"

    def __init__(self, user_agent: str | None = None) -> None:
        self.user_agent = user_agent

    def queries(self, citation: CitationKey) -> list[str]:
        return [citation.key]

    def build_url(self, query: str) -> str:
        return f"{self.search_url}?{urlencode({self.query_param: query}, quote_via=quote)}"

    def headers(self) -> dict[str, str]:
        if not self.user_agent:
            return {}
        return {"User-Agent": self.user_agent}

    async def search(self, client: httpx.AsyncClient, url: str, timeout: float) -> str:
        response = await client.get(url, headers=self.headers(), timeout=timeout)
        response.raise_for_status()
        return response.text

    def matches(self, body: str, citation: CitationKey) -> bool:
        if not body:
            return False
        lowered = body.lower()
        return "pasal" in lowered and str(citation.number) in lowered


class BpkSearchProvider(SearchProvider):
    site = SourceSite.BPK
    search_url = BPK_SEARCH_URL
    query_param = "Query"
    snippet = "Found on BPK search results (HTML match)"

    def queries(self, citation: CitationKey) -> list[str]:
        number = citation.number
        code = citation.code.value
        return [
            f"{code} Pasal {number}",
            f"Pasal {number} {code}",
            f"{CODE_FULL_NAMES[citation.code]} Pasal {number}",
        ]


class MahkamahAgungSearchProvider(SearchProvider):
    site = SourceSite.MAHKAMAH_AGUNG
    search_url = MAHKAMAH_AGUNG_SEARCH_URL
    snippet = "Found in MA search results (HTML match)"

    def queries(self, citation: CitationKey) -> list[str]:
        return [f"Pasal {citation.number}"]


class GoogleSearchProvider(SearchProvider):
    """General web search fallback.

    Scraping a public search engine conflicts with its terms of service and
    leaks case details to a third party; only enabled on explicit opt-in.
    """

    site = SourceSite.GOOGLE
    search_url = GOOGLE_SEARCH_URL
    snippet = "Found with google search (HTML match)"

    def __init__(self, user_agent: str | None = "Mozilla/5.0") -> None:
        super().__init__(user_agent=user_agent)
