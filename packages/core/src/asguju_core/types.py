from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CitationCode(StrEnum):
    KUHP = "KUHP"
    KUHAP = "KUHAP"


class SourceSite(StrEnum):
    BPK = "peraturan.bpk.go.id"
    MAHKAMAH_AGUNG = "putusan.mahkamahagung.go.id"
    GOOGLE = "google_search"


class CitationKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: int = Field(gt=0)
    code: CitationCode = CitationCode.KUHP

    @property
    def key(self) -> str:
        return f"Pasal {self.number} {self.code.value}"

    def __str__(self) -> str:
        return self.key


class SourceHit(BaseModel):
    site: SourceSite
    url: str
    snippet: str


class VerificationResult(BaseModel):
    """Outcome of probing external search sites for one citation.

    ``verified`` only means corroborating text was found next to the number;
    it does not establish that the pasal exists in the named code.
    """

    citation: CitationKey
    verified: bool = False
    sources: list[SourceHit] = Field(default_factory=list)

    @classmethod
    def unverified(cls, citation: CitationKey) -> VerificationResult:
        return cls(citation=citation)

    def to_payload(self) -> dict[str, Any]:
        return {
            "citation": self.citation.key,
            "verified": self.verified,
            "sources": [hit.model_dump(mode="json") for hit in self.sources],
        }
