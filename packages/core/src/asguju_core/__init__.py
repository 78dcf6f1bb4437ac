from .citeextract.extract import extract_pasal_citations
from .config import VerificationSettings
from .pipeline import check_text, extract_citations, verify_text
from .types import CitationCode, CitationKey, SourceHit, SourceSite, VerificationResult
from .verify import CitationVerifier, build_verifier, verify_all

__all__ = [
    "CitationCode",
    "CitationKey",
    "SourceHit",
    "SourceSite",
    "VerificationResult",
    "VerificationSettings",
    "extract_pasal_citations",
    "extract_citations",
    "verify_text",
    "check_text",
    "CitationVerifier",
    "build_verifier",
    "verify_all",
]
