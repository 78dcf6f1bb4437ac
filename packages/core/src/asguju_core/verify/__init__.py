from .orchestrator import verify_all
from .providers import (
    BpkSearchProvider,
    GoogleSearchProvider,
    MahkamahAgungSearchProvider,
    SearchProvider,
)
from .verifier import CitationVerifier, build_verifier, default_providers

__all__ = [
    "SearchProvider",
    "BpkSearchProvider",
    "MahkamahAgungSearchProvider",
    "GoogleSearchProvider",
    "CitationVerifier",
    "build_verifier",
    "default_providers",
    "verify_all",
]
