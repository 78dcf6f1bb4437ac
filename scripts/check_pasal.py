#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[1]
CORE_PACKAGE_ROOT = REPO_ROOT / "packages" / "core" / "src"
if str(CORE_PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(CORE_PACKAGE_ROOT))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract pasal citations from a text file and check them against public search sites."
    )
    parser.add_argument("path", help="UTF-8 text file, e.g. a saved legal memo")
    parser.add_argument(
        "--extract-only",
        action="store_true",
        help="Print the normalized citations without probing any site",
    )
    parser.add_argument(
        "--fallback-search",
        action="store_true",
        help="Also probe general web search (off by default; sends the query to a third party)",
    )
    parser.add_argument("--timeout-ms", type=int, default=None, help="Per-probe timeout")
    parser.add_argument("--verbose", action="store_true", help="Log every probe")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        text = Path(args.path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Cannot read {args.path}: {exc}", file=sys.stderr)
        return 2

    from asguju_core.config import VerificationSettings
    from asguju_core.pipeline import check_text, extract_citations

    overrides: dict[str, object] = {}
    if args.fallback_search:
        overrides["enable_fallback_search"] = True
    if args.timeout_ms is not None:
        overrides["provider_timeout_ms"] = args.timeout_ms
    settings = VerificationSettings(**overrides)

    if args.extract_only:
        payload: object = [citation.key for citation in extract_citations(text, settings)]
    else:
        payload = asyncio.run(check_text(text, settings=settings))

    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
