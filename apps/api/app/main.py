from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging
from pathlib import Path
from uuid import uuid4

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
import httpx
from pydantic import BaseModel, Field

from asguju_core.citeextract.extract import extract_pasal_citations
from asguju_core.config import VerificationSettings
from asguju_core.ingest.file_text import extract_file_text
from asguju_core.types import VerificationResult
from asguju_core.verify import CitationVerifier, build_verifier, verify_all

from app.gemini import GeminiClient, GeminiError, GeminiNotConfiguredError
from app.prompt import ExtractedFile, build_prompt
from app.settings import settings

logger = logging.getLogger(__name__)

verification_settings = VerificationSettings()

NO_TEXT_PLACEHOLDER = "(no text extracted)"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    if verification_settings.enable_fallback_search:
        logger.warning("General web search fallback is enabled for pasal verification")
    yield


app = FastAPI(title="AsGuJu API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SourceHitResponse(BaseModel):
    site: str
    url: str
    snippet: str


class VerificationResponse(BaseModel):
    citation: str
    verified: bool
    sources: list[SourceHitResponse]


class AnalyzeResponse(BaseModel):
    success: bool = True
    result: str
    extracted: list[ExtractedFile]
    verifications: list[VerificationResponse]


class VerifyTextRequest(BaseModel):
    text: str | None = Field(default=None)


class VerifyTextResponse(BaseModel):
    citations: list[str]
    verifications: list[VerificationResponse]


def get_gemini_client() -> GeminiClient:
    return GeminiClient(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        timeout_seconds=settings.gemini_timeout_seconds,
    )


async def get_verifier() -> AsyncIterator[CitationVerifier]:
    async with httpx.AsyncClient(follow_redirects=True) as client:
        yield build_verifier(verification_settings, client)


def _to_responses(results: list[VerificationResult]) -> list[VerificationResponse]:
    return [VerificationResponse.model_validate(result.to_payload()) for result in results]


async def _verify_text(text: str | None, verifier: CitationVerifier) -> tuple[list[str], list[VerificationResponse]]:
    citations = extract_pasal_citations(text, max_chars=verification_settings.extract_max_chars)
    results = await verify_all(citations, verifier)
    return [citation.key for citation in citations], _to_responses(results)


async def _save_upload(upload: UploadFile, upload_dir: Path) -> Path:
    suffix = Path(upload.filename or "").suffix.lower()
    path = upload_dir / f"{uuid4().hex}{suffix}"
    content = await upload.read()
    await run_in_threadpool(path.write_bytes, content)
    return path


async def _extract_upload_text(path: Path, filename: str) -> str:
    try:
        text = await run_in_threadpool(extract_file_text, str(path), filename)
    except Exception:
        logger.warning("Text extraction failed for %s", filename, exc_info=True)
        text = ""
    return text or NO_TEXT_PLACEHOLDER


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/analyze", response_model=AnalyzeResponse)
async def analyze(
    case_description: str = Form(default="", alias="caseDescription"),
    files: list[UploadFile] | None = File(default=None),
    gemini: GeminiClient = Depends(get_gemini_client),
    verifier: CitationVerifier = Depends(get_verifier),
) -> AnalyzeResponse:
    uploads = files or []
    if len(uploads) > settings.max_upload_files:
        raise HTTPException(
            status_code=400,
            detail=f"At most {settings.max_upload_files} files may be uploaded",
        )

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    saved: list[Path] = []
    try:
        extracted: list[ExtractedFile] = []
        for upload in uploads:
            filename = upload.filename or "upload"
            path = await _save_upload(upload, upload_dir)
            saved.append(path)
            text = await _extract_upload_text(path, filename)
            extracted.append(ExtractedFile(filename=filename, text=text))

        prompt = build_prompt(
            case_description,
            extracted,
            file_chars=settings.prompt_file_chars,
        )
        try:
            result_text = await gemini.generate(prompt)
        except GeminiNotConfiguredError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        except GeminiError as exc:
            logger.error("Gemini call failed: %s", exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc

        _, verifications = await _verify_text(result_text, verifier)
    finally:
        for path in saved:
            path.unlink(missing_ok=True)

    return AnalyzeResponse(
        result=result_text,
        extracted=extracted,
        verifications=verifications,
    )


@app.post("/api/verify", response_model=VerifyTextResponse)
async def verify_text(
    request: VerifyTextRequest,
    verifier: CitationVerifier = Depends(get_verifier),
) -> VerifyTextResponse:
    citations, verifications = await _verify_text(request.text, verifier)
    return VerifyTextResponse(citations=citations, verifications=verifications)
