from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient
import httpx
import pytest

from asguju_core.verify.providers import BpkSearchProvider, MahkamahAgungSearchProvider
from asguju_core.verify.verifier import CitationVerifier

import app.main as main_module
from app.gemini import GeminiError
from app.main import app, get_gemini_client, get_verifier
from app.settings import settings


class _FakeGemini:
    def __init__(self, reply: str | None = None, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply or ""


def _bpk_handler(request: httpx.Request) -> httpx.Response:
    if request.url.host == "peraturan.bpk.go.id" and "340" in request.url.params.get("Query", ""):
        return httpx.Response(200, text="<div>Pasal 340 KUHP</div>")
    return httpx.Response(200, text="<div>Tidak ada hasil</div>")


def _verifier_override(handler):
    async def _dependency():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            yield CitationVerifier(
                [BpkSearchProvider(), MahkamahAgungSearchProvider()],
                client,
                timeout_seconds=1.0,
            )

    return _dependency


@pytest.fixture()
def upload_dir(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.setattr(settings, "upload_dir", str(tmp_path))
    return tmp_path


@pytest.fixture()
def client():
    app.dependency_overrides[get_verifier] = _verifier_override(_bpk_handler)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_analyze_returns_result_extracted_files_and_verifications(
    client: TestClient, upload_dir: Path
) -> None:
    gemini = _FakeGemini(reply="Menurut Pasal 340 KUHP dan Pasal 55, terdakwa ...")
    app.dependency_overrides[get_gemini_client] = lambda: gemini

    response = client.post(
        "/api/analyze",
        data={"caseDescription": "Pembunuhan berencana di Bekasi"},
        files=[("files", ("kronologi.txt", b"Korban ditemukan pukul 05.00", "text/plain"))],
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["result"].startswith("Menurut Pasal 340 KUHP")
    assert body["extracted"] == [
        {"filename": "kronologi.txt", "text": "Korban ditemukan pukul 05.00"}
    ]
    assert [v["citation"] for v in body["verifications"]] == ["Pasal 340 KUHP", "Pasal 55 KUHP"]
    assert body["verifications"][0]["verified"] is True
    assert body["verifications"][0]["sources"][0]["site"] == "peraturan.bpk.go.id"
    assert body["verifications"][1] == {
        "citation": "Pasal 55 KUHP",
        "verified": False,
        "sources": [],
    }
    assert "Pembunuhan berencana di Bekasi" in gemini.prompts[0]
    assert "Korban ditemukan pukul 05.00" in gemini.prompts[0]
    assert list(upload_dir.iterdir()) == []


def test_analyze_records_placeholder_when_extraction_fails(
    client: TestClient, upload_dir: Path, monkeypatch
) -> None:
    def broken(path: str, name: str) -> str:
        raise RuntimeError("cannot open broken document")

    monkeypatch.setattr(main_module, "extract_file_text", broken)
    app.dependency_overrides[get_gemini_client] = lambda: _FakeGemini(reply="Tidak ada pasal.")

    response = client.post(
        "/api/analyze",
        files=[("files", ("rusak.pdf", b"not a pdf", "application/pdf"))],
    )

    assert response.status_code == 200
    assert response.json()["extracted"] == [
        {"filename": "rusak.pdf", "text": "(no text extracted)"}
    ]
    assert response.json()["verifications"] == []


def test_analyze_without_api_key_returns_500(
    client: TestClient, upload_dir: Path, monkeypatch
) -> None:
    monkeypatch.setattr(settings, "gemini_api_key", None)

    response = client.post("/api/analyze", data={"caseDescription": "x"})

    assert response.status_code == 500
    assert response.json() == {"detail": "GEMINI_API_KEY not configured"}


def test_analyze_gemini_failure_returns_502(
    client: TestClient, upload_dir: Path
) -> None:
    app.dependency_overrides[get_gemini_client] = lambda: _FakeGemini(
        error=GeminiError("Gemini request failed with status 503: overloaded")
    )

    response = client.post(
        "/api/analyze",
        files=[("files", ("a.txt", b"isi", "text/plain"))],
    )

    assert response.status_code == 502
    assert list(upload_dir.iterdir()) == []


def test_analyze_rejects_too_many_files(
    client: TestClient, upload_dir: Path, monkeypatch
) -> None:
    monkeypatch.setattr(settings, "max_upload_files", 1)
    app.dependency_overrides[get_gemini_client] = lambda: _FakeGemini(reply="")

    response = client.post(
        "/api/analyze",
        files=[
            ("files", ("a.txt", b"a", "text/plain")),
            ("files", ("b.txt", b"b", "text/plain")),
        ],
    )

    assert response.status_code == 400


def test_verify_endpoint_reports_citations_and_results(client: TestClient) -> None:
    response = client.post(
        "/api/verify",
        json={"text": "Pasal 340 KUHP jo. Pasal 340 KUHP, serta Pasal 184 KUHAP"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["citations"] == ["Pasal 340 KUHP", "Pasal 184 KUHAP"]
    assert [v["verified"] for v in body["verifications"]] == [True, False]


def test_verify_endpoint_accepts_empty_text(client: TestClient) -> None:
    response = client.post("/api/verify", json={})

    assert response.json() == {"citations": [], "verifications": []}


def test_analyze_writes_uploads_off_the_event_loop(
    client: TestClient, upload_dir: Path, monkeypatch
) -> None:
    offloaded: list[str] = []
    original = main_module.run_in_threadpool

    async def recording(func, *args, **kwargs):
        offloaded.append(getattr(func, "__name__", repr(func)))
        return await original(func, *args, **kwargs)

    monkeypatch.setattr(main_module, "run_in_threadpool", recording)
    app.dependency_overrides[get_gemini_client] = lambda: _FakeGemini(reply="Tidak ada pasal.")

    response = client.post(
        "/api/analyze",
        files=[("files", ("kronologi.txt", b"isi berkas", "text/plain"))],
    )

    assert response.status_code == 200
    assert offloaded == ["write_bytes", "extract_file_text"]
    assert response.json()["extracted"][0]["text"] == "isi berkas"
