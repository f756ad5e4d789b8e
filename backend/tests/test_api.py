"""
HTTP API のテスト（LLMクライアントは dependency_overrides でフェイクに差し替え）
"""
from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from docquiz.core.errors import ERROR_STATUS_MAP
from docquiz.core.settings import settings
from docquiz.llm.base import LLMInternalError, LLMTimeoutError
from docquiz.main import app
from docquiz.routers.dependencies import get_llm_client

from conftest import FakeLLMClient

ANALYSIS = {
    "totalPages": 4,
    "citations": {"apa7": "a", "mla9": "m", "chicago": "c"},
    "parts": [
        {"id": 1, "title": "Intro", "description": "Opening", "startPage": 1, "endPage": 2},
        {"id": 2, "title": "Body", "description": "Main text", "startPage": 3, "endPage": 4},
    ],
}

QUIZ = {
    "title": "Sample quiz",
    "questions": [
        {"question": "Q?", "options": ["yes", "no"], "answer": "yes"},
    ],
}


class _RaisingClient:
    def __init__(self, error: Exception) -> None:
        self.error = error

    async def generate(self, contents, response_schema=None) -> str:
        raise self.error


@pytest.fixture
def api():
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def _use(llm_client) -> None:
    app.dependency_overrides[get_llm_client] = lambda: llm_client


def test_health(api) -> None:
    res = api.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"
    assert res.json()["model"] == settings.gemini_model
    assert res.json()["api_key_configured"] is True


def test_error_codes_match_raised_errors() -> None:
    assert set(ERROR_STATUS_MAP) == {"INVALID_INPUT", "TIMEOUT", "INTERNAL_ERROR", "UPSTREAM_ERROR"}


def test_analyze_returns_camel_case_body(api, pdf_base64) -> None:
    _use(FakeLLMClient(json.dumps(ANALYSIS)))

    res = api.post("/documents/analyze", json={"base64_data": pdf_base64})

    assert res.status_code == 200
    assert res.json() == ANALYSIS


def test_analyze_malformed_response_returns_502(api, pdf_base64) -> None:
    _use(FakeLLMClient("not-json"))

    res = api.post("/documents/analyze", json={"base64_data": pdf_base64})

    assert res.status_code == 502
    assert res.json()["detail"]["error"] == {
        "code": "UPSTREAM_ERROR",
        "message": "Failed to analyze document structure.",
    }


def test_analyze_invalid_base64_returns_400(api) -> None:
    _use(FakeLLMClient(json.dumps(ANALYSIS)))

    res = api.post("/documents/analyze", json={"base64_data": "@@@"})

    assert res.status_code == 400
    assert res.json()["detail"]["error"]["code"] == "INVALID_INPUT"


def test_analyze_timeout_returns_408(api, pdf_base64) -> None:
    _use(_RaisingClient(LLMTimeoutError("timed out")))

    res = api.post("/documents/analyze", json={"base64_data": pdf_base64})

    assert res.status_code == 408
    assert res.json()["detail"]["error"]["code"] == "TIMEOUT"


def test_extract_returns_text(api, pdf_base64) -> None:
    llm = FakeLLMClient("hello world")
    _use(llm)

    res = api.post(
        "/documents/extract",
        json={"base64_data": pdf_base64, "part_title": "Intro", "part_description": "Opening"},
    )

    assert res.status_code == 200
    assert res.json() == {"text": "hello world"}
    assert "Intro (Opening)" in llm.calls[0]["contents"][1]


def test_extract_empty_response_returns_502(api, pdf_base64) -> None:
    _use(FakeLLMClient(""))

    res = api.post(
        "/documents/extract",
        json={"base64_data": pdf_base64, "part_title": "Intro", "part_description": "Opening"},
    )

    assert res.status_code == 502
    assert res.json()["detail"]["error"]["message"] == "Could not extract text for this part."


def test_generate_quiz(api) -> None:
    _use(FakeLLMClient(json.dumps(QUIZ)))

    res = api.post("/quiz/generate", json={"text": "Some study text."})

    assert res.status_code == 200
    assert res.json() == QUIZ


def test_generate_quiz_upstream_error_returns_502(api) -> None:
    _use(_RaisingClient(LLMInternalError("quota")))

    res = api.post("/quiz/generate", json={"text": "Some study text."})

    assert res.status_code == 502
    assert res.json()["detail"]["error"]["code"] == "UPSTREAM_ERROR"


def test_generate_quiz_requires_text(api) -> None:
    _use(FakeLLMClient(json.dumps(QUIZ)))

    res = api.post("/quiz/generate", json={"text": ""})

    assert res.status_code == 422


def test_grade_quiz(api) -> None:
    res = api.post("/quiz/grade", json={"quiz": QUIZ, "answers": ["yes"]})

    assert res.status_code == 200
    assert res.json() == {"total": 1, "correct": 1, "results": [True]}


def test_grade_quiz_length_mismatch_returns_400(api) -> None:
    res = api.post("/quiz/grade", json={"quiz": QUIZ, "answers": []})

    assert res.status_code == 400
    assert res.json()["detail"]["error"]["code"] == "INVALID_INPUT"
