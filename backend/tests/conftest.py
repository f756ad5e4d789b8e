"""
pytest共通設定・フィクスチャ

【初心者向け】
- FakeLLMClient: Gemini の代わりに決め打ちの応答を返すフェイク。送信内容を calls に記録する
- settings はモジュール読み込み時に生成されるため、環境変数は import より前に設定する
"""
from __future__ import annotations

import base64
import os
from typing import Any

import pytest

os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")


class FakeLLMClient:
    """決め打ちの応答を返すLLMクライアント"""

    def __init__(self, response: str | None = "") -> None:
        self.response = response
        self.calls: list[dict[str, Any]] = []

    async def generate(self, contents, response_schema=None) -> str:
        self.calls.append({"contents": contents, "response_schema": response_schema})
        return self.response


@pytest.fixture
def fake_client_factory():
    """応答テキストを指定して FakeLLMClient を作る"""
    return FakeLLMClient


@pytest.fixture
def pdf_bytes() -> bytes:
    return b"%PDF-1.4\n% docquiz test document\n"


@pytest.fixture
def pdf_base64(pdf_bytes: bytes) -> str:
    return base64.b64encode(pdf_bytes).decode("ascii")
