"""
LLMアダプタ層

【初心者向け】
- LLMClientインターフェースと、その実装であるGeminiClientを提供
- 各操作はクライアントを引数で受け取るので、テストではフェイク実装に差し替えられる
"""
from docquiz.llm.base import (
    LLMClient,
    LLMError,
    LLMInternalError,
    LLMTimeoutError,
)
from docquiz.llm.gemini import GeminiClient, get_gemini_client

__all__ = [
    "LLMClient",
    "LLMError",
    "LLMInternalError",
    "LLMTimeoutError",
    "GeminiClient",
    "get_gemini_client",
]
