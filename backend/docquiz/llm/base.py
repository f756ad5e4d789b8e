"""
LLMアダプタ層の基底定義（抽象インターフェース・例外）

【初心者向け】
- LLMClient: Protocol。Gemini 等の実装が generate(contents, response_schema) を提供する約束
- LLMTimeoutError / LLMInternalError: LLM 呼び出し失敗時に raise。routers 等で捕捉
"""
from typing import Protocol, List, Dict, Any, Union

# 1リクエスト分のコンテンツ
# - str: プロンプト文字列のみ
# - list: インラインデータ（{"mime_type": ..., "data": bytes}）と指示テキストの並び
ContentPart = Union[str, Dict[str, Any]]
Contents = Union[str, List[ContentPart]]


class LLMClient(Protocol):
    """
    LLMクライアントのインターフェース

    各操作（文書解析・本文抽出・Quiz生成）はこのProtocolに準拠したクライアントを
    引数で受け取る（クライアントの生成・寿命は呼び出し側の責任）
    """

    async def generate(
        self,
        contents: Contents,
        response_schema: Dict[str, Any] | None = None,
    ) -> str:
        """
        LLMに1回問い合わせ、応答テキストを取得

        Args:
            contents: 送信するコンテンツ（文字列 or パートのリスト）
            response_schema: JSON出力を強制する場合のスキーマ（Noneなら自由テキスト）

        Returns:
            LLMからの応答テキスト（応答が空の場合は空文字列）

        Raises:
            LLMTimeoutError: タイムアウト時
            LLMInternalError: その他のエラー時
        """
        ...


class LLMError(Exception):
    """LLM関連の基底例外"""
    pass


class LLMTimeoutError(LLMError):
    """LLM呼び出しのタイムアウトエラー"""
    pass


class LLMInternalError(LLMError):
    """LLM呼び出しの内部エラー（HTTPエラー、認証エラー、クォータ制限等）"""
    pass
