"""
LLM応答のJSONパース
"""
import json
import logging
from typing import Any, Dict

# ロガー設定
logger = logging.getLogger(__name__)

CODE_FENCE = "```"


def _strip_code_fence(text: str) -> str | None:
    """
    応答全体を囲むマークダウンのコードフェンス（```json ... ``` / ``` ... ```）を剥がす

    response_mime_type=application/json 指定時は通常付かないが、モデルによっては付くことがある。
    先頭がフェンスで始まらない場合は None（JSON文字列値の中の ``` には触れない）。
    """
    if not text.startswith(CODE_FENCE):
        return None

    # 先頭行（``` / ```json）を捨てる
    first_newline = text.find("\n")
    if first_newline < 0:
        return None
    body = text[first_newline + 1:].rstrip()

    # 末尾の閉じフェンスを捨てる
    if body.endswith(CODE_FENCE):
        body = body[:-len(CODE_FENCE)]
    logger.info("コードフェンスを除去")
    return body.strip()


def parse_json_object(response_text: str | None) -> Dict[str, Any]:
    """
    LLMレスポンスをJSONオブジェクト（dict）としてパース

    まずそのままパースし、失敗した場合のみコードフェンスを剥がして再パースする。

    Args:
        response_text: LLMからのレスポンステキスト

    Returns:
        パースしたdict

    Raises:
        ValueError: 空応答（"empty_response"）、JSON構文エラー、トップレベルがオブジェクトでない場合
    """
    # 空応答チェック（空白のみも含む）
    if not response_text or not response_text.strip():
        raise ValueError("empty_response")

    text = response_text.strip()

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        unfenced = _strip_code_fence(text)
        if unfenced is None:
            logger.error(f"JSONパースエラー: {e}（先頭200文字: {text[:200]}）")
            raise ValueError(f"json_parse_error: {e}") from e
        try:
            data = json.loads(unfenced)
        except json.JSONDecodeError as fenced_error:
            logger.error(f"JSONパースエラー（フェンス除去後）: {fenced_error}（先頭200文字: {unfenced[:200]}）")
            raise ValueError(f"json_parse_error: {fenced_error}") from fenced_error

    if not isinstance(data, dict):
        raise ValueError(f"json_validation_error: トップレベルがオブジェクトではありません（{type(data).__name__}）")

    return data
