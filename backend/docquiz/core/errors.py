"""
共通エラーハンドリング（APIで返すエラー形式の統一）

【初心者向け】
- フロントエンドが { "error": { "code": "...", "message": "..." } } で
  エラーを受け取れるよう、共通形式で例外を投げる
- raise_invalid_input 等のヘルパーで、コードごとのHTTPステータスを自動設定
- OperationError 系: 文書解析・テキスト抽出・Quiz生成の失敗を表す例外
  （HTTPに依存しないので、API以外の呼び出し元からも使える）
"""
from fastapi import HTTPException, status
from typing import Literal

# エラーコード一覧（型安全のため Literal で定義）
ErrorCode = Literal[
    "INVALID_INPUT",
    "TIMEOUT",
    "INTERNAL_ERROR",
    "UPSTREAM_ERROR",
]

# エラーコードとHTTPステータスのマッピング
ERROR_STATUS_MAP: dict[ErrorCode, int] = {
    "INVALID_INPUT": status.HTTP_400_BAD_REQUEST,
    "TIMEOUT": status.HTTP_408_REQUEST_TIMEOUT,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "UPSTREAM_ERROR": status.HTTP_502_BAD_GATEWAY,
}


class AppError(HTTPException):
    """アプリケーション共通エラー

    FastAPIのHTTPExceptionはdetailをJSONとして返す。
    フロントエンドで期待される形式: { "error": { "code": "...", "message": "..." } }
    """

    def __init__(self, code: ErrorCode, message: str):
        status_code = ERROR_STATUS_MAP[code]
        # detailにJSON形式のエラー情報を設定
        # FastAPIが自動的にJSONレスポンスとして返す
        super().__init__(
            status_code=status_code,
            detail={"error": {"code": code, "message": message}}
        )


def raise_invalid_input(message: str) -> None:
    """INVALID_INPUTエラーを発生させる"""
    raise AppError("INVALID_INPUT", message)


def raise_timeout(message: str) -> None:
    """TIMEOUTエラーを発生させる"""
    raise AppError("TIMEOUT", message)


def raise_upstream_error(message: str) -> None:
    """UPSTREAM_ERRORエラーを発生させる

    LLM（Gemini）側の失敗や、応答が期待した形にならなかった場合に使う。
    HTTP 502 と { "error": { "code": "UPSTREAM_ERROR", "message": "..." } } を返す
    """
    raise AppError("UPSTREAM_ERROR", message)


# --- 操作レベルの例外（HTTP非依存） ---

class OperationError(Exception):
    """文書解析・抽出・Quiz生成の基底例外"""
    pass


class InvalidDocumentError(OperationError):
    """入力文書（base64）が不正な場合のエラー"""
    pass


class DocumentAnalysisError(OperationError):
    """文書構造の解析に失敗した場合のエラー"""
    pass


class SegmentExtractionError(OperationError):
    """パート本文の抽出に失敗した場合のエラー"""
    pass


class QuizGenerationError(OperationError):
    """Quiz生成に失敗した場合のエラー"""
    pass
