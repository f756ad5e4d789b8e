"""
Documents APIルーター（文書構造解析・パート本文抽出）
"""
import logging

from fastapi import APIRouter, Depends

from docquiz.core.errors import (
    InvalidDocumentError,
    OperationError,
    raise_invalid_input,
    raise_timeout,
    raise_upstream_error,
)
from docquiz.docs.analyzer import analyze_document_structure, extract_segment_text
from docquiz.llm.base import LLMClient, LLMInternalError, LLMTimeoutError
from docquiz.routers.dependencies import get_llm_client
from docquiz.schemas.document import (
    AnalyzeRequest,
    DocumentAnalysis,
    ExtractRequest,
    ExtractResponse,
)

# ロガー設定
logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=DocumentAnalysis)
async def analyze_document(
    request: AnalyzeRequest,
    client: LLMClient = Depends(get_llm_client),
) -> DocumentAnalysis:
    """
    PDFの構造を解析する

    - base64_data: 必須。PDFをbase64エンコードした文字列
    - レスポンス: { totalPages, citations: { apa7, mla9, chicago }, parts: [...] }
    """
    try:
        return await analyze_document_structure(client, request.base64_data)
    except InvalidDocumentError as e:
        raise_invalid_input(str(e))
    except LLMTimeoutError as e:
        raise_timeout(str(e))
    except (LLMInternalError, OperationError) as e:
        raise_upstream_error(str(e))


@router.post("/extract", response_model=ExtractResponse)
async def extract_part(
    request: ExtractRequest,
    client: LLMClient = Depends(get_llm_client),
) -> ExtractResponse:
    """
    解析済みパートの本文を抽出する

    - base64_data: 必須。analyze と同じPDF
    - part_title / part_description: analyze の結果のパート情報
    """
    try:
        text = await extract_segment_text(
            client,
            request.base64_data,
            request.part_title,
            request.part_description,
        )
    except InvalidDocumentError as e:
        raise_invalid_input(str(e))
    except LLMTimeoutError as e:
        raise_timeout(str(e))
    except (LLMInternalError, OperationError) as e:
        raise_upstream_error(str(e))

    return ExtractResponse(text=text)
