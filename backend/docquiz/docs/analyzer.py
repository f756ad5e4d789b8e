"""
文書構造解析・パート本文抽出

【初心者向け】
- analyze_document_structure: PDFを丸ごとGeminiに渡し、引用・総ページ数・論理パートをJSONで受け取る
- extract_segment_text: 同じPDFと「どのパートか（タイトル+説明）」を渡し、そのパートの本文だけを受け取る
- PDF全文を一度に抽出すると出力上限で途切れるため、先にパートへ分割してから1パートずつ抽出する
- LLMクライアントは引数で受け取る（生成・寿命は呼び出し側の責任）
"""
import base64
import binascii
import logging

from pydantic import ValidationError

from docquiz.core.errors import (
    DocumentAnalysisError,
    InvalidDocumentError,
    SegmentExtractionError,
)
from docquiz.core.settings import settings
from docquiz.llm.base import LLMClient
from docquiz.llm.parser import parse_json_object
from docquiz.llm.prompt import (
    ANALYSIS_RESPONSE_SCHEMA,
    build_analysis_contents,
    build_extraction_contents,
)
from docquiz.schemas.document import DocumentAnalysis

# ロガー設定
logger = logging.getLogger(__name__)

ANALYSIS_ERROR_MESSAGE = "Failed to analyze document structure."
EXTRACTION_ERROR_MESSAGE = "Could not extract text for this part."


def decode_document(base64_data: str) -> bytes:
    """
    base64文字列をPDFのバイト列に戻す

    形式チェック（PDFかどうか、サイズ）はしない。base64として不正な場合のみエラー。
    改行・空白は取り除いてから読む（base64.encodebytes や base64 コマンドの折り返し出力に対応）。

    Raises:
        InvalidDocumentError: base64として不正、または空の場合
    """
    compact = "".join(base64_data.split())
    try:
        pdf_bytes = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidDocumentError(f"文書データがbase64として不正です: {e}") from e

    if not pdf_bytes:
        raise InvalidDocumentError("文書データが空です")
    return pdf_bytes


def _warn_on_contract_violations(analysis: DocumentAnalysis) -> None:
    """
    モデルに依頼した条件（パート数・ページ範囲・ID一意）から外れていればログに残す

    依頼値であって保証ではないため、値は修正せずそのまま返す。
    """
    part_count = len(analysis.parts)
    if not settings.analysis_min_parts <= part_count <= settings.analysis_max_parts:
        logger.warning(
            f"[ANALYZE:PART_COUNT] パート数が依頼範囲外: {part_count}件 "
            f"（依頼: {settings.analysis_min_parts}〜{settings.analysis_max_parts}件）"
        )

    ids = [part.id for part in analysis.parts]
    if len(set(ids)) != len(ids):
        logger.warning(f"[ANALYZE:DUPLICATE_ID] パートIDが重複しています: {ids}")

    for part in analysis.parts:
        if not 1 <= part.start_page <= part.end_page <= analysis.total_pages:
            logger.warning(
                f"[ANALYZE:PAGE_RANGE] パート{part.id}のページ範囲が不正: "
                f"{part.start_page}-{part.end_page}（総ページ数={analysis.total_pages}）"
            )


async def analyze_document_structure(
    client: LLMClient,
    base64_data: str,
) -> DocumentAnalysis:
    """
    文書の構造（引用・総ページ数・論理パート）を解析する

    Args:
        client: LLMクライアント
        base64_data: PDFをbase64エンコードした文字列

    Returns:
        DocumentAnalysis

    Raises:
        InvalidDocumentError: base64が不正な場合（LLMは呼ばない）
        DocumentAnalysisError: 応答が空・JSONとして不正・形が合わない場合
        LLMTimeoutError / LLMInternalError: LLM呼び出し自体の失敗
    """
    pdf_bytes = decode_document(base64_data)
    contents = build_analysis_contents(
        pdf_bytes,
        min_parts=settings.analysis_min_parts,
        max_parts=settings.analysis_max_parts,
    )

    logger.info(f"文書構造解析を開始: pdf_bytes={len(pdf_bytes)}")
    response_text = await client.generate(contents, response_schema=ANALYSIS_RESPONSE_SCHEMA)

    try:
        data = parse_json_object(response_text)
        analysis = DocumentAnalysis.model_validate(data)
    except (ValueError, ValidationError) as e:
        logger.error(f"文書構造解析の応答を解釈できません: {e}")
        raise DocumentAnalysisError(ANALYSIS_ERROR_MESSAGE) from e

    _warn_on_contract_violations(analysis)
    logger.info(
        f"文書構造解析完了: total_pages={analysis.total_pages}, parts={len(analysis.parts)}"
    )
    return analysis


async def extract_segment_text(
    client: LLMClient,
    base64_data: str,
    part_title: str,
    part_description: str,
) -> str:
    """
    指定パートの本文（逐語）を抽出する

    Args:
        client: LLMクライアント
        base64_data: PDFをbase64エンコードした文字列
        part_title: パートのタイトル（analyze_document_structure の結果）
        part_description: パートの説明

    Returns:
        抽出した本文（応答テキストをそのまま返す）

    Raises:
        InvalidDocumentError: base64が不正な場合（LLMは呼ばない）
        SegmentExtractionError: 応答が空の場合
        LLMTimeoutError / LLMInternalError: LLM呼び出し自体の失敗
    """
    pdf_bytes = decode_document(base64_data)
    contents = build_extraction_contents(pdf_bytes, part_title, part_description)

    logger.info(f"パート本文抽出を開始: title={part_title[:50]}")
    text = await client.generate(contents)

    if not text:
        logger.error(f"パート本文が空でした: title={part_title[:50]}")
        raise SegmentExtractionError(EXTRACTION_ERROR_MESSAGE)

    logger.info(f"パート本文抽出完了: {len(text)}文字")
    return text
