"""
プロンプト・レスポンススキーマ生成ロジック

【初心者向け】
- build_*_contents: Gemini に送るコンテンツ（PDFインラインデータ + 指示テキスト）を組み立てる
- *_RESPONSE_SCHEMA: JSON出力を強制するためのスキーマ（Gemini の Schema 形式）
- 分割数・問題数・文字数上限などの方針値は引数で受け取り、文字列に直書きしない
"""
from typing import Any, Dict, List

PDF_MIME_TYPE = "application/pdf"


# --- レスポンススキーマ ---

CITATIONS_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "apa7": {"type": "STRING"},
        "mla9": {"type": "STRING"},
        "chicago": {"type": "STRING"},
    },
    "required": ["apa7", "mla9", "chicago"],
}

SEGMENT_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "id": {"type": "INTEGER"},
        "title": {"type": "STRING"},
        "description": {"type": "STRING"},
        "startPage": {"type": "INTEGER"},
        "endPage": {"type": "INTEGER"},
    },
    "required": ["id", "title", "description", "startPage", "endPage"],
}

ANALYSIS_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "totalPages": {"type": "INTEGER"},
        "citations": CITATIONS_SCHEMA,
        "parts": {"type": "ARRAY", "items": SEGMENT_SCHEMA},
    },
    "required": ["citations", "parts", "totalPages"],
}

QUESTION_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "question": {"type": "STRING"},
        "options": {"type": "ARRAY", "items": {"type": "STRING"}},
        "answer": {"type": "STRING"},
    },
    "required": ["question", "options", "answer"],
}

QUIZ_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "questions": {"type": "ARRAY", "items": QUESTION_SCHEMA},
    },
    "required": ["title", "questions"],
}


def build_pdf_part(pdf_bytes: bytes) -> Dict[str, Any]:
    """PDFのインラインデータパートを作る"""
    return {"mime_type": PDF_MIME_TYPE, "data": pdf_bytes}


def build_analysis_contents(
    pdf_bytes: bytes,
    min_parts: int,
    max_parts: int,
) -> List[Any]:
    """
    文書構造解析用のコンテンツを構築

    - 引用（APA7 / MLA9 / Chicago）
    - 総ページ数
    - min_parts〜max_parts 個の論理パート（開始ページ・終了ページ付き）

    Args:
        pdf_bytes: PDFのバイト列
        min_parts: 分割数の下限
        max_parts: 分割数の上限

    Returns:
        [PDFパート, 指示テキスト]
    """
    instruction = (
        "Analyze this document. "
        "1: Provide academic citations (APA7, MLA9, Chicago). "
        "2: Determine the total number of pages in the document. "
        f"3: Divide the entire document into {min_parts}-{max_parts} logical parts/segments for reading. "
        "For each part, provide a sequential integer id, a short title, a one-sentence description, "
        "the starting page number and the ending page number. "
        "Return as JSON."
    )
    return [build_pdf_part(pdf_bytes), instruction]


def build_extraction_contents(
    pdf_bytes: bytes,
    part_title: str,
    part_description: str,
) -> List[Any]:
    """
    パート本文抽出用のコンテンツを構築（要約禁止・逐語抽出）

    Args:
        pdf_bytes: PDFのバイト列
        part_title: パートのタイトル
        part_description: パートの説明

    Returns:
        [PDFパート, 指示テキスト]
    """
    instruction = (
        f'Extract and return the FULL RAW TEXT for the following section: "{part_title} ({part_description})". '
        "Do not summarize. Return only the verbatim text found in those pages/chapters."
    )
    return [build_pdf_part(pdf_bytes), instruction]


QUIZ_PROMPT_HEADER = (
    "Based on the following text, generate a {question_count}-question multiple choice quiz. "
    "Each question must have its correct answer copied exactly from one of its options. "
    "Return JSON.\n\n"
    "Text: "
)


def build_quiz_prompt(text: str, question_count: int) -> str:
    """
    Quiz生成用のプロンプト文字列を構築

    本文はインラインデータではなく、プロンプト文字列に直接埋め込む。
    文字数の切り詰めは呼び出し側（quiz.generator）で済ませておくこと。

    Args:
        text: 切り詰め済みの本文
        question_count: 依頼する問題数

    Returns:
        プロンプト文字列
    """
    return QUIZ_PROMPT_HEADER.format(question_count=question_count) + text
