"""
文書解析API用スキーマ（文書構造・パート・引用の型）

【初心者向け】
- DocumentAnalysis: 総ページ数 / 引用（3形式）/ パート一覧
- Segment: 1パート分（id, title, description, startPage, endPage）
- JSONのキーはGeminiとの契約に合わせてcamelCase（aliasで定義）
  Python側では snake_case で扱い、model_dump(by_alias=True) で元の形に戻る
"""
from pydantic import BaseModel, ConfigDict, Field


class Citations(BaseModel):
    """学術引用（3形式）"""
    apa7: str = Field(..., description="APA 第7版")
    mla9: str = Field(..., description="MLA 第9版")
    chicago: str = Field(..., description="Chicago スタイル")


class Segment(BaseModel):
    """文書の論理パート（連続したページ範囲）"""
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="パートID（解析結果内で一意）")
    title: str = Field(..., description="パートのタイトル")
    description: str = Field(..., description="パートの説明")
    start_page: int = Field(..., alias="startPage", description="開始ページ（1始まり）")
    end_page: int = Field(..., alias="endPage", description="終了ページ（開始ページ以上）")


class DocumentAnalysis(BaseModel):
    """文書構造の解析結果"""
    model_config = ConfigDict(populate_by_name=True)

    total_pages: int = Field(..., alias="totalPages", description="総ページ数")
    citations: Citations
    parts: list[Segment] = Field(default_factory=list, description="パート一覧（5〜10件を依頼）")


# --- API用スキーマ ---

class AnalyzeRequest(BaseModel):
    """文書構造解析リクエスト"""
    base64_data: str = Field(..., min_length=1, description="PDFをbase64エンコードした文字列")


class ExtractRequest(BaseModel):
    """パート本文抽出リクエスト"""
    base64_data: str = Field(..., min_length=1, description="PDFをbase64エンコードした文字列")
    part_title: str = Field(..., min_length=1, description="抽出対象パートのタイトル")
    part_description: str = Field(default="", description="抽出対象パートの説明")


class ExtractResponse(BaseModel):
    """パート本文抽出レスポンス"""
    text: str
