"""
Quiz API用スキーマ（クイズ生成・採点の型）

【初心者向け】
- Question: 1問分（question, options, answer）。answer は options のどれか
- Quiz: タイトル + 問題リスト（5問を依頼）
- QuizGenerateRequest / QuizGradeRequest: APIのリクエスト型
"""
from typing import Optional

from pydantic import BaseModel, Field


class Question(BaseModel):
    """多肢選択問題（1問）"""
    question: str = Field(..., description="問題文")
    options: list[str] = Field(..., description="選択肢")
    answer: str = Field(..., description="正解（options のいずれかと一致する想定）")


class Quiz(BaseModel):
    """生成されたクイズ"""
    title: str = Field(..., description="クイズのタイトル")
    questions: list[Question] = Field(..., description="問題リスト")


class QuizGenerateRequest(BaseModel):
    """クイズ生成リクエスト"""
    text: str = Field(..., min_length=1, description="出題元の本文（上限を超える分は切り捨て）")


class QuizGradeRequest(BaseModel):
    """採点リクエスト"""
    quiz: Quiz
    answers: list[Optional[str]] = Field(
        ...,
        description="各問題で選んだ選択肢（未回答はnull）。quiz.questions と同じ順序・件数"
    )


class QuizGradeResult(BaseModel):
    """採点結果"""
    total: int = Field(..., description="問題数")
    correct: int = Field(..., description="正解数")
    results: list[bool] = Field(..., description="問題ごとの正誤")
