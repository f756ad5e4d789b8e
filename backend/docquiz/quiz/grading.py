"""
クイズの採点（LLMは使わない純粋関数）
"""
from typing import Optional, Sequence

from docquiz.schemas.quiz import Quiz, QuizGradeResult


def grade_quiz(quiz: Quiz, answers: Sequence[Optional[str]]) -> QuizGradeResult:
    """
    選んだ選択肢と各問題の正解を比較して採点する

    前後の空白は無視して完全一致で判定。未回答（None）は不正解扱い。

    Args:
        quiz: 採点対象のクイズ
        answers: 各問題で選んだ選択肢（quiz.questions と同じ順序・件数）

    Returns:
        QuizGradeResult

    Raises:
        ValueError: answers の件数が問題数と一致しない場合
    """
    if len(answers) != len(quiz.questions):
        raise ValueError(
            f"回答数が問題数と一致しません: answers={len(answers)}, questions={len(quiz.questions)}"
        )

    results = [
        answer is not None and answer.strip() == question.answer.strip()
        for question, answer in zip(quiz.questions, answers)
    ]
    return QuizGradeResult(total=len(results), correct=sum(results), results=results)
