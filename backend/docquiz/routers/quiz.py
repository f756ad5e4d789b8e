"""
Quiz APIルーター（クイズ生成・採点）
"""
import logging

from fastapi import APIRouter, Depends

from docquiz.core.errors import (
    OperationError,
    raise_invalid_input,
    raise_timeout,
    raise_upstream_error,
)
from docquiz.llm.base import LLMClient, LLMInternalError, LLMTimeoutError
from docquiz.quiz.generator import generate_quiz
from docquiz.quiz.grading import grade_quiz
from docquiz.routers.dependencies import get_llm_client
from docquiz.schemas.quiz import (
    Quiz,
    QuizGenerateRequest,
    QuizGradeRequest,
    QuizGradeResult,
)

# ロガー設定
logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate", response_model=Quiz)
async def generate(
    request: QuizGenerateRequest,
    client: LLMClient = Depends(get_llm_client),
) -> Quiz:
    """
    本文から多肢選択クイズを生成する

    - text: 必須。上限（QUIZ_MAX_SOURCE_CHARS）を超える分は切り捨てて出題
    """
    try:
        return await generate_quiz(client, request.text)
    except LLMTimeoutError as e:
        raise_timeout(str(e))
    except (LLMInternalError, OperationError) as e:
        raise_upstream_error(str(e))


@router.post("/grade", response_model=QuizGradeResult)
async def grade(request: QuizGradeRequest) -> QuizGradeResult:
    """
    クイズを採点する（LLMは使わない）

    - quiz: 生成済みのクイズ
    - answers: 各問題で選んだ選択肢（未回答はnull）
    """
    try:
        result = grade_quiz(request.quiz, request.answers)
    except ValueError as e:
        raise_invalid_input(str(e))

    logger.info(f"採点完了: {result.correct}/{result.total}")
    return result
