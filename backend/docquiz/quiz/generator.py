"""
Quiz生成ロジック

本文（パート抽出結果など）から多肢選択クイズを生成する。
"""
import logging

from pydantic import ValidationError

from docquiz.core.errors import QuizGenerationError
from docquiz.core.settings import settings
from docquiz.llm.base import LLMClient
from docquiz.llm.parser import parse_json_object
from docquiz.llm.prompt import QUIZ_RESPONSE_SCHEMA, build_quiz_prompt
from docquiz.schemas.quiz import Quiz

# ロガー設定
logger = logging.getLogger(__name__)

QUIZ_ERROR_MESSAGE = "Failed to generate quiz."


def truncate_source_text(text: str, max_chars: int) -> str:
    """
    本文を先頭 max_chars 文字に切り詰める（超過時は警告ログ）

    Args:
        text: 本文
        max_chars: 最大文字数

    Returns:
        切り詰め後の本文
    """
    if len(text) <= max_chars:
        return text

    logger.warning(
        f"[QUIZ:TRUNCATE] 本文が上限を超えたため切り詰めます: "
        f"{len(text)}文字 → {max_chars}文字（{len(text) - max_chars}文字は出題対象外）"
    )
    return text[:max_chars]


def _warn_on_contract_violations(quiz: Quiz, question_count: int) -> None:
    """問題数・正解が選択肢に含まれるか を確認し、外れていればログに残す（値は修正しない）"""
    if len(quiz.questions) != question_count:
        logger.warning(
            f"[QUIZ:COUNT] 問題数が依頼と異なります: {len(quiz.questions)}問（依頼: {question_count}問）"
        )

    for i, question in enumerate(quiz.questions):
        if question.answer not in question.options:
            logger.warning(f"[QUIZ:ANSWER] 問題{i + 1}の正解が選択肢に含まれていません: {question.answer[:50]}")


async def generate_quiz(client: LLMClient, text: str) -> Quiz:
    """
    本文から多肢選択クイズを生成する

    - 本文は settings.quiz_max_source_chars 文字で切り詰めてプロンプトに直接埋め込む
    - 応答が空・JSONとして不正・形が合わない場合は QuizGenerationError
      （文書構造解析と同じ方針）

    Args:
        client: LLMクライアント
        text: 出題元の本文

    Returns:
        Quiz

    Raises:
        QuizGenerationError: 応答を Quiz として解釈できない場合
        LLMTimeoutError / LLMInternalError: LLM呼び出し自体の失敗
    """
    question_count = settings.quiz_question_count
    source_text = truncate_source_text(text, settings.quiz_max_source_chars)
    prompt = build_quiz_prompt(source_text, question_count)

    logger.info(f"Quiz生成を開始: source_chars={len(source_text)}, question_count={question_count}")
    response_text = await client.generate(prompt, response_schema=QUIZ_RESPONSE_SCHEMA)

    try:
        data = parse_json_object(response_text)
        quiz = Quiz.model_validate(data)
    except (ValueError, ValidationError) as e:
        logger.error(f"Quiz生成の応答を解釈できません: {e}")
        raise QuizGenerationError(QUIZ_ERROR_MESSAGE) from e

    _warn_on_contract_violations(quiz, question_count)
    logger.info(f"Quiz生成完了: title={quiz.title[:50]}, questions={len(quiz.questions)}")
    return quiz
