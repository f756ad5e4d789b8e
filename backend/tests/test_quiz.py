"""
Quiz生成・採点のテスト
"""
from __future__ import annotations

import asyncio
import json
import logging

import pytest

from docquiz.core.errors import QuizGenerationError
from docquiz.core.settings import settings
from docquiz.llm.prompt import QUIZ_PROMPT_HEADER, QUIZ_RESPONSE_SCHEMA
from docquiz.quiz.generator import generate_quiz, truncate_source_text
from docquiz.quiz.grading import grade_quiz
from docquiz.schemas.quiz import Question, Quiz


def _quiz_body(count: int = 5) -> dict:
    return {
        "title": "Photosynthesis",
        "questions": [
            {
                "question": f"Question {i}?",
                "options": ["A", "B", "C", "D"],
                "answer": "B",
            }
            for i in range(1, count + 1)
        ],
    }


def test_generate_quiz_parses_response(fake_client_factory) -> None:
    client = fake_client_factory(json.dumps(_quiz_body()))

    quiz = asyncio.run(generate_quiz(client, "Plants convert light into energy."))

    assert quiz.title == "Photosynthesis"
    assert len(quiz.questions) == 5
    assert quiz.questions[0].answer == "B"
    assert client.calls[0]["response_schema"] == QUIZ_RESPONSE_SCHEMA


def test_generate_quiz_embeds_text_in_prompt_string(fake_client_factory) -> None:
    client = fake_client_factory(json.dumps(_quiz_body()))

    asyncio.run(generate_quiz(client, "Plants convert light into energy."))

    prompt = client.calls[0]["contents"]
    assert isinstance(prompt, str)
    assert prompt.endswith("Plants convert light into energy.")
    assert "5-question multiple choice quiz" in prompt


def test_generate_quiz_forwards_only_first_8000_chars(fake_client_factory) -> None:
    client = fake_client_factory(json.dumps(_quiz_body()))
    text = "a" * 8000 + "b" * 1000

    asyncio.run(generate_quiz(client, text))

    prompt = client.calls[0]["contents"]
    header = QUIZ_PROMPT_HEADER.format(question_count=settings.quiz_question_count)
    assert prompt == header + "a" * 8000
    assert "b" not in prompt[len(header):]


def test_generate_quiz_uses_configured_limits(fake_client_factory, monkeypatch) -> None:
    monkeypatch.setattr(settings, "quiz_max_source_chars", 10)
    monkeypatch.setattr(settings, "quiz_question_count", 3)
    client = fake_client_factory(json.dumps(_quiz_body(3)))

    asyncio.run(generate_quiz(client, "0123456789overflow"))

    prompt = client.calls[0]["contents"]
    assert prompt.endswith("Text: 0123456789")
    assert "3-question" in prompt


@pytest.mark.parametrize("response", ["", None, "not-json", "[]", '{"title": "x"}'])
def test_generate_quiz_invalid_response_fails(fake_client_factory, response) -> None:
    client = fake_client_factory(response)

    with pytest.raises(QuizGenerationError, match="Failed to generate quiz") as exc_info:
        asyncio.run(generate_quiz(client, "some text"))

    assert exc_info.value.__cause__ is not None


def test_generate_quiz_keeps_answer_outside_options(fake_client_factory) -> None:
    body = _quiz_body()
    body["questions"][0]["answer"] = "Z"
    client = fake_client_factory(json.dumps(body))

    quiz = asyncio.run(generate_quiz(client, "some text"))

    assert quiz.questions[0].answer == "Z"


def test_truncate_source_text_leaves_short_text() -> None:
    assert truncate_source_text("short", 8000) == "short"
    assert truncate_source_text("x" * 8000, 8000) == "x" * 8000


def test_truncate_source_text_cuts_long_text() -> None:
    assert truncate_source_text("abcdef", 3) == "abc"


def _quiz() -> Quiz:
    return Quiz(
        title="Capitals",
        questions=[
            Question(question="Capital of France?", options=["Paris", "Lyon"], answer="Paris"),
            Question(question="Capital of Japan?", options=["Osaka", "Tokyo"], answer="Tokyo"),
            Question(question="Capital of Italy?", options=["Rome", "Milan"], answer="Rome"),
        ],
    )


def test_grade_quiz_counts_correct_answers() -> None:
    result = grade_quiz(_quiz(), ["Paris", " Tokyo ", "Milan"])

    assert result.total == 3
    assert result.correct == 2
    assert result.results == [True, True, False]


def test_grade_quiz_treats_unanswered_as_wrong() -> None:
    result = grade_quiz(_quiz(), [None, "Tokyo", None])

    assert result.correct == 1
    assert result.results == [False, True, False]


def test_grade_quiz_rejects_length_mismatch() -> None:
    with pytest.raises(ValueError):
        grade_quiz(_quiz(), ["Paris"])


def test_generate_quiz_keeps_backticks_inside_string_values(fake_client_factory) -> None:
    body = _quiz_body()
    body["questions"][0]["question"] = "What does ```python start?"
    body["questions"][0]["options"] = ["A fenced code block", "A comment"]
    body["questions"][0]["answer"] = "A fenced code block"
    client = fake_client_factory(json.dumps(body))

    quiz = asyncio.run(generate_quiz(client, "Markdown basics."))

    assert quiz.model_dump() == body


def test_generate_quiz_logs_truncation(fake_client_factory, caplog) -> None:
    caplog.set_level(logging.WARNING, logger="docquiz.quiz.generator")
    client = fake_client_factory(json.dumps(_quiz_body()))

    asyncio.run(generate_quiz(client, "a" * 8001))

    assert "[QUIZ:TRUNCATE]" in caplog.text


def test_generate_quiz_short_text_is_not_logged_as_truncated(fake_client_factory, caplog) -> None:
    caplog.set_level(logging.WARNING, logger="docquiz.quiz.generator")
    client = fake_client_factory(json.dumps(_quiz_body()))

    asyncio.run(generate_quiz(client, "a" * 8000))

    assert "[QUIZ:" not in caplog.text


def test_generate_quiz_logs_question_count_mismatch(fake_client_factory, caplog) -> None:
    caplog.set_level(logging.WARNING, logger="docquiz.quiz.generator")
    client = fake_client_factory(json.dumps(_quiz_body(3)))

    quiz = asyncio.run(generate_quiz(client, "some text"))

    assert len(quiz.questions) == 3
    assert "[QUIZ:COUNT]" in caplog.text


def test_generate_quiz_logs_answer_outside_options(fake_client_factory, caplog) -> None:
    caplog.set_level(logging.WARNING, logger="docquiz.quiz.generator")
    body = _quiz_body()
    body["questions"][0]["answer"] = "Z"
    client = fake_client_factory(json.dumps(body))

    asyncio.run(generate_quiz(client, "some text"))

    assert "[QUIZ:ANSWER]" in caplog.text
    assert "問題1" in caplog.text
