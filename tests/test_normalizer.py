import logging

import pytest
from pydantic import ValidationError

from conftest import SAMPLE_TABLE, make_question, quiz_json
from errors import InvalidShape
from services.json_response import parse_and_validate
from services.markdown_table import parse_quiz_table
from services.normalizer import normalize
from services.schemas import Difficulty, QuizQuestion, RawQuestionCandidate


def test_defaults_are_filled():
    raw = [{"question": "Q?", "options": ["a", "b", "c", "d"], "correctAnswer": "b"}]
    q = normalize(raw)[0]

    assert q == QuizQuestion(id="1", question="Q?", options=["a", "b", "c", "d"], correct_answer="b",
                             explanation="", difficulty=Difficulty.MEDIUM, category="general")


def test_ids_follow_position_when_missing_or_blank():
    raw = [
        {"question": "A?", "options": ["a", "b", "c", "d"], "correctAnswer": "a"},
        {"id": "  ", "question": "B?", "options": ["a", "b", "c", "d"], "correctAnswer": "a"},
        {"id": "q-9", "question": "C?", "options": ["a", "b", "c", "d"], "correctAnswer": "a"},
    ]
    assert [q.id for q in normalize(raw)] == ["1", "2", "q-9"]


@pytest.mark.parametrize("label, expected", [
    ("easy", Difficulty.EASY), ("Beginner", Difficulty.EASY), ("BASIC", Difficulty.EASY),
    ("medium", Difficulty.MEDIUM), ("intermediate", Difficulty.MEDIUM), ("Moderate", Difficulty.MEDIUM),
    ("hard", Difficulty.HARD), ("advanced", Difficulty.HARD), (" difficult ", Difficulty.HARD),
])
def test_difficulty_synonyms(label, expected):
    raw = [{"question": "Q?", "options": ["a", "b", "c", "d"], "correctAnswer": "a", "difficulty": label}]
    assert normalize(raw)[0].difficulty is expected


def test_unknown_difficulty_is_not_fatal(caplog):
    raw = [{"question": "Q?", "options": ["a", "b", "c", "d"], "correctAnswer": "a", "difficulty": "expert"}]
    with caplog.at_level(logging.WARNING):
        q = normalize(raw)[0]

    assert q.difficulty is Difficulty.MEDIUM
    assert "expert" in caplog.text


def test_options_pass_through_in_order():
    raw = [{"question": "Q?", "options": ["d", "c", "b", "a"], "correctAnswer": "a"}]
    assert normalize(raw)[0].options == ["d", "c", "b", "a"]


def test_category_kept_when_present():
    raw = [{"question": "Q?", "options": ["a", "b", "c", "d"], "correctAnswer": "a", "category": "math"}]
    assert normalize(raw)[0].category == "math"


def test_json_candidates_round_out():
    parsed = parse_and_validate(quiz_json([make_question(1), make_question(2, 1, difficulty="Advanced")]))
    questions = normalize(parsed.questions)

    assert [q.id for q in questions] == ["1", "2"]
    assert questions[1].correct_answer == "Option 2B"
    assert questions[1].difficulty is Difficulty.HARD


def test_normalize_is_idempotent():
    once = normalize(parse_quiz_table(SAMPLE_TABLE))
    twice = normalize(once)

    assert twice == once
    assert normalize([q.to_public() for q in once]) == once


def test_accepts_candidate_models():
    c = RawQuestionCandidate(question="Q?", options=["a", "b", "c", "d"], correct_answer="d")
    assert normalize([c])[0].correct_answer == "d"


def test_candidate_with_two_options_is_rejected():
    raw = [
        {"question": "Fine?", "options": ["a", "b", "c", "d"], "correctAnswer": "a"},
        {"question": "Broken?", "options": ["a", "b"], "correctAnswer": "a"},
    ]
    with pytest.raises(InvalidShape, match="Question 2"):
        normalize(raw)


def test_empty_input_gives_empty_output():
    assert normalize([]) == []


def test_repeated_provider_ids_are_rejected():
    raw = [make_question(1), make_question(2, id="1")]
    with pytest.raises(InvalidShape, match='Question 2 has a duplicate id "1"'):
        normalize(raw)


def test_positional_id_steps_aside_for_a_provided_one():
    raw = [
        {"question": "A?", "options": ["a", "b", "c", "d"], "correctAnswer": "a"},
        {"id": "1", "question": "B?", "options": ["a", "b", "c", "d"], "correctAnswer": "a"},
        {"question": "C?", "options": ["a", "b", "c", "d"], "correctAnswer": "a"},
    ]
    ids = [q.id for q in normalize(raw)]

    assert ids == ["1-2", "1", "3"]
    assert len(set(ids)) == len(ids)


def test_question_model_requires_distinct_options():
    with pytest.raises(ValidationError, match="distinct"):
        QuizQuestion(id="1", question="Q?", options=["a", "a", "b", "c"], correct_answer="a")


def test_missing_difficulty_is_logged(caplog):
    raw = [{"question": "Q?", "options": ["a", "b", "c", "d"], "correctAnswer": "a"}]
    with caplog.at_level(logging.DEBUG, logger="services.difficulty"):
        q = normalize(raw)[0]

    assert q.difficulty is Difficulty.MEDIUM
    assert "Missing difficulty" in caplog.text
