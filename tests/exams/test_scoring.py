import pytest

from src.resovista.resovista.core.exceptions import ValidationError
from src.resovista.resovista.exams.scoring import normalize_answers, score_answers

QUESTIONS = [
    {"id": "q1", "correctAnswer": "Paris", "marks": 2},
    {"id": "q2", "correctAnswer": ["a", "c"]},
    {"id": "q3", "text": "Explain"},
]


def test_normalize_accepts_three_shapes():
    expected = {"q1": "Paris", "q2": ["a"]}
    assert normalize_answers({"q1": "Paris", "q2": ["a"]}, QUESTIONS) == expected
    assert normalize_answers([{"questionId": "q1", "answer": "Paris"}, {"questionId": "q2", "answer": ["a"]}], QUESTIONS) == expected
    assert normalize_answers(["Paris", ["a"]], QUESTIONS) == expected
    assert normalize_answers(None, QUESTIONS) == {}


def test_normalize_rejects_scalars():
    with pytest.raises(ValidationError):
        normalize_answers("Paris", QUESTIONS)


def test_scoring_is_case_and_whitespace_insensitive():
    result = score_answers(QUESTIONS, {"q1": "  paris ", "q2": ["C", "a"], "q3": "words"})
    assert (result.score, result.max_score, result.percentage) == (3.0, 3.0, 100.0)


def test_partial_multi_select_scores_zero():
    result = score_answers(QUESTIONS, {"q1": "Lyon", "q2": ["a"]})
    assert result.score == 0
    assert result.percentage == 0.0


def test_ungradable_exam_has_no_percentage():
    result = score_answers([{"id": "essay"}], {"essay": "text"})
    assert result.max_score == 0
    assert result.percentage is None
