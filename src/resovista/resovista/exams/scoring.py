"""Auto-grading of objective questions.

A question is gradable when it has a ``correctAnswer``; it is worth its
``marks`` (default 1). Text answers compare case- and whitespace-insensitively,
list answers (multi-select) compare as sets.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ScoreResult:
    score: float
    max_score: float
    percentage: Optional[float]


def question_id(question: Mapping[str, Any], index: int) -> str:
    qid = question.get("id")
    return str(qid) if qid is not None else str(index)


def normalize_answers(answers: Any, questions: Sequence[Mapping[str, Any]]) -> dict:
    """Accept ``{questionId: answer}``, ``[{questionId, answer}]`` or a positional list."""
    if answers is None:
        return {}
    if isinstance(answers, Mapping):
        return {str(k): v for k, v in answers.items()}
    if isinstance(answers, list):
        out: dict = {}
        for i, item in enumerate(answers):
            if isinstance(item, Mapping) and "questionId" in item:
                out[str(item["questionId"])] = item.get("answer")
            elif i < len(questions):
                out[question_id(questions[i], i)] = item
            else:
                out[str(i)] = item
        return out
    raise ValidationError("answers must be an object or a list")


def _norm(value: Any) -> str:
    return " ".join(str(value).split()).casefold()


def _matches(answer: Any, correct: Any) -> bool:
    if answer is None:
        return False
    if isinstance(correct, list):
        given = answer if isinstance(answer, list) else [answer]
        return {_norm(v) for v in given} == {_norm(v) for v in correct}
    if isinstance(answer, list):
        return False
    return _norm(answer) == _norm(correct)


def _marks(question: Mapping[str, Any]) -> float:
    value = question.get("marks", 1)
    try:
        marks = float(value)
    except (TypeError, ValueError):
        return 1.0
    return marks if marks >= 0 else 0.0


def score_answers(questions: Sequence[Mapping[str, Any]], answers: Mapping[str, Any]) -> ScoreResult:
    score = 0.0
    max_score = 0.0
    for i, q in enumerate(questions):
        if not isinstance(q, Mapping) or q.get("correctAnswer") is None:
            continue
        marks = _marks(q)
        max_score += marks
        if _matches(answers.get(question_id(q, i)), q["correctAnswer"]):
            score += marks

    percentage = round(score / max_score * 100, 2) if max_score else None
    return ScoreResult(score=score, max_score=max_score, percentage=percentage)
