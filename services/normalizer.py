# services/normalizer.py
import logging
from typing import Iterable, List, Mapping, Union

from pydantic import ValidationError

from errors import InvalidShape
from services.difficulty import normalize_difficulty
from services.schemas import QuizQuestion, RawQuestionCandidate

logger = logging.getLogger(__name__)

Candidate = Union[RawQuestionCandidate, QuizQuestion, Mapping]


def _as_candidate(raw: Candidate) -> RawQuestionCandidate:
    if isinstance(raw, RawQuestionCandidate):
        return raw
    if isinstance(raw, QuizQuestion):
        return RawQuestionCandidate.model_validate(raw.model_dump(mode="json", by_alias=True))
    return RawQuestionCandidate.model_validate(dict(raw))


def _assign_ids(candidates: List[RawQuestionCandidate]) -> List[str]:
    """Provided ids must be unique; missing ones take the 1-based position."""
    provided = [c.id if c.id and c.id.strip() else None for c in candidates]
    seen = set()
    for i, qid in enumerate(provided):
        if qid is None:
            continue
        if qid in seen:
            raise InvalidShape(f'Question {i + 1} has a duplicate id "{qid}"')
        seen.add(qid)

    ids = []
    for i, qid in enumerate(provided):
        if qid is None:
            qid = str(i + 1)
            k = 2
            while qid in seen:
                qid = f"{i + 1}-{k}"
                k += 1
            seen.add(qid)
        ids.append(qid)
    return ids


def normalize(raw_questions: Iterable[Candidate]) -> List[QuizQuestion]:
    """Fill defaults and unify shape; option/answer checks belong to the parsers."""
    candidates = []
    for i, raw in enumerate(raw_questions):
        try:
            candidates.append(_as_candidate(raw))
        except ValidationError as e:
            raise InvalidShape(f"Question {i + 1} is not a valid quiz question: {e.errors()[0]['msg']}") from e
        except (TypeError, ValueError) as e:
            raise InvalidShape(f"Question {i + 1} is not a valid quiz question: {e}") from e

    ids = _assign_ids(candidates)
    out = []
    for i, c in enumerate(candidates):
        try:
            out.append(QuizQuestion(
                id=ids[i],
                question=c.question or "",
                options=list(c.options or []),
                correct_answer=c.correct_answer or "",
                explanation=c.explanation or "",
                difficulty=normalize_difficulty(c.difficulty),
                category=c.category or "general",
            ))
        except ValidationError as e:
            raise InvalidShape(f"Question {i + 1} is not a valid quiz question: {e.errors()[0]['msg']}") from e
        except (TypeError, ValueError) as e:
            raise InvalidShape(f"Question {i + 1} is not a valid quiz question: {e}") from e
    return out
