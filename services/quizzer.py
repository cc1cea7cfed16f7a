# services/quizzer.py
import logging
from typing import Any, Dict, List, Mapping, Tuple

from ai_providers.base import ProviderOptions
from errors import InvalidRequest, InvalidShape
from services.difficulty import resolve_distribution
from services.json_response import parse_and_validate
from services.markdown_table import parse_quiz_table
from services.normalizer import normalize
from services.schemas import QuizQuestion, QuizRecord, QuizRequest

logger = logging.getLogger(__name__)


def parse_provider_output(raw: str, response_format: str = "json") -> Tuple[List[QuizQuestion], Dict[str, Any]]:
    """Raw adapter reply -> validated questions (+ provider metadata, JSON only).

    The JSON path rejects the whole batch on the first bad question; the
    table path drops bad rows and keeps the rest.
    """
    if response_format == "markdown":
        candidates, metadata = parse_quiz_table(raw), {}
    else:
        parsed = parse_and_validate(raw)
        candidates, metadata = parsed.questions, parsed.metadata
    return normalize(candidates), metadata


def _provider_options(req: QuizRequest) -> ProviderOptions:
    opts = {"model": req.model}
    if req.temperature is not None:
        opts["temperature"] = req.temperature
    if req.max_tokens:
        opts["max_tokens"] = req.max_tokens
    return ProviderOptions(**opts)


#main entry: pick a provider, ask it for a quiz, validate and store the batch
def generate_quiz(policy, store, req: QuizRequest, content: str, document_id: str = None) -> QuizRecord:
    if not content or not content.strip():
        raise InvalidRequest("Cannot generate quiz from empty content")

    distribution = resolve_distribution(req.difficulty, req.difficulty_distribution)
    provider = policy.select(req.provider)
    ptype = provider.provider_type.value
    logger.info(f"Generating {req.number_of_questions} questions with {ptype} ({distribution.as_dict()})")

    raw = provider.generate_quiz(
        content,
        req.number_of_questions,
        distribution,
        req.additional_instructions,
        _provider_options(req),
    )
    questions, metadata = parse_provider_output(raw, provider.response_format)
    if not questions:
        raise InvalidShape("Provider returned no valid questions")
    if len(questions) != req.number_of_questions:
        logger.warning(f"{ptype} returned {len(questions)} questions, {req.number_of_questions} requested")

    title = str(metadata.get("title") or "").strip()[:255] or None
    return store.create(questions, title=title, provider=ptype, document_id=document_id, metadata=metadata)


def grade_answers(questions: List[QuizQuestion], answers: Mapping[str, Any]) -> Dict[str, Any]:
    """Score a submission; answers map question id -> chosen option text."""
    answers = answers or {}
    results = []
    correct = 0
    for q in questions:
        chosen = answers.get(q.id)
        chosen = chosen.strip() if isinstance(chosen, str) else None
        ok = chosen is not None and chosen == q.correct_answer.strip()
        if ok:
            correct += 1
        results.append({
            "id": q.id,
            "selected": chosen,
            "correct": ok,
            "correctAnswer": q.correct_answer,
            "explanation": q.explanation,
        })

    percent = int(round(100 * correct / max(1, len(questions))))
    return {"score": correct, "total": len(questions), "percent": percent, "results": results}
