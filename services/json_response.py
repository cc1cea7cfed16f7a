# services/json_response.py
import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from errors import InvalidShape, MalformedResponse
from services.schemas import ParsedQuiz, RawQuestionCandidate

logger = logging.getLogger(__name__)

_OPEN_FENCE = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_CLOSE_FENCE = re.compile(r"\n?```\s*$")
_JSON_TAG_LINE = re.compile(r"^json[ \t]*\n", re.IGNORECASE)
# string literals are matched first so "http://..." inside a value survives
_COMMENTS = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)


def _strip_comments(text: str) -> str:
    return _COMMENTS.sub(lambda m: m.group(1) or "", text)


def clean_json_text(raw_text: str) -> str:
    """Best-effort cleanup of a model reply that should contain one JSON object."""
    t = (raw_text or "").strip()
    t = _OPEN_FENCE.sub("", t, count=1)
    t = _CLOSE_FENCE.sub("", t, count=1)
    t = _JSON_TAG_LINE.sub("", t.strip(), count=1)

    start, end = t.find("{"), t.rfind("}")
    if start != -1 and end > start:
        t = t[start:end + 1]

    return _strip_comments(t).strip()


def _present(value: Any) -> bool:
    return value is not None and value != ""


def parse_and_validate(raw_text: str) -> ParsedQuiz:
    """Parse a provider reply and enforce the {questions, metadata} schema.

    Strict: the first bad question fails the whole batch.
    """
    cleaned = clean_json_text(raw_text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON response: {e}")
        raise MalformedResponse(cleaned, str(e)) from e

    if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
        raise InvalidShape("Invalid response format: missing or invalid questions array")
    if not isinstance(data.get("metadata"), dict):
        raise InvalidShape("Invalid response format: missing or invalid metadata")

    candidates = []
    for i, q in enumerate(data["questions"]):
        n = i + 1
        if (not isinstance(q, dict) or not _present(q.get("question"))
                or not isinstance(q.get("options"), list) or not _present(q.get("correctAnswer"))):
            raise InvalidShape(f"Question {n} is missing required fields")
        if len(q["options"]) != 4:
            raise InvalidShape(f"Question {n} must have exactly 4 options")
        try:
            c = RawQuestionCandidate.model_validate(q)
        except ValidationError as e:
            raise InvalidShape(f"Question {n} has invalid field types: {e.error_count()} error(s)") from e
        # compared as text, 4 and 4.0 are different options
        if len(set(c.options)) != 4:
            raise InvalidShape(f"Question {n} options must be distinct")
        if c.correct_answer not in c.options:
            raise InvalidShape(f"Question {n} correct answer is not among the options")
        candidates.append(c)

    return ParsedQuiz(questions=candidates, metadata=data["metadata"])
