# services/markdown_table.py
"""Quiz questions from a markdown table.

Expected layout::

    | Question | Option A | Option B | Option C | Option D | Correct Answer | Explanation | Difficulty |
    |----------|----------|----------|----------|----------|----------------|-------------|------------|
    | What is...? | Answer A | Answer B | Answer C | Answer D | Answer A | Because... | easy |

Rows that cannot be turned into a valid question are dropped with a warning;
the rest of the table still comes back.
"""
import logging
from typing import Dict, List

from pydantic import ValidationError

from errors import InvalidShape, ParseError
from services.difficulty import normalize_difficulty
from services.schemas import QuizQuestion

logger = logging.getLogger(__name__)

EXPECTED_HEADERS = [
    "question", "option a", "option b", "option c", "option d",
    "correct answer", "explanation", "difficulty",
]
OPTION_HEADERS = EXPECTED_HEADERS[1:5]
MIN_ROW_CELLS = 6


def _table_lines(markdown_text: str) -> List[str]:
    lines = []
    in_table = False
    for line in (markdown_text or "").strip().split("\n"):
        t = line.strip()
        if t.startswith("|") and t.endswith("|"):
            in_table = True
            lines.append(t)
        elif in_table and t == "":
            break
    return lines


def _cells(line: str) -> List[str]:
    # drop the empty pieces before the leading and after the trailing pipe
    return [c.strip() for c in line.split("|")[1:-1]]


def _header_map(headers: List[str]) -> Dict[str, int]:
    """Column index per expected label.

    Exact labels win, then containment either way ("Correct Answer:" vs
    "correct answer", "Q" vs "question"), then the canonical position. A
    column is claimed by at most one label.
    """
    labels = [h.lower().strip() for h in headers]
    mapping: Dict[str, int] = {}
    taken = set()

    def claim(key, idx):
        mapping[key] = idx
        taken.add(idx)

    for key in EXPECTED_HEADERS:
        if key in labels and labels.index(key) not in taken:
            claim(key, labels.index(key))

    for key in EXPECTED_HEADERS:
        if key in mapping:
            continue
        for idx, label in enumerate(labels):
            if idx in taken or not label:
                continue
            if label in key or key in label:
                claim(key, idx)
                break

    for pos, key in enumerate(EXPECTED_HEADERS):
        if key not in mapping and pos < len(labels) and pos not in taken:
            claim(key, pos)
    return mapping


def _column(row: List[str], header_map: Dict[str, int], key: str, required: bool = True) -> str:
    idx = header_map.get(key)
    if idx is None or idx >= len(row):
        if required:
            raise InvalidShape(f'Column "{key}" not found in table')
        return ""
    return row[idx].strip()


def _match_option(answer: str, options: List[str]):
    if answer in options:
        return answer
    wanted = answer.strip().lower()
    for option in options:
        if option.strip().lower() == wanted:
            return option
    return None


def parse_quiz_table(markdown_text: str) -> List[QuizQuestion]:
    table = _table_lines(markdown_text)
    if len(table) < 3:
        raise ParseError(
            "Invalid table format: need at least header, separator, and one data row"
        )

    header_map = _header_map(_cells(table[0]))

    questions: List[QuizQuestion] = []
    for i in range(2, len(table)):
        row = _cells(table[i])
        if len(row) < MIN_ROW_CELLS:
            logger.debug(f"Skipping incomplete table row {i}: {len(row)} cells")
            continue

        qid = str(i - 1)
        try:
            options = [_column(row, header_map, key) for key in OPTION_HEADERS]
            answer = _column(row, header_map, "correct answer")
            matched = _match_option(answer, options)
            if matched is None:
                logger.warning(
                    f'Question {qid}: correct answer "{answer}" does not match any option, dropping row'
                )
                continue

            questions.append(QuizQuestion(
                id=qid,
                question=_column(row, header_map, "question"),
                options=options,
                correct_answer=matched,
                explanation=_column(row, header_map, "explanation", required=False),
                difficulty=normalize_difficulty(_column(row, header_map, "difficulty", required=False)),
                category="general",
            ))
        except (InvalidShape, ValidationError) as e:
            logger.warning(f"Error parsing question row {i}, dropping it: {e}")
            continue

    return questions
