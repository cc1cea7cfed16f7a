# services/exporter.py
import json
from string import ascii_uppercase
from typing import List, Tuple

from markupsafe import escape

from errors import InvalidRequest
from services.schemas import QuizQuestion

EXPORT_FORMATS = {
    "json": ("application/json", "json"),
    "text": ("text/plain", "txt"),
    "html": ("text/html", "html"),
}

HTML_HEAD = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
  <style>
    body {{ font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }}
    h1 {{ text-align: center; }}
    .question {{ margin-bottom: 20px; padding: 15px; border: 1px solid #ddd; border-radius: 5px; }}
    .options {{ margin-left: 20px; }}
    .explanation {{ margin-top: 10px; padding: 10px; background-color: #f5f5f5; border-radius: 5px; }}
    .correct {{ color: green; font-weight: bold; }}
  </style>
</head>
<body>
  <h1>{title}</h1>
"""


def as_text(title: str, questions: List[QuizQuestion]) -> str:
    out = f"{title}\n\n"
    for n, q in enumerate(questions, 1):
        out += f"Question {n}: {q.question}\n"
        for label, option in zip(ascii_uppercase, q.options):
            out += f"{label}) {option}\n"
        out += f"\nCorrect Answer: {q.correct_answer}\n"
        out += f"Explanation: {q.explanation}\n\n"
    return out


def as_html(title: str, questions: List[QuizQuestion]) -> str:
    html = HTML_HEAD.format(title=escape(title))
    for n, q in enumerate(questions, 1):
        html += f'  <div class="question">\n    <h3>Question {n}: {escape(q.question)}</h3>\n    <div class="options">\n'
        for label, option in zip(ascii_uppercase, q.options):
            if option == q.correct_answer:
                html += f'      <div class="correct">{label}) {escape(option)} &#10003;</div>\n'
            else:
                html += f'      <div>{label}) {escape(option)}</div>\n'
        html += (
            "    </div>\n"
            f'    <div class="explanation">\n      <strong>Explanation:</strong> {escape(q.explanation)}\n    </div>\n'
            "  </div>\n"
        )
    return html + "</body>\n</html>"


def export_quiz(fmt: str, questions: List[QuizQuestion], title: str = None) -> Tuple[str, str, str]:
    """Render a quiz for download; returns (body, mime type, file extension)."""
    fmt = (fmt or "json").lower()
    if fmt not in EXPORT_FORMATS:
        raise InvalidRequest(f"Invalid format. Supported formats: {', '.join(EXPORT_FORMATS)}")
    title = title or "Generated Quiz"

    if fmt == "json":
        body = json.dumps([q.to_public() for q in questions], indent=2, ensure_ascii=False)
    elif fmt == "text":
        body = as_text(title, questions)
    else:
        body = as_html(title, questions)
    mimetype, ext = EXPORT_FORMATS[fmt]
    return body, mimetype, ext
