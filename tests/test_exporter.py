import json

import pytest

from conftest import make_question
from errors import InvalidRequest
from services.exporter import export_quiz
from services.normalizer import normalize


@pytest.fixture
def questions():
    return normalize([
        make_question(1),
        make_question(2, 1, question="Is <b>bold</b> & safe?", explanation="Tags <i>escaped</i>."),
    ])


def test_json_export(questions):
    body, mimetype, ext = export_quiz("json", questions)

    assert mimetype == "application/json"
    assert ext == "json"
    data = json.loads(body)
    assert data[0]["correctAnswer"] == "Option 1A"
    assert data[1]["question"] == "Is <b>bold</b> & safe?"


def test_text_export(questions):
    body, mimetype, ext = export_quiz("TEXT", questions, title="Science")

    assert ext == "txt"
    assert mimetype.startswith("text/plain")
    assert body.startswith("Science\n\n")
    assert "Question 1: Question number 1?\nA) Option 1A\nB) Option 1B\nC) Option 1C\nD) Option 1D\n" in body
    assert "Correct Answer: Option 2B" in body


def test_html_export_escapes_and_marks_correct_option(questions):
    body, mimetype, ext = export_quiz("html", questions)

    assert ext == "html"
    assert "<title>Generated Quiz</title>" in body
    assert "Is &lt;b&gt;bold&lt;/b&gt; &amp; safe?" in body
    assert "<b>bold</b>" not in body
    assert '<div class="correct">B) Option 2B &#10003;</div>' in body
    assert "<div>A) Option 2A</div>" in body


def test_default_format_is_json(questions):
    assert export_quiz(None, questions)[2] == "json"


def test_unknown_format(questions):
    with pytest.raises(InvalidRequest, match="json, text, html"):
        export_quiz("pdf", questions)
