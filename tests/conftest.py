import json

import pytest

from ai_providers.base import AIProvider, ProviderType
from ai_providers.registry import ProviderSelectionPolicy
from app import create_app
from config import Settings
from models import init_db
from services.quiz_store import QuizStore


def make_question(n, answer_index=0, **extra):
    options = [f"Option {n}{c}" for c in "ABCD"]
    q = {
        "id": str(n),
        "question": f"Question number {n}?",
        "options": options,
        "correctAnswer": options[answer_index],
        "explanation": f"Because {n}.",
        "difficulty": "easy",
    }
    q.update(extra)
    return q


def quiz_json(questions, metadata=None):
    return json.dumps({
        "questions": questions,
        "metadata": metadata if metadata is not None else {
            "title": "Sample Quiz",
            "description": "Generated for tests",
            "difficultyDistribution": {"easy": 100, "medium": 0, "hard": 0},
            "numberOfQuestions": len(questions),
        },
    })


SAMPLE_TABLE = (
    "| Question | Option A | Option B | Option C | Option D | Correct Answer | Explanation | Difficulty |\n"
    "|----------|----------|----------|----------|----------|----------------|-------------|------------|\n"
    "| What is the capital of France? | Berlin | Paris | Rome | Madrid | Paris | Paris is the capital. | easy |\n"
    "| What is 3 x 3? | 6 | 9 | 12 | 33 | 9 | Multiplication. | Intermediate |\n"
)


class FakeProvider(AIProvider):
    """Adapter double returning a canned reply and recording its calls."""

    def __init__(self, provider_type, available=True, reply="", response_format="json"):
        self.provider_type = ProviderType(provider_type)
        self.response_format = response_format
        self._available = available
        self.reply = reply
        self.calls = []

    def generate_quiz(self, content, number_of_questions, difficulty_distribution,
                      additional_instructions="", options=None):
        self._ensure_available()
        self.calls.append({
            "content": content,
            "n": number_of_questions,
            "distribution": difficulty_distribution,
            "instructions": additional_instructions,
            "options": options,
        })
        return self.reply


@pytest.fixture
def json_provider():
    return FakeProvider("openai", reply=quiz_json([make_question(1), make_question(2, 3)]))


@pytest.fixture
def table_provider():
    return FakeProvider("groq", reply=SAMPLE_TABLE, response_format="markdown")


@pytest.fixture
def policy(json_provider, table_provider):
    return ProviderSelectionPolicy([json_provider, table_provider])


@pytest.fixture
def settings(tmp_path):
    return Settings({
        "RUNTIME_DIR": str(tmp_path / "runtime"),
        "DATABASE_URL": f"sqlite:///{tmp_path / 'test.db'}",
        "LOG_LEVEL": "DEBUG",
    })


@pytest.fixture
def session_factory(tmp_path):
    return init_db(f"sqlite:///{tmp_path / 'store.db'}")


@pytest.fixture
def store(session_factory):
    return QuizStore(session_factory)


@pytest.fixture
def app(settings, policy):
    app = create_app(settings, policy=policy)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
