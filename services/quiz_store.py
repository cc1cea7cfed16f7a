# services/quiz_store.py
import logging
from typing import Any, Dict, Iterable, Optional

from models import Question, Quiz
from services.schemas import QuizQuestion, QuizRecord

logger = logging.getLogger(__name__)


class QuizStore:
    """Generated quiz batches keyed by a generated id.

    A batch is written once by `create` and never updated; `evict` is the
    only way it goes away.
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def create(self, questions: Iterable[QuizQuestion], *, title: str = None, provider: str = None,
               document_id: str = None, metadata: Dict[str, Any] = None) -> QuizRecord:
        questions = list(questions)
        with self._session_factory() as s:
            quiz = Quiz(document_id=document_id, provider=provider,
                        total_questions=len(questions), meta=dict(metadata or {}))
            s.add(quiz)
            s.flush()
            quiz.title = title or f"Quiz {quiz.id}"
            for pos, q in enumerate(questions):
                s.add(Question(
                    quiz_id=quiz.id,
                    position=pos,
                    question_key=q.id,
                    prompt=q.question,
                    options=list(q.options),
                    correct_answer=q.correct_answer,
                    explanation=q.explanation,
                    difficulty=q.difficulty.value,
                    category=q.category,
                ))
            s.commit()
            logger.info(f"Stored quiz {quiz.id} with {len(questions)} questions")
            return QuizRecord(id=quiz.id, title=quiz.title, provider=provider, document_id=document_id,
                              created_at=quiz.created_at, questions=questions)

    def get(self, quiz_id: str) -> Optional[QuizRecord]:
        with self._session_factory() as s:
            quiz = s.get(Quiz, quiz_id)
            if quiz is None:
                return None
            return QuizRecord(
                id=quiz.id,
                title=quiz.title,
                provider=quiz.provider,
                document_id=quiz.document_id,
                created_at=quiz.created_at,
                questions=[
                    QuizQuestion(
                        id=q.question_key,
                        question=q.prompt,
                        options=list(q.options),
                        correct_answer=q.correct_answer,
                        explanation=q.explanation or "",
                        difficulty=q.difficulty or "medium",
                        category=q.category or "general",
                    )
                    for q in quiz.questions
                ],
            )

    def evict(self, quiz_id: str) -> bool:
        with self._session_factory() as s:
            quiz = s.get(Quiz, quiz_id)
            if quiz is None:
                return False
            s.delete(quiz)
            s.commit()
            logger.info(f"Evicted quiz {quiz_id}")
            return True
