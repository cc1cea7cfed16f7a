import os
import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text, create_engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

Base = declarative_base()


def _uuid():
    return str(uuid.uuid4())


class Document(Base):
    __tablename__ = 'documents'
    id = Column(String(36), primary_key=True, default=_uuid)
    filename = Column(String(255), nullable=False)
    stored_name = Column(String(255), nullable=False)  # "<id><ext>" under UPLOADS_DIR
    size_kb = Column(Integer, default=0)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    quizzes = relationship('Quiz', back_populates='document')

# ===== QUIZ =====

class Quiz(Base):
    __tablename__ = 'quizzes'
    id = Column(String(36), primary_key=True, default=_uuid)
    document_id = Column(String(36), ForeignKey('documents.id'), nullable=True)
    title = Column(String(255), default='Generated Quiz')
    provider = Column(String(32))
    total_questions = Column(Integer, default=0)
    meta = Column(JSON, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)

    document = relationship('Document', back_populates='quizzes')
    questions = relationship('Question', back_populates='quiz', cascade='all,delete-orphan',
                             order_by='Question.position')

class Question(Base):
    __tablename__ = 'questions'
    id = Column(Integer, primary_key=True)
    quiz_id = Column(String(36), ForeignKey('quizzes.id'), nullable=False)
    position = Column(Integer, nullable=False)
    question_key = Column(String(64), nullable=False)  # QuizQuestion.id within the batch
    prompt = Column(Text, nullable=False)
    options = Column(JSON, nullable=False)             # four option strings, display order A-D
    correct_answer = Column(Text, nullable=False)
    explanation = Column(Text, default='')
    difficulty = Column(String(16), default='medium')  # easy|medium|hard
    category = Column(String(64), default='general')

    quiz = relationship('Quiz', back_populates='questions')


def init_db(database_url: str):
    """Create tables and return a session factory."""
    if database_url.startswith("sqlite:///"):
        folder = os.path.dirname(database_url[len("sqlite:///"):])
        if folder:
            os.makedirs(folder, exist_ok=True)
    engine = create_engine(database_url, future=True)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
