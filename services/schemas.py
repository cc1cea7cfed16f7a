# services/schemas.py
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class DifficultyDistribution(BaseModel):
    """Percent of questions per level; the three shares add up to 100 (+-1)."""

    easy: float = Field(default=0, ge=0, le=100)
    medium: float = Field(default=0, ge=0, le=100)
    hard: float = Field(default=0, ge=0, le=100)

    @model_validator(mode="after")
    def _sums_to_hundred(self):
        total = self.easy + self.medium + self.hard
        if abs(total - 100) > 1:
            raise ValueError(f"difficulty distribution must sum to 100, got {total:g}")
        return self

    @classmethod
    def from_level(cls, level: "Difficulty") -> "DifficultyDistribution":
        level = Difficulty(level)
        return cls(**{d.value: (100 if d is level else 0) for d in Difficulty})

    def as_dict(self) -> Dict[str, float]:
        return {"easy": self.easy, "medium": self.medium, "hard": self.hard}


def _stringify(value):
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class QuizQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    question: str = Field(min_length=1)
    options: List[str]
    correct_answer: str = Field(alias="correctAnswer")
    explanation: str = ""
    difficulty: Difficulty = Difficulty.MEDIUM
    category: str = "general"

    @field_validator("question")
    @classmethod
    def _question_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("question must not be empty")
        return v

    @model_validator(mode="after")
    def _answer_is_an_option(self):
        if len(self.options) != 4:
            raise ValueError(f"expected exactly 4 options, got {len(self.options)}")
        if len(set(self.options)) != 4:
            raise ValueError("options must be distinct")
        if self.correct_answer not in self.options:
            raise ValueError("correct answer is not among the options")
        return self

    def to_public(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class RawQuestionCandidate(BaseModel):
    """A question as a provider emitted it; every field may be missing."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    question: Optional[str] = None
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = Field(default=None, alias="correctAnswer")
    explanation: Optional[str] = None
    difficulty: Optional[str] = None
    category: Optional[str] = None

    @field_validator("id", "question", "correct_answer", "explanation", "difficulty", "category", mode="before")
    @classmethod
    def _scalars_to_text(cls, v):
        return _stringify(v)

    @field_validator("options", mode="before")
    @classmethod
    def _options_to_text(cls, v):
        if isinstance(v, (list, tuple)):
            return [_stringify(o) for o in v]
        return v


class ParsedQuiz(BaseModel):
    questions: List[RawQuestionCandidate]
    metadata: Dict[str, Any] = Field(default_factory=dict)


class QuizRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    document_text: Optional[str] = Field(default=None, alias="documentText")
    document_id: Optional[str] = Field(default=None, alias="documentId")
    number_of_questions: int = Field(default=5, alias="numberOfQuestions")
    difficulty: Optional[str] = None
    difficulty_distribution: Optional[Dict[str, float]] = Field(default=None, alias="difficultyDistribution")
    additional_instructions: str = Field(default="", alias="additionalInstructions")
    provider: Optional[str] = None
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = Field(default=None, alias="maxTokens")

    @field_validator("number_of_questions", mode="before")
    @classmethod
    def _clamp_count(cls, v):
        if v in (None, ""):
            return 5
        return min(max(1, int(v)), 20)

    @field_validator("additional_instructions", mode="before")
    @classmethod
    def _instructions(cls, v):
        return v or ""


class QuizRecord(BaseModel):
    id: str
    title: str
    provider: Optional[str] = None
    document_id: Optional[str] = None
    created_at: Optional[datetime] = None
    questions: List[QuizQuestion]

    def to_public(self) -> Dict[str, Any]:
        return {
            "quizId": self.id,
            "title": self.title,
            "provider": self.provider,
            "questions": [q.to_public() for q in self.questions],
        }
