import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from errors import ProviderUnavailable

logger = logging.getLogger(__name__)


class ProviderType(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    DEEPSEEK = "deepseek"
    GROK = "grok"
    GROQ = "groq"
    LOCAL = "local"


class ProviderOptions(BaseModel):
    model: Optional[str] = None
    temperature: float = 0.7
    max_tokens: int = 4000


class AIProvider(ABC):
    provider_type: ProviderType
    # "json" replies go through the JSON validator, "markdown" through the table parser
    response_format = "json"
    display_name = "AI"

    def __init__(self, configured: bool):
        self._available = bool(configured)
        if not self._available:
            logger.warning(f"{self.display_name} API key not found. Some features will be unavailable.")

    def is_available(self) -> bool:
        return self._available

    def _ensure_available(self):
        if not self._available:
            raise ProviderUnavailable(self.provider_type.value)

    @abstractmethod
    def generate_quiz(self, content: str, number_of_questions: int, difficulty_distribution,
                      additional_instructions: str = "", options: Optional[ProviderOptions] = None) -> str:
        """
        Return the raw model reply: a JSON object
          {questions: [{id, question, options[4], correctAnswer, explanation, difficulty}], metadata: {...}}
        or, for response_format == 'markdown', a table with columns
          Question | Option A..D | Correct Answer | Explanation | Difficulty
        """

    def __repr__(self):
        return f"<{self.__class__.__name__} available={self._available}>"
