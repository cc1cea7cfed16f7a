# ai_providers/groq_provider.py
import logging, time
from groq import Groq
from groq import RateLimitError

from errors import ProviderRequestError
from .base import AIProvider, ProviderOptions, ProviderType
from .prompts import SYSTEM_QUIZ_TABLE, build_table_prompt

logger = logging.getLogger(__name__)


class GroqProvider(AIProvider):
    provider_type = ProviderType.GROQ
    response_format = "markdown"
    display_name = "Groq"

    def __init__(self, api_key: str = None, model: str = "llama-3.3-70b-versatile",
                 fallback_model: str = "llama-3.1-8b-instant", max_content_chars: int = 8000,
                 client=None):
        super().__init__(configured=bool(api_key) or client is not None)
        self.client = client
        if self.client is None and api_key:
            self.client = Groq(api_key=api_key)
        self.model = model
        self.fallback_model = fallback_model
        self.max_content_chars = max_content_chars

    # chat returns the model reply text
    def _chat(self, system: str, user: str, model: str, temperature: float, max_tokens: int,
              retries: int = 2) -> str:
        # retries - extra attempts when the API errors out
        model_to_use = model
        for i in range(retries + 1):
            try:
                resp = self.client.chat.completions.create(
                    model=model_to_use,
                    messages=[{"role": "system", "content": system},
                              {"role": "user", "content": user}],
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
                return resp.choices[0].message.content or ""
            except RateLimitError:
                if model_to_use != self.fallback_model:
                    logger.warning(f"Groq rate limit on {model_to_use}, switching to {self.fallback_model}")
                    model_to_use = self.fallback_model
                    continue
                if i == retries:
                    raise
                time.sleep(1.5 * (i + 1))
            except Exception:
                if i == retries:
                    raise
                time.sleep(0.8 * (i + 1))
        return ""

    def generate_quiz(self, content, number_of_questions, difficulty_distribution,
                      additional_instructions="", options=None) -> str:
        self._ensure_available()
        options = options or ProviderOptions(temperature=0.2)
        user = build_table_prompt(content, number_of_questions, difficulty_distribution,
                                  additional_instructions, self.max_content_chars)
        try:
            return self._chat(SYSTEM_QUIZ_TABLE, user, options.model or self.model,
                              options.temperature, options.max_tokens)
        except Exception as e:
            logger.error(f"Groq API error: {e}")
            raise ProviderRequestError(f"Failed to generate quiz with Groq: {e}") from e
