# ai_providers/openai_provider.py
import logging
from openai import OpenAI

from errors import ProviderRequestError
from .base import AIProvider, ProviderOptions, ProviderType
from .prompts import QUIZ_JSON_SCHEMA, SYSTEM_QUIZ_JSON, build_json_prompt

logger = logging.getLogger(__name__)


class OpenAIProvider(AIProvider):
    provider_type = ProviderType.OPENAI
    display_name = "OpenAI"

    def __init__(self, api_key: str = None, base_url: str = None,
                 model: str = "gpt-4-turbo-preview", max_content_chars: int = 20000, client=None):
        super().__init__(configured=bool(api_key) or client is not None)
        self.model = model
        self.max_content_chars = max_content_chars
        self.client = client
        if self.client is None and api_key:
            self.client = OpenAI(api_key=api_key, base_url=base_url)

    def generate_quiz(self, content, number_of_questions, difficulty_distribution,
                      additional_instructions="", options=None) -> str:
        self._ensure_available()
        options = options or ProviderOptions()
        prompt = build_json_prompt(content, number_of_questions, difficulty_distribution,
                                   additional_instructions, self.max_content_chars)
        try:
            resp = self.client.chat.completions.create(
                model=options.model or self.model,
                messages=[{"role": "system", "content": SYSTEM_QUIZ_JSON},
                          {"role": "user", "content": prompt}],
                temperature=options.temperature,
                max_tokens=options.max_tokens,
                response_format={
                    "type": "json_schema",
                    "json_schema": {"name": "quiz", "schema": QUIZ_JSON_SCHEMA},
                },
            )
            if not resp.choices or not resp.choices[0].message:
                raise ValueError("Incomplete response received from OpenAI")
            return resp.choices[0].message.content or ""
        except Exception as e:
            logger.error(f"OpenAI API error: {e}", exc_info=True)
            raise ProviderRequestError(f"Failed to generate quiz with OpenAI: {e}") from e
