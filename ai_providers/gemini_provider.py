# ai_providers/gemini_provider.py
import logging
import requests

from errors import ProviderRequestError
from .base import AIProvider, ProviderOptions, ProviderType
from .http_chat import error_detail, post_json
from .prompts import SYSTEM_QUIZ_JSON, build_json_prompt

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class GeminiProvider(AIProvider):
    provider_type = ProviderType.GEMINI
    display_name = "Gemini"

    def __init__(self, api_key: str = None, model: str = "gemini-1.5-flash",
                 max_content_chars: int = 20000, timeout: float = 120):
        super().__init__(configured=bool(api_key))
        self.api_key = api_key
        self.model = model
        self.max_content_chars = max_content_chars
        self.timeout = timeout

    def generate_quiz(self, content, number_of_questions, difficulty_distribution,
                      additional_instructions="", options=None) -> str:
        self._ensure_available()
        options = options or ProviderOptions()
        prompt = SYSTEM_QUIZ_JSON + "\n\n" + build_json_prompt(
            content, number_of_questions, difficulty_distribution,
            additional_instructions, self.max_content_chars,
        )
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": options.temperature,
                "maxOutputTokens": options.max_tokens,
                "responseMimeType": "application/json",
            },
        }
        url = GEMINI_URL.format(model=options.model or self.model)
        try:
            data = post_json(url, payload, params={"key": self.api_key}, timeout=self.timeout)
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except requests.RequestException as e:
            logger.error(f"Gemini API error: {error_detail(e)}")
            raise ProviderRequestError(f"Failed to generate quiz with Gemini: {error_detail(e)}") from e
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected Gemini response: {e}")
            raise ProviderRequestError("Failed to generate quiz with Gemini: unexpected response shape") from e
