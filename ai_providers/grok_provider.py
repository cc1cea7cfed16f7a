# ai_providers/grok_provider.py
import logging
import requests

from errors import ProviderRequestError
from .base import AIProvider, ProviderOptions, ProviderType
from .http_chat import error_detail, post_chat_completion
from .prompts import SYSTEM_QUIZ_JSON, build_json_prompt

logger = logging.getLogger(__name__)


class GrokProvider(AIProvider):
    provider_type = ProviderType.GROK
    display_name = "Grok"

    def __init__(self, api_key: str = None, base_url: str = "https://api.x.ai/v1",
                 model: str = "grok-2-latest", max_content_chars: int = 20000, timeout: float = 120):
        super().__init__(configured=bool(api_key))
        self.api_key = api_key
        self.base_url = (base_url or "https://api.x.ai/v1").rstrip("/")
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
            "model": options.model or self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
            "response_format": {"type": "json_object"},
        }
        try:
            text = post_chat_completion(f"{self.base_url}/chat/completions", self.api_key,
                                        payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Grok API error: {error_detail(e)}")
            raise ProviderRequestError(f"Failed to generate quiz with Grok: {error_detail(e)}") from e
        return text.strip()
