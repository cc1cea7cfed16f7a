# ai_providers/deepseek_provider.py
import logging
import requests

from errors import ProviderRequestError
from .base import AIProvider, ProviderOptions, ProviderType
from .http_chat import error_detail, post_chat_completion
from .prompts import SYSTEM_QUIZ_JSON, build_json_prompt

logger = logging.getLogger(__name__)

DEEPSEEK_URL = "https://api.deepseek.com/v1/chat/completions"


class DeepseekProvider(AIProvider):
    provider_type = ProviderType.DEEPSEEK
    display_name = "DeepSeek"

    # smaller context window than the other vendors
    def __init__(self, api_key: str = None, model: str = "deepseek-chat",
                 max_content_chars: int = 12000, timeout: float = 120):
        super().__init__(configured=bool(api_key))
        self.api_key = api_key
        self.model = model
        self.max_content_chars = max_content_chars
        self.timeout = timeout

    def generate_quiz(self, content, number_of_questions, difficulty_distribution,
                      additional_instructions="", options=None) -> str:
        self._ensure_available()
        options = options or ProviderOptions()
        payload = {
            "model": options.model or self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_QUIZ_JSON},
                {"role": "user", "content": build_json_prompt(
                    content, number_of_questions, difficulty_distribution,
                    additional_instructions, self.max_content_chars)},
            ],
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
            "response_format": {"type": "json_object"},
        }
        try:
            return post_chat_completion(DEEPSEEK_URL, self.api_key, payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"DeepSeek API error: {error_detail(e)}")
            raise ProviderRequestError(f"Failed to generate quiz with DeepSeek: {error_detail(e)}") from e
