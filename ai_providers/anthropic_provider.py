# ai_providers/anthropic_provider.py
import logging
import requests

from errors import ProviderRequestError
from .base import AIProvider, ProviderOptions, ProviderType
from .http_chat import error_detail, post_json
from .prompts import SYSTEM_QUIZ_JSON, build_json_prompt

logger = logging.getLogger(__name__)

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(AIProvider):
    provider_type = ProviderType.ANTHROPIC
    display_name = "Anthropic"

    def __init__(self, api_key: str = None, model: str = "claude-3-sonnet-20240229",
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
        payload = {
            "model": options.model or self.model,
            "max_tokens": options.max_tokens,
            "temperature": options.temperature,
            "system": SYSTEM_QUIZ_JSON,
            "messages": [{
                "role": "user",
                "content": build_json_prompt(content, number_of_questions, difficulty_distribution,
                                             additional_instructions, self.max_content_chars),
            }],
        }
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }
        try:
            data = post_json(ANTHROPIC_URL, payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Anthropic API error: {error_detail(e)}")
            raise ProviderRequestError(f"Failed to generate quiz with Anthropic: {error_detail(e)}") from e

        # first text block of the reply
        for block in data.get("content") or []:
            if block.get("type") == "text" and block.get("text"):
                return block["text"]
        raise ProviderRequestError("Failed to generate quiz with Anthropic: no text in response")
