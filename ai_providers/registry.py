# ai_providers/registry.py
import logging
from typing import Dict, Iterable, Optional

from errors import NoProviderAvailable, ProviderUnavailable, UnsupportedProvider
from .base import AIProvider, ProviderType

logger = logging.getLogger(__name__)


class ProviderSelectionPolicy:
    """Picks the adapter whose raw output feeds the parsers.

    Adapters are kept in registration order; that order is the fallback
    priority when the caller does not ask for a specific provider. An
    explicitly requested provider is never swapped for another one.
    """

    def __init__(self, providers: Iterable[AIProvider]):
        self._providers: Dict[ProviderType, AIProvider] = {}
        for p in providers:
            self._providers[ProviderType(p.provider_type)] = p

    def _lookup(self, requested_type) -> AIProvider:
        try:
            key = ProviderType(str(getattr(requested_type, "value", requested_type)).strip().lower())
        except ValueError:
            raise UnsupportedProvider(requested_type)
        provider = self._providers.get(key)
        if provider is None:
            raise UnsupportedProvider(key.value)
        return provider

    def select(self, requested_type=None) -> AIProvider:
        if requested_type in (None, ""):
            provider = self.first_available()
            if provider is None:
                raise NoProviderAvailable()
            return provider

        provider = self._lookup(requested_type)
        if not provider.is_available():
            raise ProviderUnavailable(provider.provider_type.value)
        return provider

    def first_available(self) -> Optional[AIProvider]:
        for provider in self._providers.values():
            if provider.is_available():
                return provider
        return None

    def availability(self) -> Dict[str, bool]:
        return {t.value: p.is_available() for t, p in self._providers.items()}

    @property
    def registered(self):
        return list(self._providers)


def build_policy(settings) -> ProviderSelectionPolicy:
    """Instantiate the configured adapters in `settings.provider_order`."""
    from .anthropic_provider import AnthropicProvider
    from .deepseek_provider import DeepseekProvider
    from .gemini_provider import GeminiProvider
    from .grok_provider import GrokProvider
    from .groq_provider import GroqProvider
    from .local_stub import LocalStub
    from .openai_provider import OpenAIProvider

    limit = settings.max_content_chars
    timeout = settings.request_timeout
    factories = {
        "openai": lambda: OpenAIProvider(settings.openai_api_key, settings.openai_base_url,
                                         settings.openai_model, limit),
        "anthropic": lambda: AnthropicProvider(settings.anthropic_api_key, settings.anthropic_model,
                                               limit, timeout),
        "gemini": lambda: GeminiProvider(settings.gemini_api_key, settings.gemini_model, limit, timeout),
        "deepseek": lambda: DeepseekProvider(settings.deepseek_api_key, settings.deepseek_model,
                                             min(limit, 12000), timeout),
        "grok": lambda: GrokProvider(settings.grok_api_key, settings.grok_base_url,
                                     settings.grok_model, limit, timeout),
        "groq": lambda: GroqProvider(settings.groq_api_key, settings.groq_model,
                                     settings.groq_fallback_model, min(limit, 8000)),
        "local": lambda: LocalStub(enabled=settings.enable_local_stub),
    }

    providers = []
    for name in settings.provider_order:
        factory = factories.get(name)
        if factory is None:
            logger.warning(f"Unknown provider '{name}' in PROVIDER_ORDER, ignoring")
            continue
        providers.append(factory())

    policy = ProviderSelectionPolicy(providers)
    logger.info(f"AI providers: {policy.availability()}")
    return policy
