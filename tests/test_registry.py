import pytest

from ai_providers.base import ProviderType
from ai_providers.registry import ProviderSelectionPolicy, build_policy
from config import Settings
from conftest import FakeProvider
from errors import NoProviderAvailable, ProviderUnavailable, UnsupportedProvider


def test_explicit_unavailable_provider_does_not_fall_back():
    openai = FakeProvider("openai", available=True)
    anthropic = FakeProvider("anthropic", available=False)
    policy = ProviderSelectionPolicy([openai, anthropic])

    with pytest.raises(ProviderUnavailable) as exc:
        policy.select("anthropic")
    assert exc.value.provider_type == "anthropic"


def test_explicit_available_provider_is_returned():
    gemini = FakeProvider("gemini")
    policy = ProviderSelectionPolicy([FakeProvider("openai"), gemini])

    assert policy.select("gemini") is gemini
    assert policy.select(ProviderType.GEMINI) is gemini
    assert policy.select(" Gemini ") is gemini


def test_unregistered_or_unknown_type_is_unsupported():
    policy = ProviderSelectionPolicy([FakeProvider("openai")])

    with pytest.raises(UnsupportedProvider):
        policy.select("grok")
    with pytest.raises(UnsupportedProvider):
        policy.select("skynet")


def test_first_available_follows_registration_order():
    a = FakeProvider("openai", available=False)
    b = FakeProvider("anthropic", available=True)
    c = FakeProvider("gemini", available=True)
    policy = ProviderSelectionPolicy([a, b, c])

    assert policy.first_available() is b
    assert policy.select() is b
    assert policy.select("") is b


def test_nothing_available():
    policy = ProviderSelectionPolicy([FakeProvider("openai", available=False)])

    assert policy.first_available() is None
    with pytest.raises(NoProviderAvailable):
        policy.select()


def test_empty_registry():
    policy = ProviderSelectionPolicy([])
    assert policy.first_available() is None
    assert policy.availability() == {}


def test_availability_report_keeps_order():
    policy = ProviderSelectionPolicy([
        FakeProvider("deepseek", available=False),
        FakeProvider("openai", available=True),
    ])
    assert list(policy.availability().items()) == [("deepseek", False), ("openai", True)]


def test_availability_is_fixed_at_construction(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    policy = build_policy(Settings({"ANTHROPIC_API_KEY": "sk-ant", "PROVIDER_ORDER": "anthropic"}))

    monkeypatch.setenv("ANTHROPIC_API_KEY", "")
    assert policy.select("anthropic").is_available()


def test_build_policy_uses_configured_order_and_credentials():
    settings = Settings({
        "GEMINI_API_KEY": "g-key",
        "DEEPSEEK_API_KEY": "d-key",
        "PROVIDER_ORDER": "anthropic, deepseek ,gemini,bogus",
    })
    policy = build_policy(settings)

    assert policy.registered == [ProviderType.ANTHROPIC, ProviderType.DEEPSEEK, ProviderType.GEMINI]
    assert policy.availability() == {"anthropic": False, "deepseek": True, "gemini": True}
    assert policy.first_available().provider_type is ProviderType.DEEPSEEK


def test_default_order_without_credentials():
    policy = build_policy(Settings({}))

    assert [t.value for t in policy.registered] == [
        "openai", "anthropic", "gemini", "deepseek", "grok", "groq", "local",
    ]
    assert policy.first_available() is None


def test_local_stub_is_opt_in():
    policy = build_policy(Settings({"ENABLE_LOCAL_STUB": "1"}))
    assert policy.select().provider_type is ProviderType.LOCAL
