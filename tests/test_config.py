import pytest
from pydantic import ValidationError

from answer_router.core.config import DEFAULT_PROVIDER_ORDER, Settings
from answer_router.core.errors import CredentialMissingError
from answer_router.core.security import mask_key, require_api_key

ENV_VARS = (
    "PROVIDER_ORDER",
    "LLM_PROVIDER_ORDER",
    "GROQ_API_KEY",
    "TOGETHER_API_KEY",
    "HUGGINGFACE_API_KEY",
    "COHERE_API_KEY",
    "OPENROUTER_API_KEY",
    "PROVIDER_MATCH_STRICT",
    "ROUTER_DEADLINE_SECONDS",
    "LOG_LEVEL",
    "LOG_JSON",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = Settings.from_env()
    assert s.provider_order == DEFAULT_PROVIDER_ORDER
    assert s.order_tokens() == ["groq", "together", "huggingface", "cohere", "openrouter"]
    assert s.api_key_for("groq") == ""
    assert s.router_deadline_seconds == 0.0
    assert not s.provider_match_strict


def test_reads_keys_and_order(clean_env):
    clean_env.setenv("PROVIDER_ORDER", " Cohere , groq ,, ")
    clean_env.setenv("COHERE_API_KEY", "co-123")
    clean_env.setenv("PROVIDER_MATCH_STRICT", "true")
    clean_env.setenv("ROUTER_DEADLINE_SECONDS", "30")
    s = Settings.from_env()
    assert s.order_tokens() == ["cohere", "groq"]
    assert s.api_key_for("cohere") == "co-123"
    assert s.provider_match_strict
    assert s.router_deadline_seconds == 30.0


def test_legacy_order_variable(clean_env):
    clean_env.setenv("LLM_PROVIDER_ORDER", "openrouter")
    assert Settings.from_env().order_tokens() == ["openrouter"]
    clean_env.setenv("PROVIDER_ORDER", "groq")
    assert Settings.from_env().order_tokens() == ["groq"]


def test_blank_order_uses_default(clean_env):
    clean_env.setenv("PROVIDER_ORDER", "   ")
    assert Settings.from_env().provider_order == DEFAULT_PROVIDER_ORDER


def test_api_key_for_unknown_provider():
    assert Settings().api_key_for("gemini") == ""


def test_require_api_key():
    assert require_api_key("  abc  ", "GROQ_API_KEY") == "abc"
    with pytest.raises(CredentialMissingError, match="GROQ_API_KEY is not set"):
        require_api_key("", "GROQ_API_KEY")


def test_mask_key():
    assert mask_key("gsk_1234567890abcdef") == "gsk_...cdef"
    assert mask_key("short") == "***"
    assert mask_key(None) == ""


def test_blank_deadline_disables(clean_env):
    clean_env.setenv("ROUTER_DEADLINE_SECONDS", "  ")
    assert Settings.from_env().router_deadline_seconds == 0.0


@pytest.mark.parametrize("raw", ["-1", "30s", "soon"])
def test_invalid_deadline_rejected(clean_env, raw):
    clean_env.setenv("ROUTER_DEADLINE_SECONDS", raw)
    with pytest.raises(ValidationError, match="router_deadline_seconds"):
        Settings.from_env()


def test_negative_deadline_rejected_directly():
    with pytest.raises(ValidationError):
        Settings(router_deadline_seconds=-0.5)
