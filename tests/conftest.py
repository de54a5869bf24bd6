"""
Shared fixtures for all tests.

factory 和 FakeLLMService 在 tests/factories.py，unit/ 和 integration/ 都可以 import。
"""
import pytest
from django.test import Client

from tests.factories import FakeLLMService, build_items, build_payload


@pytest.fixture(autouse=True)
def llm_settings(settings):
    """每个测试都使用固定的 LLM 配置，不受本机环境变量影响。"""
    settings.LLM_PROVIDER = 'openai'
    settings.OPENAI_API_KEY = 'sk-test'
    settings.OPENAI_MODEL = 'gpt-3.5-turbo'
    settings.ANTHROPIC_API_KEY = ''
    settings.ANTHROPIC_MODEL = 'claude-sonnet-4-20250514'
    settings.LLM_TEMPERATURE = 0.3
    settings.LLM_MAX_TOKENS = None
    settings.LLM_TIMEOUT = 60.0
    settings.LLM_MAX_RETRIES = 0
    settings.SUPPORTPLAN_CONTENT_SAFETY_CHECK = True
    settings.SUPPORTPLAN_DENYLIST = ['子ども', 'こども', '児童', '子供', '保護者', 'キッズ']
    return settings


@pytest.fixture
def api_client():
    """Django test client for integration tests."""
    return Client()


@pytest.fixture
def support_items():
    """10 项合法的支援内容（dict）。"""
    return build_items(10)


@pytest.fixture
def valid_payload(support_items):
    """LLM 返回的合法 JSON 文本。"""
    return build_payload(support_items)


@pytest.fixture
def fake_llm(valid_payload):
    return FakeLLMService(content=valid_payload)
