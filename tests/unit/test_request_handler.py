"""
Unit tests for services.generate_support_plan()。

LLM 用 FakeLLMService 代替，不需要网络：
1. 输入检查（空 / 空白）在调用 LLM 之前
2. API key 未配置
3. 供应商错误 → 分类后的用户提示
4. 校验失败 → 通用提示
5. 成功路径
"""
import openai
import pytest

from supportplan.exceptions import (
    EmptyCompletion,
    EmptyTranscript,
    GenerationFailedError,
    MalformedJSON,
    MissingCredential,
    ProviderAuthenticationError,
    ProviderError,
    ProviderRateLimitError,
    WrongItemCount,
)
from supportplan.services import (
    MSG_CHECK_API_KEY,
    MSG_CONFIGURATION_ERROR,
    MSG_GENERATION_FAILED,
    MSG_RATE_LIMITED,
    generate_support_plan,
    to_user_error,
)
from tests.factories import FakeLLMService, build_items, build_payload, make_status_error

TRANSCRIPT = '利用者は週3回の通所を希望している'


# -------------------------------------------------------------------
# 输入检查
# -------------------------------------------------------------------

class TestEmptyTranscript:

    @pytest.mark.parametrize('record', ['', '   ', '\n\t ', '　'])
    def test_blank_input_rejected_without_llm_call(self, fake_llm, record):
        with pytest.raises(EmptyTranscript) as exc_info:
            generate_support_plan(record, llm_service=fake_llm)

        assert exc_info.value.http_status == 400
        assert exc_info.value.message == '面談記録を入力してください'
        assert len(fake_llm.calls) == 0

    def test_none_input_rejected(self, fake_llm):
        with pytest.raises(EmptyTranscript):
            generate_support_plan(None, llm_service=fake_llm)
        assert len(fake_llm.calls) == 0

    def test_empty_checked_before_credential(self, settings):
        settings.OPENAI_API_KEY = ''
        with pytest.raises(EmptyTranscript):
            generate_support_plan('  ')


# -------------------------------------------------------------------
# 配置
# -------------------------------------------------------------------

class TestMissingCredential:

    def test_missing_api_key_is_configuration_error(self, settings):
        settings.OPENAI_API_KEY = ''

        with pytest.raises(GenerationFailedError) as exc_info:
            generate_support_plan(TRANSCRIPT)

        exc = exc_info.value
        assert exc.http_status == 500
        assert exc.code == 'CONFIGURATION_ERROR'
        assert exc.message == MSG_CONFIGURATION_ERROR
        assert 'OPENAI_API_KEY' not in exc.message
        assert isinstance(exc.__cause__, MissingCredential)

    def test_missing_anthropic_key(self, settings):
        settings.LLM_PROVIDER = 'anthropic'
        settings.ANTHROPIC_API_KEY = ''

        with pytest.raises(GenerationFailedError) as exc_info:
            generate_support_plan(TRANSCRIPT)
        assert exc_info.value.code == 'CONFIGURATION_ERROR'

    def test_unknown_provider(self, settings):
        settings.LLM_PROVIDER = 'nope'

        with pytest.raises(GenerationFailedError) as exc_info:
            generate_support_plan(TRANSCRIPT)

        assert exc_info.value.code == 'CONFIGURATION_ERROR'
        assert exc_info.value.message == MSG_GENERATION_FAILED
        assert 'nope' not in exc_info.value.message


# -------------------------------------------------------------------
# 供应商错误
# -------------------------------------------------------------------

class TestProviderErrors:

    def _generate_with_error(self, exc):
        llm = FakeLLMService(exc=exc)
        with pytest.raises(GenerationFailedError) as exc_info:
            generate_support_plan(TRANSCRIPT, llm_service=llm)
        assert len(llm.calls) == 1   # 不重试
        return exc_info.value

    def test_authentication_error(self):
        cause = make_status_error(openai.AuthenticationError, 401)
        err = self._generate_with_error(
            ProviderAuthenticationError('OpenAI authentication failed', cause=cause)
        )

        assert err.http_status == 500
        assert err.code == 'PROVIDER_AUTH_ERROR'
        assert err.message == MSG_CHECK_API_KEY

    def test_rate_limit_error(self):
        err = self._generate_with_error(ProviderRateLimitError('rate limit'))

        assert err.http_status == 500
        assert err.code == 'PROVIDER_RATE_LIMITED'
        assert err.message == MSG_RATE_LIMITED

    def test_other_provider_error_is_generic(self):
        err = self._generate_with_error(ProviderError('connection reset by peer'))

        assert err.code == 'GENERATION_FAILED'
        assert err.message == MSG_GENERATION_FAILED

    def test_provider_text_never_returned(self):
        err = self._generate_with_error(
            ProviderError('upstream said: secret-internal-detail')
        )
        assert 'secret-internal-detail' not in err.message
        assert err.detail is None

    def test_empty_completion_is_generic(self):
        err = self._generate_with_error(EmptyCompletion('No response from OpenAI'))
        assert err.message == MSG_GENERATION_FAILED


# -------------------------------------------------------------------
# 校验失败
# -------------------------------------------------------------------

class TestInvalidOutput:

    @pytest.mark.parametrize('content', [
        'すみません、作成できません。',
        build_payload(count=9),
        build_payload(count=11),
        build_payload(build_items(10, category='X')),
        build_payload(build_items(10, goal='子どもと遊ぶ')),
    ])
    def test_invalid_output_collapses_to_generic_message(self, content):
        llm = FakeLLMService(content=content)

        with pytest.raises(GenerationFailedError) as exc_info:
            generate_support_plan(TRANSCRIPT, llm_service=llm)

        assert exc_info.value.message == MSG_GENERATION_FAILED
        assert exc_info.value.http_status == 500
        assert len(llm.calls) == 1

    def test_internal_kind_kept_as_cause(self):
        llm = FakeLLMService(content=build_payload(count=9))

        with pytest.raises(GenerationFailedError) as exc_info:
            generate_support_plan(TRANSCRIPT, llm_service=llm)

        assert isinstance(exc_info.value.__cause__, WrongItemCount)

    def test_deeply_nested_output_kept_as_malformed_cause(self):
        llm = FakeLLMService(content='[' * 200000 + ']' * 200000)

        with pytest.raises(GenerationFailedError) as exc_info:
            generate_support_plan(TRANSCRIPT, llm_service=llm)

        assert exc_info.value.message == MSG_GENERATION_FAILED
        assert isinstance(exc_info.value.__cause__, MalformedJSON)

    def test_content_safety_disabled_by_settings(self, settings):
        settings.SUPPORTPLAN_CONTENT_SAFETY_CHECK = False
        llm = FakeLLMService(content=build_payload(build_items(10, goal='子どもと遊ぶ')))

        result = generate_support_plan(TRANSCRIPT, llm_service=llm)
        assert len(result) == 10


# -------------------------------------------------------------------
# 成功路径
# -------------------------------------------------------------------

class TestGenerateSuccess:

    def test_returns_items_unchanged_in_order(self, fake_llm, support_items):
        result = generate_support_plan(TRANSCRIPT, llm_service=fake_llm)

        assert len(result) == 10
        assert [item.to_dict() for item in result] == support_items

    def test_exactly_one_llm_call(self, fake_llm):
        generate_support_plan(TRANSCRIPT, llm_service=fake_llm)
        assert len(fake_llm.calls) == 1

    def test_prompt_contains_transcript(self, fake_llm):
        generate_support_plan(TRANSCRIPT, llm_service=fake_llm)

        call = fake_llm.calls[0]
        assert TRANSCRIPT in call['user_prompt']
        assert 'supportItems' in call['system_prompt']

    def test_temperature_from_settings(self, fake_llm, settings):
        settings.LLM_TEMPERATURE = 0.7
        settings.LLM_MAX_TOKENS = 3000

        generate_support_plan(TRANSCRIPT, llm_service=fake_llm)

        options = fake_llm.calls[0]['options']
        assert options.temperature == 0.7
        assert options.max_tokens == 3000

    def test_uses_configured_service_when_not_injected(self, fake_llm, monkeypatch):
        monkeypatch.setattr('supportplan.services.get_llm_service', lambda: fake_llm)

        result = generate_support_plan(TRANSCRIPT)
        assert len(result) == 10
        assert len(fake_llm.calls) == 1


class TestToUserError:

    @pytest.mark.parametrize('exc, code', [
        (MissingCredential('x'), 'CONFIGURATION_ERROR'),
        (ProviderAuthenticationError('x'), 'PROVIDER_AUTH_ERROR'),
        (ProviderRateLimitError('x'), 'PROVIDER_RATE_LIMITED'),
        (ProviderError('x'), 'GENERATION_FAILED'),
        (WrongItemCount(count=9, expected=10), 'GENERATION_FAILED'),
    ])
    def test_mapping(self, exc, code):
        err = to_user_error(exc)
        assert isinstance(err, GenerationFailedError)
        assert err.code == code
        assert err.http_status == 500
