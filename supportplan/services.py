import logging

from django.conf import settings

from .exceptions import (
    EmptyTranscript,
    GenerationFailedError,
    MissingCredential,
    ProviderAuthenticationError,
    ProviderError,
    ProviderRateLimitError,
    SupportPlanError,
)
from .llm import GenerationOptions, get_llm_service
from .prompts import PROMPT_VERSION, build_prompts
from .validation import validate_response

logger = logging.getLogger(__name__)

MSG_CONFIGURATION_ERROR = 'サーバー設定エラー: APIキーが設定されていません'
MSG_CHECK_API_KEY = 'APIキーの設定を確認してください'
MSG_RATE_LIMITED = 'API利用制限に達しました。しばらく待ってから再試行してください'
MSG_GENERATION_FAILED = '支援計画の生成中にエラーが発生しました'


def get_generation_options():
    return GenerationOptions(
        temperature=float(getattr(settings, 'LLM_TEMPERATURE', 0.3)),
        max_tokens=getattr(settings, 'LLM_MAX_TOKENS', None),
    )


def to_user_error(exc):
    """
    内部异常 → 对外的 GenerationFailedError。

    只有认证失败和速率限制有单独的提示；其余（供应商错误、空响应、各种校验失败）
    统一使用通用提示。原始错误文字不会出现在返回值里。
    """
    if isinstance(exc, MissingCredential):
        return GenerationFailedError(MSG_CONFIGURATION_ERROR, code='CONFIGURATION_ERROR')
    if isinstance(exc, ProviderAuthenticationError):
        return GenerationFailedError(MSG_CHECK_API_KEY, code='PROVIDER_AUTH_ERROR')
    if isinstance(exc, ProviderRateLimitError):
        return GenerationFailedError(MSG_RATE_LIMITED, code='PROVIDER_RATE_LIMITED')
    return GenerationFailedError(MSG_GENERATION_FAILED)


def generate_support_plan(interview_record, llm_service=None):
    """
    面談記録 → 校验通过的 GenerateResponse。

    流程：输入检查 → 取 LLMService（检查 API key）→ 构建 Prompt → 调用 LLM（只调一次）→ 校验。
    Raises EmptyTranscript / GenerationFailedError — View 层不需要处理，exception_handler 统一兜底。

    失败不会重试：LLM 调用失败或输出校验失败都直接返回错误。
    """
    if not isinstance(interview_record, str) or not interview_record.strip():
        raise EmptyTranscript()

    try:
        llm = llm_service or get_llm_service()
    except MissingCredential as exc:
        logger.error("[generate] LLM API key 未配置: %s", exc)
        raise to_user_error(exc) from exc
    except ValueError as exc:
        # LLM_PROVIDER 配置错误
        logger.error("[generate] %s", exc)
        raise GenerationFailedError(MSG_GENERATION_FAILED, code='CONFIGURATION_ERROR') from exc

    system_prompt, user_prompt = build_prompts(interview_record)
    logger.info(
        "[generate] 开始生成 provider=%s model=%s prompt_version=%s 面談記録长度=%d",
        llm.provider, llm.model, PROMPT_VERSION, len(interview_record),
    )

    try:
        response = llm.complete(system_prompt, user_prompt, get_generation_options())
        logger.info("[generate] LLM 返回成功，长度=%d", len(response.content))
        result = validate_response(response.content)
    except ProviderError as exc:
        logger.warning("[generate] LLM 调用失败 code=%s: %s (cause=%r)", exc.code, exc, exc.cause)
        raise to_user_error(exc) from exc
    except SupportPlanError as exc:
        logger.warning("[generate] 生成结果无效 code=%s: %s", exc.code, exc)
        raise to_user_error(exc) from exc

    logger.info("[generate] 生成完成，%d 项", len(result))
    return result
