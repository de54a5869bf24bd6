"""
工厂函数：根据 settings.LLM_PROVIDER 返回对应的 LLMService 实例。

新增 LLM 供应商只需：
  1. 在 services.py 新建 XxxService(BaseLLMService) 类
  2. 在此处 _build_registry() 加一行
  不需要修改 services.generate_support_plan() 或任何业务代码。

同一份配置只创建一个实例（进程内复用 SDK client）。
"""

from functools import lru_cache

from django.conf import settings

from ..exceptions import MissingCredential
from .base import BaseLLMService


def _build_registry() -> dict[str, type[BaseLLMService]]:
    # 延迟导入，避免在 Django 启动前触发 SDK import
    from .services import ClaudeService, OpenAIService

    return {
        "openai":    OpenAIService,
        "anthropic": ClaudeService,
    }


# provider → (API key setting, model setting)
_SETTING_NAMES = {
    "openai":    ("OPENAI_API_KEY", "OPENAI_MODEL"),
    "anthropic": ("ANTHROPIC_API_KEY", "ANTHROPIC_MODEL"),
}


@lru_cache(maxsize=8)
def _get_cached_service(provider: str, api_key: str, model: str, timeout: float, max_retries: int) -> BaseLLMService:
    service_cls = _build_registry()[provider]
    return service_cls(
        api_key=api_key,
        model=model or service_cls.DEFAULT_MODEL,
        timeout=timeout,
        max_retries=max_retries,
    )


def get_llm_provider() -> str:
    return getattr(settings, "LLM_PROVIDER", "openai")


def get_llm_model() -> str:
    """当前配置下会使用的模型名（未知 provider 时返回空字符串）。"""
    provider = get_llm_provider()
    registry = _build_registry()
    if provider not in registry:
        return ""
    _, model_setting = _SETTING_NAMES[provider]
    return getattr(settings, model_setting, "") or registry[provider].DEFAULT_MODEL


def get_llm_service() -> BaseLLMService:
    """
    从 settings.LLM_PROVIDER 读取供应商，返回对应的 LLMService 实例。

    settings.LLM_PROVIDER 由环境变量 LLM_PROVIDER 控制（默认 "openai"）。
    换 LLM 只需改环境变量，代码零改动。

    Raises:
        ValueError:        LLM_PROVIDER 未知
        MissingCredential: 该供应商的 API key 未配置
    """
    provider = get_llm_provider()
    registry = _build_registry()

    if provider not in registry:
        raise ValueError(
            f"Unknown LLM_PROVIDER: {provider!r}. "
            f"Known providers: {list(registry.keys())}"
        )

    key_setting, _ = _SETTING_NAMES[provider]
    api_key = getattr(settings, key_setting, "")
    if not api_key:
        raise MissingCredential(f"{key_setting} is not set")

    return _get_cached_service(
        provider,
        api_key,
        get_llm_model(),
        float(getattr(settings, "LLM_TIMEOUT", 60.0)),
        int(getattr(settings, "LLM_MAX_RETRIES", 0)),
    )
