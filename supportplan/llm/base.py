"""
BaseLLMService — 所有 LLM 实现的抽象基类。

每个新 LLM 只需：
1. 继承 BaseLLMService
2. 实现 complete()
3. 在 factory.py 的 _build_registry() 注册一行

services.generate_support_plan() 完全不知道背后用哪家 LLM。
测试时可以直接传入一个假的 BaseLLMService，不需要网络。
"""

from abc import ABC, abstractmethod

from .types import GenerationOptions, LLMResponse


class BaseLLMService(ABC):

    # 子类声明自己对应的 provider 标识符（与 factory 注册键一致）
    provider: str = ""

    def __init__(self, api_key: str, model: str, timeout: float = 60.0, max_retries: int = 0):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.max_retries = max_retries

    @abstractmethod
    def complete(self, system_prompt: str, user_prompt: str, options: GenerationOptions) -> LLMResponse:
        """
        调用 LLM，返回标准 LLMResponse。

        Args:
            system_prompt: 系统级角色设定（prompts.SYSTEM_PROMPT）
            user_prompt:   嵌入了面談記録的用户级输入
            options:       temperature / max_tokens

        Returns:
            LLMResponse(content=生成文本, model=模型名)

        Raises:
            ProviderAuthenticationError: API key 无效
            ProviderRateLimitError:      触发速率限制
            ProviderError:               其他供应商 / 网络 / 超时错误
            EmptyCompletion:             供应商没有返回内容
        """
