"""
具体 LLM 实现。

新增 LLM 供应商：在此文件添加一个类，然后在 factory.py 注册即可。

已注册供应商：
  openai    — OpenAIService   (gpt-3.5-turbo, JSON mode)
  anthropic — ClaudeService   (claude-sonnet-4-20250514)

SDK client 在第一次调用时创建并复用；只携带配置，不保存任何请求状态，
可以被并发请求共享。
"""

import logging

from ..exceptions import (
    EmptyCompletion,
    ProviderAuthenticationError,
    ProviderError,
    ProviderRateLimitError,
)
from .base import BaseLLMService
from .types import GenerationOptions, LLMResponse

logger = logging.getLogger(__name__)


# ── OpenAIService ──────────────────────────────────────────────────────────
#
# 使用 OpenAI SDK。
# 环境变量：OPENAI_API_KEY
# 模型：gpt-3.5-turbo（可通过 OPENAI_MODEL 覆盖）

class OpenAIService(BaseLLMService):

    provider = "openai"
    DEFAULT_MODEL = "gpt-3.5-turbo"

    _client = None

    @property
    def client(self):
        if self._client is None:
            import openai

            self._client = openai.OpenAI(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=self.max_retries,
            )
        return self._client

    def complete(self, system_prompt: str, user_prompt: str, options: GenerationOptions) -> LLMResponse:
        import openai

        params = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user",   "content": user_prompt},
            ],
            "temperature": options.temperature,
            "response_format": {"type": "json_object"},
        }
        if options.max_tokens:
            params["max_tokens"] = options.max_tokens

        try:
            completion = self.client.chat.completions.create(**params)
        except openai.AuthenticationError as exc:
            raise ProviderAuthenticationError(f"OpenAI authentication failed: {exc}", cause=exc) from exc
        except openai.RateLimitError as exc:
            raise ProviderRateLimitError(f"OpenAI rate limit reached: {exc}", cause=exc) from exc
        except openai.OpenAIError as exc:
            raise ProviderError(f"OpenAI request failed: {exc}", cause=exc) from exc

        content = None
        if completion.choices:
            content = completion.choices[0].message.content
        if not content:
            raise EmptyCompletion("No response from OpenAI")

        logger.debug("[llm] OpenAI 返回 %d 字符 (model=%s)", len(content), self.model)
        return LLMResponse(content=content, model=self.model)


# ── ClaudeService ──────────────────────────────────────────────────────────
#
# 使用 Anthropic SDK。
# 环境变量：ANTHROPIC_API_KEY
# 模型：claude-sonnet-4-20250514（可通过 ANTHROPIC_MODEL 覆盖）
# Anthropic 没有 JSON mode，只靠 system prompt 要求输出 JSON。

class ClaudeService(BaseLLMService):

    provider = "anthropic"
    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    # 10 项日语支援内容，2000 token 不够
    DEFAULT_MAX_TOKENS = 4000

    _client = None

    @property
    def client(self):
        if self._client is None:
            import anthropic

            self._client = anthropic.Anthropic(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=self.max_retries,
            )
        return self._client

    def complete(self, system_prompt: str, user_prompt: str, options: GenerationOptions) -> LLMResponse:
        import anthropic

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=options.max_tokens or self.DEFAULT_MAX_TOKENS,
                temperature=options.temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except anthropic.AuthenticationError as exc:
            raise ProviderAuthenticationError(f"Anthropic authentication failed: {exc}", cause=exc) from exc
        except anthropic.RateLimitError as exc:
            raise ProviderRateLimitError(f"Anthropic rate limit reached: {exc}", cause=exc) from exc
        except anthropic.AnthropicError as exc:
            raise ProviderError(f"Anthropic request failed: {exc}", cause=exc) from exc

        content = "".join(
            block.text for block in (response.content or [])
            if getattr(block, "type", None) == "text"
        )
        if not content:
            raise EmptyCompletion("No response from Anthropic")

        logger.debug("[llm] Anthropic 返回 %d 字符 (model=%s)", len(content), self.model)
        return LLMResponse(content=content, model=self.model)
