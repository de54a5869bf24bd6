"""
LLM 层的标准请求参数 / 响应结构。

所有 LLMService 实现的 complete() 都接收 GenerationOptions、返回 LLMResponse。
业务层（services.py）只认识这两个格式，不知道背后用的是哪家 LLM。
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GenerationOptions:
    temperature: float = 0.3
    max_tokens: Optional[int] = None   # None = 使用各供应商的默认值


@dataclass
class LLMResponse:
    content: str       # 生成的原始文本（期望是 JSON）
    model: str         # 实际使用的模型名，写入日志
