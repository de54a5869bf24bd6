"""
个別支援計画的数据结构。

SupportItem / GenerateResponse 是业务层唯一认识的格式：
validation.py 负责从 LLM 的 JSON 构造它们，serializers.py 负责把它们变回 JSON / TSV。
两者校验通过后不再修改（frozen）。
"""

from dataclasses import dataclass, field
from typing import Any

CATEGORY_A_TYPE = 'A型事業所向け'
CATEGORY_B_TYPE = 'B型事業所向け'
CATEGORY_DAILY_LIFE_CARE = '生活介護向け'
CATEGORY_OVERALL = '総合判断'

VALID_CATEGORIES = (
    CATEGORY_A_TYPE,
    CATEGORY_B_TYPE,
    CATEGORY_DAILY_LIFE_CARE,
    CATEGORY_OVERALL,
)

# 一份计划固定 10 项，不补齐也不截断
SUPPORT_ITEM_COUNT = 10


# LLM 输出里的文本字段（camelCase），校验时要求是字符串或缺失
TEXT_FIELDS = ('title', 'goal', 'userRole', 'supportContent')


def _text(value: Any) -> str:
    return '' if value is None else value


@dataclass(frozen=True)
class SupportItem:
    category: str
    title: str = ''
    goal: str = ''
    user_role: str = ''
    support_content: str = ''

    @classmethod
    def from_dict(cls, data: dict) -> 'SupportItem':
        """LLM 输出（camelCase）→ SupportItem。缺失的文本字段记为空字符串。"""
        return cls(
            category=data.get('category'),
            title=_text(data.get('title')),
            goal=_text(data.get('goal')),
            user_role=_text(data.get('userRole')),
            support_content=_text(data.get('supportContent')),
        )

    def to_dict(self) -> dict:
        return {
            'category': self.category,
            'title': self.title,
            'goal': self.goal,
            'userRole': self.user_role,
            'supportContent': self.support_content,
        }

    def display_title(self, position: int) -> str:
        """卡片显示用：title 为空时用「項目 N」代替（N 从 1 开始）。"""
        return self.title or f'項目 {position}'

    def export_title(self, position: int) -> str:
        """Excel 导出用：title 为空时写「項目N」（不带空格）。"""
        return self.title or f'項目{position}'

    def searchable_text(self) -> str:
        return f'{self.title} {self.goal} {self.user_role} {self.support_content}'


@dataclass(frozen=True)
class GenerateResponse:
    support_items: tuple[SupportItem, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.support_items)

    def __iter__(self):
        return iter(self.support_items)
