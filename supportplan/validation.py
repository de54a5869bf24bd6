"""
LLM 输出校验。

validate_response() 按顺序执行以下检查，任何一步失败立即抛出，后面的步骤不再执行：

  1. JSON 解析                → MalformedJSON
  2. supportItems 必须是列表，文本字段必须是字符串 → InvalidSchema
  3. 必须正好 10 项           → WrongItemCount（不补齐、不截断）
  4. category 必须是 4 种之一 → InvalidCategory
  5. 内容检查（可关闭）        → InappropriateContent

第 5 步只是简单的子串匹配（区分大小写，不分词）：
可能误判包含禁用词的复合词，也可能漏掉同义表达。它只是一个粗略的过滤，不是正确性保证。
"""

import json
import logging

from django.conf import settings

from .exceptions import (
    InappropriateContent,
    InvalidCategory,
    InvalidSchema,
    MalformedJSON,
    WrongItemCount,
)
from .types import SUPPORT_ITEM_COUNT, TEXT_FIELDS, VALID_CATEGORIES, GenerateResponse, SupportItem

logger = logging.getLogger(__name__)


def parse_json(raw):
    try:
        return json.loads(raw)
    except (TypeError, ValueError, RecursionError) as exc:
        raise MalformedJSON(f"Response is not valid JSON: {exc}") from exc


def check_schema(data):
    """返回 supportItems 列表。"""
    if not isinstance(data, dict):
        raise InvalidSchema(f"Top-level JSON must be an object, got {type(data).__name__}")

    items = data.get("supportItems")
    if not isinstance(items, list):
        raise InvalidSchema("'supportItems' is missing or not a list")

    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise InvalidSchema(f"supportItems[{i}] must be an object, got {type(item).__name__}")
        for key in TEXT_FIELDS:
            value = item.get(key)
            if value is not None and not isinstance(value, str):
                raise InvalidSchema(
                    f"supportItems[{i}].{key} must be a string, got {type(value).__name__}"
                )

    return items


def check_item_count(items, expected=SUPPORT_ITEM_COUNT):
    if len(items) != expected:
        raise WrongItemCount(count=len(items), expected=expected)


def check_categories(items):
    for i, item in enumerate(items):
        category = item.get("category")
        if category not in VALID_CATEGORIES:
            raise InvalidCategory(category, index=i)


def find_denylisted_term(text, denylist):
    """返回 text 中第一个出现的禁用词（按 denylist 顺序），没有则返回 None。"""
    for term in denylist:
        if term and term in text:
            return term
    return None


def check_content(support_items, denylist):
    all_text = " ".join(item.searchable_text() for item in support_items)
    term = find_denylisted_term(all_text, denylist)
    if term is not None:
        raise InappropriateContent(term)


def validate_response(raw, *, content_safety=None, denylist=None):
    """
    校验 LLM 返回的原始文本，成功时返回 GenerateResponse。

    Args:
        raw:            LLM 返回的原始文本
        content_safety: 是否执行内容检查；None = 读 settings.SUPPORTPLAN_CONTENT_SAFETY_CHECK
        denylist:       禁用词列表；None = 读 settings.SUPPORTPLAN_DENYLIST

    Raises:
        MalformedJSON / InvalidSchema / WrongItemCount / InvalidCategory / InappropriateContent
    """
    if content_safety is None:
        content_safety = getattr(settings, "SUPPORTPLAN_CONTENT_SAFETY_CHECK", True)
    if denylist is None:
        denylist = getattr(settings, "SUPPORTPLAN_DENYLIST", [])

    data = parse_json(raw)
    items = check_schema(data)
    check_item_count(items)
    check_categories(items)

    support_items = tuple(SupportItem.from_dict(item) for item in items)

    if content_safety:
        check_content(support_items, denylist)
    else:
        logger.debug("[validate] 内容检查已关闭，跳过")

    return GenerateResponse(support_items=support_items)
