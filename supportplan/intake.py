"""
请求体解析：原始 HTTP body → GenerateRequest。

按 Content-Type 选 parser：
  application/json — {"interviewRecord": "..."}
  text/plain       — 整个 body 就是面談記録

只负责解析格式；「面談記録是否为空」由 services.generate_support_plan() 判断。
"""

import json
from dataclasses import dataclass, field
from typing import Any

from .exceptions import ValidationError

MSG_INVALID_REQUEST = 'リクエストの形式が正しくありません'


@dataclass
class GenerateRequest:
    interview_record: str
    raw_payload: Any = field(default=None, repr=False)


def _decode(raw_body: bytes | str) -> str:
    if isinstance(raw_body, str):
        return raw_body
    try:
        return raw_body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValidationError(
            message=MSG_INVALID_REQUEST,
            code="INVALID_REQUEST",
            detail={"reason": "body must be UTF-8"},
        ) from exc


def parse_json_request(raw_body: bytes | str) -> GenerateRequest:
    body = _decode(raw_body)
    if not body.strip():
        return GenerateRequest(interview_record="", raw_payload=None)

    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise ValidationError(
            message=MSG_INVALID_REQUEST,
            code="INVALID_REQUEST",
            detail={"reason": "body is not valid JSON"},
        ) from exc

    if not isinstance(payload, dict):
        raise ValidationError(
            message=MSG_INVALID_REQUEST,
            code="INVALID_REQUEST",
            detail={"reason": "body must be a JSON object"},
        )

    record = payload.get("interviewRecord")
    if record is None:
        record = ""
    if not isinstance(record, str):
        raise ValidationError(
            message=MSG_INVALID_REQUEST,
            code="INVALID_REQUEST",
            detail={"field": "interviewRecord", "reason": "must be a string"},
        )

    return GenerateRequest(interview_record=record, raw_payload=payload)


def parse_text_request(raw_body: bytes | str) -> GenerateRequest:
    return GenerateRequest(interview_record=_decode(raw_body))


_PARSERS = {
    "application/json": parse_json_request,
    "text/plain":       parse_text_request,
}


def parse_generate_request(raw_body: bytes | str, content_type: str = "") -> GenerateRequest:
    """
    Content-Type 不带或未知时按 JSON 处理（前端默认发 JSON）。
    """
    media_type = (content_type or "").split(";")[0].strip().lower()
    parser = _PARSERS.get(media_type, parse_json_request)
    return parser(raw_body)
