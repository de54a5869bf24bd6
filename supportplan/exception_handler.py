"""
统一异常处理器。

挂到 DRF 的 EXCEPTION_HANDLER setting 上。
前端只看 error 字段：有 error → 出问题了，直接把 error 显示给用户；没有 → 成功。

统一错误响应格式：
{
    "error":  "面談記録を入力してください",
    "type":   "validation_error" | "generation_error" | "error",
    "code":   "EMPTY_TRANSCRIPT",
    "detail": { ... }  // 可选
}
"""

import logging

from django.http import JsonResponse
from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.views import exception_handler as drf_default_handler

from .exceptions import BaseAppException
from .intake import MSG_INVALID_REQUEST

logger = logging.getLogger(__name__)


def unified_exception_handler(exc, context):
    """
    DRF exception handler entry point.

    优先级：
    1. BaseAppException 及其子类 → 统一格式
    2. DRF 自带的 ValidationError → 转成统一格式
    3. 其他 DRF APIException（405 / 415 等）→ 统一格式，保留原状态码
    4. 其他异常 → 交给 DRF 默认处理（返回 None 时由 Django 处理成 500）
    """

    # --- 1. 我们自己的异常体系 ---
    if isinstance(exc, BaseAppException):
        body = {
            'error': exc.message,
            'type': exc.type,
            'code': exc.code,
        }
        if exc.detail is not None:
            body['detail'] = exc.detail
        return JsonResponse(body, status=exc.http_status)

    # --- 2. DRF 自带的 ValidationError ---
    if isinstance(exc, DRFValidationError):
        body = {
            'error': MSG_INVALID_REQUEST,
            'type': 'validation_error',
            'code': 'VALIDATION_ERROR',
            'detail': exc.detail,
        }
        return JsonResponse(body, status=400)

    # --- 3. 其他 DRF 异常 ---
    if isinstance(exc, APIException):
        logger.info("[api] %s: %s", type(exc).__name__, exc.detail)
        body = {
            'error': str(exc.detail),
            'type': 'error',
            'code': str(exc.default_code).upper(),
        }
        return JsonResponse(body, status=exc.status_code)

    # --- 4. 其他的交给 DRF 默认处理 ---
    return drf_default_handler(exc, context)
