"""
统一异常体系。

分两层：

1. 对外异常 —— 继承 BaseAppException，包含：
   - type:        错误类型标识（validation_error / generation_error）
   - code:        业务错误码（EMPTY_TRANSCRIPT / PROVIDER_AUTH_ERROR / ...）
   - message:     展示给用户的文字（日语）
   - detail:      可选的附加信息（dict / list / None）
   - http_status: HTTP 状态码
   View 层只需 raise，exception_handler 统一捕获并格式化响应。

2. 内部异常 —— 继承 SupportPlanError。
   LLM 调用层和响应校验层抛出，只用于日志和诊断，永远不直接返回给用户。
   services.generate_support_plan() 是唯一把它们翻译成对外异常的地方。
"""


class BaseAppException(Exception):
    """所有对外异常的基类。"""

    type = 'error'
    code = 'UNKNOWN_ERROR'
    http_status = 500

    def __init__(self, message, code=None, detail=None, http_status=None):
        self.message = message
        if code is not None:
            self.code = code
        if http_status is not None:
            self.http_status = http_status
        self.detail = detail
        super().__init__(message)


class ValidationError(BaseAppException):
    """输入验证失败。intake / service 层抛出，400。"""

    type = 'validation_error'
    code = 'VALIDATION_ERROR'
    http_status = 400


class EmptyTranscript(ValidationError):
    """面談記録为空或只有空白。在任何 LLM 调用之前抛出。"""

    code = 'EMPTY_TRANSCRIPT'
    default_message = '面談記録を入力してください'

    def __init__(self, message=None, **kwargs):
        super().__init__(message or self.default_message, **kwargs)


class GenerationFailedError(BaseAppException):
    """
    生成失败（配置错误 / LLM 供应商错误 / 输出校验失败），500。

    message 永远是分类后的通用文字，不包含供应商返回的原始错误。
    """

    type = 'generation_error'
    code = 'GENERATION_FAILED'
    http_status = 500


# ── 内部异常 ────────────────────────────────────────────────────────────────

class SupportPlanError(Exception):
    """内部异常基类。code 写进日志，便于排查。"""

    code = 'SUPPORT_PLAN_ERROR'


class MissingCredential(SupportPlanError):
    """所选 LLM 供应商的 API key 未配置。"""

    code = 'MISSING_CREDENTIAL'


class ProviderError(SupportPlanError):
    """
    LLM 供应商调用失败（网络、超时、5xx 等）。

    cause 保存 SDK 抛出的原始异常。
    """

    code = 'PROVIDER_ERROR'

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.cause = cause


class ProviderAuthenticationError(ProviderError):
    code = 'PROVIDER_AUTH_ERROR'


class ProviderRateLimitError(ProviderError):
    code = 'PROVIDER_RATE_LIMITED'


class EmptyCompletion(SupportPlanError):
    """供应商返回成功，但没有任何内容。"""

    code = 'EMPTY_COMPLETION'


class ResponseValidationError(SupportPlanError):
    """LLM 输出未通过校验。validation.py 的所有失败都继承它。"""

    code = 'INVALID_RESPONSE'


class MalformedJSON(ResponseValidationError):
    code = 'MALFORMED_JSON'


class InvalidSchema(ResponseValidationError):
    code = 'INVALID_SCHEMA'


class WrongItemCount(ResponseValidationError):
    code = 'WRONG_ITEM_COUNT'

    def __init__(self, count, expected):
        super().__init__(f'Expected {expected} support items, got {count}')
        self.count = count
        self.expected = expected


class InvalidCategory(ResponseValidationError):
    code = 'INVALID_CATEGORY'

    def __init__(self, category, index=None):
        super().__init__(f'Invalid category: {category!r}')
        self.category = category
        self.index = index


class InappropriateContent(ResponseValidationError):
    code = 'INAPPROPRIATE_CONTENT'

    def __init__(self, term):
        super().__init__(
            f'Inappropriate content detected for adult disability services: {term}'
        )
        self.term = term
