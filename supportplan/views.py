from django.conf import settings
from django.http import HttpResponse
from rest_framework.response import Response
from rest_framework.views import APIView

from .intake import parse_generate_request
from .llm.factory import get_llm_model, get_llm_provider
from .serializers import (
    serialize_generate_response,
    serialize_support_plan_tsv,
    support_plan_filename,
)
from .services import generate_support_plan


class GenerateView(APIView):
    """
    POST /api/generate/ - 面談記録 → 10 项支援内容

    ?format=tsv 时以 TSV 附件返回（Excel 用）。
    错误由 exception_handler 统一格式化为 {"error": ...}。
    """

    def post(self, request):
        generate_request = parse_generate_request(request.body, request.content_type)
        result = generate_support_plan(generate_request.interview_record)

        if request.query_params.get('format') == 'tsv':
            response = HttpResponse(
                serialize_support_plan_tsv(result),
                content_type='text/tab-separated-values; charset=utf-8',
            )
            response['Content-Disposition'] = f'attachment; filename="{support_plan_filename()}"'
            return response

        return Response(serialize_generate_response(result))


class HealthView(APIView):
    """GET /api/health/ - 当前 LLM 配置（不含 API key）"""

    def get(self, request):
        return Response({
            'status': 'ok',
            'provider': get_llm_provider(),
            'model': get_llm_model(),
            'contentSafetyCheck': bool(getattr(settings, 'SUPPORTPLAN_CONTENT_SAFETY_CHECK', True)),
        })
