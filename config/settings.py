import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'dev-secret-key-change-in-production')
DEBUG = os.getenv('DEBUG', '0') == '1'
ALLOWED_HOSTS = ['*']

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'rest_framework',
    'corsheaders',
    'supportplan',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'config.urls'
WSGI_APPLICATION = 'config.wsgi.application'

# 无状态服务：不配置数据库
DATABASES = {}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# /api/generate 与 /api/generate/ 都可用，POST 不做重定向
APPEND_SLASH = False

# CORS
_cors_origins = os.getenv('CORS_ALLOWED_ORIGINS', '')
if _cors_origins:
    CORS_ALLOWED_ORIGINS = [o.strip() for o in _cors_origins.split(',') if o.strip()]
else:
    CORS_ALLOW_ALL_ORIGINS = True

# REST Framework
REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'UNAUTHENTICATED_USER': None,
    # ?format=tsv 由 GenerateView 自己处理，不走 DRF 的 renderer 选择
    'URL_FORMAT_OVERRIDE': None,
    'EXCEPTION_HANDLER': 'supportplan.exception_handler.unified_exception_handler',
}

# LLM
# 换供应商只需改环境变量 LLM_PROVIDER，代码零改动
LLM_PROVIDER = os.getenv('LLM_PROVIDER', 'openai')

OPENAI_API_KEY = os.getenv('OPENAI_API_KEY', '')
OPENAI_MODEL = os.getenv('OPENAI_MODEL') or 'gpt-3.5-turbo'

ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY', '')
ANTHROPIC_MODEL = os.getenv('ANTHROPIC_MODEL') or 'claude-sonnet-4-20250514'

LLM_TEMPERATURE = float(os.getenv('LLM_TEMPERATURE', '0.3'))
LLM_MAX_TOKENS = int(os.getenv('LLM_MAX_TOKENS')) if os.getenv('LLM_MAX_TOKENS') else None
# 单次调用超时（秒）
LLM_TIMEOUT = float(os.getenv('LLM_TIMEOUT', '60'))
# SDK 自带重试次数；0 = 每次请求只调用一次 LLM
LLM_MAX_RETRIES = int(os.getenv('LLM_MAX_RETRIES', '0'))

# 生成结果的内容检查（成人障害福祉向け，拒绝児童向け用語）
SUPPORTPLAN_CONTENT_SAFETY_CHECK = os.getenv('SUPPORTPLAN_CONTENT_SAFETY_CHECK', '1') == '1'
_denylist = os.getenv('SUPPORTPLAN_DENYLIST', '')
if _denylist:
    SUPPORTPLAN_DENYLIST = [t.strip() for t in _denylist.split(',') if t.strip()]
else:
    SUPPORTPLAN_DENYLIST = ['子ども', 'こども', '児童', '子供', '保護者', 'キッズ']

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '%(asctime)s %(levelname)s %(name)s %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'supportplan': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'django.request': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
    },
}
