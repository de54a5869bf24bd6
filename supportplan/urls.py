from django.urls import path
from .views import GenerateView, HealthView

urlpatterns = [
    path('generate/', GenerateView.as_view(), name='support-plan-generate'),
    path('generate', GenerateView.as_view()),
    path('health/', HealthView.as_view(), name='health'),
]
