from django.urls import path
from . import api

urlpatterns = [
    path('ensure-packages/', api.ensure_packages, name='api_ensure_packages'),
    path('seed/', api.seed, name='api_seed'),
]
