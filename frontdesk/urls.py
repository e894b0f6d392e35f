"""
URL configuration for the front-desk coordination service.

The `urlpatterns` list routes URLs to views. The API routes live in the
desk app; OpenAPI documentation is exposed at ``/swagger/`` and
``/redoc/``.
"""
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="Front Desk API",
    default_version='v1',
    description="Token queues, pharmacy stock and emergency alerts for the hospital front desk.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    # Include API routes from the desk app
    path('', include('desk.routers')),
    # Swagger and ReDoc
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
