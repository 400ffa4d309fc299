from django.conf import settings
from django.urls import include, path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

from .routers import build_router
from .views.financial_views import DentistFinancialReportView
from .views.health_views import HealthCheckView

swagger_permissions = [permissions.IsAdminUser] if not settings.DEBUG else [permissions.AllowAny]

schema_view = get_schema_view(
    openapi.Info(
        title="Odonto Gestão",
        default_version="v1",
        description="Agenda clínica e reconciliação financeira (CQRS + Bus)",
        license=openapi.License(name="BSD License"),
    ),
    public=settings.DEBUG,
    permission_classes=swagger_permissions,
)

router = build_router()

urlpatterns = [
    path("healthz", HealthCheckView.as_view(), name="healthz"),
    path(
        "dentists/<uuid:dentist_id>/financial",
        DentistFinancialReportView.as_view(),
        name="dentist-financial",
    ),

    path("swagger/",     schema_view.with_ui("swagger", cache_timeout=0), name="swagger-ui"),
    path("swagger.json", schema_view.without_ui(cache_timeout=0),         name="swagger-json"),
    path("redoc/",       schema_view.with_ui("redoc",   cache_timeout=0), name="redoc-ui"),

    # agenda (CRUD + conflicts)
    path("", include(router.urls)),
]
