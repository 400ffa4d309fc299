from rest_framework.routers import DefaultRouter

from .views.appointment_views import AppointmentViewSet

# lista de (rota, ViewSet)
RESOURCES = [
    ("appointments", AppointmentViewSet),
]

def build_router() -> DefaultRouter:
    router = DefaultRouter(trailing_slash=False)
    for prefix, viewset in RESOURCES:
        router.register(prefix, viewset, basename=prefix.replace('-', '_'))
    return router
