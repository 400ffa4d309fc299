import structlog
from django.db import DatabaseError, connection
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

logger = structlog.get_logger(__name__)


class HealthCheckView(APIView):
    """
    Rota GET /api/healthz — 200 se a API e o banco respondem, 503 caso contrário.
    """
    permission_classes = []
    authentication_classes = []

    def get(self, request):
        try:
            connection.ensure_connection()
        except DatabaseError as exc:
            logger.error("Healthcheck: banco indisponível", error=str(exc))
            return Response({"status": "degraded", "database": "down"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response({"status": "ok", "database": "up"}, status=status.HTTP_200_OK)
