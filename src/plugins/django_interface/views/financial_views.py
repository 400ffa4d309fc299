from drf_yasg.utils import swagger_auto_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from commission_billing.adapters.config import composition_root as billing_root
from commission_billing.core.application.dtos.financial_dto import FinancialFilterDTO
from commission_billing.core.application.queries.financial_queries import (
    GetDentistFinancialReportQuery,
)
from odonto_core.adapters.observability.decorators import track_http
from odonto_core.core.application.dtos.parsing import parse_dto
from odonto_core.core.application.dtos.requester_dto import Requester
from plugins.django_interface.permissions import IsClinicUser
from plugins.django_interface.serializers.core_serializers import FinancialReportSerializer
from plugins.django_interface.views.mixins import PaginationFilterMixin


class DentistFinancialReportView(PaginationFilterMixin, APIView):
    """
    GET /api/dentists/<id>/financial — produção e comissões do dentista.
    OWNER/ADMIN veem qualquer dentista; o próprio dentista vê só o seu.
    """
    permission_classes = [IsClinicUser]

    @swagger_auto_schema(responses={200: FinancialReportSerializer})
    @track_http("DentistFinancialReportView_get")
    def get(self, request, dentist_id):
        filtros = parse_dto(FinancialFilterDTO, self._filters(request))
        report = billing_root.container.query_bus().dispatch(
            GetDentistFinancialReportQuery(
                clinic_id=str(request.user.clinic_id),
                dentist_id=str(dentist_id),
                filtros=filtros,
                requester=Requester(user_id=str(request.user.id), role=request.user.role),
            )
        )
        return Response(FinancialReportSerializer(report).data)
