# ╭────────────────────────────────────────────────────────────────────────────╮
# │  Agenda – CRUD de agendamentos + checagem de conflito                      │
# │                                                                            │
# │  • clinic_id vem sempre do usuário autenticado (nunca do corpo)            │
# │  • DELETE = cancelamento lógico (status CANCELED)                          │
# ╰────────────────────────────────────────────────────────────────────────────╯
from __future__ import annotations

from drf_yasg.utils import swagger_auto_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from appointment_scheduling.adapters.config import composition_root as scheduling_root
from appointment_scheduling.core.application.commands.appointment_commands import (
    BookAppointmentCommand,
    CancelAppointmentCommand,
    UpdateAppointmentCommand,
)
from appointment_scheduling.core.application.dtos.appointment_dto import (
    AppointmentFilterDTO,
    ConflictCheckDTO,
    CreateAppointmentDTO,
    UpdateAppointmentDTO,
)
from appointment_scheduling.core.application.queries.appointment_queries import (
    CheckScheduleConflictQuery,
    GetAppointmentQuery,
    ListAppointmentsQuery,
)
from odonto_core.adapters.observability.decorators import track_http
from odonto_core.core.application.dtos.parsing import parse_dto
from plugins.django_interface.permissions import CanManageSchedule
from plugins.django_interface.serializers.core_serializers import (
    AppointmentSerializer,
    AppointmentWriteSerializer,
    ConflictCheckResultSerializer,
)
from plugins.django_interface.views.mixins import PaginationFilterMixin


def _command_bus():
    return scheduling_root.container.command_bus()


def _query_bus():
    return scheduling_root.container.query_bus()


class AppointmentViewSet(PaginationFilterMixin, viewsets.ViewSet):
    """Agendamentos da clínica do usuário."""
    permission_classes = [CanManageSchedule]
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    @track_http("AppointmentViewSet_list")
    def list(self, request):
        page, page_size = self._pagination(request)
        filtros = parse_dto(AppointmentFilterDTO, self._filters(request))
        res = _query_bus().dispatch(
            ListAppointmentsQuery(
                clinic_id=str(request.user.clinic_id),
                filtros=filtros,
                page=page,
                page_size=page_size,
            )
        )
        payload = {
            "results": AppointmentSerializer(res.items, many=True).data,
            "total_items": res.total,
            "page": res.page,
            "page_size": res.page_size,
            "total_pages": res.total_pages,
            "items_on_page": len(res.items),
        }
        return Response(payload, status=status.HTTP_200_OK)

    @track_http("AppointmentViewSet_retrieve")
    def retrieve(self, request, pk=None):
        appt = _query_bus().dispatch(GetAppointmentQuery(id=str(pk), clinic_id=str(request.user.clinic_id)))
        return Response(AppointmentSerializer(appt).data)

    @swagger_auto_schema(request_body=AppointmentWriteSerializer, responses={201: AppointmentSerializer})
    @track_http("AppointmentViewSet_create")
    def create(self, request):
        payload = parse_dto(CreateAppointmentDTO, request.data)
        appt = _command_bus().dispatch(
            BookAppointmentCommand(clinic_id=str(request.user.clinic_id), payload=payload)
        )
        return Response(AppointmentSerializer(appt).data, status=status.HTTP_201_CREATED)

    @track_http("AppointmentViewSet_partial_update")
    def partial_update(self, request, pk=None):
        payload = parse_dto(UpdateAppointmentDTO, request.data)
        appt = _command_bus().dispatch(
            UpdateAppointmentCommand(id=str(pk), clinic_id=str(request.user.clinic_id), payload=payload)
        )
        return Response(AppointmentSerializer(appt).data)

    @track_http("AppointmentViewSet_destroy")
    def destroy(self, request, pk=None):
        appt = _command_bus().dispatch(
            CancelAppointmentCommand(id=str(pk), clinic_id=str(request.user.clinic_id))
        )
        return Response(AppointmentSerializer(appt).data, status=status.HTTP_200_OK)

    @swagger_auto_schema(responses={200: ConflictCheckResultSerializer})
    @action(detail=False, methods=["get"], url_path="conflicts")
    @track_http("AppointmentViewSet_conflicts")
    def conflicts(self, request):
        filtros = self._filters(request)
        payload = parse_dto(ConflictCheckDTO, filtros)
        has_conflict = _query_bus().dispatch(
            CheckScheduleConflictQuery(clinic_id=str(request.user.clinic_id), payload=payload)
        )
        return Response({"has_conflict": has_conflict})
