from __future__ import annotations

import structlog
from django.db import DatabaseError
from django.db.models import Prefetch
from django.db.models.functions import Coalesce

from commission_billing.core.domain.entities.source_records import (
    AttendanceProcedureRecord,
    AttendanceRecord,
)
from commission_billing.core.domain.repositories.attendance_source_repository import (
    AttendanceSourceRepository,
)
from odonto_core.core.domain.exceptions import InfrastructureError
from plugins.django_interface.models import Attendance as AttendanceModel
from plugins.django_interface.models import AttendanceProcedure as AttendanceProcedureModel

logger = structlog.get_logger(__name__)


class AttendanceSourceRepoImpl(AttendanceSourceRepository):
    def find_done_for_dentist(self, clinic_id: str, dentist_id: str, filtros: dict) -> list[AttendanceRecord]:
        lines = AttendanceProcedureModel.objects.filter(dentist_id=dentist_id).select_related("procedure")
        qs = (
            AttendanceModel.objects.filter(
                clinic_id=clinic_id,
                dentist_id=dentist_id,
                status=AttendanceModel.Status.DONE,
            )
            .select_related("patient")
            .annotate(occurred_at=Coalesce("finished_at", "arrival_at"))
            .prefetch_related(Prefetch("procedures", queryset=lines, to_attr="dentist_lines"))
            .order_by("-occurred_at")
        )
        if filtros.get("start"):
            qs = qs.filter(occurred_at__gte=filtros["start"])
        if filtros.get("end"):
            qs = qs.filter(occurred_at__lt=filtros["end"])
        if filtros.get("patient_id"):
            qs = qs.filter(patient_id=filtros["patient_id"])

        try:
            return [self._to_record(a) for a in qs]
        except DatabaseError as exc:
            logger.error("Falha ao ler atendimentos do dentista", dentist_id=str(dentist_id), error=str(exc))
            raise InfrastructureError("attendance source query failed") from exc

    @staticmethod
    def _to_record(a: AttendanceModel) -> AttendanceRecord:
        return AttendanceRecord(
            id=a.id,
            patient_id=a.patient_id,
            patient_name=a.patient.name,
            arrival_at=a.arrival_at,
            finished_at=a.finished_at,
            procedures=[
                AttendanceProcedureRecord(
                    id=line.id,
                    description=line.description,
                    quantity=line.quantity,
                    price=line.price,
                    procedure_id=line.procedure_id,
                    procedure_base_value=line.procedure.base_value if line.procedure else None,
                    procedure_commission_percentage=(
                        line.procedure.commission_percentage if line.procedure else None
                    ),
                )
                for line in a.dentist_lines
            ],
        )
