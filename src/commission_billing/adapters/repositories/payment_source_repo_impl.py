from __future__ import annotations

import structlog
from django.db import DatabaseError
from django.db.models import Prefetch, Q

from commission_billing.core.domain.entities.source_records import (
    PaymentRecord,
    TreatmentPlanItemRecord,
    TreatmentPlanRecord,
)
from commission_billing.core.domain.repositories.payment_source_repository import (
    PaymentSourceRepository,
)
from odonto_core.core.domain.exceptions import InfrastructureError
from plugins.django_interface.models import Payment as PaymentModel
from plugins.django_interface.models import TreatmentPlan as TreatmentPlanModel
from plugins.django_interface.models import TreatmentPlanItem as TreatmentPlanItemModel

logger = structlog.get_logger(__name__)


class PaymentSourceRepoImpl(PaymentSourceRepository):
    """
    Pagamentos → orçamentos → itens, em 3 queries (prefetch), restritos aos
    orçamentos do dentista informado.
    """

    def find_for_dentist(self, clinic_id: str, dentist_id: str, filtros: dict) -> list[PaymentRecord]:
        plans = TreatmentPlanModel.objects.filter(
            clinic_id=clinic_id, dentist_id=dentist_id
        ).prefetch_related(
            Prefetch("items", queryset=TreatmentPlanItemModel.objects.select_related("procedure"))
        )
        qs = (
            PaymentModel.objects.filter(clinic_id=clinic_id, treatment_plans__dentist_id=dentist_id)
            .select_related("patient")
            .prefetch_related(Prefetch("treatment_plans", queryset=plans, to_attr="dentist_plans"))
            .distinct()
            .order_by("-created_at")
        )
        if filtros.get("start"):
            qs = qs.filter(created_at__gte=filtros["start"])
        if filtros.get("end"):
            qs = qs.filter(created_at__lt=filtros["end"])
        if filtros.get("patient_id"):
            pid = filtros["patient_id"]
            qs = qs.filter(Q(patient_id=pid) | Q(patient__isnull=True, treatment_plans__patient_id=pid))

        try:
            return [self._to_record(p) for p in qs]
        except DatabaseError as exc:
            logger.error("Falha ao ler pagamentos do dentista", dentist_id=str(dentist_id), error=str(exc))
            raise InfrastructureError("payment source query failed") from exc

    def has_approved_plan(self, clinic_id: str, dentist_id: str, patient_id: str) -> bool:
        try:
            return TreatmentPlanModel.objects.filter(
                clinic_id=clinic_id,
                dentist_id=dentist_id,
                patient_id=patient_id,
                status=TreatmentPlanModel.Status.APPROVED,
            ).exists()
        except DatabaseError as exc:
            raise InfrastructureError("approved plan lookup failed") from exc

    # ────────────────────────── mapeamento ──────────────────────────
    @staticmethod
    def _to_record(p: PaymentModel) -> PaymentRecord:
        return PaymentRecord(
            id=p.id,
            created_at=p.created_at,
            patient_id=p.patient_id,
            patient_name=p.patient.name if p.patient else None,
            treatment_plans=[
                TreatmentPlanRecord(
                    id=plan.id,
                    patient_id=plan.patient_id,
                    items=[
                        TreatmentPlanItemRecord(
                            id=item.id,
                            description=item.description,
                            unit_value=item.value,
                            quantity=item.quantity,
                            procedure_id=item.procedure_id,
                            procedure_commission_percentage=(
                                item.procedure.commission_percentage if item.procedure else None
                            ),
                        )
                        for item in plan.items.all()
                    ],
                )
                for plan in p.dentist_plans
            ],
        )
