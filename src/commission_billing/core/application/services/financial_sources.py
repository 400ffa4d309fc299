"""
Adaptadores de fonte: cada um converte os registros de uma origem em
`FinancialTransactionEntity`, já com comissão resolvida e status definido.
O agregador (`FinancialReportService`) não conhece a origem das linhas.
"""
from __future__ import annotations

from collections.abc import Iterator
from decimal import Decimal

from commission_billing.core.domain.entities.financial_transaction_entity import (
    UNKNOWN_PATIENT_NAME,
    FinancialTransactionEntity,
    TransactionSource,
    TransactionStatus,
)
from commission_billing.core.domain.entities.source_records import AttendanceProcedureRecord
from commission_billing.core.domain.repositories.attendance_source_repository import (
    AttendanceSourceRepository,
)
from commission_billing.core.domain.repositories.payment_source_repository import (
    PaymentSourceRepository,
)
from commission_billing.core.domain.services.commission_resolver import resolve_commission
from odonto_core.core.domain.entities.dentist_entity import DentistEntity

ZERO = Decimal("0")


class TreatmentPlanPaymentSource:
    """Itens de orçamento pagos: sempre PAGO, data = criação do pagamento."""

    def __init__(self, repo: PaymentSourceRepository):
        self.repo = repo

    def transactions(
        self, clinic_id: str, dentist: DentistEntity, filtros: dict
    ) -> Iterator[FinancialTransactionEntity]:
        for payment in self.repo.find_for_dentist(clinic_id, str(dentist.id), filtros):
            patient_name = payment.patient_name or UNKNOWN_PATIENT_NAME
            for plan in payment.treatment_plans:
                patient_id = payment.patient_id or plan.patient_id
                for item in plan.items:
                    gross = item.unit_value * item.quantity
                    resolution = resolve_commission(
                        gross,
                        item.procedure_commission_percentage,
                        dentist.commission_percentage,
                    )
                    yield FinancialTransactionEntity(
                        id=f"{payment.id}-{item.id}",
                        date=payment.created_at,
                        patient_id=patient_id,
                        patient_name=patient_name,
                        procedure_name=item.description,
                        gross_value=gross,
                        commission=resolution.amount,
                        commission_type=resolution.tier,
                        status=TransactionStatus.PAGO,
                        source=TransactionSource.TREATMENT_PLAN,
                        source_id=plan.id,
                        procedure_id=item.procedure_id,
                    )


def attendance_line_gross(line: AttendanceProcedureRecord) -> Decimal:
    """Preço cobrado × qtd; sem preço, valor base do procedimento × qtd; senão 0."""
    if line.price:
        return line.price * line.quantity
    if line.procedure_base_value:
        return line.procedure_base_value * line.quantity
    return ZERO


class AttendanceProcedureSource:
    """
    Procedimentos de atendimentos finalizados. PAGO se houver orçamento
    APROVADO do mesmo dentista para o paciente, senão PENDENTE; a consulta é
    feita uma vez por paciente em cada relatório. Linhas de valor zero são
    descartadas.
    """

    def __init__(self, repo: AttendanceSourceRepository, payment_repo: PaymentSourceRepository):
        self.repo = repo
        self.payment_repo = payment_repo

    def transactions(
        self, clinic_id: str, dentist: DentistEntity, filtros: dict
    ) -> Iterator[FinancialTransactionEntity]:
        approved: dict[str, bool] = {}

        for attendance in self.repo.find_done_for_dentist(clinic_id, str(dentist.id), filtros):
            patient_key = str(attendance.patient_id)
            for line in attendance.procedures:
                gross = attendance_line_gross(line)
                if gross == ZERO:
                    continue

                if patient_key not in approved:
                    approved[patient_key] = self.payment_repo.has_approved_plan(
                        clinic_id, str(dentist.id), patient_key
                    )

                resolution = resolve_commission(
                    gross,
                    line.procedure_commission_percentage,
                    dentist.commission_percentage,
                )
                yield FinancialTransactionEntity(
                    id=f"{attendance.id}-{line.id}",
                    date=attendance.occurred_at,
                    patient_id=attendance.patient_id,
                    patient_name=attendance.patient_name,
                    procedure_name=line.description,
                    gross_value=gross,
                    commission=resolution.amount,
                    commission_type=resolution.tier,
                    status=TransactionStatus.PAGO if approved[patient_key] else TransactionStatus.PENDENTE,
                    source=TransactionSource.ATTENDANCE,
                    source_id=attendance.id,
                    procedure_id=line.procedure_id,
                )
