from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from itertools import chain

import structlog

from commission_billing.adapters.observability.metrics import (
    FINANCIAL_REPORT_DURATION,
    FINANCIAL_TRANSACTIONS,
)
from commission_billing.core.application.dtos.financial_dto import (
    FinancialFilterDTO,
    FinancialReportDTO,
    FinancialTransactionDTO,
    money,
)
from commission_billing.core.application.services.financial_sources import (
    AttendanceProcedureSource,
    TreatmentPlanPaymentSource,
)
from commission_billing.core.domain.entities.financial_transaction_entity import (
    FinancialTransactionEntity,
    TransactionStatus,
)
from odonto_core.core.application.dtos.requester_dto import Requester
from odonto_core.core.domain.entities.dentist_entity import DentistEntity
from odonto_core.core.domain.exceptions import AccessDenied, DentistNotFound
from odonto_core.core.domain.repositories.dentist_repository import DentistRepository
from odonto_core.core.domain.services.local_day import as_zone, local_day_bounds

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")


class FinancialReportService:
    """
    Reconcilia as duas fontes de produção do dentista (itens de orçamento
    pagos e procedimentos de atendimentos finalizados) num único livro-razão
    e calcula os agregados. Somente leitura.
    """

    def __init__(
        self,
        dentist_repo: DentistRepository,
        plan_source: TreatmentPlanPaymentSource,
        attendance_source: AttendanceProcedureSource,
        time_zone,
    ):
        self.dentist_repo = dentist_repo
        self.plan_source = plan_source
        self.attendance_source = attendance_source
        self.time_zone = as_zone(time_zone)

    # ▶ acesso
    @staticmethod
    def _authorize(dentist: DentistEntity, requester: Requester | None) -> None:
        if requester is None or requester.is_manager:
            return
        if str(requester.user_id) == str(dentist.user_id):
            return
        raise AccessDenied(dentist_id=str(dentist.id), user_id=str(requester.user_id))

    # ▶ janela de datas (limites do dia local; fim exclusivo)
    def _window(self, filtros: FinancialFilterDTO) -> tuple[datetime | None, datetime | None]:
        start = end = None
        if filtros.date_from:
            start = local_day_bounds(filtros.date_from, self.time_zone)[0]
        if filtros.date_to:
            end = local_day_bounds(filtros.date_to, self.time_zone)[1]
        return start, end

    @staticmethod
    def _matches(
        t: FinancialTransactionEntity,
        filtros: FinancialFilterDTO,
        start: datetime | None,
        end: datetime | None,
    ) -> bool:
        if start and t.date < start:
            return False
        if end and t.date >= end:
            return False
        if filtros.patient_id and str(t.patient_id) != str(filtros.patient_id):
            return False
        if filtros.procedure_id and str(t.procedure_id) != str(filtros.procedure_id):
            return False
        return not (filtros.commission_type and t.commission_type != filtros.commission_type)

    def build_report(
        self,
        clinic_id: str,
        dentist_id: str,
        filtros: FinancialFilterDTO | None = None,
        requester: Requester | None = None,
    ) -> FinancialReportDTO:
        filtros = filtros or FinancialFilterDTO()
        dentist = self.dentist_repo.find_by_id(str(dentist_id), str(clinic_id))
        if dentist is None:
            raise DentistNotFound(dentist_id=str(dentist_id))
        self._authorize(dentist, requester)

        with FINANCIAL_REPORT_DURATION.time():
            start, end = self._window(filtros)
            prefilter = {
                k: v
                for k, v in {
                    "start": start,
                    "end": end,
                    "patient_id": str(filtros.patient_id) if filtros.patient_id else None,
                }.items()
                if v is not None
            }

            ledger = [
                t
                for t in chain(
                    self.plan_source.transactions(str(clinic_id), dentist, prefilter),
                    self.attendance_source.transactions(str(clinic_id), dentist, prefilter),
                )
                if self._matches(t, filtros, start, end)
            ]
            ledger.sort(key=lambda t: t.date, reverse=True)

            # totais somam as linhas já em centavos: recebido + pendente == soma das comissões exibidas
            linhas = [FinancialTransactionDTO.from_entity(t) for t in ledger]
            paid = TransactionStatus.PAGO.value
            gross_production = sum((t.gross_value for t in linhas), ZERO)
            total_received = sum((t.commission for t in linhas if t.status == paid), ZERO)
            total_pending = sum((t.commission for t in linhas if t.status != paid), ZERO)

        for t in ledger:
            FINANCIAL_TRANSACTIONS.labels(source=t.source.value, status=t.status.value).inc()
        logger.info(
            "Relatório financeiro gerado",
            clinic_id=str(clinic_id),
            dentist_id=str(dentist_id),
            transactions=len(ledger),
        )

        return FinancialReportDTO(
            dentist_id=str(dentist.id),
            commission_percentage=(
                money(dentist.commission_percentage)
                if dentist.commission_percentage is not None
                else None
            ),
            gross_production=money(gross_production),
            total_received=money(total_received),
            total_pending=money(total_pending),
            net_received=money(total_received),
            transactions=linhas,
        )
