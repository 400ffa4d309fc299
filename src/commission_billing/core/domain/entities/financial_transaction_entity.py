from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from odonto_core.core.domain.entities._base import EntityMixin

UNKNOWN_PATIENT_NAME = "Paciente não informado"


class CommissionType(StrEnum):
    GENERAL = "GENERAL"
    PROCEDURE = "PROCEDURE"


class TransactionStatus(StrEnum):
    PAGO = "PAGO"
    PENDENTE = "PENDENTE"


class TransactionSource(StrEnum):
    TREATMENT_PLAN = "TREATMENT_PLAN"
    ATTENDANCE = "ATTENDANCE"


@dataclass(frozen=True, slots=True)
class FinancialTransactionEntity(EntityMixin):
    """
    Linha do livro-razão do dentista. Derivada a cada relatório, nunca persistida.
    `id` = "<id do registro de origem>-<id da linha>".
    """
    id: str
    date: datetime
    patient_id: uuid.UUID | None
    patient_name: str
    procedure_name: str
    gross_value: Decimal
    commission: Decimal
    commission_type: CommissionType
    status: TransactionStatus
    source: TransactionSource
    source_id: uuid.UUID
    procedure_id: uuid.UUID | None = None

    @property
    def is_paid(self) -> bool:
        return self.status is TransactionStatus.PAGO
