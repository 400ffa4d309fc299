from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from pydantic import BaseModel, model_validator

from commission_billing.core.domain.entities.financial_transaction_entity import (
    CommissionType,
    FinancialTransactionEntity,
)

CENTS = Decimal("0.01")


def money(value: Decimal) -> Decimal:
    """Quantiza para centavos (ROUND_HALF_UP). Usado só na saída."""
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


class FinancialFilterDTO(BaseModel):
    """
    Filtros do relatório. `date_from` e `date_to` são dias inclusivos no fuso
    da clínica: `date_to` cobre até o último instante do dia.
    """
    date_from: dt.date | None = None
    date_to: dt.date | None = None
    patient_id: UUID | None = None
    procedure_id: UUID | None = None
    commission_type: CommissionType | None = None

    @model_validator(mode="after")
    def _check_range(self):
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("date_from deve ser anterior ou igual a date_to")
        return self


@dataclass(frozen=True)
class FinancialTransactionDTO:
    id: str
    date: dt.datetime
    patient_id: str | None
    patient_name: str
    procedure_name: str
    gross_value: Decimal
    commission: Decimal
    commission_type: str
    status: str
    source: str
    source_id: str

    @classmethod
    def from_entity(cls, t: FinancialTransactionEntity) -> FinancialTransactionDTO:
        return cls(
            id=t.id,
            date=t.date,
            patient_id=str(t.patient_id) if t.patient_id else None,
            patient_name=t.patient_name,
            procedure_name=t.procedure_name,
            gross_value=money(t.gross_value),
            commission=money(t.commission),
            commission_type=t.commission_type.value,
            status=t.status.value,
            source=t.source.value,
            source_id=str(t.source_id),
        )


@dataclass(frozen=True)
class FinancialReportDTO:
    dentist_id: str
    commission_percentage: Decimal | None
    gross_production: Decimal
    total_received: Decimal
    total_pending: Decimal
    net_received: Decimal
    transactions: list[FinancialTransactionDTO] = field(default_factory=list)
