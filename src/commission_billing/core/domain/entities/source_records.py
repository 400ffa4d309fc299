"""
Modelos de leitura devolvidos pelas fontes financeiras.

São fotografias planas do que o armazenamento contém; nenhuma regra de
comissão ou status vive aqui.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class TreatmentPlanItemRecord:
    id: uuid.UUID
    description: str
    unit_value: Decimal
    quantity: int
    procedure_id: uuid.UUID | None = None
    procedure_commission_percentage: Decimal | None = None


@dataclass(frozen=True, slots=True)
class TreatmentPlanRecord:
    id: uuid.UUID
    patient_id: uuid.UUID
    items: list[TreatmentPlanItemRecord] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PaymentRecord:
    id: uuid.UUID
    created_at: datetime
    patient_id: uuid.UUID | None = None
    patient_name: str | None = None
    treatment_plans: list[TreatmentPlanRecord] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class AttendanceProcedureRecord:
    id: uuid.UUID
    description: str
    quantity: int
    price: Decimal | None = None
    procedure_id: uuid.UUID | None = None
    procedure_base_value: Decimal | None = None
    procedure_commission_percentage: Decimal | None = None


@dataclass(frozen=True, slots=True)
class AttendanceRecord:
    id: uuid.UUID
    patient_id: uuid.UUID
    patient_name: str
    arrival_at: datetime
    finished_at: datetime | None = None
    procedures: list[AttendanceProcedureRecord] = field(default_factory=list)

    @property
    def occurred_at(self) -> datetime:
        return self.finished_at or self.arrival_at
