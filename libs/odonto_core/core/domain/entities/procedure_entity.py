from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal

from odonto_core.core.domain.entities._base import EntityMixin


@dataclass(frozen=True, slots=True)
class ProcedureSnapshot:
    """
    Cópia imutável do preço/comissão do procedimento no momento do agendamento.
    Edições posteriores no catálogo não alteram o faturamento histórico.
    """
    name: str
    base_value: Decimal
    commission_percentage: Decimal

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "base_value": str(self.base_value),
            "commission_percentage": str(self.commission_percentage),
        }

    @classmethod
    def from_dict(cls, data: dict) -> ProcedureSnapshot:
        return cls(
            name=data["name"],
            base_value=Decimal(str(data["base_value"])),
            commission_percentage=Decimal(str(data["commission_percentage"])),
        )


@dataclass(slots=True)
class ProcedureEntity(EntityMixin):
    id: uuid.UUID
    clinic_id: uuid.UUID
    name: str
    base_value: Decimal
    commission_percentage: Decimal
    is_active: bool = True
    specialty_id: uuid.UUID | None = None

    def snapshot(self) -> ProcedureSnapshot:
        return ProcedureSnapshot(
            name=self.name,
            base_value=self.base_value,
            commission_percentage=self.commission_percentage,
        )
