from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal

from odonto_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class DentistEntity(EntityMixin):
    id: uuid.UUID
    clinic_id: uuid.UUID
    user_id: uuid.UUID
    user_active: bool
    name: str
    cro: str
    specialty: str | None = None
    commission_percentage: Decimal | None = None  # comissão geral (0–100)

    @property
    def is_bookable(self) -> bool:
        """Só dentistas com usuário ativo recebem novos agendamentos."""
        return self.user_active
