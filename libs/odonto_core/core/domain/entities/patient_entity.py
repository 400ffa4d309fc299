from __future__ import annotations

import uuid
from dataclasses import dataclass

from odonto_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class PatientEntity(EntityMixin):
    id: uuid.UUID
    clinic_id: uuid.UUID
    name: str
    is_active: bool = True
