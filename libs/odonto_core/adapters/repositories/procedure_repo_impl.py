from __future__ import annotations

import structlog
from django.db import DatabaseError

from odonto_core.core.domain.entities.procedure_entity import ProcedureEntity
from odonto_core.core.domain.exceptions import InfrastructureError
from odonto_core.core.domain.repositories.procedure_repository import ProcedureRepository
from plugins.django_interface.models import Procedure as ProcedureModel

logger = structlog.get_logger(__name__)


class ProcedureRepoImpl(ProcedureRepository):
    def find_by_id(self, procedure_id: str, clinic_id: str) -> ProcedureEntity | None:
        try:
            model = ProcedureModel.objects.filter(id=procedure_id, clinic_id=clinic_id).first()
        except DatabaseError as exc:
            logger.error("Falha ao buscar procedimento", procedure_id=str(procedure_id), error=str(exc))
            raise InfrastructureError("procedure lookup failed") from exc
        return ProcedureEntity.from_model(model) if model else None
