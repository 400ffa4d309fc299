from __future__ import annotations

import structlog
from django.db import DatabaseError

from odonto_core.core.domain.entities.dentist_entity import DentistEntity
from odonto_core.core.domain.exceptions import InfrastructureError
from odonto_core.core.domain.repositories.dentist_repository import DentistRepository
from plugins.django_interface.models import Dentist as DentistModel

logger = structlog.get_logger(__name__)


class DentistRepoImpl(DentistRepository):
    """Lookup de dentistas; o status ativo vem do usuário vinculado."""

    def find_by_id(self, dentist_id: str, clinic_id: str) -> DentistEntity | None:
        try:
            model = (
                DentistModel.objects.select_related("user")
                .filter(id=dentist_id, clinic_id=clinic_id)
                .first()
            )
        except DatabaseError as exc:
            logger.error("Falha ao buscar dentista", dentist_id=str(dentist_id), error=str(exc))
            raise InfrastructureError("dentist lookup failed") from exc
        return self._to_entity(model) if model else None

    @staticmethod
    def _to_entity(model: DentistModel) -> DentistEntity:
        return DentistEntity.from_model(
            model,
            user_active=model.user.is_active,
            name=model.user.name,
            commission_percentage=model.commission,
        )
