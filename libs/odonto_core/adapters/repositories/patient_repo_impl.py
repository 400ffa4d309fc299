from __future__ import annotations

import structlog
from django.db import DatabaseError

from odonto_core.core.domain.entities.patient_entity import PatientEntity
from odonto_core.core.domain.exceptions import InfrastructureError
from odonto_core.core.domain.repositories.patient_repository import PatientRepository
from plugins.django_interface.models import Patient as PatientModel

logger = structlog.get_logger(__name__)


class PatientRepoImpl(PatientRepository):
    def find_by_id(self, patient_id: str, clinic_id: str) -> PatientEntity | None:
        try:
            model = PatientModel.objects.filter(id=patient_id, clinic_id=clinic_id).first()
        except DatabaseError as exc:
            logger.error("Falha ao buscar paciente", patient_id=str(patient_id), error=str(exc))
            raise InfrastructureError("patient lookup failed") from exc
        return PatientEntity.from_model(model) if model else None
