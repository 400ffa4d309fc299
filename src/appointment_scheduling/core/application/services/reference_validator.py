from __future__ import annotations

import structlog

from odonto_core.core.domain.entities.dentist_entity import DentistEntity
from odonto_core.core.domain.entities.patient_entity import PatientEntity
from odonto_core.core.domain.entities.procedure_entity import ProcedureEntity
from odonto_core.core.domain.exceptions import (
    DentistInactive,
    DentistNotFound,
    PatientInactive,
    PatientNotFound,
    ProcedureInactive,
    ProcedureNotFound,
)
from odonto_core.core.domain.repositories.dentist_repository import DentistRepository
from odonto_core.core.domain.repositories.patient_repository import PatientRepository
from odonto_core.core.domain.repositories.procedure_repository import ProcedureRepository

logger = structlog.get_logger(__name__)


class ReferenceValidator:
    """
    Confere dentista, paciente e procedimento referenciados por um agendamento.
    Ausente (ou de outra clínica) → *NotFound; desabilitado → *Inactive.
    """

    def __init__(
        self,
        dentist_repo: DentistRepository,
        patient_repo: PatientRepository,
        procedure_repo: ProcedureRepository,
    ):
        self.dentist_repo = dentist_repo
        self.patient_repo = patient_repo
        self.procedure_repo = procedure_repo

    def require_dentist(self, dentist_id, clinic_id) -> DentistEntity:
        dentist = self.dentist_repo.find_by_id(str(dentist_id), str(clinic_id))
        if dentist is None:
            raise DentistNotFound(dentist_id=str(dentist_id))
        if not dentist.is_bookable:
            logger.info("Dentista inativo recusado", dentist_id=str(dentist_id))
            raise DentistInactive(dentist_id=str(dentist_id))
        return dentist

    def require_patient(self, patient_id, clinic_id) -> PatientEntity:
        patient = self.patient_repo.find_by_id(str(patient_id), str(clinic_id))
        if patient is None:
            raise PatientNotFound(patient_id=str(patient_id))
        if not patient.is_active:
            raise PatientInactive(patient_id=str(patient_id))
        return patient

    def require_procedure(self, procedure_id, clinic_id) -> ProcedureEntity:
        procedure = self.procedure_repo.find_by_id(str(procedure_id), str(clinic_id))
        if procedure is None:
            raise ProcedureNotFound(procedure_id=str(procedure_id))
        if not procedure.is_active:
            raise ProcedureInactive(procedure_id=str(procedure_id))
        return procedure
