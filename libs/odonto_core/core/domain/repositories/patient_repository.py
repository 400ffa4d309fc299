from abc import ABC, abstractmethod

from odonto_core.core.domain.entities.patient_entity import PatientEntity


class PatientRepository(ABC):
    @abstractmethod
    def find_by_id(self, patient_id: str, clinic_id: str) -> PatientEntity | None:
        """Recupera paciente da clínica."""
        ...
