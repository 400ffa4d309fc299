from abc import ABC, abstractmethod

from odonto_core.core.domain.entities.dentist_entity import DentistEntity


class DentistRepository(ABC):
    @abstractmethod
    def find_by_id(self, dentist_id: str, clinic_id: str) -> DentistEntity | None:
        """Recupera dentista da clínica (com status do usuário vinculado)."""
        ...
