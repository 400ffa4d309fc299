from abc import ABC, abstractmethod

from odonto_core.core.domain.entities.procedure_entity import ProcedureEntity


class ProcedureRepository(ABC):
    @abstractmethod
    def find_by_id(self, procedure_id: str, clinic_id: str) -> ProcedureEntity | None:
        """Recupera procedimento do catálogo da clínica (ativo ou não)."""
        ...
