from abc import ABC, abstractmethod

from commission_billing.core.domain.entities.source_records import AttendanceRecord


class AttendanceSourceRepository(ABC):
    @abstractmethod
    def find_done_for_dentist(self, clinic_id: str, dentist_id: str, filtros: dict) -> list[AttendanceRecord]:
        """
        Atendimentos finalizados (DONE) do dentista, com apenas as linhas de
        procedimento executadas por ele. Aceita os mesmos pré-filtros de
        `PaymentSourceRepository.find_for_dentist` sobre a data efetiva
        (`finished_at`, senão `arrival_at`).
        """
        ...
