from abc import ABC, abstractmethod

from commission_billing.core.domain.entities.source_records import PaymentRecord


class PaymentSourceRepository(ABC):
    @abstractmethod
    def find_for_dentist(self, clinic_id: str, dentist_id: str, filtros: dict) -> list[PaymentRecord]:
        """
        Pagamentos vinculados a orçamentos do dentista; cada `PaymentRecord`
        traz apenas os orçamentos deste dentista. `filtros` pode conter
        `start`/`end` (janela sobre a data do pagamento) e `patient_id`;
        é apenas um pré-filtro, o serviço reaplica os filtros por transação.
        """
        ...

    @abstractmethod
    def has_approved_plan(self, clinic_id: str, dentist_id: str, patient_id: str) -> bool:
        """Existe orçamento APROVADO do dentista para o paciente?"""
        ...
