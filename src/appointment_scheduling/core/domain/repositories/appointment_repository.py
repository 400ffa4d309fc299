from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Any

from appointment_scheduling.core.domain.entities.appointment_entity import (
    AppointmentEntity,
    AppointmentStatus,
)
from odonto_core.core.application.cqrs import PagedResult


class AppointmentRepository(ABC):
    @abstractmethod
    def find_by_dentist_and_day(
        self,
        clinic_id: str,
        dentist_id: str,
        day_start: datetime,
        day_end: datetime,
        statuses: Iterable[AppointmentStatus],
    ) -> list[AppointmentEntity]:
        """
        Agendamentos do dentista com `day_start <= date < day_end`
        e status dentro de `statuses`.
        """
        ...

    @abstractmethod
    def find_by_id(self, appointment_id: str, clinic_id: str) -> AppointmentEntity | None:
        ...

    @abstractmethod
    def create(self, appointment: AppointmentEntity) -> AppointmentEntity:
        ...

    @abstractmethod
    def update(self, appointment: AppointmentEntity) -> AppointmentEntity:
        ...

    @abstractmethod
    def list(
        self,
        clinic_id: str,
        filtros: dict[str, Any],
        page: int,
        page_size: int,
    ) -> PagedResult[AppointmentEntity]:
        """Listagem paginada, ordenada por data ascendente."""
        ...

    @abstractmethod
    def schedule_lock(self, clinic_id: str, dentist_id: str) -> AbstractContextManager[None]:
        """
        Seção crítica de "checar conflito + gravar" para a agenda de um dentista.

        É apenas a via rápida: a garantia definitiva de não sobreposição
        precisa existir no armazenamento (lock de linha, constraint de
        exclusão ou nível de isolamento serializável).
        """
        ...
