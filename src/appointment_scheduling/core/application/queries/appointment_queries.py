from dataclasses import dataclass, field

from appointment_scheduling.core.application.dtos.appointment_dto import (
    AppointmentFilterDTO,
    ConflictCheckDTO,
)
from odonto_core.core.application.cqrs import QueryDTO


@dataclass(frozen=True, slots=True)
class GetAppointmentQuery(QueryDTO):
    id: str
    clinic_id: str

@dataclass(frozen=True, slots=True)
class ListAppointmentsQuery(QueryDTO):
    """
    Lista agendamentos da clínica, ordenados por data ascendente.
    - filtros: dentista, paciente, dia, intervalo de dias e status
    - page / page_size: paginação (default 1 / 50)
    """
    clinic_id: str
    filtros: AppointmentFilterDTO = field(default_factory=AppointmentFilterDTO)
    page: int = 1
    page_size: int = 50

@dataclass(frozen=True, slots=True)
class CheckScheduleConflictQuery(QueryDTO):
    clinic_id: str
    payload: ConflictCheckDTO
