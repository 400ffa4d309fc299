from __future__ import annotations

from datetime import datetime
from typing import Any

from appointment_scheduling.core.application.commands.appointment_commands import (
    BookAppointmentCommand,
    CancelAppointmentCommand,
    UpdateAppointmentCommand,
)
from appointment_scheduling.core.application.dtos.appointment_dto import (
    ConflictCheckDTO,
    CreateAppointmentDTO,
    UpdateAppointmentDTO,
)
from appointment_scheduling.core.application.queries.appointment_queries import (
    CheckScheduleConflictQuery,
)
from appointment_scheduling.core.domain.entities.appointment_entity import AppointmentEntity
from odonto_core.core.application.cqrs import CommandBus, QueryBus
from odonto_core.core.application.dtos.parsing import parse_dto


class AppointmentService:
    """
    Fachada do ciclo de vida de agendamentos para chamadores que não falam
    CQRS (views, comandos de management, integrações). Entradas em dict são
    validadas pelos DTOs; erros de validação viram `ValidationError`.
    """

    def __init__(self, command_bus: CommandBus, query_bus: QueryBus):
        self.command_bus = command_bus
        self.query_bus = query_bus

    def book_appointment(
        self, clinic_id: str, data: CreateAppointmentDTO | dict[str, Any]
    ) -> AppointmentEntity:
        payload = parse_dto(CreateAppointmentDTO, data)
        return self.command_bus.dispatch(BookAppointmentCommand(clinic_id=str(clinic_id), payload=payload))

    def reschedule_or_update(
        self, appointment_id: str, clinic_id: str, data: UpdateAppointmentDTO | dict[str, Any]
    ) -> AppointmentEntity:
        payload = parse_dto(UpdateAppointmentDTO, data)
        return self.command_bus.dispatch(
            UpdateAppointmentCommand(id=str(appointment_id), clinic_id=str(clinic_id), payload=payload)
        )

    def cancel_appointment(self, appointment_id: str, clinic_id: str) -> AppointmentEntity:
        return self.command_bus.dispatch(
            CancelAppointmentCommand(id=str(appointment_id), clinic_id=str(clinic_id))
        )

    def has_conflict(
        self,
        clinic_id: str,
        dentist_id: str,
        date: datetime,
        duration_minutes: int,
        exclude_appointment_id: str | None = None,
    ) -> bool:
        payload = parse_dto(
            ConflictCheckDTO,
            {
                "dentist_id": dentist_id,
                "date": date,
                "duration_minutes": duration_minutes,
                "exclude_id": exclude_appointment_id,
            },
        )
        return self.query_bus.dispatch(CheckScheduleConflictQuery(clinic_id=str(clinic_id), payload=payload))
