from dataclasses import dataclass

from appointment_scheduling.core.application.dtos.appointment_dto import (
    CreateAppointmentDTO,
    UpdateAppointmentDTO,
)
from odonto_core.core.application.cqrs import CommandDTO


@dataclass(frozen=True)
class BookAppointmentCommand(CommandDTO):
    clinic_id: str
    payload: CreateAppointmentDTO

@dataclass(frozen=True)
class UpdateAppointmentCommand(CommandDTO):
    id: str
    clinic_id: str
    payload: UpdateAppointmentDTO

@dataclass(frozen=True)
class CancelAppointmentCommand(CommandDTO):
    """Cancelamento lógico: o registro permanece com status CANCELED."""
    id: str
    clinic_id: str
