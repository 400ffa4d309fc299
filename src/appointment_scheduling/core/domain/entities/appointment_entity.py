from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from appointment_scheduling.core.domain.entities.time_slot import TimeSlot
from odonto_core.core.domain.entities._base import EntityMixin
from odonto_core.core.domain.entities.procedure_entity import ProcedureSnapshot
from odonto_core.core.domain.exceptions import InvalidStatusTransition, ValidationError

MIN_DURATION_MINUTES = 15
MAX_DURATION_MINUTES = 480
DEFAULT_DURATION_MINUTES = 30


class AppointmentStatus(StrEnum):
    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    CANCELED = "CANCELED"
    RESCHEDULED = "RESCHEDULED"
    NO_SHOW = "NO_SHOW"
    DONE = "DONE"


# status que ocupam a agenda do dentista
BLOCKING_STATUSES: frozenset[AppointmentStatus] = frozenset({
    AppointmentStatus.SCHEDULED,
    AppointmentStatus.CONFIRMED,
    AppointmentStatus.RESCHEDULED,
})


def validate_duration(duration_minutes: int) -> int:
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
        raise ValidationError("duração deve ser inteira", field="duration_minutes")
    if not MIN_DURATION_MINUTES <= duration_minutes <= MAX_DURATION_MINUTES:
        raise ValidationError(
            "duração fora do intervalo permitido",
            field="duration_minutes",
            value=duration_minutes,
        )
    return duration_minutes


@dataclass(slots=True)
class AppointmentEntity(EntityMixin):
    id: uuid.UUID
    clinic_id: uuid.UUID
    dentist_id: uuid.UUID
    patient_id: uuid.UUID
    date: datetime
    duration_minutes: int = DEFAULT_DURATION_MINUTES
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    procedure_id: uuid.UUID | None = None
    procedure_snapshot: ProcedureSnapshot | None = None
    procedure: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        validate_duration(self.duration_minutes)
        try:
            self.status = AppointmentStatus(self.status)
        except ValueError as exc:
            raise ValidationError("status inválido", field="status", value=self.status) from exc

    @property
    def slot(self) -> TimeSlot:
        return TimeSlot(self.date, self.duration_minutes)

    @property
    def ends_at(self) -> datetime:
        return self.slot.end

    @property
    def blocks_schedule(self) -> bool:
        return self.status in BLOCKING_STATUSES

    def transition_to(self, new_status: AppointmentStatus | str) -> None:
        """Cancelado é terminal para edições; o retorno exige novo agendamento."""
        target = AppointmentStatus(new_status)
        if self.status is AppointmentStatus.CANCELED and target is not AppointmentStatus.CANCELED:
            raise InvalidStatusTransition(
                "agendamento cancelado não pode ser reaberto",
                appointment_id=str(self.id),
                target=target.value,
            )
        self.status = target

    def cancel(self) -> None:
        self.status = AppointmentStatus.CANCELED
