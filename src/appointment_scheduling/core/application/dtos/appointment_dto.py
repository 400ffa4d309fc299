from __future__ import annotations

import datetime as dt
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from appointment_scheduling.core.domain.entities.appointment_entity import (
    DEFAULT_DURATION_MINUTES,
    MAX_DURATION_MINUTES,
    MIN_DURATION_MINUTES,
    AppointmentStatus,
)

PROCEDURE_TEXT_MAX = 200
NOTES_MAX = 1000


def _blank_to_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class CreateAppointmentDTO(BaseModel):
    """Entrada de criação de agendamento (texto livre já normalizado)."""
    dentist_id: UUID
    patient_id: UUID
    date: datetime
    duration_minutes: int = Field(
        default=DEFAULT_DURATION_MINUTES, ge=MIN_DURATION_MINUTES, le=MAX_DURATION_MINUTES
    )
    procedure_id: UUID | None = None
    procedure: str | None = Field(default=None, max_length=PROCEDURE_TEXT_MAX)
    notes: str | None = Field(default=None, max_length=NOTES_MAX)

    @field_validator("procedure", "notes", "procedure_id", mode="before")
    @classmethod
    def _normalize_text(cls, value):
        return _blank_to_none(value)


class UpdateAppointmentDTO(BaseModel):
    """
    Atualização parcial: apenas os campos enviados são aplicados
    (ver `model_fields_set`). `procedure` e `notes` aceitam null para limpar.
    """
    dentist_id: UUID | None = None
    patient_id: UUID | None = None
    date: datetime | None = None
    duration_minutes: int | None = Field(
        default=None, ge=MIN_DURATION_MINUTES, le=MAX_DURATION_MINUTES
    )
    status: AppointmentStatus | None = None
    procedure_id: UUID | None = None
    procedure: str | None = Field(default=None, max_length=PROCEDURE_TEXT_MAX)
    notes: str | None = Field(default=None, max_length=NOTES_MAX)

    @field_validator("procedure", "notes", "procedure_id", mode="before")
    @classmethod
    def _normalize_text(cls, value):
        return _blank_to_none(value)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class AppointmentFilterDTO(BaseModel):
    """Filtros de listagem; dias interpretados no fuso da clínica, limites inclusivos."""
    dentist_id: UUID | None = None
    patient_id: UUID | None = None
    date: dt.date | None = None
    date_from: dt.date | None = None
    date_to: dt.date | None = None
    status: AppointmentStatus | None = None


class ConflictCheckDTO(BaseModel):
    dentist_id: UUID
    date: datetime
    duration_minutes: int = Field(
        default=DEFAULT_DURATION_MINUTES, ge=MIN_DURATION_MINUTES, le=MAX_DURATION_MINUTES
    )
    exclude_id: UUID | None = None
