from __future__ import annotations

from datetime import datetime, tzinfo

import structlog

from appointment_scheduling.core.domain.entities.appointment_entity import (
    BLOCKING_STATUSES,
    validate_duration,
)
from appointment_scheduling.core.domain.entities.time_slot import TimeSlot
from appointment_scheduling.core.domain.repositories.appointment_repository import (
    AppointmentRepository,
)
from odonto_core.core.domain.services.local_day import as_zone, day_bounds, ensure_aware

logger = structlog.get_logger(__name__)


class ConflictChecker:
    """
    Detecta sobreposição entre um horário candidato e a agenda do dentista.

    Considera apenas agendamentos do mesmo dia local (fuso da clínica) com
    status que bloqueiam a agenda. Erros do repositório sobem intactos;
    falha de leitura nunca vira "sem conflito".

    A checagem é otimista: sem `schedule_lock` (ou garantia equivalente no
    banco) duas reservas concorrentes podem passar ambas.
    """

    def __init__(self, appointment_repo: AppointmentRepository, time_zone: tzinfo | str):
        self.appointment_repo = appointment_repo
        self.time_zone = as_zone(time_zone)

    def has_conflict(
        self,
        clinic_id: str,
        dentist_id: str,
        candidate_start: datetime,
        duration_minutes: int,
        exclude_appointment_id: str | None = None,
    ) -> bool:
        validate_duration(duration_minutes)
        candidate = TimeSlot(ensure_aware(candidate_start, self.time_zone), duration_minutes)
        day_start, day_end = day_bounds(candidate.start, self.time_zone)

        existing = self.appointment_repo.find_by_dentist_and_day(
            clinic_id, dentist_id, day_start, day_end, BLOCKING_STATUSES
        )
        excluded = str(exclude_appointment_id) if exclude_appointment_id else None

        for appt in existing:
            if not appt.blocks_schedule or (excluded and str(appt.id) == excluded):
                continue
            if candidate.overlaps(appt.slot):
                logger.info(
                    "Conflito de agenda detectado",
                    dentist_id=str(dentist_id),
                    candidate_start=candidate.start.isoformat(),
                    conflicting_id=str(appt.id),
                )
                return True
        return False
