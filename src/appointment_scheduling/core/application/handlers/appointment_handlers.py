import uuid

import structlog

from appointment_scheduling.adapters.observability.metrics import (
    APPOINTMENT_BOOKINGS,
    APPOINTMENT_CONFLICTS,
)
from appointment_scheduling.core.application.commands.appointment_commands import (
    BookAppointmentCommand,
    CancelAppointmentCommand,
    UpdateAppointmentCommand,
)
from appointment_scheduling.core.application.services.reference_validator import ReferenceValidator
from appointment_scheduling.core.domain.entities.appointment_entity import (
    AppointmentEntity,
    AppointmentStatus,
)
from appointment_scheduling.core.domain.repositories.appointment_repository import (
    AppointmentRepository,
)
from appointment_scheduling.core.domain.services.conflict_checker import ConflictChecker
from odonto_core.core.application.cqrs import CommandHandler
from odonto_core.core.domain.exceptions import (
    AppointmentNotFound,
    DomainError,
    SchedulingConflict,
    ValidationError,
)
from odonto_core.core.domain.services.local_day import ensure_aware

logger = structlog.get_logger(__name__)

# campos que não aceitam null numa atualização parcial
_REQUIRED_ON_UPDATE = ("dentist_id", "patient_id", "date", "duration_minutes", "status")


def _raise_conflict(appointment_id, dentist_id, start) -> None:
    APPOINTMENT_CONFLICTS.inc()
    raise SchedulingConflict(
        "horário indisponível para o dentista",
        appointment_id=str(appointment_id) if appointment_id else None,
        dentist_id=str(dentist_id),
        date=start.isoformat(),
    )


# ——— BOOK ——————————————————————————————————————————————————

class BookAppointmentHandler(CommandHandler[BookAppointmentCommand]):
    """
    Ordem fixa (falha rápida): dentista → paciente → procedimento → conflito.
    Nada é gravado se qualquer etapa falhar.
    """

    def __init__(
        self,
        repo: AppointmentRepository,
        validator: ReferenceValidator,
        conflict_checker: ConflictChecker,
    ):
        self.repo = repo
        self.validator = validator
        self.conflict_checker = conflict_checker

    def handle(self, command: BookAppointmentCommand) -> AppointmentEntity:
        p = command.payload
        clinic_id = str(command.clinic_id)
        try:
            self.validator.require_dentist(p.dentist_id, clinic_id)
            self.validator.require_patient(p.patient_id, clinic_id)
            snapshot = None
            if p.procedure_id:
                snapshot = self.validator.require_procedure(p.procedure_id, clinic_id).snapshot()

            start = ensure_aware(p.date, self.conflict_checker.time_zone)
            with self.repo.schedule_lock(clinic_id, str(p.dentist_id)):
                if self.conflict_checker.has_conflict(
                    clinic_id, str(p.dentist_id), start, p.duration_minutes
                ):
                    _raise_conflict(None, p.dentist_id, start)

                created = self.repo.create(
                    AppointmentEntity(
                        id=uuid.uuid4(),
                        clinic_id=clinic_id,
                        dentist_id=p.dentist_id,
                        patient_id=p.patient_id,
                        date=start,
                        duration_minutes=p.duration_minutes,
                        status=AppointmentStatus.SCHEDULED,
                        procedure_id=p.procedure_id,
                        procedure_snapshot=snapshot,
                        procedure=p.procedure,
                        notes=p.notes,
                    )
                )
        except SchedulingConflict:
            APPOINTMENT_BOOKINGS.labels(outcome="conflict").inc()
            raise
        except DomainError as exc:
            APPOINTMENT_BOOKINGS.labels(outcome="rejected").inc()
            logger.info("Agendamento recusado", clinic_id=clinic_id, code=exc.code)
            raise

        APPOINTMENT_BOOKINGS.labels(outcome="created").inc()
        logger.info(
            "Agendamento criado",
            clinic_id=clinic_id,
            appointment_id=str(created.id),
            dentist_id=str(created.dentist_id),
            date=created.date.isoformat(),
        )
        return created


# ——— UPDATE ————————————————————————————————————————————————

class UpdateAppointmentHandler(CommandHandler[UpdateAppointmentCommand]):
    """
    Atualização parcial. Troca de dentista/paciente/procedimento revalida a
    referência; mudança de data, duração ou dentista refaz a checagem de
    conflito excluindo o próprio agendamento. Mudança só de status não
    revalida nada.
    """

    def __init__(
        self,
        repo: AppointmentRepository,
        validator: ReferenceValidator,
        conflict_checker: ConflictChecker,
    ):
        self.repo = repo
        self.validator = validator
        self.conflict_checker = conflict_checker

    def handle(self, command: UpdateAppointmentCommand) -> AppointmentEntity:
        clinic_id = str(command.clinic_id)
        appt = self.repo.find_by_id(str(command.id), clinic_id)
        if appt is None:
            raise AppointmentNotFound(appointment_id=str(command.id))

        changes = command.payload.changes()
        for name in _REQUIRED_ON_UPDATE:
            if name in changes and changes[name] is None:
                raise ValidationError("campo não pode ser nulo", field=name)

        tz = self.conflict_checker.time_zone
        dentist_changed = "dentist_id" in changes and str(changes["dentist_id"]) != str(appt.dentist_id)
        patient_changed = "patient_id" in changes and str(changes["patient_id"]) != str(appt.patient_id)
        new_date = ensure_aware(changes["date"], tz) if "date" in changes else appt.date
        date_changed = new_date != appt.date
        duration_changed = changes.get("duration_minutes", appt.duration_minutes) != appt.duration_minutes

        if dentist_changed:
            self.validator.require_dentist(changes["dentist_id"], clinic_id)
        if patient_changed:
            self.validator.require_patient(changes["patient_id"], clinic_id)

        if "procedure_id" in changes:
            if changes["procedure_id"] is not None:
                procedure = self.validator.require_procedure(changes["procedure_id"], clinic_id)
                appt.procedure_id = procedure.id
                appt.procedure_snapshot = procedure.snapshot()
            else:
                appt.procedure_id = None
                appt.procedure_snapshot = None

        if "status" in changes:
            appt.transition_to(changes["status"])

        if dentist_changed:
            appt.dentist_id = changes["dentist_id"]
        if patient_changed:
            appt.patient_id = changes["patient_id"]
        appt.date = new_date
        if duration_changed:
            appt.duration_minutes = changes["duration_minutes"]
        for text_field in ("procedure", "notes"):
            if text_field in changes:
                setattr(appt, text_field, changes[text_field])

        with self.repo.schedule_lock(clinic_id, str(appt.dentist_id)):
            reslotted = dentist_changed or date_changed or duration_changed
            if reslotted and appt.blocks_schedule and self.conflict_checker.has_conflict(
                clinic_id,
                str(appt.dentist_id),
                appt.date,
                appt.duration_minutes,
                exclude_appointment_id=str(appt.id),
            ):
                _raise_conflict(appt.id, appt.dentist_id, appt.date)
            updated = self.repo.update(appt)

        logger.info(
            "Agendamento atualizado",
            clinic_id=clinic_id,
            appointment_id=str(updated.id),
            fields=sorted(changes),
        )
        return updated


# ——— CANCEL ————————————————————————————————————————————————

class CancelAppointmentHandler(CommandHandler[CancelAppointmentCommand]):
    def __init__(self, repo: AppointmentRepository):
        self.repo = repo

    def handle(self, command: CancelAppointmentCommand) -> AppointmentEntity:
        clinic_id = str(command.clinic_id)
        appt = self.repo.find_by_id(str(command.id), clinic_id)
        if appt is None:
            raise AppointmentNotFound(appointment_id=str(command.id))
        if appt.status is AppointmentStatus.CANCELED:
            return appt

        appt.cancel()
        updated = self.repo.update(appt)
        logger.info("Agendamento cancelado", clinic_id=clinic_id, appointment_id=str(appt.id))
        return updated
