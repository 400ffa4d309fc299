from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

import structlog
from django.db import DatabaseError, transaction

from appointment_scheduling.core.domain.entities.appointment_entity import (
    AppointmentEntity,
    AppointmentStatus,
)
from appointment_scheduling.core.domain.repositories.appointment_repository import (
    AppointmentRepository,
)
from odonto_core.core.application.cqrs import PagedResult
from odonto_core.core.domain.entities.procedure_entity import ProcedureSnapshot
from odonto_core.core.domain.exceptions import AppointmentNotFound, InfrastructureError
from plugins.django_interface.models import Appointment as AppointmentModel
from plugins.django_interface.models import Dentist as DentistModel

logger = structlog.get_logger(__name__)

_WRITABLE_FIELDS = (
    "dentist_id",
    "patient_id",
    "date",
    "duration_minutes",
    "status",
    "procedure_ref_id",
    "procedure_snapshot",
    "procedure",
    "notes",
)


class AppointmentRepoImpl(AppointmentRepository):
    """
    Agenda persistida no Django ORM.

    Toda falha de banco vira `InfrastructureError` (encadeada); o chamador
    decide se repete a operação.
    """

    # ────────────────────────── mapeamento ──────────────────────────
    @staticmethod
    def _to_entity(m: AppointmentModel) -> AppointmentEntity:
        return AppointmentEntity(
            id=m.id,
            clinic_id=m.clinic_id,
            dentist_id=m.dentist_id,
            patient_id=m.patient_id,
            date=m.date,
            duration_minutes=m.duration_minutes,
            status=AppointmentStatus(m.status),
            procedure_id=m.procedure_ref_id,
            procedure_snapshot=(
                ProcedureSnapshot.from_dict(m.procedure_snapshot) if m.procedure_snapshot else None
            ),
            procedure=m.procedure,
            notes=m.notes,
            created_at=m.created_at,
            updated_at=m.updated_at,
        )

    @staticmethod
    def _to_fields(e: AppointmentEntity) -> dict[str, Any]:
        return {
            "dentist_id": e.dentist_id,
            "patient_id": e.patient_id,
            "date": e.date,
            "duration_minutes": e.duration_minutes,
            "status": AppointmentStatus(e.status).value,
            "procedure_ref_id": e.procedure_id,
            "procedure_snapshot": e.procedure_snapshot.to_dict() if e.procedure_snapshot else None,
            "procedure": e.procedure,
            "notes": e.notes,
        }

    # ────────────────────────── consultas ──────────────────────────
    def find_by_dentist_and_day(
        self,
        clinic_id: str,
        dentist_id: str,
        day_start: datetime,
        day_end: datetime,
        statuses: Iterable[AppointmentStatus],
    ) -> list[AppointmentEntity]:
        try:
            qs = AppointmentModel.objects.filter(
                clinic_id=clinic_id,
                dentist_id=dentist_id,
                date__gte=day_start,
                date__lt=day_end,
                status__in=[AppointmentStatus(s).value for s in statuses],
            ).order_by("date")
            return [self._to_entity(m) for m in qs]
        except DatabaseError as exc:
            logger.error("Falha ao ler agenda do dentista", dentist_id=str(dentist_id), error=str(exc))
            raise InfrastructureError("appointment range query failed") from exc

    def find_by_id(self, appointment_id: str, clinic_id: str) -> AppointmentEntity | None:
        try:
            m = AppointmentModel.objects.filter(id=appointment_id, clinic_id=clinic_id).first()
        except DatabaseError as exc:
            raise InfrastructureError("appointment lookup failed") from exc
        return self._to_entity(m) if m else None

    def list(
        self,
        clinic_id: str,
        filtros: dict[str, Any],
        page: int,
        page_size: int,
    ) -> PagedResult[AppointmentEntity]:
        qs = AppointmentModel.objects.filter(clinic_id=clinic_id)
        if filtros.get("dentist_id"):
            qs = qs.filter(dentist_id=filtros["dentist_id"])
        if filtros.get("patient_id"):
            qs = qs.filter(patient_id=filtros["patient_id"])
        if filtros.get("status"):
            qs = qs.filter(status=AppointmentStatus(filtros["status"]).value)
        if filtros.get("start"):
            qs = qs.filter(date__gte=filtros["start"])
        if filtros.get("end"):
            qs = qs.filter(date__lt=filtros["end"])

        try:
            total = qs.count()
            offset = (page - 1) * page_size
            items = [self._to_entity(m) for m in qs.order_by("date", "id")[offset : offset + page_size]]
        except DatabaseError as exc:
            raise InfrastructureError("appointment listing failed") from exc
        return PagedResult(items=items, total=total, page=page, page_size=page_size)

    # ────────────────────────── escrita ──────────────────────────
    def create(self, appointment: AppointmentEntity) -> AppointmentEntity:
        try:
            m = AppointmentModel.objects.create(
                id=appointment.id,
                clinic_id=appointment.clinic_id,
                **self._to_fields(appointment),
            )
        except DatabaseError as exc:
            logger.error("Falha ao gravar agendamento", error=str(exc))
            raise InfrastructureError("appointment create failed") from exc
        return self._to_entity(m)

    def update(self, appointment: AppointmentEntity) -> AppointmentEntity:
        try:
            m = AppointmentModel.objects.filter(
                id=appointment.id, clinic_id=appointment.clinic_id
            ).first()
            if m is None:
                raise AppointmentNotFound(appointment_id=str(appointment.id))
            for name, value in self._to_fields(appointment).items():
                setattr(m, name, value)
            m.save(update_fields=[*_WRITABLE_FIELDS, "updated_at"])
        except DatabaseError as exc:
            logger.error("Falha ao atualizar agendamento", appointment_id=str(appointment.id), error=str(exc))
            raise InfrastructureError("appointment update failed") from exc
        return self._to_entity(m)

    # ────────────────────────── concorrência ──────────────────────────
    @contextmanager
    def schedule_lock(self, clinic_id: str, dentist_id: str) -> Iterator[None]:
        """
        Abre uma transação e trava a linha do dentista (SELECT ... FOR UPDATE),
        serializando reservas concorrentes para a mesma agenda. Em bancos sem
        lock de linha (SQLite) vale só a atomicidade.
        """
        with transaction.atomic():
            try:
                list(
                    DentistModel.objects.select_for_update()
                    .filter(id=dentist_id, clinic_id=clinic_id)
                    .values_list("id", flat=True)
                )
            except DatabaseError as exc:
                raise InfrastructureError("schedule lock failed") from exc
            yield
