from datetime import datetime

from appointment_scheduling.adapters.observability.metrics import CONFLICT_CHECK_DURATION
from appointment_scheduling.core.application.queries.appointment_queries import (
    CheckScheduleConflictQuery,
    GetAppointmentQuery,
    ListAppointmentsQuery,
)
from appointment_scheduling.core.domain.entities.appointment_entity import AppointmentEntity
from appointment_scheduling.core.domain.repositories.appointment_repository import (
    AppointmentRepository,
)
from appointment_scheduling.core.domain.services.conflict_checker import ConflictChecker
from odonto_core.core.application.cqrs import PagedResult, QueryHandler
from odonto_core.core.domain.exceptions import AppointmentNotFound
from odonto_core.core.domain.services.local_day import local_day_bounds

MAX_PAGE_SIZE = 200


class GetAppointmentHandler(QueryHandler[GetAppointmentQuery, AppointmentEntity]):
    def __init__(self, repo: AppointmentRepository):
        self.repo = repo

    def handle(self, query: GetAppointmentQuery) -> AppointmentEntity:
        appt = self.repo.find_by_id(str(query.id), str(query.clinic_id))
        if appt is None:
            raise AppointmentNotFound(appointment_id=str(query.id))
        return appt


class ListAppointmentsHandler(QueryHandler[ListAppointmentsQuery, PagedResult[AppointmentEntity]]):
    """
    Converte os filtros de dia (fuso da clínica) em limites `[start, end)`
    antes de ir ao repositório.
    """

    def __init__(self, repo: AppointmentRepository, time_zone):
        self.repo = repo
        self.time_zone = time_zone

    def _bounds(self, day) -> tuple[datetime, datetime]:
        return local_day_bounds(day, self.time_zone)

    def handle(self, query: ListAppointmentsQuery) -> PagedResult[AppointmentEntity]:
        f = query.filtros
        filtros: dict = {}
        if f.dentist_id:
            filtros["dentist_id"] = str(f.dentist_id)
        if f.patient_id:
            filtros["patient_id"] = str(f.patient_id)
        if f.status:
            filtros["status"] = f.status
        if f.date:
            filtros["start"], filtros["end"] = self._bounds(f.date)
        else:
            if f.date_from:
                filtros["start"] = self._bounds(f.date_from)[0]
            if f.date_to:
                filtros["end"] = self._bounds(f.date_to)[1]

        page = max(query.page, 1)
        page_size = min(max(query.page_size, 1), MAX_PAGE_SIZE)
        return self.repo.list(str(query.clinic_id), filtros, page, page_size)


class CheckScheduleConflictHandler(QueryHandler[CheckScheduleConflictQuery, bool]):
    def __init__(self, conflict_checker: ConflictChecker):
        self.conflict_checker = conflict_checker

    def handle(self, query: CheckScheduleConflictQuery) -> bool:
        p = query.payload
        with CONFLICT_CHECK_DURATION.time():
            return self.conflict_checker.has_conflict(
                str(query.clinic_id),
                str(p.dentist_id),
                p.date,
                p.duration_minutes,
                exclude_appointment_id=str(p.exclude_id) if p.exclude_id else None,
            )
