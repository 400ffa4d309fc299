"""Montagem dos handlers/serviços sobre os repositórios em memória."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal

from appointment_scheduling.core.application.commands.appointment_commands import (
    BookAppointmentCommand,
    CancelAppointmentCommand,
    UpdateAppointmentCommand,
)
from appointment_scheduling.core.application.handlers.appointment_handlers import (
    BookAppointmentHandler,
    CancelAppointmentHandler,
    UpdateAppointmentHandler,
)
from appointment_scheduling.core.application.handlers.appointment_query_handlers import (
    CheckScheduleConflictHandler,
    GetAppointmentHandler,
    ListAppointmentsHandler,
)
from appointment_scheduling.core.application.queries.appointment_queries import (
    CheckScheduleConflictQuery,
    GetAppointmentQuery,
    ListAppointmentsQuery,
)
from appointment_scheduling.core.application.services.appointment_service import AppointmentService
from appointment_scheduling.core.application.services.reference_validator import ReferenceValidator
from appointment_scheduling.core.domain.services.conflict_checker import ConflictChecker
from odonto_core.core.application.cqrs import CommandBus, QueryBus
from odonto_core.core.domain.entities.dentist_entity import DentistEntity
from odonto_core.core.domain.entities.patient_entity import PatientEntity
from odonto_core.core.domain.entities.procedure_entity import ProcedureEntity
from tests.helpers.in_memory_repos import (
    InMemoryAppointmentRepo,
    InMemoryDentistRepo,
    InMemoryPatientRepo,
    InMemoryProcedureRepo,
)

CLINIC_TZ = "America/Sao_Paulo"


def make_dentist(clinic_id, *, active=True, commission=None) -> DentistEntity:
    return DentistEntity(
        id=uuid.uuid4(),
        clinic_id=clinic_id,
        user_id=uuid.uuid4(),
        user_active=active,
        name="Dra. Ana",
        cro="SP-12345",
        commission_percentage=Decimal(commission) if commission is not None else None,
    )


def make_patient(clinic_id, *, active=True) -> PatientEntity:
    return PatientEntity(id=uuid.uuid4(), clinic_id=clinic_id, name="João da Silva", is_active=active)


def make_procedure(clinic_id, *, active=True, base_value="250.00", commission="30") -> ProcedureEntity:
    return ProcedureEntity(
        id=uuid.uuid4(),
        clinic_id=clinic_id,
        name="Limpeza",
        base_value=Decimal(base_value),
        commission_percentage=Decimal(commission),
        is_active=active,
    )


@dataclass
class SchedulingWorld:
    clinic_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    dentists: InMemoryDentistRepo = field(default_factory=InMemoryDentistRepo)
    patients: InMemoryPatientRepo = field(default_factory=InMemoryPatientRepo)
    procedures: InMemoryProcedureRepo = field(default_factory=InMemoryProcedureRepo)
    appointments: InMemoryAppointmentRepo = field(default_factory=InMemoryAppointmentRepo)

    def __post_init__(self):
        self.checker = ConflictChecker(self.appointments, CLINIC_TZ)
        validator = ReferenceValidator(self.dentists, self.patients, self.procedures)

        self.command_bus = CommandBus()
        self.command_bus.register(
            BookAppointmentCommand, BookAppointmentHandler(self.appointments, validator, self.checker)
        )
        self.command_bus.register(
            UpdateAppointmentCommand, UpdateAppointmentHandler(self.appointments, validator, self.checker)
        )
        self.command_bus.register(CancelAppointmentCommand, CancelAppointmentHandler(self.appointments))

        self.query_bus = QueryBus()
        self.query_bus.register(GetAppointmentQuery, GetAppointmentHandler(self.appointments))
        self.query_bus.register(ListAppointmentsQuery, ListAppointmentsHandler(self.appointments, CLINIC_TZ))
        self.query_bus.register(CheckScheduleConflictQuery, CheckScheduleConflictHandler(self.checker))

        self.service = AppointmentService(self.command_bus, self.query_bus)

    def dentist(self, **kwargs) -> DentistEntity:
        return self.dentists.add(make_dentist(self.clinic_id, **kwargs))

    def patient(self, **kwargs) -> PatientEntity:
        return self.patients.add(make_patient(self.clinic_id, **kwargs))

    def procedure(self, **kwargs) -> ProcedureEntity:
        return self.procedures.add(make_procedure(self.clinic_id, **kwargs))
