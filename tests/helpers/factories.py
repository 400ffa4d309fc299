"""Criação de registros ORM para testes que usam banco."""
from __future__ import annotations

from decimal import Decimal

from plugins.django_interface.models import (
    Attendance,
    AttendanceProcedure,
    Clinic,
    Dentist,
    Patient,
    Payment,
    PaymentTreatmentPlan,
    Procedure,
    TreatmentPlan,
    TreatmentPlanItem,
    User,
)

_seq = iter(range(1, 1_000_000))


def clinic(name="Clínica Sorriso") -> Clinic:
    return Clinic.objects.create(name=name)


def user(clinic_obj, role=User.Role.RECEPTIONIST, active=True, name="Usuário") -> User:
    return User.objects.create(
        clinic=clinic_obj,
        email=f"user{next(_seq)}@example.com",
        name=name,
        role=role,
        is_active=active,
    )


def dentist(clinic_obj, commission="20", active=True) -> Dentist:
    return Dentist.objects.create(
        clinic=clinic_obj,
        user=user(clinic_obj, role=User.Role.DENTIST, active=active, name="Dra. Ana"),
        cro=f"SP-{next(_seq)}",
        commission=Decimal(commission) if commission is not None else None,
    )


def patient(clinic_obj, active=True, name="João da Silva") -> Patient:
    return Patient.objects.create(clinic=clinic_obj, name=name, is_active=active)


def procedure(clinic_obj, base_value="250.00", commission="30", active=True) -> Procedure:
    return Procedure.objects.create(
        clinic=clinic_obj,
        name="Limpeza",
        base_value=Decimal(base_value),
        commission_percentage=Decimal(commission),
        is_active=active,
    )


def treatment_plan(dentist_obj, patient_obj, status=TreatmentPlan.Status.APPROVED, items=()) -> TreatmentPlan:
    plan = TreatmentPlan.objects.create(
        clinic=dentist_obj.clinic, dentist=dentist_obj, patient=patient_obj, status=status
    )
    for value, quantity, proc in items:
        TreatmentPlanItem.objects.create(
            treatment_plan=plan,
            procedure=proc,
            description=proc.name if proc else "Item avulso",
            value=Decimal(value),
            quantity=quantity,
        )
    return plan


def payment(patient_obj, plans, amount="100.00", created_at=None) -> Payment:
    pay = Payment.objects.create(
        clinic=patient_obj.clinic, patient=patient_obj, amount=Decimal(amount), method=Payment.Method.PIX
    )
    for plan in plans:
        PaymentTreatmentPlan.objects.create(payment=pay, treatment_plan=plan)
    if created_at is not None:
        Payment.objects.filter(id=pay.id).update(created_at=created_at)
        pay.refresh_from_db()
    return pay


def attendance(dentist_obj, patient_obj, arrival_at, finished_at=None, status=Attendance.Status.DONE, lines=()):
    att = Attendance.objects.create(
        clinic=dentist_obj.clinic,
        dentist=dentist_obj,
        patient=patient_obj,
        status=status,
        arrival_at=arrival_at,
        finished_at=finished_at,
    )
    for price, quantity, proc, line_dentist in lines:
        AttendanceProcedure.objects.create(
            attendance=att,
            dentist=line_dentist or dentist_obj,
            procedure=proc,
            description=proc.name if proc else "Procedimento avulso",
            price=Decimal(price) if price is not None else None,
            quantity=quantity,
        )
    return att
