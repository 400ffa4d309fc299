"""
Domínio → ORM

⚑ Todas as tabelas de negócio carregam `clinic_id` (isolamento multi-tenant)
⚑ Valores monetários em DecimalField(12, 2); percentuais em DecimalField(5, 2)
⚑ Agendamento guarda snapshot imutável do procedimento (JSON) além da FK
⚑ "Excluir" agendamento = status CANCELED, nunca DELETE físico
"""

from __future__ import annotations

import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import CheckConstraint, Index, Q
from django.db.models.functions import Lower

PERCENT_VALIDATORS = [MinValueValidator(0), MaxValueValidator(100)]


# ╭──────────────────────────────────────────────╮
# │ 1. Clínicas / Acesso                        │
# ╰──────────────────────────────────────────────╯
class Clinic(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    cnpj = models.CharField(max_length=18, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "clinics"

    def __str__(self) -> str:
        return self.name


class User(models.Model):
    class Role(models.TextChoices):
        OWNER = "OWNER", "Proprietário"
        ADMIN = "ADMIN", "Administrador"
        DENTIST = "DENTIST", "Dentista"
        RECEPTIONIST = "RECEPTIONIST", "Recepcionista"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="users")
    email = models.EmailField(unique=True, max_length=128)
    name = models.CharField(max_length=100)
    is_active = models.BooleanField(default=True, db_index=True)
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.RECEPTIONIST,
        db_index=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "users"
        indexes = [
            Index(Lower("email"), name="user_email_lower_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


# ╭──────────────────────────────────────────────╮
# │ 2. Catálogo                                 │
# ╰──────────────────────────────────────────────╯
class Specialty(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        db_table = "specialties"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Procedure(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="procedures")
    specialty = models.ForeignKey(
        Specialty, on_delete=models.SET_NULL, null=True, blank=True, related_name="procedures"
    )
    name = models.CharField(max_length=200)
    base_value = models.DecimalField(max_digits=12, decimal_places=2)
    commission_percentage = models.DecimalField(
        max_digits=5, decimal_places=2, default=0, validators=PERCENT_VALIDATORS
    )
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "procedures"
        ordering = ["name"]
        constraints = [
            CheckConstraint(
                condition=Q(commission_percentage__gte=0) & Q(commission_percentage__lte=100),
                name="ck_procedure_commission_range",
            ),
        ]

    def __str__(self) -> str:
        return self.name


# ╭──────────────────────────────────────────────╮
# │ 3. Pessoas                                  │
# ╰──────────────────────────────────────────────╯
class Dentist(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="dentists")
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="dentist")
    cro = models.CharField(max_length=20)
    specialty = models.CharField(max_length=100, blank=True, null=True)
    commission = models.DecimalField(
        max_digits=5, decimal_places=2, blank=True, null=True, validators=PERCENT_VALIDATORS
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "dentists"

    def __str__(self) -> str:
        return f"{self.user.name} (CRO {self.cro})"


class Patient(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="patients")
    name = models.CharField(max_length=255)
    email = models.EmailField(blank=True, null=True)
    phone = models.CharField(max_length=20, blank=True, null=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "patients"
        indexes = [Index(fields=["clinic", "name"])]

    def __str__(self) -> str:
        return self.name


# ╭──────────────────────────────────────────────╮
# │ 4. Agenda                                   │
# ╰──────────────────────────────────────────────╯
class Appointment(models.Model):
    class Status(models.TextChoices):
        SCHEDULED = "SCHEDULED", "Agendado"
        CONFIRMED = "CONFIRMED", "Confirmado"
        CANCELED = "CANCELED", "Cancelado"
        RESCHEDULED = "RESCHEDULED", "Reagendado"
        NO_SHOW = "NO_SHOW", "Não Compareceu"
        DONE = "DONE", "Concluído"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="appointments")
    dentist = models.ForeignKey(Dentist, on_delete=models.PROTECT, related_name="appointments")
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name="appointments")
    date = models.DateTimeField()
    duration_minutes = models.PositiveIntegerField(
        default=30, validators=[MinValueValidator(15), MaxValueValidator(480)]
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.SCHEDULED, db_index=True
    )
    procedure_ref = models.ForeignKey(
        Procedure,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="appointments",
        db_column="procedure_id",
    )
    procedure_snapshot = models.JSONField(blank=True, null=True)
    procedure = models.CharField(max_length=200, blank=True, null=True)  # texto livre (legado)
    notes = models.TextField(max_length=1000, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "appointments"
        ordering = ["date"]
        indexes = [
            Index(fields=["clinic", "dentist", "date"], name="appt_clinic_dentist_date_idx"),
            Index(fields=["clinic", "patient"], name="appt_clinic_patient_idx"),
        ]
        constraints = [
            CheckConstraint(
                condition=Q(duration_minutes__gte=15) & Q(duration_minutes__lte=480),
                name="ck_appointment_duration_range",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.date:%Y-%m-%d %H:%M} ({self.status})"


# ╭──────────────────────────────────────────────╮
# │ 5. Orçamentos / Pagamentos                  │
# ╰──────────────────────────────────────────────╯
class TreatmentPlan(models.Model):
    class Status(models.TextChoices):
        OPEN = "OPEN", "Aberto"
        APPROVED = "APPROVED", "Aprovado"
        REJECTED = "REJECTED", "Rejeitado"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="treatment_plans")
    dentist = models.ForeignKey(Dentist, on_delete=models.PROTECT, related_name="treatment_plans")
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name="treatment_plans")
    title = models.CharField(max_length=200, blank=True, null=True)
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.OPEN, db_index=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "treatment_plans"
        indexes = [Index(fields=["clinic", "dentist", "patient", "status"])]


class TreatmentPlanItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    treatment_plan = models.ForeignKey(TreatmentPlan, on_delete=models.CASCADE, related_name="items")
    procedure = models.ForeignKey(
        Procedure, on_delete=models.SET_NULL, null=True, blank=True, related_name="plan_items"
    )
    description = models.CharField(max_length=200)
    value = models.DecimalField(max_digits=12, decimal_places=2)
    quantity = models.PositiveIntegerField(default=1)

    class Meta:
        db_table = "treatment_plan_items"


class Payment(models.Model):
    class Method(models.TextChoices):
        CASH = "CASH", "Dinheiro"
        PIX = "PIX", "Pix"
        CARD = "CARD", "Cartão"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="payments")
    patient = models.ForeignKey(
        Patient, on_delete=models.SET_NULL, null=True, blank=True, related_name="payments"
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    method = models.CharField(max_length=10, choices=Method.choices)
    description = models.CharField(max_length=500, blank=True, null=True)
    treatment_plans = models.ManyToManyField(
        TreatmentPlan, through="PaymentTreatmentPlan", related_name="payments"
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "payments"


class PaymentTreatmentPlan(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    payment = models.ForeignKey(Payment, on_delete=models.CASCADE, related_name="payment_treatment_plans")
    treatment_plan = models.ForeignKey(
        TreatmentPlan, on_delete=models.CASCADE, related_name="payment_treatment_plans"
    )

    class Meta:
        db_table = "payment_treatment_plans"
        unique_together = ("payment", "treatment_plan")


# ╭──────────────────────────────────────────────╮
# │ 6. Atendimentos                             │
# ╰──────────────────────────────────────────────╯
class Attendance(models.Model):
    class Status(models.TextChoices):
        CHECKED_IN = "CHECKED_IN", "Check-in"
        IN_PROGRESS = "IN_PROGRESS", "Em atendimento"
        DONE = "DONE", "Finalizado"
        CANCELED = "CANCELED", "Cancelado"
        NO_SHOW = "NO_SHOW", "Não Compareceu"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name="attendances")
    dentist = models.ForeignKey(Dentist, on_delete=models.PROTECT, related_name="attendances")
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name="attendances")
    appointment = models.OneToOneField(
        Appointment, on_delete=models.SET_NULL, null=True, blank=True, related_name="attendance"
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.CHECKED_IN, db_index=True
    )
    arrival_at = models.DateTimeField()
    finished_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        db_table = "attendances"
        indexes = [Index(fields=["clinic", "dentist", "status"])]


class AttendanceProcedure(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    attendance = models.ForeignKey(Attendance, on_delete=models.CASCADE, related_name="procedures")
    dentist = models.ForeignKey(Dentist, on_delete=models.PROTECT, related_name="attendance_procedures")
    procedure = models.ForeignKey(
        Procedure, on_delete=models.SET_NULL, null=True, blank=True, related_name="attendance_lines"
    )
    description = models.CharField(max_length=200)
    price = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True)
    quantity = models.PositiveIntegerField(default=1)

    class Meta:
        db_table = "attendance_procedures"
