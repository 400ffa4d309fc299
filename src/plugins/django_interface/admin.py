"""
Admin site registry
-------------------
Registra os modelos da clínica de forma dinâmica.
"""

import structlog
from django.contrib import admin as django_admin

from . import models

logger = structlog.get_logger(__name__)

# ╭──────────────────────────────────────────────╮
# │ Configuração de cada ModelAdmin             │
# ╰──────────────────────────────────────────────╯
MODEL_ADMIN_REGISTRY: dict[type[models.models.Model], dict] = {
    # 1. Clínica & Usuários
    models.Clinic: dict(
        list_display=("name", "cnpj", "created_at"),
        search_fields=("name", "cnpj"),
    ),
    models.User: dict(
        list_display=("email", "name", "role", "is_active", "clinic"),
        search_fields=("email", "name"),
        list_filter=("role", "is_active"),
    ),
    # 2. Catálogo
    models.Specialty: dict(
        list_display=("name",),
        search_fields=("name",),
    ),
    models.Procedure: dict(
        list_display=("name", "clinic", "base_value", "commission_percentage", "is_active"),
        list_filter=("clinic", "is_active"),
        search_fields=("name",),
    ),
    # 3. Pessoas
    models.Dentist: dict(
        list_display=("user", "cro", "clinic", "commission"),
        list_filter=("clinic",),
        search_fields=("cro", "user__name"),
    ),
    models.Patient: dict(
        list_display=("name", "email", "phone", "clinic", "is_active"),
        list_filter=("clinic", "is_active"),
        search_fields=("name", "email"),
    ),
    # 4. Agenda
    models.Appointment: dict(
        list_display=("date", "duration_minutes", "dentist", "patient", "status"),
        list_filter=("status", "clinic"),
        date_hierarchy="date",
    ),
    # 5. Financeiro
    models.TreatmentPlan: dict(
        list_display=("patient", "dentist", "status", "created_at"),
        list_filter=("status", "clinic"),
    ),
    models.TreatmentPlanItem: dict(
        list_display=("treatment_plan", "description", "value", "quantity"),
    ),
    models.Payment: dict(
        list_display=("patient", "amount", "method", "created_at"),
        list_filter=("method", "clinic"),
    ),
    models.Attendance: dict(
        list_display=("patient", "dentist", "status", "arrival_at", "finished_at"),
        list_filter=("status", "clinic"),
    ),
    models.AttendanceProcedure: dict(
        list_display=("attendance", "dentist", "description", "price", "quantity"),
    ),
}

# ╭──────────────────────────────────────────────╮
# │ Registro dinâmico                           │
# ╰──────────────────────────────────────────────╯
for model, opts in MODEL_ADMIN_REGISTRY.items():
    admin_class = type(f"{model.__name__}Admin", (django_admin.ModelAdmin,), opts)
    django_admin.site.register(model, admin_class)
    logger.debug("Registered model in admin", model=model.__name__)
