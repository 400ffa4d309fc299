# =========================================================
# Serializers compatíveis com as *entities*/DTOs (e não com
# os modelos Django). Entrada é validada pelos DTOs pydantic.
# =========================================================
from rest_framework import serializers


def _money(**kwargs):
    return serializers.DecimalField(max_digits=14, decimal_places=2, coerce_to_string=False, **kwargs)


# ───────────────────────────────────────────────
# Agenda
# ───────────────────────────────────────────────
class ProcedureSnapshotSerializer(serializers.Serializer):
    name                  = serializers.CharField()
    base_value            = _money()
    commission_percentage = serializers.DecimalField(max_digits=5, decimal_places=2, coerce_to_string=False)


class AppointmentSerializer(serializers.Serializer):
    id                 = serializers.UUIDField()
    clinic_id          = serializers.UUIDField()
    dentist_id         = serializers.UUIDField()
    patient_id         = serializers.UUIDField()
    date               = serializers.DateTimeField()
    ends_at            = serializers.DateTimeField()
    duration_minutes   = serializers.IntegerField()
    status             = serializers.CharField()
    procedure_id       = serializers.UUIDField(allow_null=True)
    procedure_snapshot = ProcedureSnapshotSerializer(allow_null=True)
    procedure          = serializers.CharField(allow_null=True, allow_blank=True)
    notes              = serializers.CharField(allow_null=True, allow_blank=True)
    created_at         = serializers.DateTimeField(allow_null=True)
    updated_at         = serializers.DateTimeField(allow_null=True)


class AppointmentWriteSerializer(serializers.Serializer):
    """Somente documentação (swagger); a validação real é do DTO."""
    dentist_id       = serializers.UUIDField()
    patient_id       = serializers.UUIDField()
    date             = serializers.DateTimeField()
    duration_minutes = serializers.IntegerField(min_value=15, max_value=480, default=30)
    procedure_id     = serializers.UUIDField(required=False, allow_null=True)
    procedure        = serializers.CharField(required=False, allow_null=True, max_length=200)
    notes            = serializers.CharField(required=False, allow_null=True, max_length=1000)


class ConflictCheckResultSerializer(serializers.Serializer):
    has_conflict = serializers.BooleanField()


# ───────────────────────────────────────────────
# Financeiro
# ───────────────────────────────────────────────
class FinancialTransactionSerializer(serializers.Serializer):
    id              = serializers.CharField()
    date            = serializers.DateTimeField()
    patient_id      = serializers.CharField(allow_null=True)
    patient_name    = serializers.CharField()
    procedure_name  = serializers.CharField()
    gross_value     = _money()
    commission      = _money()
    commission_type = serializers.CharField()
    status          = serializers.CharField()
    source          = serializers.CharField()
    source_id       = serializers.CharField()


class FinancialReportSerializer(serializers.Serializer):
    dentist_id            = serializers.CharField()
    commission_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2, coerce_to_string=False, allow_null=True
    )
    gross_production      = _money()
    total_received        = _money()
    total_pending         = _money()
    net_received          = _money()
    transactions          = FinancialTransactionSerializer(many=True)
