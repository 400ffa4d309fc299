"""
Taxonomia de erros do domínio.

Erros de regra de negócio (`DomainError` e filhos) são devolvidos ao chamador
e nunca retentados: repetir a operação não muda o resultado. Falhas de
armazenamento/lookup viram `InfrastructureError` e sobem intactas para que o
chamador aplique a própria política de retry.

Cada erro carrega um `code` estável; a camada de apresentação é quem traduz
o código em mensagem para o usuário.
"""
from __future__ import annotations


class DomainError(Exception):
    """Classe base para todas as violações de regra de negócio."""
    code = "DOMAIN_ERROR"

    def __init__(self, message: str | None = None, **context) -> None:
        self.context = context
        super().__init__(message or self.code)


# ── entidade ausente ou fora da clínica ─────────────────────────────
class NotFoundError(DomainError):
    code = "NOT_FOUND"


class DentistNotFound(NotFoundError):
    code = "DENTIST_NOT_FOUND"


class PatientNotFound(NotFoundError):
    code = "PATIENT_NOT_FOUND"


class ProcedureNotFound(NotFoundError):
    code = "PROCEDURE_NOT_FOUND"


class AppointmentNotFound(NotFoundError):
    code = "APPOINTMENT_NOT_FOUND"


# ── entidade existe, mas está desabilitada ───────────────────────────
class InactiveEntityError(DomainError):
    code = "INACTIVE_ENTITY"


class DentistInactive(InactiveEntityError):
    code = "DENTIST_INACTIVE"


class PatientInactive(InactiveEntityError):
    code = "PATIENT_INACTIVE"


class ProcedureInactive(InactiveEntityError):
    code = "PROCEDURE_INACTIVE"


# ── agenda ───────────────────────────────────────────────────────────
class SchedulingConflict(DomainError):
    code = "SCHEDULING_CONFLICT"


# ── entrada malformada ───────────────────────────────────────────────
class ValidationError(DomainError):
    code = "VALIDATION_ERROR"


class InvalidStatusTransition(ValidationError):
    code = "INVALID_STATUS_TRANSITION"


# ── autorização ──────────────────────────────────────────────────────
class AccessDenied(DomainError):
    code = "ACCESS_DENIED"


# ── infraestrutura ───────────────────────────────────────────────────
class InfrastructureError(Exception):
    """
    Falha de armazenamento ou lookup sem relação com regra de negócio.
    Sempre encadeada (`raise ... from exc`) à exceção original.
    """
    code = "INFRASTRUCTURE_ERROR"
