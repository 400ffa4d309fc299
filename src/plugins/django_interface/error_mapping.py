"""
Tradução dos erros de domínio para HTTP.

O núcleo levanta exceções com `code` estável; este é o único lugar que
conhece status HTTP e mensagens para o usuário.
"""
import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from odonto_core.adapters.context.request_context import current_user_id
from odonto_core.core.domain.exceptions import DomainError, InfrastructureError

logger = structlog.get_logger(__name__)

# code → (status HTTP, mensagem)
ERROR_TABLE: dict[str, tuple[int, str]] = {
    "DENTIST_NOT_FOUND":         (status.HTTP_404_NOT_FOUND, "Dentista não encontrado"),
    "PATIENT_NOT_FOUND":         (status.HTTP_404_NOT_FOUND, "Paciente não encontrado"),
    "PROCEDURE_NOT_FOUND":       (status.HTTP_404_NOT_FOUND, "Procedimento não encontrado ou não pertence a esta clínica"),
    "APPOINTMENT_NOT_FOUND":     (status.HTTP_404_NOT_FOUND, "Agendamento não encontrado"),
    "NOT_FOUND":                 (status.HTTP_404_NOT_FOUND, "Registro não encontrado"),
    "DENTIST_INACTIVE":          (status.HTTP_422_UNPROCESSABLE_ENTITY, "Dentista inativo não pode receber agendamentos"),
    "PATIENT_INACTIVE":          (status.HTTP_422_UNPROCESSABLE_ENTITY, "Paciente inativo não pode ser agendado"),
    "PROCEDURE_INACTIVE":        (status.HTTP_422_UNPROCESSABLE_ENTITY, "Procedimento inativo não pode ser agendado"),
    "INACTIVE_ENTITY":           (status.HTTP_422_UNPROCESSABLE_ENTITY, "Registro inativo"),
    "SCHEDULING_CONFLICT":       (status.HTTP_409_CONFLICT, "Já existe um agendamento neste horário para este dentista"),
    "VALIDATION_ERROR":          (status.HTTP_400_BAD_REQUEST, "Dados inválidos"),
    "INVALID_STATUS_TRANSITION": (status.HTTP_400_BAD_REQUEST, "Agendamento cancelado não pode ser reaberto"),
    "ACCESS_DENIED":             (status.HTTP_403_FORBIDDEN, "Acesso negado"),
    "INFRASTRUCTURE_ERROR":      (status.HTTP_503_SERVICE_UNAVAILABLE, "Serviço temporariamente indisponível"),
}


def error_payload(exc: DomainError | InfrastructureError) -> tuple[int, dict]:
    http_status, message = ERROR_TABLE.get(
        exc.code, (status.HTTP_400_BAD_REQUEST, "Erro de regra de negócio")
    )
    body = {"success": False, "code": exc.code, "error": message}
    errors = getattr(exc, "context", {}).get("errors")
    if errors:
        body["details"] = errors
    return http_status, body


def domain_exception_handler(exc, context):
    """EXCEPTION_HANDLER do DRF: erros de domínio/infra → resposta JSON padronizada."""
    if isinstance(exc, DomainError | InfrastructureError):
        http_status, body = error_payload(exc)
        log = logger.error if http_status >= 500 else logger.info
        log(
            "Erro mapeado para HTTP",
            code=exc.code,
            status=http_status,
            requester_id=current_user_id(),
            view=context["view"].__class__.__name__ if context.get("view") else None,
            **{k: v for k, v in getattr(exc, "context", {}).items() if k != "errors"},
        )
        return Response(body, status=http_status)
    return exception_handler(exc, context)
