from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from odonto_core.core.domain.exceptions import ValidationError

M = TypeVar("M", bound=BaseModel)


def parse_dto(model_cls: type[M], data: M | dict[str, Any]) -> M:
    """
    Valida `data` contra o DTO pydantic e converte falhas de validação em
    `ValidationError` do domínio (com a lista de campos em `context["errors"]`).
    """
    if isinstance(data, model_cls):
        return data
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as exc:
        errors = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        raise ValidationError("dados inválidos", errors=errors) from exc
