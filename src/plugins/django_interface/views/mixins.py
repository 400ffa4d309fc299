from odonto_core.core.domain.exceptions import ValidationError

DEFAULT_PAGE_SIZE = 50


class PaginationFilterMixin:
    """Remove page/page_size do QueryDict e devolve filtros limpos."""

    @staticmethod
    def _pagination(request) -> tuple[int, int]:
        try:
            page = int(request.query_params.get("page", 1))
            size = int(request.query_params.get("page_size", DEFAULT_PAGE_SIZE))
        except ValueError as exc:
            raise ValidationError("paginação inválida", field="page") from exc
        return page, size

    @staticmethod
    def _filters(request) -> dict[str, str]:
        params = request.query_params.copy()          # QueryDict mutável
        params.pop("page", None)
        params.pop("page_size", None)
        return {key: params.get(key) for key in params if params.get(key) not in (None, "")}
