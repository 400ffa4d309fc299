from dataclasses import dataclass, field

from commission_billing.core.application.dtos.financial_dto import FinancialFilterDTO
from odonto_core.core.application.cqrs import QueryDTO
from odonto_core.core.application.dtos.requester_dto import Requester


@dataclass(frozen=True, slots=True)
class GetDentistFinancialReportQuery(QueryDTO):
    """
    Relatório financeiro (produção e comissões) de um dentista.
    - requester: None apenas para chamadas internas (ex.: management command)
    """
    clinic_id: str
    dentist_id: str
    filtros: FinancialFilterDTO = field(default_factory=FinancialFilterDTO)
    requester: Requester | None = None
