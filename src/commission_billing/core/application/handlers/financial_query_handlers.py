from commission_billing.core.application.dtos.financial_dto import FinancialReportDTO
from commission_billing.core.application.queries.financial_queries import (
    GetDentistFinancialReportQuery,
)
from commission_billing.core.application.services.financial_report_service import (
    FinancialReportService,
)
from odonto_core.core.application.cqrs import QueryHandler


class GetDentistFinancialReportHandler(QueryHandler[GetDentistFinancialReportQuery, FinancialReportDTO]):
    def __init__(self, report_service: FinancialReportService):
        self.report_service = report_service

    def handle(self, query: GetDentistFinancialReportQuery) -> FinancialReportDTO:
        return self.report_service.build_report(
            query.clinic_id,
            query.dentist_id,
            query.filtros,
            query.requester,
        )
