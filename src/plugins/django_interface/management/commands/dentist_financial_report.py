import json

from django.core.management.base import BaseCommand, CommandError
from django.core.serializers.json import DjangoJSONEncoder

from commission_billing.adapters.config import composition_root as billing_root
from commission_billing.core.application.dtos.financial_dto import FinancialFilterDTO
from commission_billing.core.application.queries.financial_queries import (
    GetDentistFinancialReportQuery,
)
from odonto_core.core.application.dtos.parsing import parse_dto
from odonto_core.core.domain.exceptions import DomainError
from plugins.django_interface.serializers.core_serializers import FinancialReportSerializer


class Command(BaseCommand):
    help = "Gera o relatório financeiro (produção e comissões) de um dentista em JSON."

    def add_arguments(self, parser):
        parser.add_argument("--clinic-id", required=True, help="UUID da clínica")
        parser.add_argument("--dentist-id", required=True, help="UUID do dentista")
        parser.add_argument("--date-from", help="Dia inicial (YYYY-MM-DD, inclusivo)")
        parser.add_argument("--date-to", help="Dia final (YYYY-MM-DD, inclusivo)")
        parser.add_argument("--patient", dest="patient_id", help="UUID do paciente")
        parser.add_argument("--procedure", dest="procedure_id", help="UUID do procedimento")
        parser.add_argument(
            "--commission-type",
            choices=["PROCEDURE", "GENERAL"],
            help="Filtra pela origem do percentual aplicado",
        )

    def handle(self, *args, **opts):
        raw = {
            key: opts[key]
            for key in ("date_from", "date_to", "patient_id", "procedure_id", "commission_type")
            if opts.get(key)
        }
        try:
            filtros = parse_dto(FinancialFilterDTO, raw)
            report = billing_root.container.query_bus().dispatch(
                GetDentistFinancialReportQuery(
                    clinic_id=opts["clinic_id"],
                    dentist_id=opts["dentist_id"],
                    filtros=filtros,
                )
            )
        except DomainError as exc:
            raise CommandError(f"{exc.code}: {exc}") from exc

        data = FinancialReportSerializer(report).data
        self.stdout.write(json.dumps(data, cls=DjangoJSONEncoder, ensure_ascii=False, indent=2))
