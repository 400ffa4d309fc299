"""Reconciliação financeira do dentista (orçamentos pagos + atendimentos)."""
import uuid
from datetime import date, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from django.test import SimpleTestCase

from commission_billing.core.application.dtos.financial_dto import FinancialFilterDTO
from commission_billing.core.application.handlers.financial_query_handlers import (
    GetDentistFinancialReportHandler,
)
from commission_billing.core.application.queries.financial_queries import (
    GetDentistFinancialReportQuery,
)
from commission_billing.core.application.services.financial_report_service import (
    FinancialReportService,
)
from commission_billing.core.application.services.financial_sources import (
    AttendanceProcedureSource,
    TreatmentPlanPaymentSource,
)
from commission_billing.core.domain.entities.source_records import (
    AttendanceProcedureRecord,
    AttendanceRecord,
    PaymentRecord,
    TreatmentPlanItemRecord,
    TreatmentPlanRecord,
)
from odonto_core.core.application.dtos.parsing import parse_dto
from odonto_core.core.application.dtos.requester_dto import Requester
from odonto_core.core.domain.exceptions import AccessDenied, DentistNotFound, ValidationError
from tests.helpers.builders import CLINIC_TZ, make_dentist
from tests.helpers.in_memory_repos import (
    InMemoryAttendanceSourceRepo,
    InMemoryDentistRepo,
    InMemoryPaymentSourceRepo,
)

SP = ZoneInfo(CLINIC_TZ)
CLINIC = str(uuid.uuid4())


def at(day, hour=10):
    return datetime(2025, 3, day, hour, 0, tzinfo=SP)


def plan_payment(patient_id, created_at, *items, patient_name="Maria"):
    return PaymentRecord(
        id=uuid.uuid4(),
        created_at=created_at,
        patient_id=patient_id,
        patient_name=patient_name,
        treatment_plans=[TreatmentPlanRecord(id=uuid.uuid4(), patient_id=patient_id, items=list(items))],
    )


def plan_item(value, quantity=1, procedure_id=None, pct=None, description="Restauração"):
    return TreatmentPlanItemRecord(
        id=uuid.uuid4(),
        description=description,
        unit_value=Decimal(value),
        quantity=quantity,
        procedure_id=procedure_id,
        procedure_commission_percentage=Decimal(pct) if pct is not None else None,
    )


def attendance(patient_id, finished_at, *lines, arrival_at=None):
    return AttendanceRecord(
        id=uuid.uuid4(),
        patient_id=patient_id,
        patient_name="Carlos",
        arrival_at=arrival_at or finished_at,
        finished_at=finished_at,
        procedures=list(lines),
    )


def line(price=None, quantity=1, base=None, pct=None, procedure_id=None, description="Profilaxia"):
    return AttendanceProcedureRecord(
        id=uuid.uuid4(),
        description=description,
        quantity=quantity,
        price=Decimal(price) if price is not None else None,
        procedure_id=procedure_id,
        procedure_base_value=Decimal(base) if base is not None else None,
        procedure_commission_percentage=Decimal(pct) if pct is not None else None,
    )


class FinancialReportTests(SimpleTestCase):
    def setUp(self):
        self.dentist = make_dentist(CLINIC, commission="20")
        self.dentists = InMemoryDentistRepo(self.dentist)
        self.maria = uuid.uuid4()
        self.carlos = uuid.uuid4()
        self.payments = InMemoryPaymentSourceRepo()
        self.attendances = InMemoryAttendanceSourceRepo()

    def service(self):
        return FinancialReportService(
            dentist_repo=self.dentists,
            plan_source=TreatmentPlanPaymentSource(self.payments),
            attendance_source=AttendanceProcedureSource(self.attendances, self.payments),
            time_zone=CLINIC_TZ,
        )

    def report(self, requester=None, **filters):
        return self.service().build_report(
            CLINIC, str(self.dentist.id), FinancialFilterDTO(**filters), requester
        )

    def test_plan_items_are_paid_and_use_procedure_rate(self):
        self.payments.payments = [plan_payment(self.maria, at(5), plan_item("1000", pct="35"))]
        rep = self.report()
        [t] = rep.transactions
        self.assertEqual(t.status, "PAGO")
        self.assertEqual(t.source, "TREATMENT_PLAN")
        self.assertEqual(t.commission, Decimal("350.00"))
        self.assertEqual(t.commission_type, "PROCEDURE")

    def test_general_rate_applies_without_procedure(self):
        self.dentist.commission_percentage = Decimal("30")
        self.payments.payments = [plan_payment(self.maria, at(5), plan_item("500"))]
        [t] = self.report().transactions
        self.assertEqual(t.commission, Decimal("150.00"))
        self.assertEqual(t.commission_type, "GENERAL")

    def test_attendance_without_approved_plan_is_pending(self):
        self.attendances.attendances = [attendance(self.carlos, at(6), line("200"))]
        [t] = self.report().transactions
        self.assertEqual(t.status, "PENDENTE")
        self.assertEqual(t.source, "ATTENDANCE")

    def test_attendance_with_approved_plan_is_paid(self):
        self.payments.approved = {(str(self.dentist.id), str(self.carlos))}
        self.attendances.attendances = [attendance(self.carlos, at(6), line("200"), line("100"))]
        rep = self.report()
        self.assertEqual({t.status for t in rep.transactions}, {"PAGO"})
        self.assertEqual(self.payments.approval_lookups, 1)

    def test_approved_plan_of_other_dentist_does_not_count(self):
        self.payments.approved = {(str(uuid.uuid4()), str(self.carlos))}
        self.attendances.attendances = [attendance(self.carlos, at(6), line("200"))]
        self.assertEqual(self.report().transactions[0].status, "PENDENTE")

    def test_attendance_gross_falls_back_to_base_value(self):
        self.attendances.attendances = [
            attendance(self.carlos, at(6), line(None, quantity=2, base="150"), line(None, base=None))
        ]
        rep = self.report()
        self.assertEqual(len(rep.transactions), 1)
        self.assertEqual(rep.transactions[0].gross_value, Decimal("300.00"))

    def test_effective_date_falls_back_to_arrival(self):
        rec = AttendanceRecord(
            id=uuid.uuid4(),
            patient_id=self.carlos,
            patient_name="Carlos",
            arrival_at=at(7, 8),
            finished_at=None,
            procedures=[line("80")],
        )
        self.attendances.attendances = [rec]
        self.assertEqual(self.report().transactions[0].date, at(7, 8))

    def test_ledger_conservation_and_totals(self):
        self.payments.approved = {(str(self.dentist.id), str(self.maria))}
        self.payments.payments = [
            plan_payment(self.maria, at(3), plan_item("100.10", quantity=3, pct="12.5")),
            plan_payment(self.maria, at(4), plan_item("59.99")),
        ]
        self.attendances.attendances = [
            attendance(self.maria, at(8), line("250")),
            attendance(self.carlos, at(9), line("333.33", pct="15")),
        ]
        rep = self.report()

        self.assertEqual(rep.gross_production, sum(t.gross_value for t in rep.transactions))
        self.assertEqual(
            rep.total_received + rep.total_pending,
            sum(t.commission for t in rep.transactions),
        )
        self.assertEqual(rep.net_received, rep.total_received)
        self.assertEqual(rep.total_pending, Decimal("50.00"))
        self.assertEqual(rep.gross_production, Decimal("943.62"))

    def test_totals_match_rounded_lines_with_sub_cent_commissions(self):
        self.attendances.attendances = [
            attendance(self.carlos, at(6), line("1.00", pct="0.5"), line("1.00", pct="0.5")),
        ]
        rep = self.report()

        self.assertEqual([t.commission for t in rep.transactions], [Decimal("0.01"), Decimal("0.01")])
        self.assertEqual(rep.total_pending, Decimal("0.02"))
        self.assertEqual(
            rep.total_received + rep.total_pending,
            sum(t.commission for t in rep.transactions),
        )

    def test_source_id_points_to_plan_and_attendance(self):
        payment = plan_payment(self.maria, at(3), plan_item("100"))
        visit = attendance(self.carlos, at(4), line("50"))
        self.payments.payments = [payment]
        self.attendances.attendances = [visit]

        by_source = {t.source: t for t in self.report().transactions}
        plan = payment.treatment_plans[0]
        self.assertEqual(by_source["TREATMENT_PLAN"].source_id, str(plan.id))
        self.assertEqual(by_source["TREATMENT_PLAN"].id, f"{payment.id}-{plan.items[0].id}")
        self.assertEqual(by_source["ATTENDANCE"].source_id, str(visit.id))

    def test_transactions_sorted_newest_first(self):
        self.payments.payments = [plan_payment(self.maria, at(2), plan_item("10"))]
        self.attendances.attendances = [
            attendance(self.carlos, at(9), line("10")),
            attendance(self.carlos, at(5), line("10")),
        ]
        dates = [t.date for t in self.report().transactions]
        self.assertEqual(dates, [at(9), at(5), at(2)])

    def test_date_window_is_inclusive_in_clinic_zone(self):
        self.attendances.attendances = [
            attendance(self.carlos, datetime(2025, 3, 10, 23, 59, tzinfo=SP), line("10")),
            attendance(self.carlos, datetime(2025, 3, 11, 0, 0, tzinfo=SP), line("10")),
            attendance(self.carlos, datetime(2025, 3, 9, 23, 59, tzinfo=SP), line("10")),
        ]
        rep = self.report(date_from=date(2025, 3, 10), date_to=date(2025, 3, 10))
        self.assertEqual(len(rep.transactions), 1)

    def test_commission_type_filter_uses_resolved_tier(self):
        self.payments.payments = [
            plan_payment(self.maria, at(3), plan_item("100", pct="50"), plan_item("100", pct="0")),
        ]
        rep = self.report(commission_type="GENERAL")
        self.assertEqual([t.commission_type for t in rep.transactions], ["GENERAL"])
        self.assertEqual(rep.gross_production, Decimal("100.00"))

    def test_patient_and_procedure_filters(self):
        proc = uuid.uuid4()
        self.payments.payments = [
            plan_payment(self.maria, at(3), plan_item("100", procedure_id=proc), plan_item("40")),
        ]
        self.attendances.attendances = [attendance(self.carlos, at(4), line("70", procedure_id=proc))]
        self.assertEqual(len(self.report(patient_id=self.maria).transactions), 2)
        self.assertEqual(len(self.report(procedure_id=proc).transactions), 2)

    def test_unknown_patient_name_placeholder(self):
        payment = plan_payment(self.maria, at(3), plan_item("10"), patient_name=None)
        self.payments.payments = [payment]
        self.assertEqual(self.report().transactions[0].patient_name, "Paciente não informado")

    def test_unknown_dentist_aborts(self):
        self.dentists.items.clear()
        self.payments.payments = [plan_payment(self.maria, at(3), plan_item("10"))]
        with self.assertRaises(DentistNotFound):
            self.report()

    def test_access_rules(self):
        other = Requester(user_id=str(uuid.uuid4()), role="DENTIST")
        with self.assertRaises(AccessDenied):
            self.report(requester=other)

        own = Requester(user_id=str(self.dentist.user_id), role="DENTIST")
        admin = Requester(user_id=str(uuid.uuid4()), role="ADMIN")
        for requester in (own, admin):
            self.assertEqual(self.report(requester=requester).dentist_id, str(self.dentist.id))

    def test_handler_dispatch(self):
        self.payments.payments = [plan_payment(self.maria, at(3), plan_item("10"))]
        handler = GetDentistFinancialReportHandler(report_service=self.service())
        rep = handler.handle(
            GetDentistFinancialReportQuery(clinic_id=CLINIC, dentist_id=str(self.dentist.id))
        )
        self.assertEqual(rep.gross_production, Decimal("10.00"))
        self.assertEqual(rep.commission_percentage, Decimal("20.00"))

    def test_inverted_date_range_is_rejected(self):
        with self.assertRaises(ValidationError):
            parse_dto(FinancialFilterDTO, {"date_from": "2025-03-10", "date_to": "2025-03-01"})
