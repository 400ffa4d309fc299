"""Camada HTTP: autenticação JWT, permissões e mapeamento de erros."""
import uuid

from django.urls import reverse
from rest_framework.test import APIClient, APITestCase

from odonto_core.adapters.security.jwt_service import JWTService
from plugins.django_interface.models import Appointment, User
from tests.helpers import factories


def client_for(user) -> APIClient:
    token = JWTService.create_token(
        subject=str(user.id), expires_in=3600, role=user.role, clinic_id=str(user.clinic_id)
    )
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return client


class HealthCheckTests(APITestCase):
    def test_healthz_is_public(self):
        resp = self.client.get(reverse("healthz"))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")


class AppointmentApiTests(APITestCase):
    def setUp(self):
        self.clinic = factories.clinic()
        self.dentist = factories.dentist(self.clinic)
        self.patient = factories.patient(self.clinic)
        self.receptionist = factories.user(self.clinic, role=User.Role.RECEPTIONIST)
        self.api = client_for(self.receptionist)
        self.list_url = reverse("appointments-list")

    def book(self, date="2025-03-10T14:00:00-03:00", duration=60, **extra):
        return self.api.post(
            self.list_url,
            {
                "dentist_id": str(self.dentist.id),
                "patient_id": str(self.patient.id),
                "date": date,
                "duration_minutes": duration,
                **extra,
            },
            format="json",
        )

    def test_requires_authentication(self):
        self.assertEqual(APIClient().get(self.list_url).status_code, 401)

    def test_inactive_user_token_is_rejected(self):
        ghost = factories.user(self.clinic, active=False)
        self.assertEqual(client_for(ghost).get(self.list_url).status_code, 401)

    def test_create_and_conflict(self):
        created = self.book()
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["status"], "SCHEDULED")

        clash = self.book(date="2025-03-10T14:30:00-03:00", duration=30)
        self.assertEqual(clash.status_code, 409)
        self.assertEqual(clash.json()["code"], "SCHEDULING_CONFLICT")

        adjacent = self.book(date="2025-03-10T15:00:00-03:00", duration=30)
        self.assertEqual(adjacent.status_code, 201)
        self.assertEqual(Appointment.objects.count(), 2)

    def test_inactive_procedure_maps_to_422(self):
        proc = factories.procedure(self.clinic, active=False)
        resp = self.book(procedure_id=str(proc.id))
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json()["code"], "PROCEDURE_INACTIVE")

    def test_snapshot_is_returned(self):
        proc = factories.procedure(self.clinic, base_value="180.00", commission="25")
        body = self.book(procedure_id=str(proc.id)).json()
        self.assertEqual(body["procedure_id"], str(proc.id))
        self.assertEqual(body["procedure_snapshot"]["base_value"], 180.0)

    def test_invalid_payload_lists_fields(self):
        resp = self.book(duration=5)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["code"], "VALIDATION_ERROR")
        self.assertEqual(resp.json()["details"][0]["field"], "duration_minutes")

    def test_list_update_cancel(self):
        appt_id = self.book().json()["id"]
        detail = reverse("appointments-detail", args=[appt_id])

        listing = self.api.get(self.list_url, {"date": "2025-03-10", "page_size": 10}).json()
        self.assertEqual(listing["total_items"], 1)
        self.assertEqual(listing["results"][0]["id"], appt_id)

        patched = self.api.patch(detail, {"status": "CONFIRMED", "notes": "ligar antes"}, format="json")
        self.assertEqual(patched.status_code, 200)
        self.assertEqual(patched.json()["status"], "CONFIRMED")

        canceled = self.api.delete(detail)
        self.assertEqual(canceled.status_code, 200)
        self.assertEqual(canceled.json()["status"], "CANCELED")
        self.assertTrue(Appointment.objects.filter(id=appt_id).exists())

        reopen = self.api.patch(detail, {"status": "SCHEDULED"}, format="json")
        self.assertEqual(reopen.status_code, 400)
        self.assertEqual(reopen.json()["code"], "INVALID_STATUS_TRANSITION")

    def test_conflict_check_endpoint(self):
        appt_id = self.book().json()["id"]
        url = reverse("appointments-conflicts")
        params = {"dentist_id": str(self.dentist.id), "date": "2025-03-10T14:15:00-03:00", "duration_minutes": 15}
        self.assertTrue(self.api.get(url, params).json()["has_conflict"])
        self.assertFalse(self.api.get(url, {**params, "exclude_id": appt_id}).json()["has_conflict"])

    def test_other_clinic_cannot_see_appointment(self):
        appt_id = self.book().json()["id"]
        outsider = factories.user(factories.clinic("Outra"), role=User.Role.ADMIN)
        resp = client_for(outsider).get(reverse("appointments-detail", args=[appt_id]))
        self.assertEqual(resp.status_code, 404)

    def test_dentist_role_is_read_only(self):
        dentist_api = client_for(self.dentist.user)
        self.assertEqual(dentist_api.get(self.list_url).status_code, 200)
        resp = dentist_api.post(self.list_url, {}, format="json")
        self.assertEqual(resp.status_code, 403)


class FinancialReportApiTests(APITestCase):
    def setUp(self):
        self.clinic = factories.clinic()
        self.dentist = factories.dentist(self.clinic, commission="20")
        self.patient = factories.patient(self.clinic)
        proc = factories.procedure(self.clinic, commission="35")
        plan = factories.treatment_plan(self.dentist, self.patient, items=[("1000", 1, proc)])
        factories.payment(self.patient, [plan])
        self.url = reverse("dentist-financial", args=[self.dentist.id])

    def test_admin_sees_report(self):
        admin = factories.user(self.clinic, role=User.Role.ADMIN)
        body = client_for(admin).get(self.url).json()
        self.assertEqual(body["gross_production"], 1000.0)
        self.assertEqual(body["total_received"], 350.0)
        self.assertEqual(body["transactions"][0]["status"], "PAGO")

    def test_dentist_sees_only_own_report(self):
        self.assertEqual(client_for(self.dentist.user).get(self.url).status_code, 200)

        colleague = factories.dentist(self.clinic)
        resp = client_for(colleague.user).get(self.url)
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["code"], "ACCESS_DENIED")

    def test_unknown_dentist(self):
        admin = factories.user(self.clinic, role=User.Role.OWNER)
        resp = client_for(admin).get(reverse("dentist-financial", args=[uuid.uuid4()]))
        self.assertEqual(resp.status_code, 404)

    def test_invalid_filter(self):
        admin = factories.user(self.clinic, role=User.Role.ADMIN)
        resp = client_for(admin).get(self.url, {"date_from": "2025-02-01", "date_to": "2025-01-01"})
        self.assertEqual(resp.status_code, 400)
