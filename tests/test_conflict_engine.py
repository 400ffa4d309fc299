"""Detecção de sobreposição na agenda do dentista."""
import uuid
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from django.test import SimpleTestCase

from appointment_scheduling.core.domain.entities.appointment_entity import (
    AppointmentEntity,
    AppointmentStatus,
)
from appointment_scheduling.core.domain.entities.time_slot import TimeSlot
from odonto_core.core.domain.exceptions import ValidationError
from odonto_core.core.domain.services.local_day import day_bounds
from tests.helpers.builders import CLINIC_TZ, SchedulingWorld

SP = ZoneInfo(CLINIC_TZ)


def at(hour, minute=0, day=10):
    return datetime(2025, 3, day, hour, minute, tzinfo=SP)


class TimeSlotTests(SimpleTestCase):
    def test_overlap_is_symmetric(self):
        a = TimeSlot(at(14), 60)
        b = TimeSlot(at(14, 30), 30)
        c = TimeSlot(at(15), 30)
        self.assertTrue(a.overlaps(b))
        self.assertTrue(b.overlaps(a))
        self.assertFalse(a.overlaps(c))
        self.assertFalse(c.overlaps(a))

    def test_touching_boundaries_do_not_overlap(self):
        self.assertFalse(TimeSlot(at(9), 60).overlaps(TimeSlot(at(10), 15)))
        self.assertFalse(TimeSlot(at(10), 15).overlaps(TimeSlot(at(9), 60)))

    def test_contained_slot_overlaps(self):
        self.assertTrue(TimeSlot(at(8), 480).overlaps(TimeSlot(at(12), 15)))

    def test_end_uses_duration(self):
        self.assertEqual(TimeSlot(at(14), 45).end, at(14, 45))


class DayBoundsTests(SimpleTestCase):
    def test_bounds_are_local_midnights(self):
        start, end = day_bounds(at(23, 30), CLINIC_TZ)
        self.assertEqual(start, datetime(2025, 3, 10, tzinfo=SP))
        self.assertEqual(end, datetime(2025, 3, 11, tzinfo=SP))

    def test_utc_moment_is_mapped_to_clinic_day(self):
        # 01:00 UTC do dia 11 ainda é dia 10 em São Paulo (UTC-3)
        moment = datetime(2025, 3, 11, 1, 0, tzinfo=ZoneInfo("UTC"))
        start, _ = day_bounds(moment, CLINIC_TZ)
        self.assertEqual(start.date(), datetime(2025, 3, 10).date())


class ConflictCheckerTests(SimpleTestCase):
    def setUp(self):
        self.world = SchedulingWorld()
        self.dentist_id = uuid.uuid4()
        self.existing = self._store(at(14), 60)

    def _store(self, start, duration, status=AppointmentStatus.SCHEDULED, dentist_id=None):
        appt = AppointmentEntity(
            id=uuid.uuid4(),
            clinic_id=self.world.clinic_id,
            dentist_id=dentist_id or self.dentist_id,
            patient_id=uuid.uuid4(),
            date=start,
            duration_minutes=duration,
            status=status,
        )
        return self.world.appointments.create(appt)

    def _check(self, start, duration, exclude=None, dentist_id=None):
        return self.world.checker.has_conflict(
            self.world.clinic_id,
            str(dentist_id or self.dentist_id),
            start,
            duration,
            exclude_appointment_id=exclude,
        )

    def test_partial_overlap_conflicts(self):
        self.assertTrue(self._check(at(14, 30), 30))
        self.assertTrue(self._check(at(13, 30), 45))

    def test_touching_start_and_end_are_free(self):
        self.assertFalse(self._check(at(15), 30))
        self.assertFalse(self._check(at(13, 30), 30))

    def test_other_dentist_is_independent(self):
        self.assertFalse(self._check(at(14), 60, dentist_id=uuid.uuid4()))

    def test_self_exclusion(self):
        self.assertFalse(self._check(at(14, 15), 60, exclude=str(self.existing.id)))

    def test_non_blocking_statuses_are_ignored(self):
        for status in (AppointmentStatus.CANCELED, AppointmentStatus.NO_SHOW, AppointmentStatus.DONE):
            self._store(at(9), 60, status=status)
        self.assertFalse(self._check(at(9), 60))

    def test_confirmed_and_rescheduled_block(self):
        self._store(at(9), 30, status=AppointmentStatus.CONFIRMED)
        self._store(at(11), 30, status=AppointmentStatus.RESCHEDULED)
        self.assertTrue(self._check(at(9, 15), 15))
        self.assertTrue(self._check(at(11), 15))

    def test_only_same_local_day_is_considered(self):
        # termina depois da meia-noite mas começa no dia anterior: fora da janela do dia
        self._store(at(23, 30, day=9), 60)
        self.assertFalse(self._check(at(0, 0), 30))

    def test_naive_candidate_is_read_in_clinic_zone(self):
        self.assertTrue(self._check(datetime(2025, 3, 10, 14, 30), 30))

    def test_invalid_duration_is_rejected(self):
        with self.assertRaises(ValidationError):
            self._check(at(8), 10)
        with self.assertRaises(ValidationError):
            self._check(at(8), 481)

    def test_result_changes_after_cancel(self):
        self.assertTrue(self._check(at(14), 30))
        self.world.service.cancel_appointment(str(self.existing.id), self.world.clinic_id)
        self.assertFalse(self._check(at(14), 30))

    def test_service_facade_matches_checker(self):
        self.assertTrue(
            self.world.service.has_conflict(self.world.clinic_id, str(self.dentist_id), at(14, 59), 15)
        )
        self.assertFalse(
            self.world.service.has_conflict(
                self.world.clinic_id, str(self.dentist_id), at(15) + timedelta(minutes=1), 15
            )
        )
