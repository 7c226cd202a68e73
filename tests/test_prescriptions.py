"""Tests for prescriptions, the appointment completion step and feedback."""

import pytest

from app.core.security import Role
from app.features.appointments.models import AppointmentStatus
from app.features.appointments.schemas import AppointmentCreate
from app.features.appointments.service import AppointmentService
from app.features.prescriptions.models import Prescription
from app.features.prescriptions.schemas import PrescriptionCreate, PrescriptionUpdate
from app.shared.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from tests.conftest import TODAY, make_identity


dave = make_identity("dave", Role.DOCTOR)
carol = make_identity("carol", Role.PATIENT)


@pytest.fixture
async def appointment(registered, appointment_service, alice):
    return await appointment_service.create_appointment(
        alice,
        AppointmentCreate(
            doctor_username="bob",
            appointment_date=TODAY.isoformat(),
            appointment_time="10:00",
            symptoms="Persistent cough",
        ),
    )


def prescription_for(appointment, text: str = "Rest and fluids") -> PrescriptionCreate:
    return PrescriptionCreate(
        appointment_id=str(appointment.id),
        prescription_text=text,
        consultation_notes="Follow up in a week",
    )


class TestCreate:
    async def test_create_completes_appointment(self, appointment, prescription_service, appointment_service, bob):
        prescription = await prescription_service.create_prescription(bob, prescription_for(appointment))

        reloaded = await appointment_service.find_appointment(str(appointment.id))
        assert prescription.appointment_id == str(appointment.id)
        assert prescription.appointment_sync_failed is False
        assert reloaded.status == AppointmentStatus.COMPLETED

    async def test_completion_failure_is_recorded_not_raised(
        self, appointment, prescription_service, appointment_service, bob, monkeypatch
    ):
        async def failing_set_status(self, appointment, status):
            raise RuntimeError("storage unavailable")

        monkeypatch.setattr(AppointmentService, "set_status", failing_set_status)

        prescription = await prescription_service.create_prescription(bob, prescription_for(appointment))

        stored = await Prescription.find_one(Prescription.appointment_id == str(appointment.id))
        reloaded = await appointment_service.find_appointment(str(appointment.id))
        assert prescription.appointment_sync_failed is True
        assert stored is not None
        assert stored.appointment_sync_failed is True
        assert reloaded.status == AppointmentStatus.UPCOMING

    async def test_one_prescription_per_appointment(self, appointment, prescription_service, bob):
        await prescription_service.create_prescription(bob, prescription_for(appointment))

        with pytest.raises(ConflictException):
            await prescription_service.create_prescription(bob, prescription_for(appointment, "Second opinion"))

    @pytest.mark.parametrize("caller", ["alice", "dave", "alice_doctor"])
    async def test_only_bound_doctor_creates(self, appointment, prescription_service, alice, caller):
        identities = {
            "alice": alice,
            "dave": dave,
            "alice_doctor": make_identity("alice", Role.DOCTOR),
        }

        with pytest.raises(ForbiddenException):
            await prescription_service.create_prescription(identities[caller], prescription_for(appointment))

        assert await Prescription.find_one(Prescription.appointment_id == str(appointment.id)) is None

    async def test_unknown_appointment(self, registered, prescription_service, bob):
        with pytest.raises(NotFoundException):
            await prescription_service.create_prescription(
                bob,
                PrescriptionCreate(appointment_id="507f1f77bcf86cd799439011", prescription_text="x"),
            )


class TestRead:
    async def test_bound_parties_read(self, appointment, prescription_service, alice, bob):
        await prescription_service.create_prescription(bob, prescription_for(appointment))

        for identity in (alice, bob):
            prescription = await prescription_service.get_prescription(identity, str(appointment.id))
            assert prescription.prescription_text == "Rest and fluids"

    async def test_strangers_cannot_read(self, appointment, prescription_service, bob):
        await prescription_service.create_prescription(bob, prescription_for(appointment))

        for identity in (carol, dave):
            with pytest.raises(ForbiddenException):
                await prescription_service.get_prescription(identity, str(appointment.id))
            with pytest.raises(ForbiddenException):
                await prescription_service.prescription_exists(identity, str(appointment.id))

    async def test_missing_prescription(self, appointment, prescription_service, alice):
        with pytest.raises(NotFoundException):
            await prescription_service.get_prescription(alice, str(appointment.id))

    async def test_exists(self, appointment, prescription_service, alice, bob):
        assert await prescription_service.prescription_exists(alice, str(appointment.id)) is False

        await prescription_service.create_prescription(bob, prescription_for(appointment))

        assert await prescription_service.prescription_exists(alice, str(appointment.id)) is True


class TestUpdate:
    async def test_bound_doctor_updates(self, appointment, prescription_service, bob):
        await prescription_service.create_prescription(bob, prescription_for(appointment))

        updated = await prescription_service.update_prescription(
            bob,
            str(appointment.id),
            PrescriptionUpdate(prescription_text="Antibiotics for 5 days"),
        )

        assert updated.prescription_text == "Antibiotics for 5 days"
        assert updated.consultation_notes is None

    async def test_patient_cannot_update(self, appointment, prescription_service, alice, bob):
        await prescription_service.create_prescription(bob, prescription_for(appointment))

        with pytest.raises(ForbiddenException):
            await prescription_service.update_prescription(
                alice, str(appointment.id), PrescriptionUpdate(prescription_text="Nothing")
            )


class TestFeedback:
    async def test_patient_rates_once(self, appointment, prescription_service, alice, bob):
        await prescription_service.create_prescription(bob, prescription_for(appointment))

        rated = await prescription_service.submit_feedback(alice, str(appointment.id), 5, "Very helpful")

        assert rated.feedback_rating == 5
        assert rated.feedback_comment == "Very helpful"
        with pytest.raises(ConflictException):
            await prescription_service.submit_feedback(alice, str(appointment.id), 1)

    @pytest.mark.parametrize("rating", [0, 6, -1, True, 3.5])
    async def test_rating_out_of_range_rejected_before_storage(
        self, prescription_service, alice, monkeypatch, rating
    ):
        async def unexpected_lookup(*args, **kwargs):
            raise AssertionError("storage accessed")

        monkeypatch.setattr(AppointmentService, "find_appointment", unexpected_lookup)

        with pytest.raises(ValidationException):
            await prescription_service.submit_feedback(alice, "507f1f77bcf86cd799439011", rating)

    async def test_doctor_cannot_rate(self, appointment, prescription_service, bob):
        await prescription_service.create_prescription(bob, prescription_for(appointment))

        with pytest.raises(ForbiddenException):
            await prescription_service.submit_feedback(bob, str(appointment.id), 4)

    async def test_other_patient_cannot_rate(self, appointment, prescription_service, bob):
        await prescription_service.create_prescription(bob, prescription_for(appointment))

        with pytest.raises(ForbiddenException):
            await prescription_service.submit_feedback(carol, str(appointment.id), 4)

    async def test_feedback_needs_prescription(self, appointment, prescription_service, alice):
        with pytest.raises(NotFoundException):
            await prescription_service.submit_feedback(alice, str(appointment.id), 4)
