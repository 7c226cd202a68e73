# Prescriptions Feature - Service

from typing import Optional

from pymongo.errors import DuplicateKeyError

from app.core.logging import logger
from app.core.security import Role, TokenPayload
from app.features.appointments.models import Appointment, AppointmentStatus
from app.features.appointments.service import (
    AppointmentService,
    is_bound_doctor,
    is_bound_party,
    is_bound_patient,
)
from app.features.prescriptions.models import Prescription
from app.features.prescriptions.schemas import (
    MAX_RATING,
    MIN_RATING,
    PrescriptionCreate,
    PrescriptionResponse,
    PrescriptionUpdate,
)
from app.shared.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)


class PrescriptionService:
    """Service class for the prescription lifecycle."""

    def __init__(self, appointments: AppointmentService):
        self.appointments = appointments

    @staticmethod
    def prescription_to_response(prescription: Prescription) -> PrescriptionResponse:
        """Convert Prescription document to response schema."""
        return PrescriptionResponse(
            id=str(prescription.id),
            appointment_id=prescription.appointment_id,
            prescription_text=prescription.prescription_text,
            consultation_notes=prescription.consultation_notes,
            feedback_rating=prescription.feedback_rating,
            feedback_comment=prescription.feedback_comment,
            appointment_sync_failed=prescription.appointment_sync_failed,
            created_at=prescription.created_at,
            updated_at=prescription.updated_at,
        )

    @staticmethod
    async def find_prescription(appointment_id: str) -> Optional[Prescription]:
        return await Prescription.find_one(Prescription.appointment_id == appointment_id)

    async def _bound_doctor_appointment(self, identity: TokenPayload, appointment_id: str, action: str) -> Appointment:
        if identity.role != Role.DOCTOR:
            raise ForbiddenException(f"Only doctors can {action} prescriptions")

        appointment = await self.appointments.find_appointment(appointment_id)

        if not is_bound_doctor(identity, appointment):
            logger.warning(f"Doctor {identity.sub} denied {action} on prescription for appointment {appointment_id}")
            raise ForbiddenException(f"Not authorized to {action} prescription for this appointment")

        return appointment

    async def _bound_party_appointment(self, identity: TokenPayload, appointment_id: str) -> Appointment:
        appointment = await self.appointments.find_appointment(appointment_id)

        if not is_bound_party(identity, appointment):
            logger.warning(f"{identity.role.value} {identity.sub} denied access to prescription for appointment {appointment_id}")
            raise ForbiddenException("Not authorized to view this prescription")

        return appointment

    async def create_prescription(self, identity: TokenPayload, data: PrescriptionCreate) -> Prescription:
        """
        Write the prescription for a consultation and complete the appointment.

        This runs as two steps. The prescription is stored first; the parent
        appointment is then moved to completed. If the second step fails the
        error is logged and recorded on the prescription as
        ``appointment_sync_failed``, and the prescription is still returned.

        Raises:
            ForbiddenException: If the caller is not the appointment's doctor
            NotFoundException: If the appointment does not exist
            ConflictException: If the appointment already has a prescription
        """
        appointment = await self._bound_doctor_appointment(identity, data.appointment_id, "create")
        appointment_id = str(appointment.id)

        if await self.find_prescription(appointment_id):
            raise ConflictException("A prescription already exists for this appointment")

        prescription = Prescription(
            appointment_id=appointment_id,
            prescription_text=data.prescription_text,
            consultation_notes=data.consultation_notes or None,
        )
        try:
            await prescription.insert()
        except DuplicateKeyError:
            raise ConflictException("A prescription already exists for this appointment")

        logger.info(f"Doctor {identity.sub} created prescription {prescription.id} for appointment {appointment_id}")

        return await self._complete_appointment(prescription, appointment)

    async def _complete_appointment(
        self,
        prescription: Prescription,
        appointment: Appointment,
    ) -> Prescription:
        """Second step of prescription creation. Never raises."""
        try:
            await self.appointments.set_status(appointment, AppointmentStatus.COMPLETED)
            return prescription
        except Exception as e:
            logger.error(f"Failed to complete appointment {appointment.id} after prescription {prescription.id}: {e}")

        prescription.appointment_sync_failed = True
        try:
            await prescription.save()
        except Exception as e:
            logger.error(f"Failed to flag prescription {prescription.id} as out of sync: {e}")

        return prescription

    async def get_prescription(self, identity: TokenPayload, appointment_id: str) -> Prescription:
        """Get the prescription of an appointment the caller is a bound party of."""
        await self._bound_party_appointment(identity, appointment_id)

        prescription = await self.find_prescription(appointment_id)
        if not prescription:
            raise NotFoundException("Prescription not found")

        return prescription

    async def prescription_exists(self, identity: TokenPayload, appointment_id: str) -> bool:
        """Same access rule as get_prescription, answering only yes or no."""
        await self._bound_party_appointment(identity, appointment_id)
        return await self.find_prescription(appointment_id) is not None

    async def update_prescription(
        self,
        identity: TokenPayload,
        appointment_id: str,
        data: PrescriptionUpdate,
    ) -> Prescription:
        """Revise a prescription. Only the appointment's doctor may do this."""
        await self._bound_doctor_appointment(identity, appointment_id, "update")

        prescription = await self.find_prescription(appointment_id)
        if not prescription:
            raise NotFoundException("Prescription not found")

        prescription.prescription_text = data.prescription_text
        prescription.consultation_notes = data.consultation_notes or None
        prescription.update_timestamp()
        await prescription.save()

        logger.info(f"Doctor {identity.sub} updated prescription for appointment {appointment_id}")
        return prescription

    async def submit_feedback(
        self,
        identity: TokenPayload,
        appointment_id: str,
        rating: int,
        comment: Optional[str] = None,
    ) -> Prescription:
        """
        Record the patient's rating (1-5) and comment on a prescription.

        Raises:
            ForbiddenException: If the caller is not the appointment's patient
            ValidationException: If the rating is outside 1-5
            NotFoundException: If the appointment or the prescription does not exist
            ConflictException: If feedback was already submitted
        """
        if identity.role != Role.PATIENT:
            raise ForbiddenException("Only patients can submit feedback")

        if not isinstance(rating, int) or isinstance(rating, bool) or not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationException(f"Feedback rating must be between {MIN_RATING} and {MAX_RATING}")

        appointment = await self.appointments.find_appointment(appointment_id)
        if not is_bound_patient(identity, appointment):
            logger.warning(f"Patient {identity.sub} denied feedback on appointment {appointment_id}")
            raise ForbiddenException("Not authorized to submit feedback for this appointment")

        prescription = await self.find_prescription(appointment_id)
        if not prescription:
            raise NotFoundException("Prescription not found")

        if prescription.feedback_rating is not None:
            raise ConflictException("Feedback has already been submitted")

        prescription.feedback_rating = rating
        prescription.feedback_comment = comment or None
        prescription.update_timestamp()
        await prescription.save()

        logger.info(f"Patient {identity.sub} rated prescription for appointment {appointment_id}: {rating}")
        return prescription
