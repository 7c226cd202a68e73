# Appointments Feature - Service

from datetime import date, datetime
from enum import Enum
from typing import Callable, List, Optional, Union

from bson import ObjectId

from app.core.logging import logger
from app.core.security import Role, TokenPayload
from app.features.appointments.models import Appointment, AppointmentStatus, DATE_FORMAT
from app.features.appointments.schemas import AppointmentCreate, AppointmentResponse
from app.features.doctors.models import Doctor
from app.features.patients.models import Patient
from app.shared.exceptions import ForbiddenException, NotFoundException, ValidationException


class AppointmentWindow(str, Enum):
    """Listing filters, always applied to the caller's own appointments."""

    ALL = "all"
    TODAY = "today"
    UPCOMING = "upcoming"
    COMPLETED = "completed"


# Windows each role may list
ROLE_WINDOWS = {
    Role.PATIENT: set(AppointmentWindow),
    Role.DOCTOR: {AppointmentWindow.ALL, AppointmentWindow.TODAY, AppointmentWindow.UPCOMING},
}


def is_bound_patient(identity: TokenPayload, appointment: Appointment) -> bool:
    return identity.role == Role.PATIENT and appointment.patient_username == identity.sub


def is_bound_doctor(identity: TokenPayload, appointment: Appointment) -> bool:
    return identity.role == Role.DOCTOR and appointment.doctor_username == identity.sub


def is_bound_party(identity: TokenPayload, appointment: Appointment) -> bool:
    return is_bound_patient(identity, appointment) or is_bound_doctor(identity, appointment)


def parse_appointment_date(value: str) -> date:
    """Parse a YYYY-MM-DD calendar date."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationException("Invalid date format, use YYYY-MM-DD")


class AppointmentService:
    """Service class for the appointment lifecycle."""

    def __init__(self, today: Optional[Callable[[], date]] = None):
        self._today = today or date.today

    @staticmethod
    def appointment_to_response(appointment: Appointment) -> AppointmentResponse:
        """Convert Appointment document to response schema."""
        return AppointmentResponse(
            id=str(appointment.id),
            patient_username=appointment.patient_username,
            doctor_username=appointment.doctor_username,
            doctor_name=appointment.doctor_name,
            appointment_date=appointment.appointment_date,
            appointment_time=appointment.appointment_time,
            specialty=appointment.specialty,
            symptoms=appointment.symptoms,
            status=appointment.status,
            notes=appointment.notes,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )

    async def create_appointment(self, identity: TokenPayload, data: AppointmentCreate) -> Appointment:
        """
        Book an appointment for the calling patient.

        Args:
            identity: Caller identity, must be a patient
            data: Booking details

        Returns:
            Created appointment in the upcoming state

        Raises:
            ForbiddenException: If the caller is not a patient
            ValidationException: If the date is not YYYY-MM-DD
            NotFoundException: If the doctor or the calling patient does not exist
        """
        if identity.role != Role.PATIENT:
            logger.warning(f"{identity.role.value} {identity.sub} tried to book an appointment")
            raise ForbiddenException("Only patients can create appointments")

        appointment_date = parse_appointment_date(data.appointment_date)

        doctor = await Doctor.find_one(Doctor.username == data.doctor_username)
        if not doctor:
            raise NotFoundException("Doctor not found")

        patient = await Patient.find_one(Patient.username == identity.sub)
        if not patient:
            raise NotFoundException("Patient not found")

        appointment = Appointment(
            patient_username=identity.sub,
            doctor_username=doctor.username,
            doctor_name=doctor.name,
            appointment_date=appointment_date.isoformat(),
            appointment_time=data.appointment_time,
            specialty=data.specialty or doctor.specialization,
            symptoms=data.symptoms,
            status=AppointmentStatus.UPCOMING,
        )
        await appointment.insert()

        logger.info(
            f"Created appointment {appointment.id} for patient {identity.sub} "
            f"with doctor {doctor.username} on {appointment.appointment_date} {appointment.appointment_time}"
        )
        return appointment

    async def find_appointment(self, appointment_id: str) -> Appointment:
        """
        Load an appointment without any access check.

        Raises:
            NotFoundException: If the id is malformed or unknown
        """
        if not ObjectId.is_valid(appointment_id):
            raise NotFoundException("Appointment not found")

        appointment = await Appointment.get(ObjectId(appointment_id))
        if not appointment:
            raise NotFoundException("Appointment not found")

        return appointment

    async def get_appointment(self, identity: TokenPayload, appointment_id: str) -> Appointment:
        """Get an appointment the caller is a bound party of."""
        appointment = await self.find_appointment(appointment_id)

        if not is_bound_party(identity, appointment):
            logger.warning(f"{identity.role.value} {identity.sub} denied access to appointment {appointment_id}")
            raise ForbiddenException("Unauthorized to access this appointment")

        return appointment

    async def list_appointments(
        self,
        identity: TokenPayload,
        window: AppointmentWindow = AppointmentWindow.ALL,
        role: Optional[Role] = None,
    ) -> List[Appointment]:
        """
        List the caller's own appointments.

        Args:
            identity: Caller identity; patients see their bookings, doctors their consultations
            window: today (date is today), upcoming (date from today on, still upcoming),
                completed (status completed, patients only) or all
            role: When given, the role the caller must hold (set by role-specific routes)

        Returns:
            Appointments ordered by date and time
        """
        if role is not None and identity.role != role:
            raise ForbiddenException(f"Only {role.value}s can access this endpoint")

        if window not in ROLE_WINDOWS[identity.role]:
            raise ForbiddenException(f"Only patients can list {window.value} appointments")

        if identity.role == Role.PATIENT:
            conditions = [Appointment.patient_username == identity.sub]
        else:
            conditions = [Appointment.doctor_username == identity.sub]

        today = self._today().isoformat()
        if window == AppointmentWindow.TODAY:
            conditions.append(Appointment.appointment_date == today)
        elif window == AppointmentWindow.UPCOMING:
            conditions.append(Appointment.appointment_date >= today)
            conditions.append(Appointment.status == AppointmentStatus.UPCOMING)
        elif window == AppointmentWindow.COMPLETED:
            conditions.append(Appointment.status == AppointmentStatus.COMPLETED)

        appointments = await Appointment.find(*conditions).sort(
            +Appointment.appointment_date, +Appointment.appointment_time
        ).to_list()

        logger.debug(f"Listed {len(appointments)} {window.value} appointments for {identity.role.value} {identity.sub}")
        return appointments

    async def set_status(self, appointment: Appointment, status: AppointmentStatus) -> Appointment:
        """Persist a status change. Callers are responsible for authorization."""
        appointment.status = status
        appointment.update_timestamp()
        await appointment.save()
        return appointment

    async def update_status(
        self,
        identity: TokenPayload,
        appointment_id: str,
        status: Union[AppointmentStatus, str],
    ) -> Appointment:
        """
        Change the status of an appointment the caller is a bound party of.

        Any of the three statuses may be set from any state. The status value
        is validated only after the access check.
        """
        appointment = await self.find_appointment(appointment_id)

        if not is_bound_party(identity, appointment):
            logger.warning(f"{identity.role.value} {identity.sub} denied status update on appointment {appointment_id}")
            raise ForbiddenException("Unauthorized to update this appointment")

        try:
            status = AppointmentStatus(status)
        except ValueError:
            raise ValidationException("Status must be one of: upcoming, completed, cancelled")

        previous = appointment.status
        await self.set_status(appointment, status)

        logger.info(f"Appointment {appointment_id} status {previous.value} -> {status.value} by {identity.role.value} {identity.sub}")
        return appointment

    async def add_notes(self, identity: TokenPayload, appointment_id: str, notes: str) -> Appointment:
        """Set the notes of an appointment. Only the bound doctor may do this."""
        appointment = await self.find_appointment(appointment_id)

        if not is_bound_doctor(identity, appointment):
            logger.warning(f"{identity.role.value} {identity.sub} denied notes on appointment {appointment_id}")
            raise ForbiddenException("Only the assigned doctor can add notes")

        appointment.notes = notes
        appointment.update_timestamp()
        await appointment.save()

        logger.info(f"Doctor {identity.sub} added notes to appointment {appointment_id}")
        return appointment

    async def delete_appointment(self, identity: TokenPayload, appointment_id: str) -> bool:
        """Cancel an appointment by removing it. Only the bound patient may do this."""
        appointment = await self.find_appointment(appointment_id)

        if not is_bound_patient(identity, appointment):
            logger.warning(f"{identity.role.value} {identity.sub} denied cancelling appointment {appointment_id}")
            raise ForbiddenException("Only the patient can cancel their appointment")

        await appointment.delete()

        logger.info(f"Patient {identity.sub} cancelled appointment {appointment_id}")
        return True
