# Appointments Feature - Router

from typing import List

from fastapi import APIRouter, Depends, status

from app.core.security import Role, TokenPayload
from app.dependencies import get_appointment_service, get_current_identity
from app.features.appointments.schemas import (
    AppointmentCreate,
    AppointmentNotesUpdate,
    AppointmentResponse,
    AppointmentStatusUpdate,
)
from app.features.appointments.service import AppointmentService, AppointmentWindow
from app.shared.schemas import MessageResponse


router = APIRouter(prefix="/appointments", tags=["Appointments"])
patient_appointments_router = APIRouter(prefix="/patients/appointments", tags=["Appointments"])
doctor_appointments_router = APIRouter(prefix="/doctors/appointments", tags=["Appointments"])


async def _list(
    identity: TokenPayload,
    service: AppointmentService,
    window: AppointmentWindow,
    role: Role,
) -> List[AppointmentResponse]:
    appointments = await service.list_appointments(identity, window, role)
    return [service.appointment_to_response(appointment) for appointment in appointments]


# ==================== Single Appointment ====================

@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    data: AppointmentCreate,
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    """
    Book an appointment with a doctor. Patients only.

    - **doctor_username**: Doctor to see
    - **appointment_date**: YYYY-MM-DD
    - **appointment_time**: e.g. 10:00
    - **symptoms**: What the visit is about
    """
    appointment = await service.create_appointment(identity, data)
    return service.appointment_to_response(appointment)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: str,
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Get an appointment you are the patient or the doctor of."""
    appointment = await service.get_appointment(identity, appointment_id)
    return service.appointment_to_response(appointment)


@router.patch("/{appointment_id}/status", response_model=AppointmentResponse)
async def update_appointment_status(
    appointment_id: str,
    data: AppointmentStatusUpdate,
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    """
    Change the status of an appointment.

    - **status**: upcoming, completed or cancelled
    """
    appointment = await service.update_status(identity, appointment_id, data.status)
    return service.appointment_to_response(appointment)


@router.patch("/{appointment_id}/notes", response_model=AppointmentResponse)
async def add_appointment_notes(
    appointment_id: str,
    data: AppointmentNotesUpdate,
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Set the consultation notes. Assigned doctor only."""
    appointment = await service.add_notes(identity, appointment_id, data.notes)
    return service.appointment_to_response(appointment)


@router.delete("/{appointment_id}", response_model=MessageResponse)
async def delete_appointment(
    appointment_id: str,
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Cancel (remove) an appointment. Booking patient only."""
    await service.delete_appointment(identity, appointment_id)
    return MessageResponse(message="Appointment cancelled successfully")


# ==================== Patient Listings ====================

@patient_appointments_router.get("", response_model=List[AppointmentResponse])
async def list_patient_appointments(
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    """All of the current patient's appointments."""
    return await _list(identity, service, AppointmentWindow.ALL, Role.PATIENT)


@patient_appointments_router.get("/today", response_model=List[AppointmentResponse])
async def list_today_patient_appointments(
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    return await _list(identity, service, AppointmentWindow.TODAY, Role.PATIENT)


@patient_appointments_router.get("/upcoming", response_model=List[AppointmentResponse])
async def list_upcoming_patient_appointments(
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    return await _list(identity, service, AppointmentWindow.UPCOMING, Role.PATIENT)


@patient_appointments_router.get("/completed", response_model=List[AppointmentResponse])
async def list_completed_patient_appointments(
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    return await _list(identity, service, AppointmentWindow.COMPLETED, Role.PATIENT)


# ==================== Doctor Listings ====================

@doctor_appointments_router.get("", response_model=List[AppointmentResponse])
async def list_doctor_appointments(
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    """All of the current doctor's appointments."""
    return await _list(identity, service, AppointmentWindow.ALL, Role.DOCTOR)


@doctor_appointments_router.get("/today", response_model=List[AppointmentResponse])
async def list_today_doctor_appointments(
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    return await _list(identity, service, AppointmentWindow.TODAY, Role.DOCTOR)


@doctor_appointments_router.get("/upcoming", response_model=List[AppointmentResponse])
async def list_upcoming_doctor_appointments(
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    return await _list(identity, service, AppointmentWindow.UPCOMING, Role.DOCTOR)
