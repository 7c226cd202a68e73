# Prescriptions Feature - Router

from fastapi import APIRouter, Depends, status

from app.core.security import TokenPayload
from app.dependencies import get_current_identity, get_prescription_service
from app.features.prescriptions.schemas import (
    FeedbackCreate,
    PrescriptionCreate,
    PrescriptionResponse,
    PrescriptionUpdate,
)
from app.features.prescriptions.service import PrescriptionService
from app.shared.schemas import ExistsResponse


router = APIRouter(prefix="/prescriptions", tags=["Prescriptions"])


@router.post("", response_model=PrescriptionResponse, status_code=status.HTTP_201_CREATED)
async def create_prescription(
    data: PrescriptionCreate,
    identity: TokenPayload = Depends(get_current_identity),
    service: PrescriptionService = Depends(get_prescription_service),
):
    """
    Write the prescription for an appointment and mark it completed.

    Assigned doctor only.

    - **appointment_id**: Appointment the consultation belongs to
    - **prescription_text**: The prescription
    - **consultation_notes**: Optional notes
    """
    prescription = await service.create_prescription(identity, data)
    return service.prescription_to_response(prescription)


# Static sub-path first so it is not captured by /{appointment_id}
@router.get("/{appointment_id}/exists", response_model=ExistsResponse)
async def check_prescription_exists(
    appointment_id: str,
    identity: TokenPayload = Depends(get_current_identity),
    service: PrescriptionService = Depends(get_prescription_service),
):
    """Whether the appointment has a prescription yet."""
    exists = await service.prescription_exists(identity, appointment_id)
    return ExistsResponse(exists=exists, message=None if exists else "prescription not found")


@router.get("/{appointment_id}", response_model=PrescriptionResponse)
async def get_prescription(
    appointment_id: str,
    identity: TokenPayload = Depends(get_current_identity),
    service: PrescriptionService = Depends(get_prescription_service),
):
    """Get the prescription of an appointment you are a party to."""
    prescription = await service.get_prescription(identity, appointment_id)
    return service.prescription_to_response(prescription)


@router.put("/{appointment_id}", response_model=PrescriptionResponse)
async def update_prescription(
    appointment_id: str,
    data: PrescriptionUpdate,
    identity: TokenPayload = Depends(get_current_identity),
    service: PrescriptionService = Depends(get_prescription_service),
):
    """Revise a prescription. Assigned doctor only."""
    prescription = await service.update_prescription(identity, appointment_id, data)
    return service.prescription_to_response(prescription)


@router.post("/{appointment_id}/feedback", response_model=PrescriptionResponse)
async def submit_feedback(
    appointment_id: str,
    data: FeedbackCreate,
    identity: TokenPayload = Depends(get_current_identity),
    service: PrescriptionService = Depends(get_prescription_service),
):
    """
    Rate the consultation. Booking patient only, once.

    - **feedback_rating**: 1 to 5
    - **feedback_comment**: Optional comment
    """
    prescription = await service.submit_feedback(
        identity,
        appointment_id,
        data.feedback_rating,
        data.feedback_comment,
    )
    return service.prescription_to_response(prescription)
