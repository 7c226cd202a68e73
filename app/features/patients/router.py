# Patient Accounts Feature - Router

from fastapi import APIRouter, Depends, status

from app.core.security import TokenPayload
from app.dependencies import get_current_identity, get_patient_service
from app.features.auth.schemas import ChangePasswordRequest, LoginRequest
from app.features.patients.schemas import (
    CreatePatientRequest,
    PatientLoginResponse,
    PatientResponse,
    UpdatePatientRequest,
)
from app.features.patients.service import PatientService
from app.shared.schemas import ExistsResponse, MessageResponse


router = APIRouter(prefix="/patients", tags=["Patients"])


# ============== Public Endpoints ==============

@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    request: CreatePatientRequest,
    service: PatientService = Depends(get_patient_service),
):
    """
    Register a new patient.

    - **username**: Alphanumeric, unique among patients
    - **email**: Unique among patients
    - **password**: At least 6 characters
    """
    patient = await service.create_patient(request)
    return service.patient_to_response(patient)


@router.post("/login", response_model=PatientLoginResponse)
async def login_patient(
    request: LoginRequest,
    service: PatientService = Depends(get_patient_service),
):
    """Authenticate a patient and return an access token."""
    patient, access_token = await service.login(request.username, request.password)

    return PatientLoginResponse(
        access_token=access_token,
        patient=service.patient_to_response(patient),
    )


@router.get("/check-username/{username}", response_model=ExistsResponse)
async def check_username_exists(
    username: str,
    service: PatientService = Depends(get_patient_service),
):
    """Check whether a patient username is taken."""
    return ExistsResponse(exists=await service.username_exists(username))


@router.get("/check-email/{email}", response_model=ExistsResponse)
async def check_email_exists(
    email: str,
    service: PatientService = Depends(get_patient_service),
):
    """Check whether a patient email is registered."""
    return ExistsResponse(exists=await service.email_exists(email))


# ============== Patient Self-Service (Require Patient Auth) ==============

@router.get("/profile", response_model=PatientResponse)
async def get_patient_profile(
    identity: TokenPayload = Depends(get_current_identity),
    service: PatientService = Depends(get_patient_service),
):
    """Get the current patient's profile."""
    patient = await service.get_account(identity)
    return service.patient_to_response(patient)


@router.put("/profile", response_model=PatientResponse)
async def update_patient_profile(
    request: UpdatePatientRequest,
    identity: TokenPayload = Depends(get_current_identity),
    service: PatientService = Depends(get_patient_service),
):
    """
    Update the current patient's profile.

    Only the fields supplied are changed.
    """
    patient = await service.update_profile(identity, request.model_dump(exclude_unset=True))
    return service.patient_to_response(patient)


@router.patch("/password", response_model=MessageResponse)
async def update_patient_password(
    request: ChangePasswordRequest,
    identity: TokenPayload = Depends(get_current_identity),
    service: PatientService = Depends(get_patient_service),
):
    """Change the current patient's password."""
    await service.change_password(identity, request.current_password, request.new_password)
    return MessageResponse(message="Password updated successfully")


@router.delete("", response_model=MessageResponse)
async def delete_patient(
    identity: TokenPayload = Depends(get_current_identity),
    service: PatientService = Depends(get_patient_service),
):
    """Delete the current patient's account."""
    await service.delete_account(identity)
    return MessageResponse(message="Account deleted successfully")
