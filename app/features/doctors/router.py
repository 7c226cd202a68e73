# Doctor Accounts Feature - Router

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.core.security import TokenPayload
from app.dependencies import get_current_identity, get_doctor_service
from app.features.auth.schemas import ChangePasswordRequest, LoginRequest
from app.features.doctors.schemas import (
    CreateDoctorRequest,
    DoctorListResponse,
    DoctorLoginResponse,
    DoctorResponse,
    UpdateDoctorRequest,
)
from app.features.doctors.service import MAX_PAGE_SIZE, MIN_PAGE_SIZE, DoctorService
from app.shared.schemas import ExistsResponse, MessageResponse


router = APIRouter(prefix="/doctors", tags=["Doctors"])


# ============== Public Endpoints ==============

@router.post("", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor(
    request: CreateDoctorRequest,
    service: DoctorService = Depends(get_doctor_service),
):
    """
    Register a new doctor.

    - **username**: Alphanumeric, unique among doctors
    - **email**: Unique among doctors
    - **specialization**, **qualification**, **experience**: Professional details
    """
    doctor = await service.create_doctor(request)
    return service.doctor_to_response(doctor)


@router.post("/login", response_model=DoctorLoginResponse)
async def login_doctor(
    request: LoginRequest,
    service: DoctorService = Depends(get_doctor_service),
):
    """Authenticate a doctor and return an access token."""
    doctor, access_token = await service.login(request.username, request.password)

    return DoctorLoginResponse(
        access_token=access_token,
        doctor=service.doctor_to_response(doctor),
    )


@router.get("", response_model=DoctorListResponse)
async def list_doctors(
    page_id: int = Query(1, ge=1),
    page_size: int = Query(10, ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE),
    specialty: Optional[str] = Query(None, max_length=100),
    service: DoctorService = Depends(get_doctor_service),
):
    """
    Search the doctor directory.

    - **page_id**: Page number, from 1
    - **page_size**: Between 5 and 20
    - **specialty**: Optional specialization filter
    """
    doctors, total = await service.list_doctors(page_id, page_size, specialty)

    return DoctorListResponse(
        doctors=[service.doctor_to_response(doctor) for doctor in doctors],
        page_id=page_id,
        page_size=page_size,
        total=total,
    )


@router.get("/check-username/{username}", response_model=ExistsResponse)
async def check_doctor_username_exists(
    username: str,
    service: DoctorService = Depends(get_doctor_service),
):
    """Check whether a doctor username is taken."""
    return ExistsResponse(exists=await service.username_exists(username))


@router.get("/check-email/{email}", response_model=ExistsResponse)
async def check_doctor_email_exists(
    email: str,
    service: DoctorService = Depends(get_doctor_service),
):
    """Check whether a doctor email is registered."""
    return ExistsResponse(exists=await service.email_exists(email))


# ============== Doctor Self-Service (Require Doctor Auth) ==============

@router.get("/profile", response_model=DoctorResponse)
async def get_doctor_profile(
    identity: TokenPayload = Depends(get_current_identity),
    service: DoctorService = Depends(get_doctor_service),
):
    """Get the current doctor's profile."""
    doctor = await service.get_account(identity)
    return service.doctor_to_response(doctor)


@router.put("/profile", response_model=DoctorResponse)
async def update_doctor_profile(
    request: UpdateDoctorRequest,
    identity: TokenPayload = Depends(get_current_identity),
    service: DoctorService = Depends(get_doctor_service),
):
    """
    Update the current doctor's profile.

    Only the fields supplied are changed.
    """
    doctor = await service.update_profile(identity, request.model_dump(exclude_unset=True))
    return service.doctor_to_response(doctor)


@router.patch("/password", response_model=MessageResponse)
async def update_doctor_password(
    request: ChangePasswordRequest,
    identity: TokenPayload = Depends(get_current_identity),
    service: DoctorService = Depends(get_doctor_service),
):
    """Change the current doctor's password."""
    await service.change_password(identity, request.current_password, request.new_password)
    return MessageResponse(message="Password updated successfully")


@router.delete("", response_model=MessageResponse)
async def delete_doctor(
    identity: TokenPayload = Depends(get_current_identity),
    service: DoctorService = Depends(get_doctor_service),
):
    """Delete the current doctor's account."""
    await service.delete_account(identity)
    return MessageResponse(message="Account deleted successfully")
