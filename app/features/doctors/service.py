# Doctor Accounts Feature - Service

import re
from typing import List, Optional, Tuple

from beanie.operators import RegEx

from app.core.logging import logger
from app.core.security import Role
from app.features.auth.service import AccountService
from app.features.doctors.models import Doctor
from app.features.doctors.schemas import CreateDoctorRequest, DoctorResponse
from app.shared.exceptions import ValidationException


MIN_PAGE_SIZE = 5
MAX_PAGE_SIZE = 20


class DoctorService(AccountService):
    """Service class for doctor account operations and the public directory."""

    document_class = Doctor
    role = Role.DOCTOR

    async def create_doctor(self, request: CreateDoctorRequest) -> Doctor:
        """Register a new doctor."""
        fields = request.model_dump(exclude={"password"})
        return await self.register(fields, request.password)

    async def list_doctors(
        self,
        page_id: int = 1,
        page_size: int = 10,
        specialty: Optional[str] = None,
    ) -> Tuple[List[Doctor], int]:
        """
        List doctors one page at a time.

        Args:
            page_id: 1-based page number
            page_size: Page size between 5 and 20
            specialty: Optional specialization filter (case-insensitive exact match)

        Returns:
            Tuple of (doctors on the page, total matching doctors)
        """
        if page_id < 1:
            raise ValidationException("page_id must be at least 1")
        if not MIN_PAGE_SIZE <= page_size <= MAX_PAGE_SIZE:
            raise ValidationException(f"page_size must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}")

        if specialty:
            query = Doctor.find(RegEx(Doctor.specialization, f"^{re.escape(specialty)}$", "i"))
        else:
            query = Doctor.find_all()

        total = await query.count()
        doctors = await query.sort(+Doctor.name).skip((page_id - 1) * page_size).limit(page_size).to_list()

        logger.debug(f"Listed {len(doctors)} of {total} doctors (page {page_id}, specialty={specialty})")
        return doctors, total

    @staticmethod
    def doctor_to_response(doctor: Doctor) -> DoctorResponse:
        """Convert Doctor document to response schema."""
        return DoctorResponse(
            username=doctor.username,
            name=doctor.name,
            email=doctor.email,
            phone=doctor.phone,
            gender=doctor.gender,
            specialization=doctor.specialization,
            qualification=doctor.qualification,
            experience=doctor.experience,
            created_at=doctor.created_at,
            updated_at=doctor.updated_at,
        )
