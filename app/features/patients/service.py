# Patient Accounts Feature - Service

from app.core.security import Role
from app.features.auth.service import AccountService
from app.features.patients.models import Patient
from app.features.patients.schemas import CreatePatientRequest, PatientResponse


class PatientService(AccountService):
    """Service class for patient account operations."""

    document_class = Patient
    role = Role.PATIENT

    async def create_patient(self, request: CreatePatientRequest) -> Patient:
        """Register a new patient."""
        fields = request.model_dump(exclude={"password"})
        return await self.register(fields, request.password)

    @staticmethod
    def patient_to_response(patient: Patient) -> PatientResponse:
        """Convert Patient document to response schema."""
        return PatientResponse(
            username=patient.username,
            name=patient.name,
            email=patient.email,
            phone=patient.phone,
            age=patient.age,
            gender=patient.gender,
            created_at=patient.created_at,
            updated_at=patient.updated_at,
        )
