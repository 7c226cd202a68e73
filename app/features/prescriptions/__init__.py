# Prescriptions Feature

from app.features.prescriptions.models import Prescription
from app.features.prescriptions.service import PrescriptionService

__all__ = ["Prescription", "PrescriptionService"]
