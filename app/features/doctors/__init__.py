# Doctor Accounts Feature

from app.features.doctors.models import Doctor
from app.features.doctors.service import DoctorService

__all__ = ["Doctor", "DoctorService"]
