# Appointments Feature

from app.features.appointments.models import Appointment, AppointmentStatus
from app.features.appointments.service import AppointmentService

__all__ = ["Appointment", "AppointmentStatus", "AppointmentService"]
