"""
Shared dependencies across the application.

Services are built once in ``create_app`` and kept on ``app.state``; these
functions hand them to route handlers.
"""

from fastapi import Request

from app.features.appointments.service import AppointmentService
from app.features.auth.dependencies import get_current_identity
from app.features.chat.service import ChatService
from app.features.doctors.service import DoctorService
from app.features.patients.service import PatientService
from app.features.payments.service import PaymentService
from app.features.prescriptions.service import PrescriptionService


def get_patient_service(request: Request) -> PatientService:
    return request.app.state.patient_service


def get_doctor_service(request: Request) -> DoctorService:
    return request.app.state.doctor_service


def get_appointment_service(request: Request) -> AppointmentService:
    return request.app.state.appointment_service


def get_prescription_service(request: Request) -> PrescriptionService:
    return request.app.state.prescription_service


def get_payment_service(request: Request) -> PaymentService:
    return request.app.state.payment_service


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


__all__ = [
    "get_current_identity",
    "get_patient_service",
    "get_doctor_service",
    "get_appointment_service",
    "get_prescription_service",
    "get_payment_service",
    "get_chat_service",
]
