# Payments Feature

from app.features.payments.service import PaymentService

__all__ = ["PaymentService"]
