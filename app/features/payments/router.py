# Payments Feature - Router

from fastapi import APIRouter, Depends

from app.dependencies import get_payment_service
from app.features.payments.schemas import (
    CreateOrderRequest,
    OrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from app.features.payments.service import PaymentService


router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("/create-order", response_model=OrderResponse)
async def create_order(
    request: CreateOrderRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """
    Create a payment order for a consultation.

    - **amount**: Amount in major currency units; the order carries minor units
    """
    return service.create_order(request.amount)


@router.post("/verify", response_model=VerifyPaymentResponse, response_model_exclude_none=True)
async def verify_payment(
    request: VerifyPaymentRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """Verify the provider's checkout signature for an order and payment."""
    verified = service.verify_signature(
        request.razorpay_order_id,
        request.razorpay_payment_id,
        request.razorpay_signature,
    )

    if verified:
        return VerifyPaymentResponse(status="success")
    return VerifyPaymentResponse(status="failure", reason="signature_mismatch")
