# Payments Feature - Schemas

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


# Digits accepted in an order amount, integer and fractional parts together
MAX_AMOUNT_DIGITS = 12


class CreateOrderRequest(BaseModel):
    """Schema for creating a consultation payment order."""
    amount: Decimal = Field(..., gt=0, max_digits=MAX_AMOUNT_DIGITS, description="Amount in major currency units, e.g. 499.00")


class OrderResponse(BaseModel):
    """Order descriptor. Not persisted."""
    id: str
    amount: int = Field(..., description="Amount in minor currency units")
    currency: str
    receipt: str
    status: str = "created"
    created_at: int
    key_id: Optional[str] = Field(None, description="Public checkout key for the client")


class VerifyPaymentRequest(BaseModel):
    """Schema for the payment provider's checkout callback."""
    razorpay_order_id: str = Field(..., min_length=1)
    razorpay_payment_id: str = Field(..., min_length=1)
    razorpay_signature: str = Field(..., min_length=1)


class VerifyPaymentResponse(BaseModel):
    """Outcome of a signature check."""
    status: str
    reason: Optional[str] = None
