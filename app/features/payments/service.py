# Payments Feature - Service

import hashlib
import hmac
import secrets
import string
import time
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from app.config import Settings
from app.core.logging import logger
from app.features.payments.schemas import OrderResponse
from app.shared.exceptions import InternalException, ValidationException


RANDOM_ALPHABET = string.ascii_letters + string.digits


def generate_random_string(length: int) -> str:
    """Random alphanumeric string from a CSPRNG."""
    return "".join(secrets.choice(RANDOM_ALPHABET) for _ in range(length))


def to_minor_units(amount: Decimal) -> int:
    """
    Convert a major-unit amount to integer minor units (x100, half-up).

    Raises:
        ValidationException: If the amount is not finite or too large to represent
    """
    try:
        return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (InvalidOperation, OverflowError, ValueError):
        raise ValidationException("Amount is not a representable currency value")


def compute_signature(secret: str, order_id: str, payment_id: str) -> str:
    """Hex HMAC-SHA256 of ``order_id|payment_id`` keyed by the shared secret."""
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


class PaymentService:
    """
    Consultation payment handshake.

    Orders are generated locally and are not linked to appointments; the
    verification step checks the provider's checkout signature against the
    shared secret.
    """

    def __init__(self, settings: Settings):
        self.currency = settings.PAYMENT_CURRENCY
        self.key_id = settings.PAYMENT_KEY_ID
        self._secret = settings.PAYMENT_KEY_SECRET

    def create_order(self, amount: Decimal) -> OrderResponse:
        """Create an order descriptor for the given amount."""
        amount_minor = to_minor_units(amount)
        if amount_minor < 1:
            raise ValidationException("Amount must be at least one minor currency unit")

        order = OrderResponse(
            id=f"order_{generate_random_string(14)}",
            amount=amount_minor,
            currency=self.currency,
            receipt=f"order_rcptid_{generate_random_string(10)}",
            status="created",
            created_at=int(time.time()),
            key_id=self.key_id,
        )

        logger.info(f"Created payment order {order.id} for {order.amount} {order.currency}")
        return order

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        """
        Check a checkout signature.

        Returns:
            True if the signature matches, False otherwise

        Raises:
            InternalException: If no payment secret is configured
        """
        if not self._secret:
            raise InternalException("Payment provider is not configured")

        expected = compute_signature(self._secret, order_id, payment_id)
        verified = hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))

        if verified:
            logger.info(f"Payment {payment_id} for order {order_id} verified")
        else:
            logger.warning(f"Payment signature mismatch for order {order_id}")
        return verified
