"""
BlackPeopleEats Backend — Stripe Checkout Service
===================================================

What:  Creates a one-time Stripe Checkout Session for the fixed
       "Restaurant Sponsorship" product and returns its redirect URL.
Who:   POST /api/create-checkout-session.

Modes:
    STRIPE_SECRET_KEY unset → returns MOCK_CHECKOUT_URL (reason=no_key),
                              so the sponsor button works in development
    STRIPE_SECRET_KEY set   → real session; provider errors become
                              PaymentServiceError carrying Stripe's message

The Stripe SDK is synchronous; the call runs in a worker thread so a slow
provider stalls only the request that issued it. No retry, no idempotency key.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import stripe

from blackpeopleeats.config import MOCK_CHECKOUT_URL, settings
from blackpeopleeats.exceptions import PaymentServiceError

logger = logging.getLogger(__name__)


class PaymentService:

    PRODUCT_NAME = "Restaurant Sponsorship"
    PRODUCT_DESCRIPTION = "Highlight your restaurant on BlackPeopleEats"
    CURRENCY = "usd"
    UNIT_AMOUNT_CENTS = 5000  # $50.00

    def __init__(self, api_key: Optional[str] = None, app_url: Optional[str] = None):
        self.api_key = settings.stripe_secret_key if api_key is None else api_key
        self.app_url = (app_url or settings.app_url).rstrip("/")

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def session_params(self) -> Dict[str, Any]:
        """Parameters for stripe.checkout.Session.create (minus the key)."""
        return {
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": self.CURRENCY,
                        "product_data": {
                            "name": self.PRODUCT_NAME,
                            "description": self.PRODUCT_DESCRIPTION,
                        },
                        "unit_amount": self.UNIT_AMOUNT_CENTS,
                    },
                    "quantity": 1,
                }
            ],
            "mode": "payment",
            "success_url": f"{self.app_url}/?success=true",
            "cancel_url": f"{self.app_url}/?canceled=true",
        }

    async def create_checkout_session(self) -> str:
        """
        Returns the hosted checkout URL.

        Raises:
            PaymentServiceError: Stripe rejected the request or was unreachable
        """
        if not self.configured:
            logger.info("Stripe key not configured; returning mock checkout URL")
            return MOCK_CHECKOUT_URL

        try:
            session = await asyncio.to_thread(
                stripe.checkout.Session.create,
                api_key=self.api_key,
                **self.session_params(),
            )
        except stripe.StripeError as e:
            message = e.user_message or str(e)
            logger.error("Stripe error: %s", message)
            raise PaymentServiceError(
                message=message,
                context={"error_type": type(e).__name__, "code": getattr(e, "code", None)},
            )
        except Exception as e:
            logger.error("Unexpected error creating checkout session: %s", str(e), exc_info=True)
            raise PaymentServiceError(
                message=str(e) or "Could not create a checkout session",
                context={"error_type": type(e).__name__},
            )

        logger.info("Created Stripe checkout session %s", session.id)
        return session.url


payment_service = PaymentService()


def get_payment_service() -> PaymentService:
    """FastAPI dependency returning the shared payment service."""
    return payment_service
