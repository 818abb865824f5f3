"""
BlackPeopleEats Backend — Sponsorship Checkout Route
======================================================

What:  POST /api/create-checkout-session → {"url": ...}
Who:   The "Sponsor your restaurant" button; the client redirects to url.

Without a Stripe key the url is the mock checkout page (reason=no_key).
Stripe failures are answered with HTTP 500 and Stripe's message.
"""

import logging

from fastapi import APIRouter, Depends

from blackpeopleeats.schemas.common import ErrorResponse
from blackpeopleeats.schemas.highlights import CheckoutSessionResponse
from blackpeopleeats.services.payment_service import PaymentService, get_payment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Payments"])


@router.post(
    "/create-checkout-session",
    response_model=CheckoutSessionResponse,
    responses={500: {"description": "Payment provider error", "model": ErrorResponse}},
    summary="Start a sponsorship checkout",
)
async def create_checkout_session(
    payments: PaymentService = Depends(get_payment_service),
) -> CheckoutSessionResponse:
    url = await payments.create_checkout_session()
    return CheckoutSessionResponse(url=url)
