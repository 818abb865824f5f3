"""
BlackPeopleEats Backend — Payment Service Tests (Mocked Stripe)
=================================================================

What:  Checkout session creation with stripe.checkout.Session.create patched.
"""

from unittest.mock import MagicMock, patch

import pytest
import stripe

from blackpeopleeats.config import MOCK_CHECKOUT_URL
from blackpeopleeats.exceptions import PaymentServiceError
from blackpeopleeats.services.payment_service import PaymentService


@pytest.mark.asyncio
async def test_without_key_returns_mock_url():
    """Without a key the mock URL is returned and Stripe is not called."""
    service = PaymentService(api_key="")

    with patch("stripe.checkout.Session.create") as create:
        url = await service.create_checkout_session()

    assert url == MOCK_CHECKOUT_URL
    assert "reason=no_key" in url
    create.assert_not_called()


@pytest.mark.asyncio
async def test_creates_sponsorship_session():
    """The session is a one-item $50 card payment with app redirect URLs."""
    service = PaymentService(api_key="sk_test_123", app_url="https://bpe.example.com/")
    session = MagicMock(id="cs_test_1", url="https://checkout.stripe.com/c/pay/cs_test_1")

    with patch("stripe.checkout.Session.create", return_value=session) as create:
        url = await service.create_checkout_session()

    assert url == "https://checkout.stripe.com/c/pay/cs_test_1"
    kwargs = create.call_args.kwargs
    assert kwargs["api_key"] == "sk_test_123"
    assert kwargs["mode"] == "payment"
    assert kwargs["payment_method_types"] == ["card"]
    assert kwargs["success_url"] == "https://bpe.example.com/?success=true"
    assert kwargs["cancel_url"] == "https://bpe.example.com/?canceled=true"

    (item,) = kwargs["line_items"]
    assert item["quantity"] == 1
    assert item["price_data"]["currency"] == "usd"
    assert item["price_data"]["unit_amount"] == 5000
    assert item["price_data"]["product_data"]["name"] == "Restaurant Sponsorship"


@pytest.mark.asyncio
async def test_stripe_error_carries_provider_message():
    """Stripe errors keep Stripe's user-facing message."""
    service = PaymentService(api_key="sk_test_bad")
    error = stripe.AuthenticationError("Invalid API Key provided: sk_test_bad")

    with patch("stripe.checkout.Session.create", side_effect=error):
        with pytest.raises(PaymentServiceError) as exc_info:
            await service.create_checkout_session()

    assert exc_info.value.message == "Invalid API Key provided: sk_test_bad"
    assert exc_info.value.context["error_type"] == "AuthenticationError"


@pytest.mark.asyncio
async def test_network_failure_is_wrapped():
    """Non-Stripe exceptions are wrapped in PaymentServiceError too."""
    service = PaymentService(api_key="sk_test_123")

    with patch("stripe.checkout.Session.create", side_effect=ConnectionError("unreachable")):
        with pytest.raises(PaymentServiceError) as exc_info:
            await service.create_checkout_session()

    assert "unreachable" in exc_info.value.message
