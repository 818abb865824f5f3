"""
Error and health response models shared by every router.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Example:
        {
            "error": "payment_error",
            "message": "Invalid API Key provided: sk_test_****",
            "request_id": "550e8400"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    status is "healthy" when the database answers, "unhealthy" otherwise.
    Missing Stripe/Gemini keys never make the service unhealthy; they are
    reported as "mock" / "fallback".
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    gemini: str = Field(description="Highlights provider: configured, fallback")
    payments: str = Field(description="Payment provider: configured, mock")
    uptime_seconds: float = Field(description="Seconds since service started")
