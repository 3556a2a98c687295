"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Body of every non-2xx response raised by the service."""
    error: str = Field(
        ...,
        description="Machine-readable error code",
        examples=["REPAYMENT_EXCEEDS_BALANCE"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Repayment amount 6000.00 exceeds outstanding balance 5136.42"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing (echoes X-Request-ID)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "CREDIT_NOT_FOUND",
                    "message": "Credit not found: 550e8400-e29b-41d4-a716-446655440000",
                    "request_id": "3f0c9a5e2b7d4c1a9e8f6b5a4c3d2e1f",
                }
            ]
        }
    }
