"""
Cash Card Service — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract for /cashcards.
Why:   Strict input validation, automatic serialization, and OpenAPI doc generation.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate the OpenAPI document.

Design Decision:
    Schemas are separate from SQLAlchemy models because the API contract
    exposes less than the table holds: `owner` is stored on every card but
    never returned, and never accepted from the client.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

# Largest value the NUMERIC(12, 2) amount column holds
MAX_AMOUNT = 9_999_999_999.99


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class CashCardRequest(BaseModel):
    """
    What:  Body of POST /cashcards and PUT /cashcards/{id}.
    Why:   Only `amount` is client-controlled. A client may echo back a full
           card (`id`, `owner`) as received from GET; those keys are ignored.

    Validation policy:
        - amount is required and must be a JSON number (no numeric strings)
        - amount must be finite and between 0 and MAX_AMOUNT
        - amount carries at most two decimal places
    """
    amount: float = Field(
        ge=0,
        le=MAX_AMOUNT,
        strict=True,
        allow_inf_nan=False,
        description="Card balance, non-negative, at most two decimal places",
        examples=[123.45],
    )

    @field_validator("amount")
    @classmethod
    def validate_precision(cls, v: float) -> float:
        """Rejects sub-cent amounts instead of silently rounding them."""
        if round(v, 2) != v:
            raise ValueError("amount must have at most two decimal places")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class CashCardResponse(BaseModel):
    """
    What:  Representation of a single cash card.
    Who:   Returned by GET /cashcards/{id}, and as items of GET /cashcards.

    Example:
        {"id": 99, "amount": 123.45}
    """
    id: int = Field(description="Store-assigned card identifier")
    amount: float = Field(description="Card balance")

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
