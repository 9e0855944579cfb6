"""
Error schemas - Pydantic models for error responses
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorDetail(BaseModel):
    """Detailed error information"""
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional context (url, reason, expected values, ...)"
    )
    timestamp: datetime = Field(default_factory=_utcnow, description="When the error occurred")


class ErrorResponse(BaseModel):
    """API error response - standardized format"""
    error: ErrorDetail = Field(description="Error information")
    request_id: Optional[str] = Field(None, description="Request ID for logging/debugging")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "error": {
                "code": "ROM_LOAD_FAILED",
                "message": "Failed to load ROM from https://example.org/game.nes: HTTP 404",
                "details": {"url": "https://example.org/game.nes", "reason": "HTTP 404"},
                "timestamp": "2026-01-01T10:30:00Z"
            },
            "request_id": "req-12345"
        }
    })


class ValidationErrorResponse(BaseModel):
    """Validation error - when request body is invalid"""
    error: ErrorDetail = Field(description="Error information")
    validation_errors: List[Dict[str, Any]] = Field(description="Per-field validation errors")
    request_id: Optional[str] = Field(None, description="Request ID for logging/debugging")
