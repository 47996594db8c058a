"""
Response envelope models.

Every API response is wrapped in ``{"status", "message", "data"}``. The
envelope is generic over the model of its ``data`` field.
"""

from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model exchanging camelCase field names with the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ResponseStatus(str, Enum):
    """Envelope status values the client understands."""

    SUCCESS = "Success"
    TWO_FACTOR_REQUIRED = "TwoFactorRequired"


class ResponseOutcome(Enum):
    """How a caller should treat a successfully transported response."""

    SUCCESS = "success"
    TWO_FACTOR_REQUIRED = "two_factor_required"
    FAILED = "failed"


class APIResponse(CamelModel, Generic[T]):
    """
    Standard API response envelope.

    Attributes:
        status: Application-level status ("Success", "TwoFactorRequired", ...)
        message: Optional human-readable message
        data: Optional payload
    """

    status: str = Field(..., description="Application-level status")
    message: Optional[str] = Field(default=None, description="Human-readable message")
    data: Optional[T] = Field(default=None, description="Response payload")

    @property
    def outcome(self) -> ResponseOutcome:
        """Classify the envelope status; unknown statuses count as failures."""
        if self.status == ResponseStatus.SUCCESS.value:
            return ResponseOutcome.SUCCESS
        if self.status == ResponseStatus.TWO_FACTOR_REQUIRED.value:
            return ResponseOutcome.TWO_FACTOR_REQUIRED
        return ResponseOutcome.FAILED

    @property
    def is_success(self) -> bool:
        return self.outcome is ResponseOutcome.SUCCESS

    @property
    def requires_two_factor(self) -> bool:
        return self.outcome is ResponseOutcome.TWO_FACTOR_REQUIRED
