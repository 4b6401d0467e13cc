"""Chat assistant API contract models."""

from pydantic import BaseModel, Field, StrictStr, field_validator


class ChatRequest(BaseModel):
    """A single user question for the species assistant."""

    message: StrictStr = Field(..., description="User message, must not be blank")

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Trim surrounding whitespace and reject blank messages."""
        v = v.strip()
        if not v:
            raise ValueError("message must not be blank")
        return v


class ChatResponse(BaseModel):
    """The assistant's reply, or a fixed notice when it is unavailable."""

    response: str = Field(..., description="Assistant reply text")


class ErrorResponse(BaseModel):
    """Error body returned for rejected chat requests."""

    error: str = Field(..., description="Human readable error")
