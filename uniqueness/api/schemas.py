from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorOut(BaseModel):
    detail: str = Field(
        description="Human-readable error summary.",
        examples=["Expected argument of type string, integer given"],
    )


class ValidationErrorOut(ErrorOut):
    """Validation failure response: messages grouped per attribute."""

    errors: dict[str, list[str]] = Field(
        description="Attribute name -> validation messages, in validator order.",
        examples=[{"email": ['Email "jane@example.com" has already been taken.']}],
    )
