"""Response envelopes shared by every endpoint."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error envelope. Empty param/value are left out when rendered."""

    param: str = Field(default="", description="Offending input name (e.g. date, id)")
    value: str = Field(default="", description="Submitted value of param")
    error: str = Field(..., description="Short error text (e.g. bad JSON)")

    def render(self) -> dict[str, Any]:
        return self.model_dump(exclude_defaults=True)


class MessageResponse(BaseModel):
    """Plain message envelope (delete success, not found)."""

    message: str

    def render(self) -> dict[str, Any]:
        return self.model_dump()
