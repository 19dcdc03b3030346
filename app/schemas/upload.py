"""Request/response schemas for the receipt upload endpoint."""

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Response after a receipt is stored and attached to its record."""

    success: bool = True
    message: str = "Receipt uploaded successfully"
    filename: str = Field(..., description="Generated name the receipt is stored under.")
