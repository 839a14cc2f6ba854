"""
Pydantic schemas for image upload endpoints.
"""
from pydantic import BaseModel, Field
from typing import Optional


class UploadRequest(BaseModel):
    """An uploaded file as received by the API, alive for one call."""
    content: bytes = Field(..., description="Raw file bytes")
    content_type: Optional[str] = Field(None, description="Declared MIME type")
    filename: Optional[str] = Field(None, description="Original client filename")
    size: int = Field(..., ge=0, description="File size in bytes")


class ImageUploadResponse(BaseModel):
    """Response schema for a stored image."""
    url: str = Field(..., description="Public jsDelivr CDN URL")
    file_name: str = Field(..., alias="fileName", description="Generated file name")
    message: str
    replaced: bool = Field(..., description="Whether an existing file was overwritten")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "url": "https://cdn.jsdelivr.net/gh/owner/repo@main/images/3f2b...png",
                "fileName": "3f2b8a6e-0c1d-4f7e-9b1a-2c3d4e5f6a7b.png",
                "message": "Image uploaded successfully",
                "replaced": False
            }
        }


class ErrorResponse(BaseModel):
    """Error body returned on 400/500."""
    error: str
