"""
Video Request DTOs

DTOs for video-related API requests.
"""

from pydantic import BaseModel, Field, validator


class VideoCreateRequest(BaseModel):
    """
    Request DTO for creating a draft video record.

    The record is owned by the authenticated caller; assets are attached later
    through the upload endpoints.
    """

    title: str = Field(description="Video title")
    description: str = Field("", description="Video description")

    @validator("title")
    def validate_title(cls, v):
        """Titles must contain something other than whitespace."""
        if not v or not v.strip():
            raise ValueError("Title must not be empty")
        return v.strip()
