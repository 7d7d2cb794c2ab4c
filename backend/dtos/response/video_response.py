"""
Video Response DTOs

DTOs for video-related API responses.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from domain.entities import VideoRecord
from domain.value_objects import AssetReference


class AssetResponse(BaseModel):
    """Response DTO for a committed asset."""

    storage_key: str = Field(description="Key of the asset in its storage backend")
    media_type: str = Field(description="MIME type the asset was uploaded with")
    url: str = Field(description="Locator clients use to fetch the asset")

    @classmethod
    def from_reference(cls, ref: Optional[AssetReference]) -> Optional["AssetResponse"]:
        if ref is None:
            return None
        return cls(storage_key=ref.storage_key, media_type=ref.media_type.mime, url=ref.retrieval_locator)


class VideoResponse(BaseModel):
    """
    Response DTO for a video record.

    thumbnail_url and video_url mirror the asset locators so clients that
    only care about URLs need not unpack the asset objects.
    """

    id: str = Field(description="Video ID")
    title: str = Field(description="Video title")
    description: str = Field(description="Video description")
    user_id: str = Field(description="Owner of the video")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last modification timestamp")
    thumbnail_url: Optional[str] = Field(None, description="Thumbnail locator")
    video_url: Optional[str] = Field(None, description="Video locator")
    thumbnail: Optional[AssetResponse] = Field(None, description="Thumbnail asset")
    video: Optional[AssetResponse] = Field(None, description="Video asset")

    @classmethod
    def from_record(cls, record: VideoRecord) -> "VideoResponse":
        """Build the response from a domain record."""
        return cls(
            id=record.id,
            title=record.title,
            description=record.description,
            user_id=record.owner_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
            thumbnail_url=record.thumbnail_ref.retrieval_locator if record.thumbnail_ref else None,
            video_url=record.video_ref.retrieval_locator if record.video_ref else None,
            thumbnail=AssetResponse.from_reference(record.thumbnail_ref),
            video=AssetResponse.from_reference(record.video_ref),
        )
