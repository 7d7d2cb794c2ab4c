"""
VideoRecord Entity

The metadata record uploaded assets are attached to.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional

from constants import UploadKind
from domain.value_objects import AssetReference


@dataclass(frozen=True)
class VideoRecord:
    """
    Metadata of one video.

    id, owner_id and created_at never change after creation. Every mutation
    goes through with_asset(), which copies all other fields unchanged.
    """

    id: str
    title: str
    description: str
    owner_id: str
    created_at: datetime
    updated_at: datetime
    thumbnail_ref: Optional[AssetReference] = None
    video_ref: Optional[AssetReference] = None

    def is_owned_by(self, requester_id: str) -> bool:
        return self.owner_id == requester_id

    def with_asset(self, kind: UploadKind, asset: AssetReference, now: datetime) -> "VideoRecord":
        """
        Copy of this record with one asset reference replaced.

        updated_at is advanced to now, or nudged one microsecond past the
        previous value when the clock has not moved, so it strictly increases.

        Args:
            kind: Which reference field to replace
            asset: Newly committed asset
            now: Current time

        Returns:
            New VideoRecord
        """
        updated_at = now if now > self.updated_at else self.updated_at + timedelta(microseconds=1)
        return replace(self, **{kind.record_field: asset, "updated_at": updated_at})
