"""
Video repository: the metadata store behind the upload pipeline.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from domain.entities import VideoRecord
from domain.value_objects import AssetReference, MediaType
from exceptions import NotFoundError, PersistenceError
from models import Video, utc_now
from services.interfaces import IMetadataStore
from utils.uuid_helper import generate_uuid
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


def _to_reference(key: Optional[str], media_type: Optional[str], url: Optional[str]) -> Optional[AssetReference]:
    if not url:
        return None
    if not key or not media_type:
        # Rows written before keys were tracked only have a URL
        key = key or url.rsplit('/', 1)[-1]
        media_type = media_type or 'application/octet-stream'
    return AssetReference(
        storage_key=key,
        media_type=MediaType.from_string(media_type),
        retrieval_locator=url,
    )


def to_record(row: Video) -> VideoRecord:
    """Map an ORM row onto the domain record."""
    return VideoRecord(
        id=row.id,
        title=row.title,
        description=row.description or '',
        owner_id=row.user_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        thumbnail_ref=_to_reference(row.thumbnail_key, row.thumbnail_media_type, row.thumbnail_url),
        video_ref=_to_reference(row.video_key, row.video_media_type, row.video_url),
    )


class VideoRepository(BaseRepository[Video], IMetadataStore):
    """
    SQLAlchemy-backed metadata store.

    put() replaces every mutable column of the row in one transaction. There is
    no compare-and-swap: two concurrent writers of the same video race, and the
    last commit wins.
    """

    def __init__(self, db: Session):
        super().__init__(db, Video)

    def get(self, video_id: str) -> VideoRecord:
        try:
            row = self.get_by_id(video_id)
        except SQLAlchemyError as e:
            raise PersistenceError('get_video', f"Failed to read video {video_id}: {e}")
        if row is None:
            raise NotFoundError(video_id)
        return to_record(row)

    def put(self, record: VideoRecord) -> None:
        try:
            row = self.get_by_id(record.id)
            if row is None:
                raise NotFoundError(record.id)

            row.title = record.title
            row.description = record.description
            row.updated_at = record.updated_at
            self._apply_asset(row, 'thumbnail', record.thumbnail_ref)
            self._apply_asset(row, 'video', record.video_ref)

            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to persist video {record.id}: {e}", exc_info=True)
            raise PersistenceError('update_video', f"Failed to persist video {record.id}: {e}")

    def create_video(self, title: str, description: str, owner_id: str) -> VideoRecord:
        """
        Insert a new draft video with no assets attached.

        Returns:
            The created record
        """
        now = utc_now()
        row = Video(
            id=generate_uuid(),
            title=title,
            description=description,
            user_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        try:
            self.create(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError('create_video', f"Failed to create video: {e}")
        logger.info(f"Created video {row.id} for user {owner_id}")
        return to_record(row)

    @staticmethod
    def _apply_asset(row: Video, prefix: str, ref: Optional[AssetReference]) -> None:
        setattr(row, f'{prefix}_key', ref.storage_key if ref else None)
        setattr(row, f'{prefix}_media_type', ref.media_type.mime if ref else None)
        setattr(row, f'{prefix}_url', ref.retrieval_locator if ref else None)
