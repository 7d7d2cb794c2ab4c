from sqlalchemy import Column, String, Text, DateTime, CheckConstraint, Index
from datetime import datetime, timezone
from database import Base
from utils.uuid_helper import generate_uuid


def utc_now() -> datetime:
    """Naive UTC timestamp, the form SQLite hands back on read"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Video(Base):
    """
    Persisted metadata of a video.

    Asset columns come in triples (key, media type, url); a triple is either
    fully set or fully NULL. user_id and created_at are written once on insert.
    """
    __tablename__ = 'videos'

    id = Column(String, primary_key=True, default=generate_uuid)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default='')
    user_id = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now)

    # Thumbnail asset
    thumbnail_key = Column(String, nullable=True)
    thumbnail_media_type = Column(String, nullable=True)  # e.g. 'image/png'
    thumbnail_url = Column(Text, nullable=True)

    # Primary video asset
    video_key = Column(String, nullable=True)
    video_media_type = Column(String, nullable=True)  # always 'video/mp4' today
    video_url = Column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("title != ''"),
        Index('idx_videos_user', 'user_id'),
    )
