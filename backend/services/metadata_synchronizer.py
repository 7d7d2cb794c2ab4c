"""
Metadata synchronization for committed assets.
"""
import logging
from datetime import datetime
from typing import Callable

from constants import UploadKind
from domain.entities import VideoRecord
from domain.value_objects import AssetReference
from exceptions import AuthorizationError
from models import utc_now
from services.interfaces import IMetadataStore

logger = logging.getLogger(__name__)


class MetadataSynchronizer:
    """
    Attaches committed assets to video records.

    The fetch-modify-write in synchronize() is not isolated from other
    requests: two uploads for the same video that interleave here lose one
    of the updates. Callers that need strict consistency must serialize
    uploads per video id themselves.
    """

    def __init__(self, store: IMetadataStore, clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.clock = clock

    def fetch_owned(self, video_id: str, requester_id: str) -> VideoRecord:
        """
        Fetch a record and check the requester owns it.

        Raises:
            NotFoundError: If the video does not exist
            AuthorizationError: If requester_id is not the owner
        """
        record = self.store.get(video_id)
        if not record.is_owned_by(requester_id):
            logger.warning(f"User {requester_id} attempted to modify video {video_id} owned by {record.owner_id}")
            raise AuthorizationError(video_id, requester_id)
        return record

    def synchronize(
        self,
        video_id: str,
        requester_id: str,
        kind: UploadKind,
        asset: AssetReference,
    ) -> VideoRecord:
        """
        Point the record's reference for kind at asset.

        Every other field is copied unchanged and updated_at advances.

        Returns:
            The record as persisted

        Raises:
            NotFoundError: If the video does not exist
            AuthorizationError: If requester_id is not the owner
            PersistenceError: If the store write fails
        """
        record = self.fetch_owned(video_id, requester_id)
        updated = record.with_asset(kind, asset, self.clock())
        self.store.put(updated)
        logger.info(f"Video {video_id} {kind.record_field} -> {asset.storage_key}")
        return updated
