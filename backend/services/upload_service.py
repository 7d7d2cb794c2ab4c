"""
Upload Service

Runs one upload end to end:

    ownership check -> content negotiation -> staging -> storage commit
    -> metadata synchronization

Each step starts only after the previous one succeeded. A failure after the
commit leaves the committed asset in place: it is not referenced by the
record and is replaced by the next successful upload of the same thumbnail,
or simply never referenced in the case of a random video key.
"""
from datetime import datetime
from typing import BinaryIO, Callable, Mapping, Optional

from config.settings import AppConfig
from constants import UploadKind
from domain.entities import VideoRecord
from domain.value_objects import AssetReference, ByteSize, UploadState
from dtos.internal.upload_dto import UploadRequest
from exceptions import ApplicationError
from models import utc_now
from services.asset_keys import key_for
from services.content_negotiator import negotiate
from services.interfaces import IMetadataStore, IStorageBackend
from services.metadata_synchronizer import MetadataSynchronizer
from services.staged_writer import stage_upload
from utils.logging_utils import StructuredLogger, log_operation

logger = StructuredLogger(__name__)


class UploadService:
    """
    Synchronous upload pipeline for thumbnails and videos.

    Holds no per-request state; one instance can serve concurrent requests.
    """

    def __init__(
        self,
        config: AppConfig,
        store: IMetadataStore,
        backends: Mapping[UploadKind, IStorageBackend],
        clock: Callable[[], datetime] = utc_now,
    ):
        self.config = config
        self.backends = backends
        self.synchronizer = MetadataSynchronizer(store, clock)

    @log_operation("upload_thumbnail")
    def upload_thumbnail(
        self,
        video_id: str,
        requester_id: str,
        declared_content_type: Optional[str],
        byte_stream: BinaryIO,
    ) -> VideoRecord:
        """
        Store an image as the video's thumbnail.

        Any image/* type is accepted. The asset key is {video_id}.{sub_type},
        so a new thumbnail replaces the old one.

        Raises:
            ValidationError: Bad content type or payload too large
            NotFoundError: Unknown video
            AuthorizationError: requester_id does not own the video
            StorageError: Staging or commit failed
            PersistenceError: Record update failed (asset already committed)
        """
        return self.upload(UploadRequest(
            kind=UploadKind.THUMBNAIL,
            video_id=video_id,
            requester_id=requester_id,
            declared_content_type=declared_content_type,
            byte_stream=byte_stream,
        ))

    @log_operation("upload_video")
    def upload_video(
        self,
        video_id: str,
        requester_id: str,
        declared_content_type: Optional[str],
        byte_stream: BinaryIO,
    ) -> VideoRecord:
        """
        Store an MP4 as the video's primary asset under a fresh random key.

        Raises the same errors as upload_thumbnail.
        """
        return self.upload(UploadRequest(
            kind=UploadKind.VIDEO,
            video_id=video_id,
            requester_id=requester_id,
            declared_content_type=declared_content_type,
            byte_stream=byte_stream,
        ))

    def upload(self, request: UploadRequest) -> VideoRecord:
        state = UploadState.RECEIVED
        key = None
        try:
            self.synchronizer.fetch_owned(request.video_id, request.requester_id)
            media_type = negotiate(request.kind, request.declared_content_type)
            state = state.advance(UploadState.VALIDATED)

            with stage_upload(
                request.byte_stream,
                self.config.max_bytes_for(request.kind),
                self.config.staging_dir,
            ) as staged:
                state = state.advance(UploadState.STAGED)
                key = key_for(request.kind, request.video_id, media_type.sub_type)
                locator = self.backends[request.kind].commit(key, media_type.mime, staged.file)
                state = state.advance(UploadState.COMMITTED)
                logger.info(
                    f"Committed {ByteSize(staged.size)} {media_type}",
                    extra={"storage_key": key},
                )

            asset = AssetReference(storage_key=key, media_type=media_type, retrieval_locator=locator)
            record = self.synchronizer.synchronize(
                request.video_id, request.requester_id, request.kind, asset
            )
            state = state.advance(UploadState.SYNCHRONIZED)
            return record

        except ApplicationError as e:
            reached, state = state, state.advance(UploadState.FAILED)
            if reached is UploadState.COMMITTED:
                logger.error(
                    "Asset committed but not recorded on the video",
                    extra={"storage_key": key, "error": e.message},
                )
            else:
                logger.warning(
                    f"Upload {reached.value} -> {state.value}: {e.message}",
                    extra={"error_type": type(e).__name__},
                )
            raise
