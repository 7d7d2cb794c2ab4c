"""
Upload API Endpoints

Accepts multipart uploads of thumbnails and videos for an existing video
record owned by the caller.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from constants import UploadKind
from dependencies import get_current_user_id, get_upload_service
from dtos.response.video_response import VideoResponse
from exceptions import ValidationError
from services.upload_service import UploadService
from utils.error_handlers import handle_api_errors
from utils.uuid_helper import parse_uuid

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_file(upload: Optional[UploadFile], kind: UploadKind) -> UploadFile:
    if upload is None:
        raise ValidationError(f"Unable to parse '{kind.form_field}' file from form data")
    return upload


@router.post(f"/{UploadKind.THUMBNAIL.route_name}/{{video_id}}", response_model=VideoResponse)
@handle_api_errors("Thumbnail upload")
def upload_thumbnail(
    video_id: str,
    thumbnail: Optional[UploadFile] = File(None),
    user_id: str = Depends(get_current_user_id),
    service: UploadService = Depends(get_upload_service),
):
    """
    Upload a thumbnail image for a video.

    The image replaces any previous thumbnail of the video. Any image/* type
    is accepted.
    """
    video_id = parse_uuid(video_id)
    upload = _require_file(thumbnail, UploadKind.THUMBNAIL)
    logger.info(f"Uploading thumbnail for video {video_id} by user {user_id}")

    record = service.upload_thumbnail(video_id, user_id, upload.content_type, upload.file)
    return VideoResponse.from_record(record)


@router.post(f"/{UploadKind.VIDEO.route_name}/{{video_id}}", response_model=VideoResponse)
@handle_api_errors("Video upload")
def upload_video(
    video_id: str,
    video: Optional[UploadFile] = File(None),
    user_id: str = Depends(get_current_user_id),
    service: UploadService = Depends(get_upload_service),
):
    """
    Upload the MP4 file of a video.

    Each upload is stored under a new random key; the record then points at
    the newest one.
    """
    video_id = parse_uuid(video_id)
    upload = _require_file(video, UploadKind.VIDEO)
    logger.info(f"Uploading video file for video {video_id} by user {user_id}")

    record = service.upload_video(video_id, user_id, upload.content_type, upload.file)
    return VideoResponse.from_record(record)
