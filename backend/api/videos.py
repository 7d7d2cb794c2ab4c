"""
Video API Endpoints

Creation and lookup of video records. Assets are attached through the
upload endpoints.
"""

from fastapi import APIRouter, Depends

from constants import HTTPStatus
from dependencies import get_current_user_id, get_video_repository
from dtos.request.video_request import VideoCreateRequest
from dtos.response.video_response import VideoResponse
from exceptions import AuthorizationError
from repositories.video_repository import VideoRepository
from utils.error_handlers import handle_api_errors
from utils.uuid_helper import parse_uuid

router = APIRouter()


@router.post("/videos", response_model=VideoResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Video creation")
def create_video(
    request: VideoCreateRequest,
    user_id: str = Depends(get_current_user_id),
    repository: VideoRepository = Depends(get_video_repository),
):
    """Create a draft video owned by the caller."""
    record = repository.create_video(request.title, request.description, user_id)
    return VideoResponse.from_record(record)


@router.get("/videos/{video_id}", response_model=VideoResponse)
@handle_api_errors("Video lookup")
def get_video(
    video_id: str,
    user_id: str = Depends(get_current_user_id),
    repository: VideoRepository = Depends(get_video_repository),
):
    """Fetch a video owned by the caller."""
    record = repository.get(parse_uuid(video_id))
    if not record.is_owned_by(user_id):
        raise AuthorizationError(record.id, user_id)
    return VideoResponse.from_record(record)
