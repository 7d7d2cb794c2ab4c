"""
Internal Upload DTOs

DTOs passed between the HTTP layer and the upload service.
"""

from dataclasses import dataclass
from typing import BinaryIO, Optional

from constants import UploadKind


@dataclass
class UploadRequest:
    """
    One inbound upload, alive only for the duration of a handler call.

    byte_stream is read once, front to back; it is not assumed to be seekable.
    """

    kind: UploadKind
    video_id: str
    requester_id: str
    declared_content_type: Optional[str]
    byte_stream: BinaryIO


@dataclass
class StagedUpload:
    """
    Bytes of an upload buffered in the staging area.

    file is positioned at offset zero and can be re-read.
    """

    file: BinaryIO
    path: str
    size: int
