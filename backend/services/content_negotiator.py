"""
Content negotiation for uploads.

Parses the declared Content-Type of an uploaded part into a MediaType and
checks it against what each upload kind accepts. Pure functions, no I/O.
"""
from typing import Optional

from constants import MediaTypes, UploadKind
from domain.value_objects import MediaType
from exceptions import ValidationError


def parse_media_type(header: Optional[str]) -> MediaType:
    """
    Split a Content-Type header into main and sub type.

    Parameters after ';' are dropped and the type is lower-cased.

    Raises:
        ValidationError: If the header is absent, empty or not a main/sub pair
    """
    if header is None or not header.strip():
        raise ValidationError("Couldn't find valid Content-Type header")

    essence = header.split(';', 1)[0].strip().lower()
    parts = essence.split('/')
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValidationError(
            "Malformed Content-Type header",
            {"content_type": header}
        )

    return MediaType(main_type=parts[0], sub_type=parts[1])


def negotiate_image(header: Optional[str]) -> MediaType:
    """Accept any image/* type."""
    media_type = parse_media_type(header)
    if media_type.main_type != MediaTypes.IMAGE_MAIN_TYPE:
        raise ValidationError(
            "Content Type doesn't match image data type - thumbnail has to be an image",
            {"content_type": media_type.mime}
        )
    return media_type


def negotiate_video(header: Optional[str]) -> MediaType:
    """
    Accept video/mp4 only.

    Both halves are checked, unlike thumbnails where only the main type is.
    """
    media_type = parse_media_type(header)
    if (media_type.main_type != MediaTypes.VIDEO_MAIN_TYPE
            or media_type.sub_type != MediaTypes.VIDEO_SUB_TYPE):
        raise ValidationError(
            "Content Type doesn't match video data type - video upload has to be video/mp4",
            {"content_type": media_type.mime}
        )
    return media_type


def negotiate(kind: UploadKind, header: Optional[str]) -> MediaType:
    """Dispatch to the negotiator for an upload kind."""
    if kind is UploadKind.THUMBNAIL:
        return negotiate_image(header)
    return negotiate_video(header)
