"""
Storage key derivation for uploaded assets.
"""
import base64
import secrets

from constants import AssetKeys, UploadKind
from exceptions import StorageError


def thumbnail_key(video_id: str, sub_type: str) -> str:
    """
    Key of a video's thumbnail.

    Deterministic: a new thumbnail for the same video and sub type lands on
    the same key and replaces the previous one.
    """
    return f"{video_id}.{sub_type}"


def random_video_key(sub_type: str) -> str:
    """
    Fresh key for a primary video asset.

    256 random bits, url-safe base64 without padding (43 characters), so
    earlier uploads are never overwritten.

    Raises:
        StorageError: If the system entropy source is unavailable
    """
    try:
        random_bytes = secrets.token_bytes(AssetKeys.RANDOM_KEY_BYTES)
    except (OSError, NotImplementedError) as e:
        raise StorageError('generate_key', f"Entropy source unavailable: {e}")

    encoded = base64.urlsafe_b64encode(random_bytes).rstrip(b'=').decode('ascii')
    return f"{encoded}.{sub_type}"


def key_for(kind: UploadKind, video_id: str, sub_type: str) -> str:
    """Key for an upload of the given kind."""
    if kind is UploadKind.THUMBNAIL:
        return thumbnail_key(video_id, sub_type)
    return random_video_key(sub_type)
