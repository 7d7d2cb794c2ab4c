"""
Domain Entities

Entities are business objects with identity and lifecycle.

Examples:
- VideoRecord: Metadata of a video and the assets attached to it
"""

from .video_record import VideoRecord

__all__ = ["VideoRecord"]
