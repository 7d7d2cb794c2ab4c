"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

Examples:
- MediaType: Validated MIME main/sub pair
- AssetReference: Locator of a committed asset
- ByteSize: Payload size with formatting
- UploadState: Position of an upload request in the pipeline
"""

from .asset_reference import AssetReference
from .byte_size import ByteSize
from .media_type import MediaType
from .upload_state import UploadState

__all__ = ["AssetReference", "ByteSize", "MediaType", "UploadState"]
