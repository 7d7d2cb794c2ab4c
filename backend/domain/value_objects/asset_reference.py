"""
AssetReference Value Object

Locator for a committed asset. Created only after the storage backend has
accepted the bytes; never mutated afterwards.
"""

from dataclasses import dataclass

from .media_type import MediaType


@dataclass(frozen=True)
class AssetReference:
    """
    Immutable reference to a stored asset.

    Attributes:
        storage_key: Key addressing the asset inside its backend namespace
        media_type: Validated media type the asset was uploaded with
        retrieval_locator: URL or path clients use to fetch the asset
    """

    storage_key: str
    media_type: MediaType
    retrieval_locator: str
