"""
Service Interfaces

Abstract base classes for the collaborators of the upload pipeline.
Concrete implementations are chosen in dependencies.py, so tests can swap
in fakes without touching the pipeline.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO

from domain.entities import VideoRecord


class IAuthenticator(ABC):
    """Turns a credential into the identity of the requester."""

    @abstractmethod
    def verify(self, credential: str) -> str:
        """
        Verify a credential.

        Args:
            credential: Opaque credential presented by the client

        Returns:
            Requester (user) id

        Raises:
            AuthError: If the credential is missing, malformed or invalid
        """
        pass


class IMetadataStore(ABC):
    """Key-value store of video records keyed by video id."""

    @abstractmethod
    def get(self, video_id: str) -> VideoRecord:
        """
        Fetch a record.

        Raises:
            NotFoundError: If no record exists for video_id
            PersistenceError: If the store cannot be read
        """
        pass

    @abstractmethod
    def put(self, record: VideoRecord) -> None:
        """
        Persist a record as a single write.

        Raises:
            PersistenceError: If the write fails
        """
        pass


class IStorageBackend(ABC):
    """
    Final destination of asset bytes.

    Implementations must be all-or-nothing: when commit() raises, nothing is
    visible under key.
    """

    @abstractmethod
    def commit(self, key: str, media_type: str, byte_source: BinaryIO) -> str:
        """
        Store the bytes of byte_source under key.

        Args:
            key: Storage key of the asset
            media_type: MIME type to tag the asset with
            byte_source: Readable source positioned at offset zero

        Returns:
            Retrieval locator (URL) of the committed asset

        Raises:
            StorageError: On any I/O or network failure
        """
        pass
