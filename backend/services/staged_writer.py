"""
Staged writing of upload streams.

Upload bytes are first copied into a private temporary file, so that the
storage backend gets a seekable source of known length and peak memory stays
at one chunk regardless of payload size.
"""
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from constants import UploadLimits
from domain.value_objects import ByteSize
from dtos.internal.upload_dto import StagedUpload
from exceptions import PayloadTooLargeError, StorageError

logger = logging.getLogger(__name__)


def _copy_bounded(source: BinaryIO, dest: BinaryIO, max_bytes: int, chunk_size: int) -> int:
    """Copy source into dest chunk by chunk, failing once max_bytes is passed."""
    total = 0
    while True:
        chunk = source.read(chunk_size)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise PayloadTooLargeError(max_bytes)
        dest.write(chunk)
    return total


@contextmanager
def stage_upload(
    stream: BinaryIO,
    max_bytes: int,
    staging_dir: str,
    chunk_size: int = UploadLimits.CHUNK_SIZE,
) -> Iterator[StagedUpload]:
    """
    Buffer an upload stream in a uniquely named staging file.

    The staging file is removed when the context exits, whatever the outcome:
    validation failure, storage failure, a read error from a dropped client,
    or success.

    Args:
        stream: Single-pass readable stream of upload bytes
        max_bytes: Size ceiling; one byte more aborts the copy
        staging_dir: Directory for staging files (created if missing)
        chunk_size: Read size per iteration

    Yields:
        StagedUpload positioned at offset zero

    Raises:
        PayloadTooLargeError: If the stream is longer than max_bytes
        StorageError: If the staging file cannot be created or written
    """
    try:
        Path(staging_dir).mkdir(parents=True, exist_ok=True)
        staged = tempfile.NamedTemporaryFile(
            mode='w+b',
            prefix=UploadLimits.STAGING_PREFIX,
            dir=staging_dir,
            delete=False,
        )
    except OSError as e:
        raise StorageError('stage_upload', f"Couldn't create staging file in {staging_dir}: {e}")

    path = staged.name
    try:
        try:
            size = _copy_bounded(stream, staged, max_bytes, chunk_size)
            staged.flush()
            staged.seek(0)
        except OSError as e:
            raise StorageError('stage_upload', f"Couldn't write upload to staging file: {e}")

        logger.debug(f"Staged {ByteSize(size)} at {path}")
        yield StagedUpload(file=staged, path=path, size=size)
    finally:
        staged.close()
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass
