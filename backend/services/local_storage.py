"""
Local filesystem storage backend.

Assets live as plain files under the configured assets root and are served
by the application's /assets static mount.
"""
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO
from urllib.parse import quote

from constants import UploadLimits
from exceptions import StorageError
from services.interfaces import IStorageBackend

logger = logging.getLogger(__name__)


class LocalStorageBackend(IStorageBackend):
    """
    Writes assets to {assets_root}/{key}.

    Bytes go to a hidden temp file inside the assets root first and are moved
    into place with os.replace, so readers never see a partially written
    asset at its final path.
    """

    def __init__(self, assets_root: str, base_url: str):
        self.assets_root = Path(assets_root)
        self.base_url = base_url.rstrip('/')

    def locator_for(self, key: str) -> str:
        return f"{self.base_url}/assets/{quote(key)}"

    def path_for(self, key: str) -> Path:
        if not key or key in ('.', '..') or '/' in key or '\\' in key or '\x00' in key:
            raise StorageError('commit', f"Invalid storage key: {key!r}", key)
        return self.assets_root / key

    def commit(self, key: str, media_type: str, byte_source: BinaryIO) -> str:
        dest = self.path_for(key)

        try:
            self.assets_root.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix='.', suffix='.part', dir=self.assets_root)
        except OSError as e:
            raise StorageError('commit', f"Couldn't create dest path to new asset file: {e}", key)

        try:
            with os.fdopen(fd, 'wb') as out:
                shutil.copyfileobj(byte_source, out, UploadLimits.CHUNK_SIZE)
                out.flush()
                os.fsync(out.fileno())
            os.replace(tmp_path, dest)
        except OSError as e:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
            raise StorageError('commit', f"Couldn't write content to new asset file {dest}: {e}", key)

        logger.info(f"Committed {media_type} asset to {dest}")
        return self.locator_for(key)
