"""
Local filesystem storage for generated certificate PDFs.
"""

import logging
from pathlib import Path
from typing import Optional

from ...application.ports.services.certificate_storage import CertificateStorage, StoredArtifact
from ...core.exceptions import StorageError
from ...core.utils.async_utils import run_blocking

logger = logging.getLogger(__name__)


class LocalCertificateStorage(CertificateStorage):
    """Stores certificates as files under a single directory."""

    def __init__(self, base_path: str):
        self._base_path = Path(base_path)

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _resolve(self, filename: str) -> Path:
        # Only bare filenames; anything with a directory part is rejected
        name = Path(filename).name
        if not name or name != filename:
            raise StorageError("Invalid certificate filename", {"filename": filename})
        return self._base_path / name

    def _write(self, target: Path, content: bytes) -> int:
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp = target.with_suffix(target.suffix + ".tmp")
        tmp.write_bytes(content)
        tmp.replace(target)
        return target.stat().st_size

    async def save(self, filename: str, content: bytes) -> StoredArtifact:
        target = self._resolve(filename)
        try:
            size = await run_blocking(self._write, target, content)
        except OSError as e:
            raise StorageError(f"Failed to write certificate file: {e}", {"filename": filename}) from e
        logger.info("Stored certificate file %s (%d bytes)", target, size)
        return StoredArtifact(path=str(target), size=size)

    async def load(self, path: str) -> Optional[bytes]:
        target = Path(path)
        try:
            return await run_blocking(target.read_bytes)
        except FileNotFoundError:
            logger.warning("Certificate file missing: %s", path)
            return None
        except OSError as e:
            raise StorageError(f"Failed to read certificate file: {e}", {"path": path}) from e
