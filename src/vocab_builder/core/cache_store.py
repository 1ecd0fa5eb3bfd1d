"""
Filesystem cache for fetched remote vocabularies.

The cache is a single long-lived directory inside the build directory. Each
remote vocabulary is staged as ``<displayName>.<ext>`` (or
``<displayName>.cache`` when its format is unknown), so the same vocabulary
maps to the same file on every run and staleness checks stay meaningful.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Optional, Union

from ..constants import BuildLayout
from ..shared.models import CacheEntry

logger = logging.getLogger(__name__)


class CacheStore:
    """
    Filesystem-backed staging area for remote vocabularies.
    
    Args:
        directory: Cache directory; created by ``ensure()``.
    """
    
    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)
    
    def ensure(self) -> Path:
        """Create the cache directory if needed (idempotent)."""
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory
    
    @staticmethod
    def file_name(display_name: str, extension: Optional[str]) -> str:
        """Stable cache file name for a vocabulary."""
        safe_name = display_name.replace('/', '_').replace('\\', '_')
        return f"{safe_name}.{extension or BuildLayout.UNKNOWN_FORMAT_EXTENSION}"
    
    def resolve(self, display_name: str, extension: Optional[str]) -> Path:
        """Path of the cache file for ``display_name`` and ``extension``."""
        return self.directory / self.file_name(display_name, extension)
    
    def entry(self, display_name: str, extension: Optional[str]) -> CacheEntry:
        """Cache entry for ``display_name``; its file may not exist yet."""
        return CacheEntry(self.resolve(display_name, extension))
    
    def write(self, path: Union[str, Path], chunks: Iterable[bytes]) -> Path:
        """
        Stream ``chunks`` to ``path``, replacing prior content.
        
        Data goes to a sibling ``.part`` file first and is moved into place
        once complete, so a failed download never leaves a truncated entry.
        
        Returns:
            The written path.
            
        Raises:
            OSError: If the file cannot be written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        partial = target.with_name(target.name + BuildLayout.PARTIAL_SUFFIX)
        written = 0
        try:
            with open(partial, 'wb') as f:
                for chunk in chunks:
                    if chunk:
                        f.write(chunk)
                        written += len(chunk)
            os.replace(partial, target)
        except BaseException:
            if partial.exists():
                partial.unlink()
            raise
        logger.debug(f"Wrote {written} bytes to {target}")
        return target
