# core/scanner.py
"""
Media file discovery.

Enumerates regular, non-hidden image and video files under a folder,
optionally descending into non-hidden subfolders, sorted by file name.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Union

from pixorder_app.core.errors import (
    FolderAccessDeniedError,
    FolderNotADirectoryError,
    InvalidFolderPathError,
)
from pixorder_app.core.metadata import get_media_kind

logger = logging.getLogger(__name__)


class MediaScanner:
    """Finds image and video files in a folder."""

    def scan_folder(
        self,
        folder: Union[str, Path],
        include_subfolders: bool = True,
    ) -> List[Path]:
        """
        List media files in a folder.

        Args:
            folder: Root folder to scan
            include_subfolders: If True, descend into non-hidden subfolders

        Returns:
            Media file paths sorted by file name

        Raises:
            InvalidFolderPathError: folder is empty or does not exist
            FolderNotADirectoryError: folder is not a directory
            FolderAccessDeniedError: folder (or a subfolder) cannot be listed
        """
        if not str(folder).strip():
            raise InvalidFolderPathError()

        root = Path(folder).expanduser()
        if not root.exists():
            raise InvalidFolderPathError(path=root)
        if not root.is_dir():
            raise FolderNotADirectoryError(path=root)

        try:
            candidates = (
                list(self._walk(root)) if include_subfolders else list(self._list(root))
            )
        except PermissionError as e:
            raise FolderAccessDeniedError(path=e.filename or root) from e
        except OSError as e:
            raise InvalidFolderPathError(str(e), path=root) from e

        media_files = [p for p in candidates if get_media_kind(p) is not None]
        media_files.sort(key=lambda p: p.name)

        logger.info(
            "Found %d media files in %s (subfolders: %s)",
            len(media_files),
            root,
            include_subfolders,
        )
        return media_files

    def _list(self, root: Path) -> Iterator[Path]:
        with os.scandir(root) as entries:
            for entry in entries:
                if entry.name.startswith("."):
                    continue
                if entry.is_file(follow_symlinks=False):
                    yield Path(entry.path)

    def _walk(self, root: Path) -> Iterator[Path]:
        def on_error(error: OSError) -> None:
            raise error

        for current, dirs, files in os.walk(root, onerror=on_error):
            dirs[:] = [d for d in dirs if not d.startswith(".")]
            for filename in files:
                if filename.startswith("."):
                    continue
                path = Path(current) / filename
                if path.is_file() and not path.is_symlink():
                    yield path


__all__ = ["MediaScanner"]
