# core/metadata.py
"""
Media type detection and pixel dimension extraction.

Images are read with Pillow; EXIF orientation 5-8 (quarter turns) swaps
width and height. Videos are read through exiftool, falling back to
mediainfo; a 90/270 degree rotation tag swaps width and height.
"""

import json
import logging
import mimetypes
import os
import shutil
import struct
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

from pixorder_app.core.errors import (
    NoVideoTrackError,
    UnreadableDimensionsError,
    UnreadableFileError,
    UnreadableMetadataError,
    UnsupportedFileTypeError,
    os_error_reason,
)

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset(
    (
        "jpg", "jpeg", "png", "gif", "bmp", "tif", "tiff", "webp",
        "heic", "heif", "dng", "cr2", "nef", "arw",
    )
)

VIDEO_EXTENSIONS = frozenset(
    ("mov", "mp4", "m4v", "avi", "mkv", "webm", "3gp", "mts", "m2ts")
)

# EXIF tag 0x0112
EXIF_ORIENTATION_TAG = 274

# Orientations that rotate the stored image by 90 or 270 degrees
QUARTER_TURN_ORIENTATIONS = frozenset((5, 6, 7, 8))

MEDIA_KIND_IMAGE = "image"
MEDIA_KIND_VIDEO = "video"


@dataclass(frozen=True)
class MediaDimensions:
    """Display dimensions of a media file, after orientation is applied."""

    width: float
    height: float


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Extract lowercase file extension from filepath.

    Args:
        filepath: Path to the file (can be full path or just filename)

    Returns:
        Lowercase extension without dot, or empty string if none
    """
    filename = os.path.basename(str(filepath))
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


def get_media_kind(filepath: Union[str, Path]) -> Optional[str]:
    """
    Classify a path as image or video content.

    Extension tables are checked first; unknown extensions fall back to the
    MIME type guessed from the name.

    Returns:
        "image", "video", or None for anything else
    """
    ext = get_file_extension(filepath)
    if ext in IMAGE_EXTENSIONS:
        return MEDIA_KIND_IMAGE
    if ext in VIDEO_EXTENSIONS:
        return MEDIA_KIND_VIDEO

    mime_type, _ = mimetypes.guess_type(str(filepath))
    if mime_type:
        if mime_type.startswith("image/"):
            return MEDIA_KIND_IMAGE
        if mime_type.startswith("video/"):
            return MEDIA_KIND_VIDEO
    return None


def _is_quarter_turn(rotation: float) -> bool:
    return int(round(rotation)) % 180 == 90


class MetadataReader:
    """Reads display dimensions of images and videos."""

    def __init__(self):
        self._exiftool_available = _check_tool("exiftool")
        self._mediainfo_available = _check_tool("mediainfo")

        if not self._exiftool_available and not self._mediainfo_available:
            logger.warning(
                "exiftool and mediainfo not available - video dimensions unreadable"
            )

    def get_dimensions(self, filepath: Union[str, Path]) -> MediaDimensions:
        """
        Read the display dimensions of a media file.

        Args:
            filepath: Path to an image or video

        Returns:
            MediaDimensions with orientation applied

        Raises:
            UnsupportedFileTypeError: not an image or video
            UnreadableFileError: file missing or cannot be opened
            UnreadableMetadataError: metadata present but unreadable
            UnreadableDimensionsError: no usable width/height
            NoVideoTrackError: video container without a video stream
        """
        path = Path(filepath)
        kind = get_media_kind(path)
        if kind is None:
            raise UnsupportedFileTypeError(path=path)

        if not path.is_file() or not os.access(path, os.R_OK):
            raise UnreadableFileError(path=path)

        if kind == MEDIA_KIND_IMAGE:
            return self._get_image_dimensions(path)
        return self._get_video_dimensions(path)

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def _get_image_dimensions(self, path: Path) -> MediaDimensions:
        try:
            with Image.open(path) as img:
                width, height = img.size
                try:
                    orientation = self._get_image_orientation(img)
                except (OSError, ValueError, SyntaxError, struct.error) as e:
                    raise UnreadableMetadataError(
                        f"Cannot read file metadata ({e})", path=path
                    ) from e
        except Image.DecompressionBombError as e:
            raise UnreadableFileError(
                f"Image exceeds {Image.MAX_IMAGE_PIXELS} pixel safety limit",
                path=path,
            ) from e
        except UnidentifiedImageError as e:
            raise UnreadableFileError("Unrecognized image format", path=path) from e
        except (OSError, ValueError, SyntaxError, struct.error) as e:
            raise UnreadableFileError(
                f"Cannot read file ({os_error_reason(e)})", path=path
            ) from e

        if not width or not height:
            raise UnreadableDimensionsError(path=path)

        if orientation in QUARTER_TURN_ORIENTATIONS:
            width, height = height, width

        return MediaDimensions(width=float(width), height=float(height))

    def _get_image_orientation(self, img: Image.Image) -> int:
        """Return the EXIF orientation, or 1 (normal) when absent."""
        exif = img.getexif()
        orientation = exif.get(EXIF_ORIENTATION_TAG)
        if orientation is None:
            return 1
        try:
            return int(orientation)
        except (TypeError, ValueError):
            return 1

    # ------------------------------------------------------------------
    # Videos
    # ------------------------------------------------------------------

    def _get_video_dimensions(self, path: Path) -> MediaDimensions:
        if not self._exiftool_available and not self._mediainfo_available:
            raise UnreadableMetadataError(
                "No video metadata tool available (install exiftool or mediainfo)",
                path=path,
            )

        size = None
        if self._exiftool_available:
            size = self._exiftool_video_size(path)
        if size is None and self._mediainfo_available:
            size = self._mediainfo_video_size(path)
        if size is None:
            raise NoVideoTrackError(path=path)

        width, height, rotation = size
        if width <= 0 or height <= 0:
            raise UnreadableDimensionsError(path=path)

        if _is_quarter_turn(rotation):
            width, height = height, width

        return MediaDimensions(width=width, height=height)

    def _exiftool_video_size(self, path: Path) -> Optional[Tuple[float, float, float]]:
        """Width, height, rotation from exiftool, or None if no video size is tagged."""
        cmd = [
            "exiftool",
            "-json",
            "-n",
            "-ImageWidth",
            "-ImageHeight",
            "-Rotation",
            str(path),
        ]
        output = _run_cmd(cmd)
        if not output:
            return None

        try:
            data = json.loads(output)[0]
        except (json.JSONDecodeError, IndexError, TypeError) as e:
            raise UnreadableMetadataError(
                f"Cannot parse exiftool output ({e})", path=path
            ) from e

        if "ImageWidth" not in data or "ImageHeight" not in data:
            return None

        try:
            return (
                float(data["ImageWidth"]),
                float(data["ImageHeight"]),
                float(data.get("Rotation", 0) or 0),
            )
        except (TypeError, ValueError) as e:
            raise UnreadableDimensionsError(
                f"Cannot read file dimensions ({e})", path=path
            ) from e

    def _mediainfo_video_size(self, path: Path) -> Optional[Tuple[float, float, float]]:
        """Width, height, rotation of the first video stream, or None if there is none."""
        output = _run_cmd(
            ["mediainfo", "--Inform=Video;%Width%|%Height%|%Rotation%\\n", str(path)]
        )
        first_stream = output.splitlines()[0].strip() if output else ""
        if not first_stream.strip("|"):
            return None

        parts = first_stream.split("|")
        try:
            width = float(parts[0])
            height = float(parts[1])
        except (IndexError, ValueError) as e:
            raise UnreadableDimensionsError(
                f"Cannot read file dimensions ({e})", path=path
            ) from e

        rotation = 0.0
        if len(parts) > 2 and parts[2]:
            try:
                rotation = float(parts[2])
            except ValueError:
                logger.debug("Ignoring unparsable rotation %r for %s", parts[2], path)

        return width, height, rotation


def _check_tool(name: str) -> bool:
    """
    Check if an external tool is available.

    Uses shutil.which() and common Homebrew prefixes since macOS app
    bundles often have a restricted PATH.
    """
    if shutil.which(name):
        return True

    common_paths = (
        f"/opt/homebrew/bin/{name}",
        f"/usr/local/bin/{name}",
    )
    return any(os.access(path, os.X_OK) for path in common_paths)


def _run_cmd(cmd: List[str], timeout: int = 10) -> str:
    """Run a command and return stripped stdout, or "" on failure."""
    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, timeout=timeout, encoding="utf-8"
        )
        return result.stdout.strip()
    except (subprocess.TimeoutExpired, subprocess.SubprocessError, OSError) as e:
        logger.debug("Command failed: %s - %s", cmd[0], e)
        return ""


def check_dependencies() -> List[str]:
    """
    Check availability of external dependencies.

    Returns:
        List of missing tool names.
    """
    return [name for name in ("exiftool", "mediainfo") if not _check_tool(name)]


__all__ = [
    "MediaDimensions",
    "MetadataReader",
    "IMAGE_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "get_file_extension",
    "get_media_kind",
    "check_dependencies",
]
