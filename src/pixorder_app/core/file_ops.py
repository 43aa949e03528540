# core/file_ops.py
"""
Destination conflict handling and copy/move execution.

Given a desired destination, resolve_destination() applies the conflict
policy (skip / overwrite / rename) and perform_operation() places the file.
handle_file_operation() combines both and returns the effective destination.
"""

import logging
import os
import shutil
from pathlib import Path

from pixorder_app.core.errors import (
    FileOperationFailedError,
    FileSkippedError,
    os_error_reason,
)
from pixorder_app.core.results import ClassificationMode, ConflictResolution

logger = logging.getLogger(__name__)


def generate_unique_path(dest: Path) -> Path:
    """
    Generate a free path by appending _1, _2, ... before the extension.

    Always returns a suffixed candidate, even if dest itself is free; callers
    only use this once dest is known to exist.

    Args:
        dest: Desired destination path

    Returns:
        First "<stem>_<n><suffix>" path that does not exist
    """
    parent = dest.parent
    stem = dest.stem
    suffix = dest.suffix

    counter = 1
    candidate = parent / f"{stem}_{counter}{suffix}"
    while candidate.exists():
        counter += 1
        candidate = parent / f"{stem}_{counter}{suffix}"

    return candidate


def is_same_file(source: Path, dest: Path) -> bool:
    """True if dest exists and is the same filesystem object as source."""
    try:
        return dest.exists() and os.path.samefile(source, dest)
    except OSError:
        return False


def resolve_destination(dest: Path, conflict_resolution: ConflictResolution) -> Path:
    """
    Apply the conflict policy to a desired destination.

    Args:
        dest: Desired destination path
        conflict_resolution: Policy to apply when dest already exists

    Returns:
        Effective destination path

    Raises:
        FileSkippedError: dest exists and the policy is SKIP
        FileOperationFailedError: the existing file could not be removed (OVERWRITE)
    """
    if not dest.exists():
        return dest

    if conflict_resolution is ConflictResolution.SKIP:
        raise FileSkippedError(path=dest)

    if conflict_resolution is ConflictResolution.OVERWRITE:
        try:
            if dest.is_dir() and not dest.is_symlink():
                shutil.rmtree(dest)
            else:
                dest.unlink()
        except OSError as e:
            raise FileOperationFailedError(
                f"Cannot remove existing file ({os_error_reason(e)})", path=dest
            ) from e
        logger.debug("Removed existing destination: %s", dest)
        return dest

    renamed = generate_unique_path(dest)
    logger.debug("Destination exists, renamed: %s -> %s", dest.name, renamed.name)
    return renamed


def perform_operation(source: Path, dest: Path, mode: ClassificationMode) -> None:
    """
    Move or copy source to dest.

    Move uses rename semantics and falls back to copy + delete across
    filesystems (shutil.move). Copy preserves metadata (shutil.copy2).

    Raises:
        ValueError: mode is DRY_RUN
        FileOperationFailedError: the filesystem operation failed
    """
    if mode is ClassificationMode.DRY_RUN:
        raise ValueError("Dry run does not perform file operations")

    try:
        if mode is ClassificationMode.MOVE:
            shutil.move(str(source), str(dest))
        else:
            shutil.copy2(str(source), str(dest))
    except (OSError, shutil.Error) as e:
        logger.error("Failed to %s %s -> %s: %s", mode.value, source, dest, e)
        raise FileOperationFailedError(os_error_reason(e), path=source) from e


def handle_file_operation(
    source: Path,
    dest: Path,
    mode: ClassificationMode,
    conflict_resolution: ConflictResolution,
) -> Path:
    """
    Resolve conflicts at dest, then move or copy source there.

    A source that already is dest (a re-run over an organized folder) is
    left untouched under every policy.

    Returns:
        The effective destination (differs from dest under RENAME)
    """
    if mode is ClassificationMode.DRY_RUN:
        raise ValueError("Dry run does not perform file operations")

    if is_same_file(source, dest):
        logger.debug("Already in place: %s", dest)
        return dest

    final_dest = resolve_destination(dest, conflict_resolution)
    perform_operation(source, final_dest, mode)
    return final_dest


__all__ = [
    "generate_unique_path",
    "is_same_file",
    "resolve_destination",
    "perform_operation",
    "handle_file_operation",
]
