"""
File system utilities for baro.

This module provides the on-disk primitives the tool manager is built from:
- Atomic file writes (temp file + rename)
- Guarded directory tree removal
- Symlink replacement and one-level link reading
- Archive extraction through the system ``tar`` executable
"""

import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class FilesystemError(Exception):
    """Base exception for filesystem operations."""

    pass


class ArchiveExtractionError(FilesystemError):
    """Failed to extract an archive."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """Check if ``path`` is located under ``parent``."""
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def read_link(link_path: Union[str, Path]) -> Optional[Path]:
    """
    Read the target of a symbolic link, one level deep.

    Args:
        link_path: Path to the link

    Returns:
        The raw link target (made absolute against the link's directory),
        or None if the link does not exist
    """
    link_path = Path(link_path)
    try:
        target = Path(os.readlink(link_path))
    except FileNotFoundError:
        return None
    if not target.is_absolute():
        target = link_path.parent / target
    return target


# ============================================================================
# Safe File Operations
# ============================================================================


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    This ensures the file is never in a partially-written state.
    If the write fails, the original file (if any) remains unchanged.

    Args:
        file_path: Path to write to
        content: Content to write (string or bytes)
        encoding: Text encoding (used only for string content)

    Example:
        >>> atomic_write('cache.json', '{"zigc_last_modified": null}')
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        temp_path.replace(file_path)

    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Remove a directory's contents recursively, then the directory itself.

    Symlinks inside the tree are removed, never followed.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FileNotFoundError: If path does not exist
        NotADirectoryError: If path is not a directory

    Example:
        >>> safe_rmtree('/home/user/.local/share/baro/zigc/zigc-0.13.0',
        ...             require_prefix='/home/user/.local/share/baro/zigc')
    """
    path = Path(path).absolute()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).absolute()
        if not is_relative_to(path, require_prefix) or path == require_prefix:
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if path.is_symlink() or not path.is_dir():
        if not path.exists() and not path.is_symlink():
            raise FileNotFoundError(f"Directory not found: {path}")
        raise NotADirectoryError(f"Path is not a directory: {path}")

    for entry in path.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
    path.rmdir()
    logger.debug(f"Removed directory tree: {path}")


def remove_file(path: Union[str, Path]) -> bool:
    """
    Remove a file or symlink, tolerating its absence.

    Returns:
        True if something was removed
    """
    try:
        os.unlink(path)
    except FileNotFoundError:
        return False
    return True


def replace_symlink(link_path: Union[str, Path], target: Union[str, Path]) -> None:
    """
    Point ``link_path`` at ``target``, replacing any existing link.

    The old link is deleted before the new one is created, so the path is
    briefly absent between the two calls.

    Args:
        link_path: Where the link lives
        target: What the link should point at
    """
    link_path = Path(link_path)
    if remove_file(link_path):
        logger.debug(f"Deleted the old link ({link_path})")
    os.symlink(target, link_path)
    logger.debug(f"Created symlink: {link_path} -> {target}")


# ============================================================================
# Archive Extraction
# ============================================================================


def extract_archive(
    archive_path: Union[str, Path],
    destination: Union[str, Path],
    strip_components: int = 1,
) -> None:
    """
    Extract an archive into ``destination`` with the system ``tar``.

    The archive's top-level wrapper directory is stripped so the toolchain
    files land directly at the destination root.

    Args:
        archive_path: Path to the archive file
        destination: Existing directory to extract into
        strip_components: Number of leading path components to drop

    Raises:
        ArchiveExtractionError: If ``tar`` is unavailable or exits non-zero
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    tar = shutil.which("tar")
    if tar is None:
        raise ArchiveExtractionError("`tar` executable not found on PATH")

    cmd = [
        tar,
        "-xf",
        str(archive_path),
        f"--strip-components={strip_components}",
        "-C",
        str(destination),
    ]
    logger.info("Extracting...")
    logger.debug(f"Running: {' '.join(cmd)}")

    result = subprocess.run(cmd, capture_output=True, text=True)
    if result.returncode != 0:
        raise ArchiveExtractionError(
            f"Failed to extract {archive_path.name} (exit code {result.returncode}): "
            f"{result.stderr.strip()}"
        )
