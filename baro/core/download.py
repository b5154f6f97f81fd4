"""
Network access for baro.

This module provides the three HTTP operations the tool manager needs:
- A metadata probe (HEAD) that reads the ``Last-Modified`` header
- A bounded GET that loads a small document into memory
- A streaming GET that writes a release archive to disk with progress updates

There is no retry logic: the first failure is reported to the caller.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import requests

from baro.core.exceptions import FetchingFailedError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


@dataclass
class DownloadProgress:
    """Progress information for a download."""

    bytes_downloaded: int
    total_bytes: int
    percentage: float
    speed_bps: float  # bytes per second

    def __str__(self) -> str:
        return format_progress(self)


def get_last_modified(url: str, timeout: Optional[float] = None) -> Optional[str]:
    """
    Probe ``url`` with a HEAD request and return its ``Last-Modified`` header.

    Args:
        url: URL to probe
        timeout: Request timeout in seconds (None = transport default)

    Returns:
        The header value, or None if the server did not send one

    Raises:
        FetchingFailedError: If the response status is not a success
    """
    logger.debug(f"HEAD {url}")
    response = requests.head(url, timeout=timeout, allow_redirects=True)
    if not response.ok:
        raise FetchingFailedError(url)
    # requests headers are case-insensitive
    return response.headers.get("Last-Modified")


def fetch_bytes(url: str, max_size: int, timeout: Optional[float] = None) -> bytes:
    """
    GET ``url`` and return its body, refusing bodies larger than ``max_size``.

    Args:
        url: URL to fetch
        max_size: Maximum accepted body size in bytes
        timeout: Request timeout in seconds (None = transport default)

    Raises:
        FetchingFailedError: On a non-success status or an oversized body
    """
    logger.debug(f"GET {url}")
    with requests.get(url, stream=True, timeout=timeout) as response:
        if response.status_code != 200:
            raise FetchingFailedError(url)

        body = bytearray()
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            body.extend(chunk)
            if len(body) > max_size:
                raise FetchingFailedError(f"{url} (response exceeds {max_size} bytes)")
    return bytes(body)


def download_file(
    url: str,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    timeout: Optional[float] = None,
) -> Path:
    """
    Stream ``url`` into ``destination``.

    Args:
        url: URL to download from
        destination: Local path to save file (overwritten if present)
        progress_callback: Optional callback for progress updates
        timeout: Request timeout in seconds (None = transport default)

    Returns:
        Path to downloaded file

    Raises:
        FetchingFailedError: If the response status is not 200

    Example:
        >>> download_file(
        ...     "https://ziglang.org/download/0.13.0/zig-linux-x86_64-0.13.0.tar.xz",
        ...     Path("download-0.13.0.tar.xz"),
        ... )
    """
    destination = Path(destination)
    logger.info(f"Download from {url}")

    with requests.get(url, stream=True, timeout=timeout) as response:
        if response.status_code != 200:
            raise FetchingFailedError(url)

        content_length = response.headers.get("content-length")
        total_size = int(content_length) if content_length else 0

        downloaded = 0
        start_time = time.time()
        last_progress_time = start_time

        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if not chunk:
                    continue
                f.write(chunk)
                downloaded += len(chunk)

                # Report progress (max once per 0.5 seconds to avoid spam)
                current_time = time.time()
                if progress_callback and (
                    current_time - last_progress_time >= 0.5
                    or downloaded == total_size
                ):
                    elapsed = current_time - start_time
                    progress_callback(
                        DownloadProgress(
                            bytes_downloaded=downloaded,
                            total_bytes=total_size or downloaded,
                            percentage=(downloaded / total_size * 100)
                            if total_size > 0
                            else 0,
                            speed_bps=downloaded / elapsed if elapsed > 0 else 0,
                        )
                    )
                    last_progress_time = current_time

    logger.debug(f"Download complete: {destination} ({downloaded} bytes)")
    return destination


def format_progress(progress: DownloadProgress) -> str:
    """
    Format progress for display.

    Example:
        >>> format_progress(DownloadProgress(52428800, 104857600, 50.0, 1048576))
        '50.0/100.0 MB (50.0%) at 1.0 MB/s'
    """
    mb_downloaded = progress.bytes_downloaded / 1024 / 1024
    mb_total = progress.total_bytes / 1024 / 1024
    speed_mbps = progress.speed_bps / 1024 / 1024

    if progress.percentage > 0:
        return (
            f"{mb_downloaded:.1f}/{mb_total:.1f} MB "
            f"({progress.percentage:.1f}%) "
            f"at {speed_mbps:.1f} MB/s"
        )
    return f"{mb_downloaded:.1f} MB at {speed_mbps:.1f} MB/s"
