"""
File Download

Streams an HTTP(S) resource to an optional destination file while counting
received bytes.

Usage:
    dl = Download("https://example.com/file.zip", "file.zip")
    dl.on_data = lambda chunk: print(dl.download_percent())
    dl.start()
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

import httpx
from pydantic import BaseModel, Field

from .exceptions import DownloadError

logger = logging.getLogger(__name__)

KILOBYTE = 1024
MEGABYTE = 1024 * 1024
GIGABYTE = 1024 * 1024 * 1024

DEFAULT_CHUNK_SIZE = 64 * 1024


class DownloadProgress(BaseModel):
    """Snapshot of a download's progress."""

    url: str
    dest: Optional[str] = None
    downloaded_bytes: int = Field(ge=0)
    total_bytes: int = Field(ge=0, description="From Content-Length, 0 if unknown")
    percent: float = Field(ge=0.0)
    finished: bool = False


class Download:
    """
    Download a file from the internet.

    Hooks can be overridden in a subclass or replaced per instance:
    on_data(chunk), on_end(), on_close(), on_error(error).
    on_close always runs last; on_end only when the body was fully received.
    """

    def __init__(
        self,
        url: str,
        dest: Optional[Union[str, Path]] = None,
        client: Optional[httpx.Client] = None,
        chunk_size: Optional[int] = None,
        timeout: float = 30.0,
    ):
        if not url:
            raise DownloadError("URL is not defined")
        self.url = url
        self.dest = str(dest) if dest is not None else None
        self.downloaded_bytes = 0
        self.total_bytes = 0
        self.finished = False
        self.chunk_size = chunk_size or DEFAULT_CHUNK_SIZE
        self.timeout = timeout
        self._client = client

    # =========================================================================
    # Hooks
    # =========================================================================

    def on_data(self, chunk: bytes) -> None:
        pass

    def on_end(self) -> None:
        pass

    def on_close(self) -> None:
        pass

    def on_error(self, error: Exception) -> None:
        logger.error(f"Download of {self.url} failed: {error}")

    # =========================================================================
    # Byte counting
    # =========================================================================

    def set_downloaded_bytes(self, value: int) -> "Download":
        self.downloaded_bytes = value
        return self

    def add_downloaded_bytes(self, value: int) -> "Download":
        self.downloaded_bytes += value
        return self

    def downloaded_in_bits(self) -> float:
        return self.downloaded_bytes * 8

    def downloaded_in_kilobytes(self) -> float:
        return self.downloaded_bytes / KILOBYTE

    def downloaded_in_megabytes(self) -> float:
        return self.downloaded_bytes / MEGABYTE

    def downloaded_in_gigabytes(self) -> float:
        return self.downloaded_bytes / GIGABYTE

    def downloaded_in_auto_with_unit(self) -> Tuple[float, str]:
        """
        Pick the largest unit the byte count exceeds.

        Counts under 8 bytes are reported in bits.
        """
        size = self.downloaded_bytes
        if size > GIGABYTE:
            return self.downloaded_in_gigabytes(), "GB"
        if size > MEGABYTE:
            return self.downloaded_in_megabytes(), "MB"
        if size > KILOBYTE:
            return self.downloaded_in_kilobytes(), "KB"
        if size < 8:
            return self.downloaded_in_bits(), "b"
        return size, "B"

    def downloaded_in_auto(self) -> float:
        return self.downloaded_in_auto_with_unit()[0]

    def download_percent(self) -> float:
        """Percent complete, 0.0 when the total size is unknown."""
        if not self.total_bytes:
            return 0.0
        return 100 * (self.downloaded_bytes / self.total_bytes)

    def progress(self) -> DownloadProgress:
        return DownloadProgress(
            url=self.url,
            dest=self.dest,
            downloaded_bytes=self.downloaded_bytes,
            total_bytes=self.total_bytes,
            percent=self.download_percent(),
            finished=self.finished,
        )

    # =========================================================================
    # Transfer
    # =========================================================================

    def start(
        self, url: Optional[str] = None, dest: Optional[Union[str, Path]] = None
    ) -> "Download":
        """
        Run the download to completion.

        Bytes are counted and written as received on the wire, so a
        Content-Encoding such as gzip is not decoded.
        Transport and file errors are reported through on_error, not raised.
        """
        url = url or self.url
        dest = str(dest) if dest is not None else self.dest

        client = self._client or httpx.Client(follow_redirects=True, timeout=self.timeout)
        try:
            with client.stream("GET", url) as response:
                response.raise_for_status()
                self.total_bytes = _content_length(response.headers)
                logger.info(f"Downloading {url} ({self.total_bytes or 'unknown'} bytes)")

                if dest:
                    with open(dest, "wb") as sink:
                        self._consume(response, sink.write)
                else:
                    logger.info("No destination specified.")
                    self._consume(response, None)

            self.finished = True
            self.on_end()
        except (httpx.HTTPError, OSError) as e:
            self.on_error(e)
        finally:
            if self._client is None:
                client.close()
            self.on_close()
        return self

    def _consume(
        self, response: httpx.Response, write: Optional[Callable[[bytes], int]]
    ) -> None:
        for chunk in response.iter_raw(self.chunk_size):
            self.add_downloaded_bytes(len(chunk))
            self.on_data(chunk)
            if write is not None:
                write(chunk)


def _content_length(headers: httpx.Headers) -> int:
    """Wire size from Content-Length, 0 when absent or malformed."""
    try:
        return max(int(headers.get("content-length", "0")), 0)
    except ValueError:
        logger.debug(f"Ignoring malformed Content-Length: {headers.get('content-length')!r}")
        return 0
