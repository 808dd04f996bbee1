from __future__ import annotations

import re
from dataclasses import dataclass

from services.video_gateway.domain.errors import (
    RangeNotSatisfiableError,
    RangeRequiredError,
    ValidationError,
)

DEFAULT_WINDOW_SIZE = 20 * 1024 * 1024
DEFAULT_OCTET_STREAM = "application/octet-stream"

_RANGE_PATTERN = re.compile(r"^\s*bytes\s*=\s*(\d+)\s*-\s*(\d*)\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class ByteWindow:
    start: int
    end: int
    total_size: int

    @property
    def content_length(self) -> int:
        return self.end - self.start + 1

    @property
    def content_range(self) -> str:
        return f"bytes {self.start}-{self.end}/{self.total_size}"


def parse_range_start(range_header: str | None) -> int:
    """Return the start offset of a ``bytes=<start>-[<end>]`` header.

    Only the start is honored; any end value is discarded because the
    gateway always sizes the window itself. Suffix (``bytes=-N``) and
    multi-range forms are rejected.
    """
    if range_header is None or not range_header.strip():
        raise RangeRequiredError()
    match = _RANGE_PATTERN.match(range_header)
    if match is None:
        raise ValidationError("Unsupported Range header")
    return int(match.group(1))


def compute_window(start: int, total_size: int, window_size: int) -> ByteWindow:
    if window_size < 1:
        raise ValueError("window_size must be positive")
    if start >= total_size:
        raise RangeNotSatisfiableError(total_size)
    end = min(start + window_size - 1, total_size - 1)
    return ByteWindow(start=start, end=end, total_size=total_size)
