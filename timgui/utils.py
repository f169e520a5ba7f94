"""
Low level output helpers.
"""

import os
import sys
from typing import Optional


_OUTPUT_FD: Optional[int] = None


def set_output_fd(fd: Optional[int]) -> None:
    global _OUTPUT_FD
    _OUTPUT_FD = fd


def clear_output_fd() -> None:
    global _OUTPUT_FD
    _OUTPUT_FD = None


def get_output_fd(*, default: Optional[int] = None) -> Optional[int]:
    fd = _OUTPUT_FD
    if fd is None:
        return default
    return fd


def write_all(fd: int, data: bytes) -> None:
    if not data:
        return
    mv = memoryview(data)
    total = 0
    while total < len(data):
        n = os.write(fd, mv[total:])
        if n <= 0:
            raise OSError("os.write returned 0")
        total += n


def encode_text(text: str) -> bytes:
    """
    Encode a string for the terminal.

    Args:
        text: String to encode

    Returns:
        UTF-8 bytes, unencodable characters replaced
    """
    return text.encode("utf-8", errors="replace")


def write_bytes(data: bytes) -> None:
    """
    Write raw bytes to the output fd, or stdout when none is set.

    Args:
        data: Bytes to write
    """
    fd = get_output_fd(default=None)
    if fd is not None:
        write_all(int(fd), data)
        return
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()
