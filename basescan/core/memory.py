"""Bounded-memory file reading and batch throttling.

Files above :data:`STREAM_THRESHOLD_BYTES` are never loaded whole; they are
fed to a processor in fixed line-count chunks instead. Everything else goes
through :func:`read_text_safely`, which refuses binary content and sniffs the
encoding with chardet.
"""
from __future__ import annotations

import codecs
import logging
import time
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, TypeVar, Union

import chardet  # type: ignore

T = TypeVar("T")
R = TypeVar("R")

STREAM_THRESHOLD_BYTES = 10 * 1024 * 1024
CHUNK_LINES = 1000
SNIFF_BYTES = 64 * 1024
BATCH_DELAY_SECONDS = 0.001

BINARY_BYTES = bytes(range(0, 32)) + b"\x7f"

logger = logging.getLogger("basescan").getChild("memory")

PathLike = Union[str, Path]


def is_likely_binary(data: bytes, control_threshold: float = 0.30) -> bool:
    if not data:
        return False
    if 0 in data:
        return True
    control = sum(1 for b in data if b in BINARY_BYTES and b not in (9, 10, 12, 13))
    return (control / len(data)) > control_threshold


def detect_encoding(sample: bytes) -> str:
    """Encoding for ``sample``: utf-8 when it decodes as such, else chardet's guess."""
    if not sample:
        return "utf-8"
    try:
        # a multi-byte sequence cut off at the end of the sample is not an error
        codecs.getincrementaldecoder("utf-8")().decode(sample, final=False)
        return "utf-8"
    except UnicodeDecodeError:
        pass
    enc = chardet.detect(sample).get("encoding")
    if not enc or enc.lower() == "ascii":
        return "utf-8"
    return enc


def read_text_safely(path: PathLike, max_bytes: int = STREAM_THRESHOLD_BYTES * 2) -> Optional[str]:
    """Read a whole text file, or return None when it looks binary.

    OSError propagates so callers can report file-access failures.
    """
    with Path(path).open("rb") as f:
        head = f.read(min(4096, max_bytes))
        if is_likely_binary(head):
            return None
        rest = f.read(max_bytes - len(head))
        data = head + rest
    if is_likely_binary(data):
        return None
    try:
        return data.decode(detect_encoding(data[:SNIFF_BYTES]), errors="strict")
    except (LookupError, UnicodeDecodeError):
        return data.decode("utf-8", errors="replace")


def should_stream(size_bytes: int, threshold: int = STREAM_THRESHOLD_BYTES) -> bool:
    return size_bytes > threshold


def read_file_streaming(
    path: PathLike,
    processor: Callable[[str, int], None],
    chunk_lines: int = CHUNK_LINES,
) -> None:
    """Feed ``path`` to ``processor(chunk_text, start_line)`` in line chunks.

    Every chunk holds ``chunk_lines`` whole lines except the last one, which
    is only delivered when it has non-whitespace content. ``start_line`` is
    the 1-based number of the chunk's first line. An exception raised by the
    processor stops the read and propagates to the caller.
    """
    path = Path(path)
    with path.open("rb") as raw:
        encoding = detect_encoding(raw.read(SNIFF_BYTES))

    line_number = 0
    buffered: List[str] = []
    with path.open("r", encoding=encoding, errors="replace", newline=None) as handle:
        for line in handle:
            line_number += 1
            buffered.append(line.rstrip("\n"))
            if len(buffered) >= chunk_lines:
                processor("\n".join(buffered) + "\n", line_number - len(buffered) + 1)
                buffered = []

    if buffered:
        chunk = "\n".join(buffered) + "\n"
        if chunk.strip():
            processor(chunk, line_number - len(buffered) + 1)


def iter_batches(items: Sequence[T], size: int) -> Iterator[List[T]]:
    if size < 1:
        raise ValueError("batch size must be positive")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def process_batches(
    items: Sequence[T],
    processor: Callable[[List[T]], List[R]],
    batch_size: int = 100,
    delay: float = BATCH_DELAY_SECONDS,
) -> List[R]:
    """Run ``processor`` over fixed-size batches, one batch at a time.

    A batch that raises is logged and skipped; the results of the other
    batches are still returned.
    """
    results: List[R] = []
    total = len(items)
    for start in range(0, total, batch_size):
        batch = list(items[start:start + batch_size])
        try:
            results.extend(processor(batch))
        except Exception as exc:
            logger.warning("Error processing batch %d-%d: %s", start, start + len(batch), exc)
        if start + batch_size < total and delay > 0:
            time.sleep(delay)
    return results
