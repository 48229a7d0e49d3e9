from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

DEFAULT_EXCLUDES = [
    "node_modules",
    ".git",
    "dist",
    "build",
    ".next",
    ".nuxt",
    ".svelte-kit",
    "coverage",
    ".venv",
    "__pycache__",
]


@dataclass
class ScanSettings:
    # Scheduling
    concurrency: int = 10
    batch_delay: float = 0.01  # seconds between file batches

    # Cache
    cache_capacity: int = 1000
    cache_validity: float = 5 * 60.0  # seconds

    # Streaming
    stream_threshold: int = 10 * 1024 * 1024  # bytes
    chunk_lines: int = 1000

    # Output shaping
    context_max_length: int = 100

    # Directory walk
    max_depth: int = 10
    exclude_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDES))

    show_progress: bool = False
