from __future__ import annotations

import dataclasses
import fnmatch
import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from tqdm import tqdm

from ..parsers.base import DialectParser
from .cache import CacheManager
from .config import DEFAULT_EXCLUDES, ScanSettings
from .loader import default_parsers
from .memory import iter_batches, read_file_streaming, read_text_safely, should_stream
from .models import DetectedFeature
from .registry import FeatureRegistry
from .validator import FeatureValidator


DEFAULT_LOGGER_NAME = "basescan"
SLOW_PARSE_THRESHOLD_SECONDS = 2.0

PathLike = Union[str, Path]


def configure_logging(verbose: bool = False, logger_name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Configure and return the package logger.

    Installs a single stream handler the first time it is called so that
    script usage without ``logging.basicConfig`` still reports warnings.
    ``verbose`` lowers the level to INFO.
    """

    logger = logging.getLogger(logger_name)
    level = logging.INFO if verbose else logging.WARNING
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
        )
        logger.addHandler(handler)

    return logger


class ParserManager:
    """Routes files to dialect parsers and turns their output into features.

    Files are parsed in batches of ``concurrency`` on a thread pool. Results
    are cached per file, and everything parsed in one ``parse_files`` call is
    validated in a single pass at the end.
    """

    def __init__(
        self,
        concurrency: Optional[int] = None,
        cache: Optional[CacheManager] = None,
        registry: Optional[FeatureRegistry] = None,
        parsers: Optional[Sequence[DialectParser]] = None,
        settings: Optional[ScanSettings] = None,
        *,
        logger: Optional[logging.Logger] = None,
        show_progress: Optional[bool] = None,
    ) -> None:
        self.settings = settings or ScanSettings()
        self.concurrency = max(1, concurrency if concurrency is not None else self.settings.concurrency)
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild("parsermanager")
        self.show_progress = self.settings.show_progress if show_progress is None else bool(show_progress)
        self.cache = cache if cache is not None else CacheManager(
            self.settings.cache_capacity, self.settings.cache_validity
        )
        self.validator = FeatureValidator(
            registry,
            context_max_length=self.settings.context_max_length,
            logger=base_logger,
        )
        candidates = list(parsers) if parsers is not None else default_parsers(logger=base_logger)
        self.parsers: List[DialectParser] = []
        self._by_extension: Dict[str, DialectParser] = {}
        for parser in candidates:
            self._register(parser)
        self._progress_lock = threading.Lock()

    def _register(self, parser: DialectParser) -> None:
        if not parser.is_available():
            self.logger.warning(
                "Disabling %s parser: grammar(s) %s unavailable",
                parser.name(),
                ", ".join(parser.required_grammars()),
            )
            return
        self.parsers.append(parser)
        for ext in parser.supported_extensions():
            owner = self._by_extension.get(ext)
            if owner is not None:
                self.logger.warning(
                    "Extension %s is claimed by both %s and %s; using %s",
                    ext, owner.name(), parser.name(), owner.name(),
                )
                continue
            self._by_extension[ext] = parser

    # ----------------------------------------------------------- dispatch

    def parser_for(self, path: PathLike) -> Optional[DialectParser]:
        return self._by_extension.get(Path(path).suffix.lower())

    def can_parse_file(self, path: PathLike) -> bool:
        return self.parser_for(path) is not None

    def supported_extensions(self) -> List[str]:
        return sorted(self._by_extension)

    def parser_info(self) -> List[Dict[str, Any]]:
        return [{"name": p.name(), "extensions": p.supported_extensions()} for p in self.parsers]

    def filter_supported_files(self, paths: Iterable[PathLike]) -> List[str]:
        return [str(p) for p in paths if self.can_parse_file(p)]

    # ------------------------------------------------------------ parsing

    def parse_files(self, paths: List[PathLike]) -> List[DetectedFeature]:
        if not isinstance(paths, list):
            raise TypeError(f"paths must be a list, got {type(paths).__name__}")
        supported = self.filter_supported_files(paths)
        if not supported:
            return []

        self.logger.info("Parsing %d supported file(s)", len(supported))
        raw: List[DetectedFeature] = []
        batches = list(iter_batches(supported, self.concurrency))
        progress_bar = tqdm(total=len(supported), desc="Parsing files", unit="file", disable=not self.show_progress)
        try:
            with ThreadPoolExecutor(max_workers=self.concurrency) as executor:
                for index, batch in enumerate(batches):
                    futures = [(path, executor.submit(self._parse_cached, path, progress_bar)) for path in batch]
                    for path, future in futures:
                        try:
                            raw.extend(future.result())
                        except Exception as exc:
                            if self.logger.isEnabledFor(logging.DEBUG):
                                self.logger.exception("Failed to parse %s", path)
                            else:
                                self.logger.warning("Failed to parse %s: %s", path, exc)
                    if index + 1 < len(batches) and self.settings.batch_delay > 0:
                        time.sleep(self.settings.batch_delay)
        finally:
            progress_bar.close()

        return self.validator.validate_features(raw, self.concurrency)

    def _parse_cached(self, path: str, progress_bar: Any) -> List[DetectedFeature]:
        try:
            cached, metadata = self.cache.lookup(path)
            if cached is not None:
                self.logger.debug("Cache hit for %s", path)
                return cached
            features = self.parse_file(path)
            # stored under the state seen before parsing; an edit made
            # meanwhile shows up as a mismatch on the next lookup
            if metadata is not None:
                self.cache.set(path, features, metadata)
            return features
        finally:
            with self._progress_lock:
                progress_bar.update(1)

    def parse_file(self, path: PathLike) -> List[DetectedFeature]:
        """Raw (unvalidated) features of one file, tagged with its path."""
        file_path = str(path)
        parser = self.parser_for(file_path)
        if parser is None:
            return []

        start_time = time.perf_counter()
        try:
            size = os.stat(file_path).st_size
            if should_stream(size, self.settings.stream_threshold):
                features = self._parse_streaming(file_path, parser)
            else:
                content = read_text_safely(file_path, max_bytes=self.settings.stream_threshold)
                if content is None:
                    self.logger.info("Skipping binary file %s", file_path)
                    return []
                features = parser.parse_features(content, file_path)
        except FileNotFoundError:
            self.logger.warning("File not found: %s", file_path)
            return []
        except OSError as exc:
            self.logger.warning("Could not read %s: %s", file_path, exc)
            return []

        self._maybe_log_slow_file(file_path, time.perf_counter() - start_time, size, len(features), parser.name())
        return [f if f.file == file_path else dataclasses.replace(f, file=file_path) for f in features]

    def _parse_streaming(self, path: str, parser: DialectParser) -> List[DetectedFeature]:
        self.logger.info("Streaming large file %s", path)
        features: List[DetectedFeature] = []

        def on_chunk(chunk: str, start_line: int) -> None:
            for feature in parser.parse_features(chunk, path):
                features.append(dataclasses.replace(feature, line=feature.line + start_line - 1, file=path))

        read_file_streaming(path, on_chunk, self.settings.chunk_lines)
        return features

    def validate_features(self, features: List[DetectedFeature]) -> List[DetectedFeature]:
        return self.validator.validate_features(features, self.concurrency)

    # ---------------------------------------------------------- discovery

    def scan_directory(
        self,
        root: PathLike,
        exclude: Optional[Sequence[str]] = None,
        max_depth: Optional[int] = None,
        recursive: bool = True,
    ) -> List[str]:
        """Supported files below ``root``.

        Entries whose name matches one of the ``exclude`` globs are skipped,
        directories at ``max_depth`` are not entered, and unreadable
        directories are logged and skipped.
        """
        patterns = list(exclude) if exclude is not None else list(self.settings.exclude_dirs or DEFAULT_EXCLUDES)
        depth_limit = self.settings.max_depth if max_depth is None else max_depth
        found: List[str] = []
        self._walk(str(root), patterns, recursive, 0, depth_limit, found)
        self.logger.info("Discovered %d supported file(s) under %s", len(found), root)
        return found

    def _walk(self, directory: str, patterns: List[str], recursive: bool, depth: int, max_depth: int, found: List[str]) -> None:
        if depth >= max_depth:
            return
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as exc:
            self.logger.warning("Could not read directory %s: %s", directory, exc)
            return

        for entry in entries:
            if any(fnmatch.fnmatch(entry.name, pat) for pat in patterns):
                continue
            try:
                if entry.is_file():
                    if self.can_parse_file(entry.name):
                        found.append(entry.path)
                elif entry.is_dir() and recursive:
                    self._walk(entry.path, patterns, recursive, depth + 1, max_depth, found)
            except OSError as exc:
                self.logger.debug("Unable to stat %s: %s", entry.path, exc)

    # -------------------------------------------------------------- stats

    def processing_stats(self, paths: Iterable[PathLike]) -> Dict[str, Any]:
        all_paths = [str(p) for p in paths]
        supported = self.filter_supported_files(all_paths)
        by_type: Dict[str, int] = {}
        for path in supported:
            ext = Path(path).suffix.lower()
            by_type[ext] = by_type.get(ext, 0) + 1
        return {
            "total_files": len(all_paths),
            "supported_files": len(supported),
            "files_by_type": by_type,
            # rough: 10ms per file spread over the pool
            "estimated_processing_ms": -(-len(supported) * 10 // self.concurrency),
        }

    def stats(self) -> Dict[str, Any]:
        return {
            "parsers_loaded": len(self.parsers),
            "concurrency": self.concurrency,
            "cache": self.cache.stats(),
            "grammars": self.parsers[0].grammars.loaded() if self.parsers else {},
        }

    def _maybe_log_slow_file(
        self,
        path: str,
        duration: float,
        file_size: int,
        feature_count: int,
        parser_name: str,
    ) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        if duration < SLOW_PARSE_THRESHOLD_SECONDS:
            return

        reasons: List[str] = []
        if file_size >= 1_000_000:
            reasons.append("large file")
        if feature_count >= 5_000:
            reasons.append("many features")
        if not reasons:
            reasons.append("parser workload")

        self.logger.debug(
            "Slow parse for %s took %.2fs (%s). size=%s bytes, features=%d, parser=%s",
            path,
            duration,
            ", ".join(reasons),
            f"{file_size:,}",
            feature_count,
            parser_name,
        )
