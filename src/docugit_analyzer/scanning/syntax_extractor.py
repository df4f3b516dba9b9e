"""SyntaxExtractor: produces ParsedFile records for a batch of source files.

Each file is classified, parsed and extracted independently; a file that
cannot be parsed becomes a ParseFailure and the rest of the batch goes on.

Usage:
    extractor = SyntaxExtractor(config)
    parsed, failures = extractor.extract_all(source_files)

Results come back in input order whether the batch ran sequentially or on
the thread pool. Files in languages without a grammar are skipped silently
and appear in neither list.

On the pool, every file gets its own ``parse_timeout_seconds`` clock,
started when that file starts; a file that overruns becomes a ParseFailure.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from threading import Lock
from typing import Optional, Sequence, Union

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..logging_config import get_logger
from .languages import detect_language, is_parseable
from .normalizer import TreeSitterNormalizer
from .syntax import ParsedFile, ParseFailure, SourceFile

logger = get_logger(__name__)

ExtractionResult = Union[ParsedFile, ParseFailure]


class SyntaxExtractor:
    """Extracts ParsedFile records from source files.

    Attributes:
        parsed_count: Number of files extracted successfully
        failed_count: Number of files that produced a ParseFailure
        skipped_count: Number of files skipped for having no grammar
        total_count: Total files processed
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        normalizer: Optional[TreeSitterNormalizer] = None,
    ) -> None:
        """Initialize extractor.

        Args:
            config: Worker count, batch threshold, timeout and size limits
            normalizer: Shared normalizer; one is created when omitted
        """
        self.config = config or DEFAULT_CONFIG
        self._normalizer = normalizer or TreeSitterNormalizer()
        self._lock = Lock()  # Thread-safe counter updates
        self.parsed_count = 0
        self.failed_count = 0
        self.skipped_count = 0
        self.total_count = 0

    def _record_failure(self, failure: ParseFailure) -> ParseFailure:
        logger.warning(f"Skipping {failure.path}: {failure.reason}")
        with self._lock:
            self.failed_count += 1
        return failure

    def _extract_uncounted(self, source_file: SourceFile) -> Optional[ExtractionResult]:
        # No counters or warnings here: a timed-out run is abandoned, and its
        # late result must not be counted.
        if not is_parseable(detect_language(source_file.path)):
            return None

        limit = self.config.max_file_size_bytes
        if source_file.size_bytes > limit:
            return ParseFailure(
                source_file.path,
                f"file too large ({source_file.size_bytes} bytes > {limit} bytes)",
            )

        try:
            return self._normalizer.parse_file(source_file)
        except Exception as e:
            logger.debug(f"Extraction raised for {source_file.path}", exc_info=True)
            return ParseFailure(source_file.path, f"extraction error: {e}")

    def _count(self, result: Optional[ExtractionResult]) -> Optional[ExtractionResult]:
        with self._lock:
            self.total_count += 1
            if result is None:
                self.skipped_count += 1

        if isinstance(result, ParseFailure):
            return self._record_failure(result)

        if isinstance(result, ParsedFile):
            logger.debug(
                f"Parsed {result.path}: {result.function_count} functions, "
                f"{result.class_count} classes, complexity {result.total_complexity}"
            )
            with self._lock:
                self.parsed_count += 1
        return result

    def extract(self, source_file: SourceFile) -> Optional[ExtractionResult]:
        """Extract one file.

        Returns:
            ParsedFile on success, ParseFailure if the file is too large or
            does not parse, None if its language is not deeply analyzed
        """
        return self._count(self._extract_uncounted(source_file))

    def _extract_with_timeout(self, source_file: SourceFile) -> Optional[ExtractionResult]:
        """Extract one file on its own thread, giving up after the configured timeout.

        The clock starts when this file starts, so a slow file never eats
        into the time of files queued behind it.
        """
        timeout = self.config.parse_timeout_seconds
        runner = ThreadPoolExecutor(max_workers=1, thread_name_prefix="docugit-parse")
        try:
            future = runner.submit(self._extract_uncounted, source_file)
            try:
                result = future.result(timeout=timeout)
            except FutureTimeoutError:
                result = ParseFailure(source_file.path, f"timed out after {timeout:g}s")
        finally:
            # A timed-out parse cannot be interrupted; leave it to finish alone
            runner.shutdown(wait=False)
        return self._count(result)

    def extract_all(
        self, source_files: Sequence[SourceFile], parallel: bool = True
    ) -> tuple[list[ParsedFile], list[ParseFailure]]:
        """Extract every file in the batch.

        Args:
            source_files: Files to process
            parallel: Use the thread pool for batches of at least
                ``config.parallel_threshold`` files (default: True)

        Returns:
            (parsed files, failures), each in input order
        """
        if not parallel or len(source_files) < self.config.parallel_threshold:
            # Sequential for small batches (parallel overhead not worth it)
            results = [self.extract(sf) for sf in source_files]
        else:
            results = self._extract_parallel(source_files)

        parsed = [r for r in results if isinstance(r, ParsedFile)]
        failures = [r for r in results if isinstance(r, ParseFailure)]

        logger.info(
            f"Extraction complete: {len(parsed)} parsed, {len(failures)} failed, "
            f"{len(source_files) - len(parsed) - len(failures)} skipped"
        )
        return parsed, failures

    def _extract_parallel(
        self, source_files: Sequence[SourceFile]
    ) -> list[Optional[ExtractionResult]]:
        results: list[Optional[ExtractionResult]] = []

        with ThreadPoolExecutor(max_workers=self.config.effective_workers) as executor:
            futures = [executor.submit(self._extract_with_timeout, sf) for sf in source_files]
            # Waiting in submission order keeps results aligned with the input
            for sf, future in zip(source_files, futures):
                try:
                    results.append(future.result())
                except Exception as e:
                    logger.debug(f"Error extracting {sf.path}: {e}")
                    with self._lock:
                        self.total_count += 1
                    results.append(self._record_failure(ParseFailure(sf.path, str(e))))

        return results

    def reset_stats(self) -> None:
        """Reset extraction statistics."""
        with self._lock:
            self.parsed_count = 0
            self.failed_count = 0
            self.skipped_count = 0
            self.total_count = 0
