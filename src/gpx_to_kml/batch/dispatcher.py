"""Bounded-backlog dispatch of file conversions onto a thread pool."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterator
from concurrent import futures
from pathlib import Path

from gpx_to_kml.application.ports import FileConverter
from gpx_to_kml.application.results import (
    ConversionFailure,
    ConversionOutcome,
    RunTally,
)
from gpx_to_kml.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

GPX_SUFFIX = ".gpx"


def iter_gpx_files(input_dir: Path) -> Iterator[Path]:
    """Yield regular ``.gpx`` files directly under ``input_dir``.

    The suffix match is case-insensitive and entries come back in
    filesystem order.
    """
    with os.scandir(input_dir) as entries:
        for entry in entries:
            if not entry.is_file():
                continue
            path = Path(entry.path)
            if path.suffix.lower() != GPX_SUFFIX:
                continue
            yield path


class _Tally:
    """Lock-guarded run counters."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._succeeded = 0
        self._failed = 0
        self._in_flight = 0
        self._peak_in_flight = 0

    def submitted(self) -> None:
        with self._lock:
            self._in_flight += 1
            self._peak_in_flight = max(self._peak_in_flight, self._in_flight)

    def completed(self, outcome: ConversionOutcome) -> None:
        with self._lock:
            if outcome.ok:
                self._succeeded += 1
            else:
                self._failed += 1
            self._in_flight -= 1

    @property
    def peak_in_flight(self) -> int:
        with self._lock:
            return self._peak_in_flight

    def snapshot(self) -> RunTally:
        with self._lock:
            return RunTally(
                succeeded=self._succeeded,
                failed=self._failed,
                in_flight=self._in_flight,
            )


class BatchDispatcher:
    """Feed a directory of GPX files to a fixed-size worker pool.

    Submissions pass through a bounded semaphore sized to
    ``backlog_factor * max_workers``; the producer blocks once that many
    conversions are in flight and resumes as each one completes.

    Parameters
    ----------
    output_dir : Path
        Existing directory receiving KML files.
    converter : FileConverter
        Callable converting one file; expected not to raise.
    max_workers : int | None, default=None
        Pool size. Defaults to the CPU count.
    backlog_factor : int, default=2
        In-flight limit as a multiple of the pool size.
    """

    def __init__(
        self,
        output_dir: Path,
        converter: FileConverter,
        *,
        max_workers: int | None = None,
        backlog_factor: int = 2,
    ) -> None:
        self.output_dir = output_dir
        self.max_workers = max_workers or os.cpu_count() or 1
        self.capacity = self.max_workers * backlog_factor
        if self.capacity < 1:
            raise InvalidArgumentError("backlog_factor must be >= 1")
        self._converter = converter
        self._gate = threading.BoundedSemaphore(self.capacity)
        self._tally = _Tally()

    @property
    def peak_in_flight(self) -> int:
        """Highest number of conversions observed in flight at once."""
        return self._tally.peak_in_flight

    @property
    def tally(self) -> RunTally:
        """Current counters."""
        return self._tally.snapshot()

    def _convert_one(self, input_path: Path) -> None:
        try:
            outcome = self._converter(input_path, self.output_dir)
        except Exception as exc:
            logger.debug("converter raised for %s", input_path, exc_info=True)
            outcome = ConversionFailure(
                input_path=input_path,
                message=f'{exc} while parsing: "{input_path}"',
            )
        try:
            if not outcome.ok:
                logger.error("error: %s", outcome.message)
        finally:
            self._tally.completed(outcome)
            self._gate.release()

    def run(self, input_dir: Path) -> RunTally:
        """Convert every eligible file in ``input_dir`` and wait for completion.

        Raises
        ------
        InvalidArgumentError
            If ``output_dir`` or ``input_dir`` is not a directory.
        """
        if not self.output_dir.is_dir():
            raise InvalidArgumentError(f'Not a directory: "{self.output_dir}"')
        if not input_dir.is_dir():
            raise InvalidArgumentError(f'Not a directory: "{input_dir}"')

        with futures.ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="gpx-to-kml",
        ) as pool:
            for input_path in iter_gpx_files(input_dir):
                logger.info("Reading: %s", input_path)
                self._gate.acquire()
                self._tally.submitted()
                pool.submit(self._convert_one, input_path)
        tally = self._tally.snapshot()
        logger.debug("run finished: %s", tally.summary())
        return tally
