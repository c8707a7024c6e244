"""Background loading that ignores results superseded by a newer upload.

Decompression and MessagePack decoding are CPU bound, so hosts with an
interactive thread submit loads here. Each submission gets a monotonically
increasing sequence number and only the latest one is ever delivered.
"""
from __future__ import annotations

import concurrent.futures as cf
import itertools
import threading
from dataclasses import dataclass
from typing import Optional

from ..domain.models import ParseResult
from .codec_service import SaveCodecService


@dataclass(frozen=True)
class LoadTicket:
    sequence: int
    file_name: str
    future: cf.Future


class SequencedLoader:
    """Runs probes on a worker pool and discards stale results."""

    def __init__(self, service: Optional[SaveCodecService] = None, max_workers: int = 1):
        self.service = service or SaveCodecService()
        self._executor = cf.ThreadPoolExecutor(max_workers=max_workers)
        self._counter = itertools.count(1)
        self._lock = threading.Lock()
        self._latest = 0

    def submit(self, data: bytes, file_name: str = "") -> LoadTicket:
        with self._lock:
            sequence = next(self._counter)
            self._latest = sequence
        future = self._executor.submit(self.service.load, data, file_name)
        return LoadTicket(sequence=sequence, file_name=file_name, future=future)

    def is_current(self, ticket: LoadTicket) -> bool:
        with self._lock:
            return ticket.sequence == self._latest

    def result(self, ticket: LoadTicket, timeout: Optional[float] = None) -> Optional[ParseResult]:
        """
        Wait for a ticket's result.

        Returns:
            The ParseResult, or None when a newer load was submitted meanwhile

        Raises:
            UnrecognizedFormat: If the current ticket's file matched no strategy
        """
        done, _ = cf.wait([ticket.future], timeout=timeout)
        if not done:
            raise cf.TimeoutError(f"Load #{ticket.sequence} did not finish in time")
        if not self.is_current(ticket):
            return None
        return ticket.future.result()

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "SequencedLoader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()
