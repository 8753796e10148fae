"""Consolidated result store with run completion tracking."""

import asyncio
import logging
import threading
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass, field

from nunit_event_listener.extractor import ResultExtractor
from nunit_event_listener.models.events import RunCompleteMarker, TestCaseReport
from nunit_event_listener.models.result import TestResult

log = logging.getLogger(__name__)


@dataclass(kw_only=True, eq=False)
class ResultStore:
    """Last-write-wins view of test case results, keyed by test name.

    A retried test is reported once per attempt; the latest report replaces
    the earlier ones. Delivery order is trusted, no timestamp resolution is
    done. The mapping and the completion flag share one condition so that
    snapshots never observe a half-applied merge.
    """

    extractor: ResultExtractor = field(default_factory=ResultExtractor)
    _results: dict[str, TestResult] = field(default_factory=dict, init=False)
    _completed: bool = field(default=False, init=False)
    _condition: threading.Condition = field(
        default_factory=threading.Condition, init=False, repr=False
    )

    def ingest(self, node: ET.Element) -> TestResult | None:
        """Apply one parsed fragment to the store.

        Returns:
            The merged result for a test case fragment, None otherwise

        """
        event = self.extractor.classify(node)

        if isinstance(event, RunCompleteMarker):
            if self.mark_complete():
                log.info("Test run finished: result=%s", event.result)
            return None

        if isinstance(event, TestCaseReport):
            result = self.extractor.extract(event.node)
            self.record(result)
            return result

        log.debug("Ignoring report fragment <%s>", event.tag)
        return None

    def record(self, result: TestResult) -> None:
        """Replace any result with the same name by the given one."""
        with self._condition:
            replaced = self._results.pop(result.name, None)
            self._results[result.name] = result

        if replaced is not None:
            log.info(
                "Superseded result for %s: %s -> %s",
                result.name,
                replaced.outcome,
                result.outcome,
            )

    def mark_complete(self) -> bool:
        """Set the completion signal.

        Returns:
            True if this call set the signal, False if it was already set

        """
        with self._condition:
            if self._completed:
                return False
            self._completed = True
            self._condition.notify_all()
            return True

    def wait_for_completion(self, timeout: float | None = None) -> bool:
        """Block until the run is complete or the timeout elapses.

        Args:
            timeout: Maximum wait time in seconds (None waits forever)

        Returns:
            Whether completion was observed

        """
        with self._condition:
            return self._condition.wait_for(lambda: self._completed, timeout)

    async def wait_for_completion_async(
        self,
        timeout: float | None = None,
        poll_interval: float = 0.05,
    ) -> bool:
        """Await completion without blocking the event loop.

        Args:
            timeout: Maximum wait time in seconds (None waits forever)
            poll_interval: Seconds between checks of the completion signal

        Returns:
            Whether completion was observed

        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout

        while not self.is_complete:
            if deadline is not None and loop.time() >= deadline:
                return False
            await asyncio.sleep(poll_interval)

        return True

    @property
    def is_complete(self) -> bool:
        with self._condition:
            return self._completed

    def snapshot(self) -> Mapping[str, TestResult]:
        """Return a copy of the consolidated results in insertion order."""
        with self._condition:
            return dict(self._results)

    def __len__(self) -> int:
        with self._condition:
            return len(self._results)
