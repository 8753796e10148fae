"""Host-facing test event listener."""

import logging
import threading
from dataclasses import dataclass, field

from nunit_event_listener.config import ListenerConfig
from nunit_event_listener.errors import ReportError
from nunit_event_listener.extractor import ResultExtractor
from nunit_event_listener.models.result import TestResult
from nunit_event_listener.parser import parse_report
from nunit_event_listener.sink import FileLogSink, LogSink
from nunit_event_listener.store import ResultStore

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class TestEventListener:
    """Receives one report fragment per test event from the runner.

    The runner may call ``on_test_event`` from any thread. Each fragment is
    fully applied to the store before the call returns. Merging and the log
    write happen under one lock, so the sink sees records in merge order.
    """

    __test__ = False

    store: ResultStore = field(default_factory=ResultStore)
    sink: LogSink | None = None
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    @classmethod
    def from_config(cls, config: ListenerConfig) -> "TestEventListener":
        """Create a listener with its own store and file sink."""
        extractor = ResultExtractor(
            test_id_property=config.test_id_property,
            tracking_id_property=config.tracking_id_property,
        )
        sink: LogSink | None = None
        if config.log_path is not None:
            sink = FileLogSink(path=config.log_path)
        return cls(store=ResultStore(extractor=extractor), sink=sink)

    def on_test_event(self, report: str) -> None:
        """Parse and apply one report fragment.

        Raises:
            ReportError: If the fragment is rejected; the store is unchanged

        """
        try:
            node = parse_report(report)
            with self._lock:
                result = self.store.ingest(node)
                if result is not None:
                    self._write_log(result)
        except ReportError as exc:
            log.error("Rejected test event report: %s", exc)
            raise

    def _write_log(self, result: TestResult) -> None:
        if self.sink is None:
            return
        try:
            self.sink.write(f"TestCase Result:\n {result.to_json()}")
        except OSError as exc:
            log.warning("Failed to write result log for %s: %s", result.name, exc)
