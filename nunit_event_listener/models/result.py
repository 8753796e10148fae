"""Models for consolidated test case results."""

import json
from dataclasses import asdict, dataclass


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Final outcome of a single test case as reported by the test runner.

    Timestamps are kept as the runner reported them. Only ``duration_seconds``
    is converted, rounded half-to-even from the fractional source value.
    """

    __test__ = False

    name: str
    outcome: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    duration_seconds: int = 0
    external_test_id: str | None = None
    external_tracking_id: str | None = None
    failure_message: str | None = None
    stack_trace: str | None = None
    description: str | None = None

    @property
    def failed(self) -> bool:
        """Whether the runner reported this test case as failed."""
        return (self.outcome or "").lower() == "failed"

    def to_json(self) -> str:
        """Render the record as a JSON object, fields in declaration order."""
        return json.dumps(asdict(self), ensure_ascii=False)
