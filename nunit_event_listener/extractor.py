"""Extraction of test case results from parsed report fragments."""

import math
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from nunit_event_listener.errors import DurationParseError, MissingTestNameError
from nunit_event_listener.models.events import (
    Ignored,
    ReportEvent,
    RunCompleteMarker,
    TestCaseReport,
)
from nunit_event_listener.models.result import TestResult

RUN_TAG = "test-run"
TEST_CASE_TAG = "test-case"

# Attributes tried in order when a test case has no name
NAME_ATTRIBUTES = ("name", "fullname", "id")

# Invariant-culture decimal number, optionally with exponent
DURATION_PATTERN = re.compile(
    r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*", re.ASCII
)


def local_name(node: ET.Element) -> str:
    """Return the element tag without its ``{namespace}`` prefix."""
    return node.tag.rpartition("}")[2]


def parse_duration(value: str | None) -> int:
    """Parse a fractional seconds value and round it half-to-even.

    Raises:
        DurationParseError: If the value is missing, non-numeric or not finite

    """
    if value is None:
        raise DurationParseError(None)
    if DURATION_PATTERN.fullmatch(value) is None:
        raise DurationParseError(value)
    seconds = float(value)
    if not math.isfinite(seconds):
        raise DurationParseError(value)
    return round(seconds)


def element_text(node: ET.Element | None) -> str | None:
    """Return the full text content of an element, or None when absent."""
    if node is None:
        return None
    return "".join(node.itertext())


@dataclass(frozen=True, kw_only=True)
class ResultExtractor:
    """Classifies report fragments and maps test cases to results."""

    test_id_property: str = "ZephyrTestId"
    tracking_id_property: str = "TestRailId"

    def classify(self, node: ET.Element) -> ReportEvent:
        """Classify a parsed fragment by its lifecycle event.

        A ``test-run`` without a result attribute is still in progress and is
        ignored rather than treated as complete.
        """
        tag = local_name(node)
        if tag == RUN_TAG and (result := node.get("result")) is not None:
            return RunCompleteMarker(result=result)
        if tag == TEST_CASE_TAG:
            return TestCaseReport(node=node)
        return Ignored(tag=tag)

    def extract(self, node: ET.Element) -> TestResult:
        """Build a result record from a ``test-case`` element.

        Raises:
            DurationParseError: If the duration is missing or invalid
            MissingTestNameError: If no identifying attribute is present

        """
        failure = node.find("failure")
        return TestResult(
            name=self._test_name(node),
            outcome=node.get("result"),
            start_time=node.get("start-time"),
            end_time=node.get("end-time"),
            duration_seconds=parse_duration(node.get("duration")),
            external_test_id=self._property(node, self.test_id_property),
            external_tracking_id=self._property(node, self.tracking_id_property),
            failure_message=(
                element_text(failure.find("message")) if failure is not None else None
            ),
            stack_trace=(
                element_text(failure.find("stack-trace"))
                if failure is not None
                else None
            ),
        )

    def _test_name(self, node: ET.Element) -> str:
        for attribute in NAME_ATTRIBUTES:
            if (value := node.get(attribute)) is not None:
                return value
        raise MissingTestNameError(
            f"Test case report has none of the attributes {list(NAME_ATTRIBUTES)}"
        )

    def _property(self, node: ET.Element, key: str) -> str | None:
        for prop in node.iterfind("properties/property"):
            if prop.get("name") == key:
                return prop.get("value")
        return None
