"""Classification outcomes for parsed report fragments."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class RunCompleteMarker:
    """Terminal ``test-run`` summary carrying the overall run result."""

    result: str


@dataclass(frozen=True, kw_only=True)
class TestCaseReport:
    """Report of a single finished test case."""

    __test__ = False

    node: ET.Element = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class Ignored:
    """Any other lifecycle event; produces no record and no state change."""

    tag: str


ReportEvent = RunCompleteMarker | TestCaseReport | Ignored
