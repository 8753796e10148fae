"""Parsing of NUnit test event report fragments."""

import xml.etree.ElementTree as ET

from nunit_event_listener.errors import MalformedReportError


def parse_report(fragment: str) -> ET.Element:
    """Parse one report fragment into its root element.

    Raises:
        MalformedReportError: If the fragment is not well-formed XML or
            cannot be encoded for the XML parser

    """
    try:
        return ET.fromstring(fragment)
    except (ET.ParseError, ValueError) as exc:
        raise MalformedReportError(str(exc)) from exc
