"""Parse JUnit XML documents into report models."""

import xml.etree.ElementTree as ET

from greener_reporter_junitxml.errors import ParseError
from greener_reporter_junitxml.models.report import (
    ErrorDetail,
    FailureDetail,
    Outcome,
    SkippedDetail,
    TestCase,
    TestReport,
    TestSuite,
)

ROOT_TAG = "testsuites"

SUITE_ATTRIBUTES = ("tests", "failures", "errors", "skipped", "time", "timestamp")


def parse_report(data: bytes) -> TestReport:
    """Parse raw JUnit XML bytes into a TestReport.

    Unknown elements and attributes are ignored. Elements are matched by local
    name, so reports declaring a default XML namespace parse the same way.
    Count and timing attributes are kept as raw text and never validated.

    Raises:
        ParseError: If the bytes are not well-formed XML or the root element
            is not ``<testsuites>``

    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise ParseError(f"malformed XML: {exc}") from exc

    if localname(root.tag) != ROOT_TAG:
        raise ParseError(f"expected <{ROOT_TAG}> root element, got <{root.tag}>")

    suites = [parse_suite(element) for element in children(root, "testsuite")]
    return TestReport(suites=suites)


def parse_suite(element: ET.Element) -> TestSuite:
    """Build a TestSuite from a ``<testsuite>`` element."""
    return TestSuite(
        name=element.get("name", ""),
        cases=[parse_case(case) for case in children(element, "testcase")],
        **{attr: element.get(attr) for attr in SUITE_ATTRIBUTES},
    )


def parse_case(element: ET.Element) -> TestCase:
    """Build a TestCase from a ``<testcase>`` element."""
    return TestCase(
        name=element.get("name", ""),
        classname=element.get("classname"),
        time=element.get("time"),
        outcome=parse_outcome(element),
    )


def parse_outcome(element: ET.Element) -> Outcome | None:
    """Pick the outcome detail of a test case.

    A case holds at most one outcome. If a malformed document carries several,
    failure wins over error, and error wins over skipped.
    """
    if (failure := first_child(element, "failure")) is not None:
        return FailureDetail(
            message=failure.get("message", ""),
            type=failure.get("type"),
            body=chardata(failure),
        )
    if (error := first_child(element, "error")) is not None:
        return ErrorDetail(
            message=error.get("message", ""),
            type=error.get("type"),
            body=chardata(error),
        )
    if (skipped := first_child(element, "skipped")) is not None:
        return SkippedDetail(message=skipped.get("message", ""))
    return None


def chardata(element: ET.Element) -> str:
    """Return the character data directly inside an element.

    Text of nested child elements is excluded, text following them is kept.
    """
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return "".join(parts)


def localname(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on qualified tags."""
    return tag.rpartition("}")[2]


def children(element: ET.Element, name: str) -> list[ET.Element]:
    """Return the direct children with the given local name, in order."""
    return [child for child in element if localname(child.tag) == name]


def first_child(element: ET.Element, name: str) -> ET.Element | None:
    return next((child for child in element if localname(child.tag) == name), None)
