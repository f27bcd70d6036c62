"""Models for JUnit XML test reports."""

from collections.abc import Sequence
from typing import Annotated, Literal

from pydantic import Field

from greener_reporter_junitxml.models.base import Model


class FailureDetail(Model):
    """A failed assertion reported by the test case."""

    kind: Literal["failure"] = "failure"
    message: str = ""
    type: str | None = None
    body: str = ""


class ErrorDetail(Model):
    """An unexpected error raised while running the test case."""

    kind: Literal["error"] = "error"
    message: str = ""
    type: str | None = None
    body: str = ""


class SkippedDetail(Model):
    """The test case was skipped."""

    kind: Literal["skipped"] = "skipped"
    message: str = ""


Outcome = Annotated[
    FailureDetail | ErrorDetail | SkippedDetail, Field(discriminator="kind")
]


class TestCase(Model):
    """A single test case; no outcome detail means the test passed."""

    __test__ = False

    name: str = Field(..., description="Test case name")
    classname: str | None = Field(default=None, description="Owning class name")
    time: str | None = Field(default=None, description="Raw duration text")
    outcome: Outcome | None = Field(
        default=None, description="Failure, error or skip detail"
    )


class TestSuite(Model):
    """A named group of test cases.

    Count and timing attributes are kept as the raw attribute text; they are
    only used for display and are never validated.
    """

    __test__ = False

    name: str = Field(default="", description="Suite name")
    tests: str | None = None
    failures: str | None = None
    errors: str | None = None
    skipped: str | None = None
    time: str | None = None
    timestamp: str | None = None
    cases: Sequence[TestCase] = Field(default_factory=list)


class TestReport(Model):
    """Complete report parsed from a ``<testsuites>`` document."""

    __test__ = False

    suites: Sequence[TestSuite] = Field(default_factory=list)

    @property
    def case_count(self) -> int:
        """Total number of test cases across all suites."""
        return sum(len(suite.cases) for suite in self.suites)
