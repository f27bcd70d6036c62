"""Models for normalized test case records submitted to the ingress API."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import Field

from greener_reporter_junitxml.models.base import WireModel

TestcaseStatus = Literal["pass", "fail", "error", "skip"]


class TestcaseRecord(WireModel):
    """Transport-ready outcome of a single test case."""

    __test__ = False

    session_id: str = Field(..., description="Session the record belongs to")
    testcase_name: str
    testcase_classname: str = ""
    testsuite: str = ""
    status: TestcaseStatus
    output: str = ""
    baggage: Mapping[str, Any] | None = Field(
        None,
        description=(
            "Per-record metadata accepted by the ingress protocol. JUnit reports "
            "carry none, so the normalizer leaves it unset and it is omitted."
        ),
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the submission body, omitting empty optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_defaults=True)


@dataclass(frozen=True, kw_only=True)
class SubmitResult:
    """Outcome of a batch submission."""

    submitted: int
