"""Normalize parsed reports into test case records."""

from greener_reporter_junitxml.models.record import TestcaseRecord, TestcaseStatus
from greener_reporter_junitxml.models.report import (
    ErrorDetail,
    FailureDetail,
    Outcome,
    SkippedDetail,
    TestReport,
)


def normalize_report(report: TestReport, session_id: str) -> list[TestcaseRecord]:
    """Build one record per test case, in suite order then case order."""
    records: list[TestcaseRecord] = []
    for suite in report.suites:
        for case in suite.cases:
            status, output = render_outcome(case.outcome)
            records.append(
                TestcaseRecord(
                    session_id=session_id,
                    testcase_name=case.name,
                    testcase_classname=case.classname or "",
                    testsuite=suite.name,
                    status=status,
                    output=output,
                )
            )
    return records


def render_outcome(outcome: Outcome | None) -> tuple[TestcaseStatus, str]:
    """Map an outcome detail to its status tag and output text."""
    if isinstance(outcome, FailureDetail):
        return "fail", f"Failure: {outcome.message}\n{outcome.body}"
    if isinstance(outcome, ErrorDetail):
        return "error", f"Error: {outcome.message}\n{outcome.body}"
    if isinstance(outcome, SkippedDetail):
        return "skip", outcome.message
    return "pass", ""
