"""Human-readable rendering of transaction reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from configurator.domain import (
    Failed,
    Passed,
    ReportOutcome,
    ResultStatus,
    RollbackFailed,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from configurator.domain import ActionResult, OperationReport

_HEADLINES = {
    ReportOutcome.APPLIED: "Configuration changes fully applied.",
    ReportOutcome.REVERTED: "Configuration changes failed and were fully reverted.",
    ReportOutcome.REVERTED_WITH_ERRORS: (
        "Configuration changes failed and were reverted with errors; "
        "manual intervention is required."
    ),
}

_STATUS_TEXT = {
    ResultStatus.PASSED: "applied",
    ResultStatus.SKIPPED: "skipped",
    ResultStatus.FAILED: "failed",
    ResultStatus.ROLLED_BACK: "reverted",
    ResultStatus.ROLLBACK_FAILED: "revert failed",
}


def describe_result(result: ActionResult) -> str:
    text = _STATUS_TEXT[result.status]
    if isinstance(result, Failed | RollbackFailed):
        text = f"{text} ({result.cause})"
    if isinstance(result, Passed | RollbackFailed) and result.resource_id is not None:
        text = f"{text} [resource {result.resource_id}]"
    return text


def render_report(report: OperationReport, labels: Mapping[str, str] | None = None) -> str:
    """Render ``report`` in ledger order, labelling keys via ``labels`` when given."""

    names = labels or {}
    lines = [_HEADLINES[report.outcome]]
    for key, result in report.items():
        lines.append(f"  - {names.get(key, key)}: {describe_result(result)}")

    if not report.transaction_succeeded():
        resource_ids = report.resource_ids()
        if resource_ids:
            lines.append("Resources that may need manual attention:")
            lines.extend(f"  - {resource_id}" for resource_id in resource_ids)
    return "\n".join(lines)
