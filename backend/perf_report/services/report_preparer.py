"""
Report Preparer - Turn a raw Lighthouse result into a renderable ReportResult.

Lighthouse stores audit results once, keyed by id, and categories only
reference them. Rendering needs each auditRef to carry its result, so the
results are attached to a copy of every category before validation. The
caller's dict is never modified.
"""
import copy
from typing import Any

from pydantic import ValidationError

from perf_report.errors import ReportValidationError
from perf_report.logger import logger
from perf_report.schemas.report_result import Category, ReportResult

PERFORMANCE_CATEGORY_ID = "performance"


def prepare_report_result(lhr: Any) -> ReportResult:
    """Attach audit results to category auditRefs and validate the report.

    Args:
        lhr: Lighthouse result as decoded JSON

    Returns:
        ReportResult whose auditRefs each carry a validated result

    Raises:
        ReportValidationError: if the report is not a mapping or its
            top-level shape is invalid
    """
    if not isinstance(lhr, dict):
        raise ReportValidationError("Lighthouse result must be a JSON object")

    # PageSpeed Insights wraps the report
    if "lighthouseResult" in lhr and "categories" not in lhr:
        lhr = lhr["lighthouseResult"]

    report = copy.deepcopy(lhr)
    audits = report.pop("audits", None) or {}
    if not isinstance(audits, dict):
        raise ReportValidationError("`audits` must be an object keyed by audit id")

    categories = report.get("categories") or {}
    if not isinstance(categories, dict):
        raise ReportValidationError("`categories` must be an object keyed by category id")

    for category_id, category in categories.items():
        if not isinstance(category, dict):
            raise ReportValidationError(f"Category {category_id} must be an object")
        category.setdefault("id", category_id)
        for audit_ref in category.get("auditRefs") or []:
            if not isinstance(audit_ref, dict) or "result" in audit_ref:
                continue
            result = audits.get(audit_ref.get("id"))
            if result is None:
                logger.warning(f"Category {category_id} references missing audit {audit_ref.get('id')}")
                continue
            audit_ref["result"] = result

    try:
        prepared = ReportResult.model_validate(report)
    except ValidationError as e:
        raise ReportValidationError(f"Invalid Lighthouse result: {e}") from e

    logger.info(
        f"Prepared report for {prepared.final_url or prepared.requested_url or 'unknown url'} "
        f"({len(prepared.categories)} categories, {len(audits)} audits)"
    )
    return prepared


def get_performance_category(report: ReportResult) -> Category:
    """Return the performance category or raise if the report has none."""
    category = report.categories.get(PERFORMANCE_CATEGORY_ID)
    if category is None:
        raise ReportValidationError("Report has no performance category")
    return category
