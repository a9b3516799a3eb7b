"""
Wasted-value calculation for opportunity audits.
"""
import math
from typing import Optional

from perf_report.schemas.report_result import AuditResult


def compute_impact(result: Optional[AuditResult]) -> float:
    """Estimated savings (ms) for an audit, always a finite number >= 0.

    Errored audits and audits without a usable numeric value count as 0 so
    that sorting by impact is total.
    """
    if result is None or result.is_error:
        return 0.0
    value = result.numeric_value
    if value is None or not math.isfinite(value) or value < 0:
        return 0.0
    return float(value)
