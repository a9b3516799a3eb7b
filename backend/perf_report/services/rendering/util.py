"""
Display helpers shared by the category renderers.

Pass/fail predicates, score ratings, number formatting and the fixed UI
strings. Strings are passed to renderers explicitly so a caller can swap in a
translated set.
"""
import math
from dataclasses import dataclass
from typing import Optional

from perf_report.schemas.report_result import AuditResult, ScoreDisplayMode

PASS_THRESHOLD = 0.9
AVERAGE_THRESHOLD = 0.5

# details keys that carry something a reader could act on
_ACTIONABLE_DETAIL_KEYS = ("items", "chains", "nodes")


@dataclass(frozen=True)
class UIStrings:
    """Fixed report strings (English)."""
    variance_disclaimer: str = (
        "Values are estimated and may vary. The [performance score is based only on these metrics]"
        "(https://github.com/GoogleChrome/lighthouse/blob/d2ec9ffbb21de9ad1a0f86ed24575eda32c796f0"
        "/docs/scoring.md#how-are-the-scores-weighted)."
    )
    calculator_link: str = "See calculator."
    metrics_toggle_label: str = "Expand view"
    opportunity_resource_column_label: str = "Opportunity"
    opportunity_savings_column_label: str = "Estimated Savings"
    error_label: str = "Error!"
    error_missing_audit_info: str = "Report error: no metric information"
    passed_audits_group_title: str = "Passed audits"
    budgets_group_title: str = "Budgets"


DEFAULT_STRINGS = UIStrings()


def has_actionable_signal(result: AuditResult) -> bool:
    """Whether an informative audit has something to show beyond its title."""
    if result.display_value:
        return True
    details = result.details or {}
    return any(details.get(key) for key in _ACTIONABLE_DETAIL_KEYS)


def show_as_passed(result: AuditResult) -> bool:
    """Whether an audit belongs with the passed audits.

    Not-applicable audits, perfect scores, and informative audits with
    nothing actionable all count as passed.
    """
    mode = result.score_display_mode
    if mode == ScoreDisplayMode.NOT_APPLICABLE:
        return True
    if mode == ScoreDisplayMode.INFORMATIVE:
        return not has_actionable_signal(result)
    return result.score is not None and result.score >= 1


def calculate_rating(score: Optional[float], score_display_mode: ScoreDisplayMode) -> str:
    """Map a score to pass/average/fail (or error)."""
    if score_display_mode in (ScoreDisplayMode.MANUAL, ScoreDisplayMode.NOT_APPLICABLE):
        return "pass"
    if score_display_mode == ScoreDisplayMode.ERROR:
        return "error"
    if score is None:
        return "fail"
    if score >= PASS_THRESHOLD:
        return "pass"
    if score >= AVERAGE_THRESHOLD:
        return "average"
    return "fail"


def js_round(value: float) -> int:
    """Round halves up, as Math.round does."""
    return int(math.floor(value + 0.5))


def _round_to(value: float, granularity: float) -> float:
    return js_round(value / granularity) * granularity


def _decimals(granularity: float) -> int:
    return max(0, -int(math.floor(math.log10(granularity))))


def format_number(value: float, granularity: float = 0.1) -> str:
    rounded = _round_to(value, granularity)
    return f"{rounded:,.{_decimals(granularity)}f}"


def format_milliseconds(ms: float, granularity: float = 10) -> str:
    return f"{format_number(ms, granularity)} ms"


def format_seconds(ms: float, granularity: float = 0.1) -> str:
    return f"{format_number(ms / 1000, granularity)} s"


def format_bytes_to_kib(size: float, granularity: float = 0.1) -> str:
    return f"{format_number(size / 1024, granularity)} KiB"
