"""
Ranking & formatting of opportunity and diagnostic audits.
"""
from typing import Iterable

from perf_report.schemas.report_result import AuditRef, ScoreDisplayMode
from perf_report.services.rendering.models import RenderedOpportunity
from perf_report.services.rendering.util import (
    DEFAULT_STRINGS,
    UIStrings,
    calculate_rating,
    format_seconds,
)
from perf_report.services.rendering.wasted import compute_impact

INFORMATIVE_SORT_SCORE = 100


def sparkline_fraction(impact: float, max_impact: float) -> float:
    """Share of the widest sparkline, clamped to [0, 1]."""
    if max_impact <= 0:
        return 0.0
    return min(1.0, max(0.0, impact / max_impact))


def _format_opportunity(ref: AuditRef, impact: float, max_impact: float, strings: UIStrings) -> RenderedOpportunity:
    result = ref.result
    rendered = RenderedOpportunity(
        id=ref.id,
        title=result.title,
        description=result.description,
        display_text=format_seconds(impact, 0.01),
        sparkline_fraction=sparkline_fraction(impact, max_impact),
        impact=impact,
        rating=calculate_rating(result.score, result.score_display_mode),
        tooltip=result.display_value,
        warnings=list(result.warnings),
    )

    if result.is_error:
        rendered.is_error = True
        rendered.display_text = strings.error_label
        rendered.tooltip = result.error_message or strings.error_missing_audit_info
        rendered.rating = "error"
    elif result.explanation:
        rendered.explanation = result.explanation

    return rendered


def rank_opportunities(
    opportunity_refs: Iterable[AuditRef],
    strings: UIStrings = DEFAULT_STRINGS,
) -> list[RenderedOpportunity]:
    """Order opportunities by estimated savings and format each one.

    Ties keep their input order. Sparkline widths are relative to the
    largest saving in this set.
    """
    scored = [(ref, compute_impact(ref.result)) for ref in opportunity_refs]
    scored.sort(key=lambda pair: pair[1], reverse=True)

    max_impact = max((impact for _, impact in scored), default=0.0)
    return [_format_opportunity(ref, impact, max_impact, strings) for ref, impact in scored]


def _diagnostic_sort_score(ref: AuditRef) -> float:
    result = ref.result
    if result.score_display_mode == ScoreDisplayMode.INFORMATIVE:
        return INFORMATIVE_SORT_SCORE
    return result.score if result.score is not None else 0


def sort_diagnostics(diagnostic_refs: Iterable[AuditRef]) -> list[AuditRef]:
    """Lowest score first; informative audits last."""
    return sorted(diagnostic_refs, key=_diagnostic_sort_score)
