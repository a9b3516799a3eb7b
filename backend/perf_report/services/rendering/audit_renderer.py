"""
Generic audit renderer used for every clump member without special formatting.
"""
from perf_report.schemas.report_result import AuditRef
from perf_report.services.rendering.models import RenderedAudit
from perf_report.services.rendering.util import calculate_rating


class AuditRenderer:
    """Renders one auditRef into a RenderedAudit row."""

    def render_audit(self, ref: AuditRef) -> RenderedAudit:
        result = ref.result
        rendered = RenderedAudit(
            id=ref.id,
            title=result.title,
            description=result.description,
            display_value=result.display_value or "",
            rating=calculate_rating(result.score, result.score_display_mode),
            warnings=list(result.warnings),
        )
        if result.is_error:
            rendered.error_message = result.error_message
            rendered.rating = "error"
        elif result.explanation:
            rendered.explanation = result.explanation
        return rendered
