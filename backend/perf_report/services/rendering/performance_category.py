"""
Performance Category Renderer - Compose the performance section of a report.

Coordinates:
- Clumping of auditRefs into sections
- Metric tiles, variance disclaimer and score calculator link
- Ranked opportunities with sparklines
- Diagnostics and passed audits (generic audit renderer)
- Budget tables

Inputs are never modified; the same inputs always give an equal section tree.
"""
import math
from typing import Mapping, Optional
from urllib.parse import urlencode

from perf_report.config import settings
from perf_report.errors import UnknownGroupError
from perf_report.logger import logger
from perf_report.schemas.report_result import (
    PERFORMANCE_BUDGET_ID,
    TIMING_BUDGET_ID,
    AuditRef,
    Category,
    ConfigSettings,
    GroupMeta,
    ScoreDisplayMode,
)
from perf_report.services.rendering import clumping
from perf_report.services.rendering.audit_renderer import AuditRenderer
from perf_report.services.rendering.budgets import build_budget_tables
from perf_report.services.rendering.details_renderer import DetailsRenderer
from perf_report.services.rendering.markdown import convert_markdown_link_snippets
from perf_report.services.rendering.models import (
    AuditGroupSection,
    CategoryHeader,
    CategorySection,
    MetricsSection,
    OpportunitiesSection,
    RenderedMetric,
)
from perf_report.services.rendering.opportunities import rank_opportunities, sort_diagnostics
from perf_report.services.rendering.util import DEFAULT_STRINGS, UIStrings, calculate_rating, js_round

FILMSTRIP_AUDIT_ID = "screenshot-thumbnails"
CLS_AUDIT_ID = "cumulative-layout-shift"
# Metrics dropped from the metrics group in later versions, still read by the calculator
LEGACY_CALCULATOR_METRICS = ("first-cpu-idle", "first-meaningful-paint")


class PerformanceCategoryRenderer:
    """Renders a performance category into a CategorySection."""

    def __init__(
        self,
        details_renderer: Optional[DetailsRenderer] = None,
        audit_renderer: Optional[AuditRenderer] = None,
        strings: UIStrings = DEFAULT_STRINGS,
        strict_groups: Optional[bool] = None,
        score_calculator_url: Optional[str] = None,
    ):
        self.details_renderer = details_renderer or DetailsRenderer()
        self.audit_renderer = audit_renderer or AuditRenderer()
        self.strings = strings
        self.strict_groups = settings.STRICT_GROUP_LOOKUP if strict_groups is None else strict_groups
        self.score_calculator_url = score_calculator_url or settings.SCORE_CALCULATOR_URL

    def render(
        self,
        category: Category,
        groups: Mapping[str, GroupMeta],
        config_settings: Optional[ConfigSettings] = None,
        lighthouse_version: str = "",
    ) -> CategorySection:
        """Render the category.

        Args:
            category: Category whose auditRefs carry their results
            groups: categoryGroups metadata by group id
            config_settings: run settings, for the score calculator link
            lighthouse_version: report version, for the score calculator link

        Returns:
            CategorySection with sections ordered metrics, opportunities,
            diagnostics, passed, budgets (empty ones omitted)
        """
        logger.info(f"Rendering category {category.id or category.title} ({len(category.audit_refs)} audits)")
        clumps = clumping.clump(category.audit_refs)

        sections: list[AuditGroupSection] = []
        if clumps.metrics:
            sections.append(self._render_metrics(
                clumps.metrics, category.audit_refs, groups, config_settings, lighthouse_version
            ))
        if clumps.opportunities:
            sections.append(self._render_opportunities(clumps.opportunities, groups))
        if clumps.diagnostics:
            sections.append(self._render_audit_group(
                "diagnostics", sort_diagnostics(clumps.diagnostics), self._group(clumping.DIAGNOSTICS_GROUP, groups)
            ))
        if clumps.passed:
            sections.append(self._render_audit_group(
                "passed", clumps.passed, GroupMeta(title=self.strings.passed_audits_group_title)
            ))

        budgets = self._render_budgets(clumps.budgets, groups)
        if budgets is not None:
            sections.append(budgets)

        return CategorySection(
            id=category.id,
            header=self._render_header(category),
            sections=sections,
            filmstrip=self._filmstrip(category),
        )

    def _group(self, group_id: str, groups: Mapping[str, GroupMeta]) -> Optional[GroupMeta]:
        group = groups.get(group_id)
        if group is None:
            if self.strict_groups:
                raise UnknownGroupError(group_id)
            logger.warning(f"No categoryGroups entry for {group_id}, rendering section unlabeled")
        return group

    def _render_header(self, category: Category) -> CategoryHeader:
        if category.score is None:
            return CategoryHeader(title=category.title, description=category.description)
        return CategoryHeader(
            title=category.title,
            description=category.description,
            score=js_round(category.score * 100),
            rating=calculate_rating(category.score, ScoreDisplayMode.NUMERIC),
        )

    def _render_metric(self, ref: AuditRef) -> RenderedMetric:
        result = ref.result
        metric = RenderedMetric(
            id=ref.id,
            title=result.title,
            display_value=result.display_value or "",
            rating=calculate_rating(result.score, result.score_display_mode),
            description=result.description,
            weight=ref.weight,
        )
        if result.is_error:
            metric.is_error = True
            metric.rating = "error"
            metric.description = ""
            metric.display_value = self.strings.error_label
            metric.tooltip = result.error_message or self.strings.error_missing_audit_info
        return metric

    def _render_metrics(
        self,
        metric_refs: list[AuditRef],
        all_refs: list[AuditRef],
        groups: Mapping[str, GroupMeta],
        config_settings: Optional[ConfigSettings],
        lighthouse_version: str,
    ) -> MetricsSection:
        group = self._group(clumping.METRICS_GROUP, groups)
        return MetricsSection(
            key="metrics",
            title=group.title if group else None,
            description=group.description if group else "",
            items=[self._render_metric(ref) for ref in metric_refs],
            disclaimer_html=str(convert_markdown_link_snippets(self.strings.variance_disclaimer)),
            score_calculator_url=self._score_calculator_href(all_refs, config_settings, lighthouse_version),
            calculator_label=self.strings.calculator_link,
            toggle_label=self.strings.metrics_toggle_label,
        )

    def _score_calculator_href(
        self,
        audit_refs: list[AuditRef],
        config_settings: Optional[ConfigSettings],
        lighthouse_version: str,
    ) -> str:
        """Link to the score calculator prefilled with this run's metric values."""
        metrics = [ref for ref in audit_refs if ref.group == clumping.METRICS_GROUP]
        for audit_id in LEGACY_CALCULATOR_METRICS:
            legacy = next((ref for ref in audit_refs if ref.id == audit_id), None)
            if legacy is not None and legacy not in metrics:
                metrics.append(legacy)

        params = []
        for ref in metrics:
            value = ref.result.numeric_value
            if value is None or not math.isfinite(value):
                formatted = "null"
            elif ref.id == CLS_AUDIT_ID:
                formatted = f"{js_round(value * 1000) / 1000:g}"
            else:
                formatted = str(js_round(value))
            params.append((ref.acronym or ref.id, formatted))

        if config_settings is not None and config_settings.device:
            params.append(("device", config_settings.device))
        if lighthouse_version:
            params.append(("version", lighthouse_version))
        return f"{self.score_calculator_url}#{urlencode(params)}"

    def _render_opportunities(
        self, opportunity_refs: list[AuditRef], groups: Mapping[str, GroupMeta]
    ) -> OpportunitiesSection:
        group = self._group(clumping.OPPORTUNITIES_GROUP, groups)
        return OpportunitiesSection(
            key="opportunities",
            title=group.title if group else None,
            description=group.description if group else "",
            items=rank_opportunities(opportunity_refs, self.strings),
            resource_column_label=self.strings.opportunity_resource_column_label,
            savings_column_label=self.strings.opportunity_savings_column_label,
        )

    def _render_audit_group(
        self, key: str, refs: list[AuditRef], group: Optional[GroupMeta]
    ) -> AuditGroupSection:
        return AuditGroupSection(
            key=key,
            title=group.title if group else None,
            description=group.description if group else "",
            items=[self.audit_renderer.render_audit(ref) for ref in refs],
        )

    def _render_budgets(
        self, budget_refs: list[AuditRef], groups: Mapping[str, GroupMeta]
    ) -> Optional[AuditGroupSection]:
        by_id = {ref.id: ref for ref in budget_refs}
        if not any(ref.result.details for ref in budget_refs):
            return None
        return build_budget_tables(
            by_id.get(PERFORMANCE_BUDGET_ID),
            by_id.get(TIMING_BUDGET_ID),
            group=self._group(clumping.BUDGETS_GROUP, groups),
            details_renderer=self.details_renderer,
        )

    def _filmstrip(self, category: Category) -> Optional[dict]:
        ref = category.find_ref(FILMSTRIP_AUDIT_ID)
        if ref is None or not ref.result.details:
            return None
        return dict(ref.result.details)
