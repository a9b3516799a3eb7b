"""
Report Runner - Main orchestrator for performance section rendering.

Coordinates report preparation, category rendering and (for URLs) fetching
the Lighthouse result from PageSpeed Insights.
"""
from dataclasses import dataclass
from typing import Any, Optional

from perf_report.logger import logger
from perf_report.schemas.report_result import ReportResult
from perf_report.services.pagespeed_client import PageSpeedClient
from perf_report.services.rendering.models import CategorySection
from perf_report.services.rendering.performance_category import PerformanceCategoryRenderer
from perf_report.services.report_preparer import get_performance_category, prepare_report_result


@dataclass
class RenderedReport:
    """A prepared report with its rendered performance category."""
    report: ReportResult
    section: CategorySection

    @property
    def url(self) -> Optional[str]:
        return self.report.final_url or self.report.requested_url


class ReportRunner:
    """Renders the performance category of Lighthouse results."""

    def __init__(
        self,
        renderer: Optional[PerformanceCategoryRenderer] = None,
        pagespeed_client: Optional[PageSpeedClient] = None,
    ):
        self.renderer = renderer or PerformanceCategoryRenderer()
        self.pagespeed_client = pagespeed_client or PageSpeedClient()

    def render(self, lhr: Any) -> RenderedReport:
        """Render the performance category of a Lighthouse result.

        Raises:
            ReportValidationError: if the report is unusable or has no
                performance category
            UnknownGroupError: on a missing categoryGroups entry when
                strict group lookup is enabled
        """
        report = prepare_report_result(lhr)
        category = get_performance_category(report)
        section = self.renderer.render(
            category,
            report.category_groups,
            config_settings=report.config_settings,
            lighthouse_version=report.lighthouse_version,
        )
        logger.info(f"Rendered performance sections: {', '.join(section.section_keys) or 'none'}")
        return RenderedReport(report=report, section=section)

    async def render_url(self, url: str, strategy: Optional[str] = None) -> RenderedReport:
        """Fetch a Lighthouse result from PageSpeed Insights and render it."""
        lhr = await self.pagespeed_client.fetch(url, strategy)
        return self.render(lhr)
