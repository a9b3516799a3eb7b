"""
Budget Table Builder - Resource and timing budget comparison tables.
"""
from typing import Optional

from perf_report.logger import logger
from perf_report.schemas.report_result import AuditRef, GroupMeta
from perf_report.services.rendering.details_renderer import DetailsRenderer
from perf_report.services.rendering.models import BudgetSection, BudgetTable


def build_budget_table(ref: Optional[AuditRef], details_renderer: DetailsRenderer) -> Optional[BudgetTable]:
    """One table row per details item, or None when the audit has no details."""
    if ref is None or not ref.result.details:
        return None
    headings, rows = details_renderer.render_table(ref.result.details)
    return BudgetTable(id=ref.id, headings=headings, rows=rows)


def build_budget_tables(
    performance_budget: Optional[AuditRef],
    timing_budget: Optional[AuditRef],
    group: Optional[GroupMeta] = None,
    details_renderer: Optional[DetailsRenderer] = None,
) -> Optional[BudgetSection]:
    """Build the budgets section.

    Args:
        performance_budget: auditRef for resource count/size budgets
        timing_budget: auditRef for timing budgets
        group: categoryGroups entry used for the section header
        details_renderer: formats the table cells

    Returns:
        BudgetSection, or None when neither audit has details
    """
    details_renderer = details_renderer or DetailsRenderer()
    tables = [
        table
        for table in (
            build_budget_table(performance_budget, details_renderer),
            build_budget_table(timing_budget, details_renderer),
        )
        if table is not None
    ]
    if not tables:
        logger.debug("No budget details present, omitting budgets section")
        return None

    return BudgetSection(
        key="budgets",
        title=group.title if group else None,
        description=group.description if group else "",
        items=tables,
    )
