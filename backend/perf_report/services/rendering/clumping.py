"""
Clumping Engine - Partition a category's auditRefs into display clumps.

Rules are an ordered list of (predicate, clump key) pairs. Each auditRef is
tested against the rules in order and placed in the clump of the first rule
that matches, so every auditRef lands in exactly one clump.

Rules:
- budget audits → budgets (never passed)
- metrics group → metrics
- load-opportunities group, not a perfect score, applicable → opportunities
- any other grouped audit that shows as passed → passed
- diagnostics group → diagnostics
- other grouped, failing audits → residual (not rendered)
- ungrouped, not applicable → not_applicable (not rendered)
- ungrouped → excluded (not rendered)
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable

from perf_report.logger import logger
from perf_report.schemas.report_result import BUDGET_AUDIT_IDS, AuditRef, ScoreDisplayMode
from perf_report.services.rendering.util import show_as_passed

METRICS = "metrics"
OPPORTUNITIES = "opportunities"
DIAGNOSTICS = "diagnostics"
PASSED = "passed"
BUDGETS = "budgets"
RESIDUAL = "residual"
NOT_APPLICABLE = "not_applicable"
EXCLUDED = "excluded"

CLUMP_KEYS = (METRICS, OPPORTUNITIES, DIAGNOSTICS, PASSED, BUDGETS, RESIDUAL, NOT_APPLICABLE, EXCLUDED)

# Group ids as they appear in categoryGroups
METRICS_GROUP = "metrics"
OPPORTUNITIES_GROUP = "load-opportunities"
DIAGNOSTICS_GROUP = "diagnostics"
BUDGETS_GROUP = "budgets"

Rule = tuple[Callable[[AuditRef], bool], str]


def _is_budget(ref: AuditRef) -> bool:
    return ref.id in BUDGET_AUDIT_IDS


def _is_metric(ref: AuditRef) -> bool:
    return ref.group == METRICS_GROUP


def _is_opportunity(ref: AuditRef) -> bool:
    return (
        ref.group == OPPORTUNITIES_GROUP
        and ref.result.score != 1
        and ref.result.score_display_mode != ScoreDisplayMode.NOT_APPLICABLE
    )


def _is_passed(ref: AuditRef) -> bool:
    return bool(ref.group) and show_as_passed(ref.result)


def _is_diagnostic(ref: AuditRef) -> bool:
    return ref.group == DIAGNOSTICS_GROUP


def _is_grouped(ref: AuditRef) -> bool:
    return bool(ref.group)


def _is_not_applicable(ref: AuditRef) -> bool:
    return ref.result.score_display_mode == ScoreDisplayMode.NOT_APPLICABLE


def _always(ref: AuditRef) -> bool:
    return True


CLUMP_RULES: tuple[Rule, ...] = (
    (_is_budget, BUDGETS),
    (_is_metric, METRICS),
    (_is_opportunity, OPPORTUNITIES),
    (_is_passed, PASSED),
    (_is_diagnostic, DIAGNOSTICS),
    (_is_grouped, RESIDUAL),
    (_is_not_applicable, NOT_APPLICABLE),
    (_always, EXCLUDED),
)


@dataclass
class ClumpResult:
    """Clumped auditRefs, each list in input order."""
    metrics: list[AuditRef] = field(default_factory=list)
    opportunities: list[AuditRef] = field(default_factory=list)
    diagnostics: list[AuditRef] = field(default_factory=list)
    passed: list[AuditRef] = field(default_factory=list)
    budgets: list[AuditRef] = field(default_factory=list)
    residual: list[AuditRef] = field(default_factory=list)
    not_applicable: list[AuditRef] = field(default_factory=list)
    excluded: list[AuditRef] = field(default_factory=list)

    def get(self, key: str) -> list[AuditRef]:
        return getattr(self, key)

    def members(self) -> list[AuditRef]:
        """Every clumped auditRef, clump by clump."""
        return [ref for key in CLUMP_KEYS for ref in self.get(key)]

    def counts(self) -> dict[str, int]:
        return {key: len(self.get(key)) for key in CLUMP_KEYS}


def classify(ref: AuditRef, rules: Iterable[Rule] = CLUMP_RULES) -> str:
    """Return the clump key of the first rule matching ``ref``."""
    for predicate, key in rules:
        if predicate(ref):
            return key
    raise ValueError(f"No clump rule matched audit {ref.id}")


def clump(audit_refs: Iterable[AuditRef]) -> ClumpResult:
    """Partition auditRefs into clumps."""
    result = ClumpResult()
    for ref in audit_refs:
        result.get(classify(ref)).append(ref)

    if result.residual:
        logger.debug(
            f"{len(result.residual)} grouped audit(s) have no performance section: "
            f"{', '.join(ref.id for ref in result.residual)}"
        )
    logger.debug(f"Clump counts: {result.counts()}")
    return result
