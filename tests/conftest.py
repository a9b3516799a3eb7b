"""Shared test fixtures for performance report tests."""

import sys
from pathlib import Path

import pytest

# Add backend to path so tests can import perf_report
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from perf_report.services.rendering.performance_category import PerformanceCategoryRenderer  # noqa: E402
from perf_report.services.report_preparer import get_performance_category, prepare_report_result  # noqa: E402


def _audit(audit_id, title, score, mode="numeric", **extra):
    audit = {
        "id": audit_id,
        "title": title,
        "description": f"{title}. [Learn more](https://web.dev/{audit_id}/).",
        "score": score,
        "scoreDisplayMode": mode,
    }
    audit.update(extra)
    return audit


def _opportunity(audit_id, title, score, savings_ms):
    return _audit(
        audit_id, title, score,
        numericValue=savings_ms,
        displayValue=f"Potential savings of {savings_ms} ms",
        details={
            "type": "opportunity",
            "overallSavingsMs": savings_ms,
            "headings": [{"key": "url", "valueType": "url", "label": "URL"}],
            "items": [{"url": "https://example.com/app.js", "wastedMs": savings_ms}],
        },
    )


def _budget_table(headings, items):
    return {"type": "table", "headings": headings, "items": items}


def make_lhr():
    """A Lighthouse result with every performance section populated.

    Sections: 3 metrics, 3 failing opportunities (savings 100/50/200 ms),
    one failing and one passing diagnostic, 4 other passed audits, and both
    budget audits with 3 rows each.
    """
    audits = {
        # Metrics
        "first-contentful-paint": _audit(
            "first-contentful-paint", "First Contentful Paint", 0.92,
            numericValue=1234.5, displayValue="1.2 s",
        ),
        "largest-contentful-paint": _audit(
            "largest-contentful-paint", "Largest Contentful Paint", 0.48,
            numericValue=4120.2, displayValue="4.1 s",
        ),
        "cumulative-layout-shift": _audit(
            "cumulative-layout-shift", "Cumulative Layout Shift", 1,
            numericValue=0.01234, displayValue="0.012",
        ),
        # Opportunities
        "render-blocking-resources": _opportunity(
            "render-blocking-resources", "Eliminate render-blocking resources", 0.46, 100
        ),
        "unused-css-rules": _opportunity("unused-css-rules", "Remove unused CSS", 0.88, 50),
        "uses-optimized-images": _opportunity("uses-optimized-images", "Efficiently encode images", 0.1, 200),
        "unminified-css": _opportunity("unminified-css", "Minify CSS", 1, 0),
        "uses-text-compression": _audit(
            "uses-text-compression", "Enable text compression", None, "notApplicable"
        ),
        # Diagnostics
        "mainthread-work-breakdown": _audit(
            "mainthread-work-breakdown", "Minimize main-thread work", 0.2,
            numericValue=4020, displayValue="4.0 s",
            details={"type": "table", "headings": [], "items": [{"group": "scriptEvaluation", "duration": 2000}]},
        ),
        "dom-size": _audit("dom-size", "Avoids an excessive DOM size", 1, numericValue=120, displayValue="120 elements"),
        "font-display": _audit("font-display", "All text remains visible during webfont loads", 1, "binary"),
        "user-timings": _audit("user-timings", "User Timing marks and measures", None, "informative"),
        # Budgets
        "performance-budget": _audit(
            "performance-budget", "Performance budget", None, "informative",
            details=_budget_table(
                [
                    {"key": "label", "itemType": "text", "text": "Resource Type"},
                    {"key": "requestCount", "itemType": "numeric", "text": "Requests"},
                    {"key": "transferSize", "itemType": "bytes", "text": "Transfer Size"},
                    {"key": "countOverBudget", "itemType": "text", "text": ""},
                    {"key": "sizeOverBudget", "itemType": "bytes", "text": "Over Budget"},
                ],
                [
                    {"resourceType": "total", "label": "Total", "requestCount": 41, "transferSize": 503000,
                     "countOverBudget": "1 request", "sizeOverBudget": 103000},
                    {"resourceType": "script", "label": "Script", "requestCount": 12, "transferSize": 301000,
                     "sizeOverBudget": 1000},
                    {"resourceType": "image", "label": "Image", "requestCount": 20, "transferSize": 150000},
                ],
            ),
        ),
        "timing-budget": _audit(
            "timing-budget", "Timing budget", None, "informative",
            details=_budget_table(
                [
                    {"key": "label", "valueType": "text", "label": "Metric"},
                    {"key": "measurement", "valueType": "ms", "label": "Measurement"},
                    {"key": "overBudget", "valueType": "ms", "label": "Over Budget"},
                ],
                [
                    {"metric": "interactive", "label": "Time to Interactive", "measurement": 7200, "overBudget": 2200},
                    {"metric": "first-contentful-paint", "label": "First Contentful Paint", "measurement": 1234},
                    {"metric": "largest-contentful-paint", "label": "Largest Contentful Paint",
                     "measurement": 4120, "overBudget": 120},
                ],
            ),
        ),
        # Ungrouped
        "screenshot-thumbnails": _audit(
            "screenshot-thumbnails", "Screenshot Thumbnails", None, "informative",
            details={"type": "filmstrip", "scale": 3000, "items": [{"timing": 300, "timestamp": 1, "data": "..."}]},
        ),
        "network-requests": _audit(
            "network-requests", "Network Requests", None, "informative",
            details={"type": "table", "headings": [], "items": [{"url": "https://example.com/"}]},
        ),
    }

    audit_refs = [
        {"id": "first-contentful-paint", "weight": 10, "group": "metrics", "acronym": "FCP"},
        {"id": "largest-contentful-paint", "weight": 25, "group": "metrics", "acronym": "LCP"},
        {"id": "cumulative-layout-shift", "weight": 15, "group": "metrics", "acronym": "CLS"},
        {"id": "render-blocking-resources", "weight": 0, "group": "load-opportunities"},
        {"id": "unused-css-rules", "weight": 0, "group": "load-opportunities"},
        {"id": "uses-optimized-images", "weight": 0, "group": "load-opportunities"},
        {"id": "unminified-css", "weight": 0, "group": "load-opportunities"},
        {"id": "uses-text-compression", "weight": 0, "group": "load-opportunities"},
        {"id": "mainthread-work-breakdown", "weight": 0, "group": "diagnostics"},
        {"id": "dom-size", "weight": 0, "group": "diagnostics"},
        {"id": "font-display", "weight": 0, "group": "diagnostics"},
        {"id": "user-timings", "weight": 0, "group": "diagnostics"},
        {"id": "performance-budget", "weight": 0, "group": "budgets"},
        {"id": "timing-budget", "weight": 0, "group": "budgets"},
        {"id": "screenshot-thumbnails", "weight": 0},
        {"id": "network-requests", "weight": 0},
    ]

    return {
        "lighthouseVersion": "6.0.0",
        "requestedUrl": "https://example.com/",
        "finalUrl": "https://example.com/",
        "fetchTime": "2020-05-05T12:00:00.000Z",
        "configSettings": {"emulatedFormFactor": "mobile", "locale": "en-US"},
        "audits": audits,
        "categories": {
            "performance": {
                "title": "Performance",
                "score": 0.726,
                "auditRefs": audit_refs,
            },
        },
        "categoryGroups": {
            "metrics": {"title": "Metrics"},
            "load-opportunities": {
                "title": "Opportunities",
                "description": "These suggestions can help your page load faster.",
            },
            "diagnostics": {
                "title": "Diagnostics",
                "description": "More information about the performance of your application.",
            },
            "budgets": {
                "title": "Budgets",
                "description": "Performance budgets set standards for the performance of your site.",
            },
        },
    }


@pytest.fixture
def lhr():
    return make_lhr()


@pytest.fixture
def report(lhr):
    return prepare_report_result(lhr)


@pytest.fixture
def category(report):
    return get_performance_category(report)


@pytest.fixture
def groups(report):
    return report.category_groups


@pytest.fixture
def renderer():
    return PerformanceCategoryRenderer(strict_groups=False)
