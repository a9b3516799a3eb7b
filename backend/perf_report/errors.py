"""
Exceptions raised while preparing and rendering performance reports.
"""


class ReportError(Exception):
    """Base exception for report rendering errors."""


class ReportValidationError(ReportError):
    """The report as a whole cannot be rendered (bad shape, missing category)."""


class UnknownGroupError(ReportError):
    """An audit references a group id that has no categoryGroups entry."""

    def __init__(self, group_id: str):
        super().__init__(f"Unknown audit group: {group_id}")
        self.group_id = group_id


class PageSpeedError(ReportError):
    """PageSpeed Insights request failed or returned an unusable payload."""
