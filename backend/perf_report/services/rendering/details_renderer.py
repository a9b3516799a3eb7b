"""
Details Renderer - Project an audit's table details into display rows.

Only the table shape is handled here (headings plus items). Each item
becomes exactly one row, in order, with one cell per heading.
"""
from typing import Any, Optional

from perf_report.services.rendering.models import TableHeading
from perf_report.services.rendering.util import (
    format_bytes_to_kib,
    format_milliseconds,
    format_number,
)

class DetailsRenderer:
    """Formats table-like details payloads."""

    def headings(self, details: dict[str, Any]) -> list[TableHeading]:
        headings = []
        for heading in details.get("headings") or []:
            key = heading.get("key")
            if not key:
                continue
            headings.append(TableHeading(
                key=key,
                # `text` and `itemType` are the older heading field names
                label=heading.get("label") or heading.get("text") or "",
                value_type=heading.get("valueType") or heading.get("itemType") or "text",
            ))
        return headings

    def format_value(self, value: Any, value_type: str, granularity: Optional[float] = None) -> Any:
        if value is None:
            return ""
        if isinstance(value, dict):
            # Typed cell, e.g. {"type": "url", "value": "..."}
            value_type = value.get("type", value_type)
            value = value.get("value", value.get("text", ""))
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, (int, float)):
            if value_type == "bytes":
                return format_bytes_to_kib(value, granularity or 0.1)
            if value_type in ("ms", "timespanMs"):
                return format_milliseconds(value, granularity or 10)
            if value_type == "numeric":
                return format_number(value, granularity or 1)
        return value if isinstance(value, str) else str(value)

    def render_table(self, details: dict[str, Any]) -> tuple[list[TableHeading], list[list[Any]]]:
        """Return (headings, rows) with one row per details item."""
        headings = self.headings(details)
        granularities = {
            h.get("key"): h.get("granularity") for h in details.get("headings") or [] if h.get("key")
        }
        rows = []
        for item in details.get("items") or []:
            item = item if isinstance(item, dict) else {}
            rows.append([
                self.format_value(item.get(h.key), h.value_type, granularities.get(h.key)) for h in headings
            ])
        return headings, rows
