"""
Report Generator - Render a performance CategorySection as an HTML document.
"""

import os
from datetime import datetime
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from perf_report.logger import logger
from perf_report.services.rendering.models import CategorySection

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")


def _percent(fraction: float) -> str:
    return f"{fraction * 100:.1f}%"


class ReportGenerator:
    """Generate HTML reports from rendered categories."""

    def __init__(self, template_dir: str = TEMPLATE_DIR):
        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(enabled_extensions=("html",)),
        )
        self.env.filters["percent"] = _percent

    def render_html(self, section: CategorySection, url: Optional[str] = None) -> str:
        """Render the category section into a standalone HTML page.

        Args:
            section: Rendered performance category
            url: The audited URL, shown in the page heading

        Returns:
            str: HTML document
        """
        template = self.env.get_template("performance_category.html")
        html_string = template.render(
            url=url,
            date=datetime.now().strftime("%B %d, %Y"),
            category=section,
        )
        logger.info(f"Rendered HTML for {url or section.id} ({len(html_string)} chars)")
        return html_string
