"""
PDF Generator Service - Performance section as a PDF document.

Uses WeasyPrint to convert the HTML report into PDF.
"""

from weasyprint import HTML

from perf_report.logger import logger
from perf_report.services.report_generator import ReportGenerator
from perf_report.services.rendering.models import CategorySection


class PdfGenerator:
    """Generate PDF reports from rendered categories."""

    def __init__(self, report_generator: ReportGenerator = None):
        self.report_generator = report_generator or ReportGenerator()

    def generate(self, section: CategorySection, url: str) -> bytes:
        """Generate PDF bytes from a rendered category.

        Args:
            section: Rendered performance category
            url: The audited URL

        Returns:
            bytes: PDF file content
        """
        try:
            html_string = self.report_generator.render_html(section, url)
            pdf_bytes = HTML(string=html_string, base_url=self.report_generator.template_dir).write_pdf()

            logger.info(f"Generated PDF report for {url} ({len(pdf_bytes)} bytes)")
            return pdf_bytes

        except Exception as e:
            logger.error(f"Failed to generate PDF: {e}")
            raise e
