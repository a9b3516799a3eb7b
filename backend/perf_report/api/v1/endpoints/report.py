"""
Performance report API endpoints.
"""
from fastapi import APIRouter, Body, HTTPException
from fastapi.responses import HTMLResponse, Response
from typing import Any, Dict, Optional

from perf_report.errors import PageSpeedError, ReportValidationError, UnknownGroupError
from perf_report.logger import logger
from perf_report.services.report_generator import ReportGenerator
from perf_report.services.report_runner import RenderedReport, ReportRunner

router = APIRouter(tags=["Report"])


def _render(lhr: Dict[str, Any]) -> RenderedReport:
    try:
        return ReportRunner().render(lhr)
    except ReportValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except UnknownGroupError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/performance")
async def render_performance(lhr: Dict[str, Any] = Body(...)):
    """Render the performance category of a Lighthouse result."""
    rendered = _render(lhr)
    return rendered.section.as_dict()


@router.post("/performance/html", response_class=HTMLResponse)
async def render_performance_html(lhr: Dict[str, Any] = Body(...)):
    """Render the performance category as an HTML page."""
    rendered = _render(lhr)
    return HTMLResponse(ReportGenerator().render_html(rendered.section, rendered.url))


@router.post("/performance/pdf")
async def render_performance_pdf(lhr: Dict[str, Any] = Body(...)):
    """Render the performance category as a PDF."""
    rendered = _render(lhr)

    from perf_report.services.pdf_generator import PdfGenerator

    pdf_bytes = PdfGenerator().generate(rendered.section, rendered.url or "")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": "attachment; filename=performance_report.pdf"
        }
    )


@router.get("/pagespeed")
async def render_pagespeed(url: str, strategy: Optional[str] = None):
    """Fetch a URL's Lighthouse result from PageSpeed Insights and render it."""
    try:
        rendered = await ReportRunner().render_url(url, strategy)
    except PageSpeedError as e:
        logger.warning(f"PageSpeed render failed for {url}: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except ReportValidationError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except UnknownGroupError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return rendered.section.as_dict()
