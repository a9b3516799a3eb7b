"""
Pydantic schemas for Lighthouse report results.

Audit results are validated once at the render boundary. The score display
mode tags each result; the per-mode rules (which modes carry a score, which
need a finite numeric value) are enforced here so the renderers can branch on
the mode alone.
"""

import math
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from perf_report.logger import logger


PERFORMANCE_BUDGET_ID = "performance-budget"
TIMING_BUDGET_ID = "timing-budget"
BUDGET_AUDIT_IDS = (PERFORMANCE_BUDGET_ID, TIMING_BUDGET_ID)


class ScoreDisplayMode(str, Enum):
    """How an audit's score should be interpreted."""
    BINARY = "binary"
    NUMERIC = "numeric"
    ERROR = "error"
    INFORMATIVE = "informative"
    NOT_APPLICABLE = "notApplicable"
    MANUAL = "manual"


# Modes that never carry a score
UNSCORED_MODES = {
    ScoreDisplayMode.ERROR.value,
    ScoreDisplayMode.NOT_APPLICABLE.value,
    ScoreDisplayMode.MANUAL.value,
}


class AuditResult(BaseModel):
    """Outcome of one audit."""
    id: str = ""
    title: str = ""
    description: str = ""
    score: Optional[float] = Field(None, ge=0, le=1)
    score_display_mode: ScoreDisplayMode = Field(..., alias="scoreDisplayMode")
    numeric_value: Optional[float] = Field(None, alias="numericValue")
    display_value: Optional[str] = Field(None, alias="displayValue")
    error_message: Optional[str] = Field(None, alias="errorMessage")
    explanation: Optional[str] = None
    warnings: list[str] = Field(default_factory=list)
    details: Optional[dict[str, Any]] = None

    class Config:
        populate_by_name = True
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def _normalize_mode(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        mode = data.get("scoreDisplayMode", data.get("score_display_mode"))
        if mode is None and (data.get("error") or data.get("errorMessage")):
            # Older reports flagged failures with `error: true` only
            mode = ScoreDisplayMode.ERROR.value
            data["scoreDisplayMode"] = mode
        if isinstance(mode, ScoreDisplayMode):
            mode = mode.value
        if mode in UNSCORED_MODES:
            data["score"] = None
        return data

    @model_validator(mode="after")
    def _check_numeric_value(self) -> "AuditResult":
        if (
            self.score_display_mode == ScoreDisplayMode.NUMERIC
            and self.numeric_value is not None
            and not math.isfinite(self.numeric_value)
        ):
            raise ValueError("numericValue must be finite for numeric audits")
        return self

    @property
    def is_error(self) -> bool:
        return bool(self.error_message) or self.score_display_mode == ScoreDisplayMode.ERROR


def error_result(audit_id: str, message: str, title: str = "") -> AuditResult:
    """Build the stand-in result for an audit whose own result is unusable."""
    return AuditResult(
        id=audit_id,
        title=title or audit_id,
        score_display_mode=ScoreDisplayMode.ERROR,
        error_message=message,
    )


class AuditRef(BaseModel):
    """One audit's linkage within a category."""
    id: str
    group: Optional[str] = None
    weight: float = Field(0, ge=0)
    acronym: Optional[str] = None
    result: AuditResult

    class Config:
        populate_by_name = True
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def _recover_malformed_result(cls, data: Any) -> Any:
        """Replace a missing or invalid result with an error result.

        One bad audit must not fail validation of the whole category, so the
        fault is recorded on the audit itself and surfaces as an error item.
        """
        if not isinstance(data, dict):
            return data
        raw = data.get("result")
        if isinstance(raw, AuditResult):
            return data

        audit_id = data.get("id", "")
        if raw is None:
            reason = "Audit result missing"
        else:
            try:
                result = AuditResult.model_validate(raw)
            except ValidationError as e:
                fields = ", ".join(
                    ".".join(str(part) for part in err["loc"]) or "result" for err in e.errors()
                )
                reason = f"Malformed audit result ({fields})"
            else:
                return {**data, "result": result}

        logger.warning(f"Audit {audit_id or '<unnamed>'}: {reason}")
        title = ""
        if isinstance(raw, dict) and isinstance(raw.get("title"), str):
            title = raw["title"]
        return {**data, "result": error_result(audit_id, reason, title)}


class GroupMeta(BaseModel):
    """Display metadata for an audit group."""
    title: str
    description: str = ""


class Category(BaseModel):
    """A named collection of audit references."""
    id: str = ""
    title: str
    description: str = ""
    score: Optional[float] = Field(None, ge=0, le=1)
    audit_refs: list[AuditRef] = Field(default_factory=list, alias="auditRefs")

    class Config:
        populate_by_name = True
        frozen = True

    def find_ref(self, audit_id: str) -> Optional[AuditRef]:
        return next((ref for ref in self.audit_refs if ref.id == audit_id), None)


class ConfigSettings(BaseModel):
    """The subset of Lighthouse run settings the renderer reads."""
    form_factor: Optional[str] = Field(None, alias="formFactor")
    emulated_form_factor: Optional[str] = Field(None, alias="emulatedFormFactor")

    class Config:
        populate_by_name = True

    @property
    def device(self) -> Optional[str]:
        return self.form_factor or self.emulated_form_factor


class ReportResult(BaseModel):
    """A Lighthouse result whose auditRefs carry their audit results."""
    lighthouse_version: str = Field("", alias="lighthouseVersion")
    requested_url: Optional[str] = Field(None, alias="requestedUrl")
    final_url: Optional[str] = Field(None, alias="finalUrl")
    fetch_time: Optional[str] = Field(None, alias="fetchTime")
    config_settings: ConfigSettings = Field(default_factory=ConfigSettings, alias="configSettings")
    categories: dict[str, Category] = Field(default_factory=dict)
    category_groups: dict[str, GroupMeta] = Field(default_factory=dict, alias="categoryGroups")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "lighthouseVersion": "6.0.0",
                "finalUrl": "https://example.com/",
                "categories": {
                    "performance": {
                        "id": "performance",
                        "title": "Performance",
                        "score": 0.72,
                        "auditRefs": [
                            {"id": "first-contentful-paint", "weight": 3, "group": "metrics"}
                        ]
                    }
                },
                "categoryGroups": {
                    "metrics": {"title": "Metrics"}
                }
            }
        }
