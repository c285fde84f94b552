"""
Analysis schemas - per-request query and result models.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from medigrid.core.logging import get_logger
from medigrid.schemas.condition import ConditionRecord, Region

logger = get_logger(__name__)


# ============================================================================
# ENUMS - Triage Classification
# ============================================================================

class UrgencyLevel(str, Enum):
    """How quickly the patient should be seen."""
    ROUTINE = "routine"
    SAME_DAY = "same_day"
    URGENT = "urgent"
    EMERGENCY = "emergency"


class RiskLevel(str, Enum):
    """Overall clinical risk of the presentation."""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


# ============================================================================
# REQUEST MODEL
# ============================================================================

class SymptomQuery(BaseModel):
    """Patient-reported symptoms plus optional context."""
    symptoms: list[str] = Field(default_factory=list, description="Free-text symptoms")
    age: Optional[int] = Field(None, ge=0, le=150, description="Patient age")
    sex: Optional[str] = Field(None, description="Patient sex")
    region: Region = Field(default=Region.NATIONAL, description="Patient region")
    risk_factors: list[str] = Field(default_factory=list, description="Known risk factors")

    @field_validator("region", mode="before")
    @classmethod
    def _coerce_region(cls, value: Any) -> Any:
        """Unknown or missing regions fall back to national."""
        if value is None:
            return Region.NATIONAL
        if isinstance(value, Region):
            return value
        try:
            return Region(str(value).strip().lower())
        except ValueError:
            logger.debug(f"Unknown region {value!r}, using national")
            return Region.NATIONAL

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "symptoms": ["persistent cough", "weight loss", "night sweats"],
                "age": 34,
                "sex": "male",
                "region": "mining",
                "risk_factors": ["HIV positive", "smoking"]
            }
        }
    )


# ============================================================================
# RESULT MODELS
# ============================================================================

class ScoreBreakdown(BaseModel):
    """Weighted contribution of each scoring component and their ceiling."""
    symptoms: float = Field(..., ge=0)
    region: float = Field(..., ge=0)
    risk_factors: float = Field(..., ge=0)
    prevalence: float = Field(..., ge=0)
    max_possible: float = Field(..., ge=0)

    @property
    def total(self) -> float:
        return self.symptoms + self.region + self.risk_factors + self.prevalence


class DiseaseMatch(BaseModel):
    """A catalog condition scored against a query."""
    condition: ConditionRecord
    match_score: float = Field(..., ge=0, le=1, description="Normalized relevance")
    matching_symptoms: list[str] = Field(default_factory=list, description="Canonical symptoms matched")
    risk_factor_matches: list[str] = Field(default_factory=list, description="Record risk factors matched")
    breakdown: Optional[ScoreBreakdown] = Field(None, description="Per-component scoring")


class AnalysisResult(BaseModel):
    """Ranked matches, emergency flag, confidence and recommendations."""
    top_matches: list[DiseaseMatch] = Field(default_factory=list)
    all_matches: list[DiseaseMatch] = Field(default_factory=list)
    emergency_risk: bool = False
    confidence: float = Field(0.0, ge=0, le=1)
    recommendations: list[str] = Field(..., min_length=1)
    regional_notes: list[str] = Field(default_factory=list)
    cultural_notes: list[str] = Field(default_factory=list)


class HealthAssessment(BaseModel):
    """Triage-oriented view of an analysis."""
    risk_level: RiskLevel
    urgency_level: UrgencyLevel
    primary_concerns: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    diagnostic_suggestions: list[str] = Field(default_factory=list)
    red_flags: list[str] = Field(default_factory=list)
    confidence: float = Field(..., ge=0, le=1)
    confidence_level: str = Field(..., description="very_high, high, moderate, low, very_low")
    disease_matches: list[DiseaseMatch] = Field(default_factory=list)
    follow_up_days: int = Field(..., ge=0)
    referral_needed: bool
    cultural_considerations: list[str] = Field(default_factory=list)
    regional_considerations: list[str] = Field(default_factory=list)
    disclaimer: str = Field(
        default="This analysis is for informational purposes only and does not constitute medical advice. Always consult a qualified healthcare provider for diagnosis and treatment.",
        description="Medical disclaimer"
    )
