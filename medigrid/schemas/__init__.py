"""Pydantic schemas for catalog records and analysis results."""

from medigrid.schemas.analysis import (
    AnalysisResult,
    DiseaseMatch,
    HealthAssessment,
    RiskLevel,
    ScoreBreakdown,
    SymptomQuery,
    UrgencyLevel,
)
from medigrid.schemas.condition import (
    ConditionRecord,
    DiseaseCategory,
    Prevalence,
    Region,
    ResourceLevel,
    SymptomFrequency,
    SymptomSeverity,
    SymptomSpec,
    TraditionalRemedy,
)

__all__ = [
    # Catalog
    "ConditionRecord",
    "SymptomSpec",
    "TraditionalRemedy",
    "DiseaseCategory",
    "Prevalence",
    "Region",
    "ResourceLevel",
    "SymptomFrequency",
    "SymptomSeverity",
    # Analysis
    "SymptomQuery",
    "DiseaseMatch",
    "ScoreBreakdown",
    "AnalysisResult",
    "HealthAssessment",
    "RiskLevel",
    "UrgencyLevel",
]
