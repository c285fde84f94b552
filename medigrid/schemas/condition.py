"""
Knowledge base schemas - curated condition records.

Catalog models are frozen and hold tuples and read-only mappings so a loaded
snapshot can be shared between concurrent analyses.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


# ============================================================================
# ENUMS - Catalog Classification Types
# ============================================================================

class DiseaseCategory(str, Enum):
    """Broad grouping of catalog conditions."""
    INFECTIOUS_ENDEMIC = "infectious_endemic"
    INFECTIOUS_COMMON = "infectious_common"
    NON_COMMUNICABLE = "non_communicable"
    TROPICAL_PARASITIC = "tropical_parasitic"
    NUTRITIONAL = "nutritional"
    ENVIRONMENTAL = "environmental"
    MATERNAL_CHILD = "maternal_child"
    MENTAL_HEALTH = "mental_health"
    OCCUPATIONAL = "occupational"
    EMERGENCY_TRAUMA = "emergency_trauma"


class Prevalence(str, Enum):
    """Population exposure tiers, lowest first."""
    RARE = "rare"              # <1% population exposure risk
    LOW = "low"                # 1-5%
    MODERATE = "moderate"      # 5-20%
    HIGH = "high"              # 20-50%
    VERY_HIGH = "very_high"    # >50%

    @property
    def rank(self) -> int:
        return list(Prevalence).index(self)


class Region(str, Enum):
    """Geographic applicability. NATIONAL matches every region."""
    NATIONAL = "national"
    COASTAL = "coastal"
    INLAND = "inland"
    NORTHERN = "northern"
    RURAL = "rural"
    URBAN = "urban"
    MINING = "mining"
    TROPICAL_NORTHEAST = "tropical_northeast"


class SymptomSeverity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"
    CRITICAL = "critical"


class SymptomFrequency(str, Enum):
    RARE = "rare"
    OCCASIONAL = "occasional"
    COMMON = "common"
    VERY_COMMON = "very_common"
    UNIVERSAL = "universal"


class ResourceLevel(str, Enum):
    """Level of care needed to manage a condition, lowest first."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"
    QUATERNARY = "quaternary"

    @property
    def rank(self) -> int:
        return list(ResourceLevel).index(self)


# Language aliases accepted by ConditionRecord.localized_name
LANGUAGE_ALIASES = {
    "af": "af", "afr": "af", "afrikaans": "af",
    "zu": "zu", "zul": "zu", "zulu": "zu",
    "xh": "xh", "xho": "xh", "xhosa": "xh",
    "en": "en", "eng": "en", "english": "en",
}


# ============================================================================
# CATALOG MODELS
# ============================================================================

class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class SymptomSpec(_FrozenModel):
    """Canonical symptom of a condition with its diagnostic weighting."""
    name: str = Field(..., min_length=1, description="Canonical symptom name")
    severity: SymptomSeverity = Field(..., description="Typical severity")
    frequency: SymptomFrequency = Field(..., description="How often the symptom presents")
    description: str = Field(default="", description="Clinical description")
    associated_findings: tuple[str, ...] = Field(default=(), description="Related examination findings")
    differential_importance: float = Field(
        default=0.5, ge=0, le=1,
        description="How discriminating the symptom is for this condition"
    )


class TraditionalRemedy(_FrozenModel):
    """Traditional medicine commonly used alongside the condition."""
    name: str
    description: str
    interactions: tuple[str, ...] = ()
    safety_notes: str = ""


class ConditionRecord(_FrozenModel):
    """One curated entry of the knowledge base."""
    id: str = Field(..., min_length=1, description="Stable unique identifier")
    name: str = Field(..., min_length=1, description="Canonical English name")
    display_names: Mapping[str, str] = Field(default_factory=dict, validate_default=True, description="Language tag to localized name")
    category: DiseaseCategory
    prevalence: Prevalence
    region: Region
    symptoms: tuple[SymptomSpec, ...] = Field(..., min_length=1)
    risk_factors: tuple[str, ...] = ()
    complications: tuple[str, ...] = ()
    diagnostic_approach: tuple[str, ...] = ()
    treatment_approach: tuple[str, ...] = ()
    prevention_measures: tuple[str, ...] = ()
    emergency_indicators: tuple[str, ...] = ()
    traditional_remedies: tuple[TraditionalRemedy, ...] = ()
    resource_level: ResourceLevel
    referral_criteria: tuple[str, ...] = ()
    epidemiology_notes: str = ""
    cultural_considerations: tuple[str, ...] = ()

    @field_validator("display_names", mode="after")
    @classmethod
    def _freeze_display_names(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("display_names")
    def _serialize_display_names(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    @property
    def all_names(self) -> list[str]:
        """English name followed by every localized name."""
        return [self.name, *self.display_names.values()]

    def localized_name(self, language: str) -> str:
        """
        Name of the condition in the requested language.

        Accepts tags and common aliases ("zu", "zul", "zulu"); unknown
        languages and missing translations fall back to the English name.
        """
        tag = LANGUAGE_ALIASES.get(language.strip().lower())
        if tag is None:
            return self.name
        return self.display_names.get(tag) or self.name
