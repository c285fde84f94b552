"""
Scoring engine - relevance of each catalog condition to a symptom query.

Four weighted components, each paired with its own ceiling so the final
score is normalized per record:

- symptom overlap (word-level fuzzy matching against canonical symptoms)
- regional relevance
- risk factor overlap
- prevalence tier
"""

from typing import Iterable, Optional

from medigrid.config import Settings, get_settings
from medigrid.core.logging import get_logger
from medigrid.schemas.analysis import DiseaseMatch, ScoreBreakdown, SymptomQuery
from medigrid.schemas.condition import (
    ConditionRecord,
    Prevalence,
    Region,
    SymptomFrequency,
    SymptomSeverity,
    SymptomSpec,
)
from medigrid.services.string_similarity import phrase_matches, text_overlaps

logger = get_logger(__name__)


SEVERITY_FACTORS = {
    SymptomSeverity.CRITICAL: 1.0,
    SymptomSeverity.SEVERE: 0.8,
    SymptomSeverity.MODERATE: 0.6,
    SymptomSeverity.MILD: 0.4,
}

FREQUENCY_FACTORS = {
    SymptomFrequency.UNIVERSAL: 1.0,
    SymptomFrequency.VERY_COMMON: 0.9,
    SymptomFrequency.COMMON: 0.7,
    SymptomFrequency.OCCASIONAL: 0.5,
    SymptomFrequency.RARE: 0.3,
}

PREVALENCE_FACTORS = {
    Prevalence.VERY_HIGH: 1.0,
    Prevalence.HIGH: 0.8,
    Prevalence.MODERATE: 0.6,
    Prevalence.LOW: 0.4,
    Prevalence.RARE: 0.2,
}


def symptom_weight(symptom: SymptomSpec) -> float:
    """Severity factor times frequency factor."""
    return SEVERITY_FACTORS[symptom.severity] * FREQUENCY_FACTORS[symptom.frequency]


class ScoringEngine:
    """Scores and ranks catalog records against a query."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def score(self, query: SymptomQuery, record: ConditionRecord) -> DiseaseMatch:
        """
        Score a single record.

        Args:
            query: Patient symptoms and context.
            record: Catalog condition.

        Returns:
            Match with a score in [0, 1] and the evidence behind it.
        """
        symptom_score, symptom_ceiling, matched_symptoms = self._symptom_component(query.symptoms, record)
        region_score, region_ceiling = self._region_component(query.region, record.region)
        risk_score, risk_ceiling, matched_risks = self._risk_factor_component(query.risk_factors, record)
        prevalence_score, prevalence_ceiling = self._prevalence_component(record.prevalence)

        breakdown = ScoreBreakdown(
            symptoms=symptom_score,
            region=region_score,
            risk_factors=risk_score,
            prevalence=prevalence_score,
            max_possible=symptom_ceiling + region_ceiling + risk_ceiling + prevalence_ceiling,
        )

        if breakdown.max_possible > 0:
            match_score = min(breakdown.total / breakdown.max_possible, 1.0)
        else:
            match_score = 0.0

        return DiseaseMatch(
            condition=record,
            match_score=match_score,
            matching_symptoms=matched_symptoms,
            risk_factor_matches=matched_risks,
            breakdown=breakdown,
        )

    def rank(self, query: SymptomQuery, records: Iterable[ConditionRecord]) -> list[DiseaseMatch]:
        """
        Score every record, keep those above the inclusion threshold and
        return the best ones, highest score first.

        Ties keep catalog order. A query with no non-blank symptoms matches
        nothing.
        """
        settings = self._settings
        if not any(symptom.strip() for symptom in query.symptoms):
            return []

        scored = [self.score(query, record) for record in records]
        kept = [m for m in scored if m.match_score > settings.MATCH_THRESHOLD]
        kept.sort(key=lambda m: m.match_score, reverse=True)

        logger.debug(
            f"Scored {len(scored)} conditions, {len(kept)} above threshold",
            extra={"threshold": settings.MATCH_THRESHOLD}
        )
        return kept[:settings.MAX_MATCHES]

    def _symptom_component(
        self,
        reported: list[str],
        record: ConditionRecord
    ) -> tuple[float, float, list[str]]:
        weight = self._settings.SYMPTOM_WEIGHT
        threshold = self._settings.FUZZY_SIMILARITY_THRESHOLD

        matched = [
            spec for spec in record.symptoms
            if any(phrase_matches(phrase, spec.name, threshold) for phrase in reported)
        ]

        score = sum(spec.differential_importance * weight * symptom_weight(spec) for spec in matched)

        if self._settings.SYMPTOM_CEILING_USES_WEIGHT:
            ceiling = sum(spec.differential_importance * weight * symptom_weight(spec) for spec in record.symptoms)
        else:
            ceiling = sum(spec.differential_importance * weight for spec in record.symptoms)

        return score, ceiling, [spec.name for spec in matched]

    def _region_component(self, query_region: Region, record_region: Region) -> tuple[float, float]:
        weight = self._settings.REGION_WEIGHT
        if (
            query_region == record_region
            or query_region == Region.NATIONAL
            or record_region == Region.NATIONAL
        ):
            return weight, weight
        return weight * self._settings.OUT_OF_REGION_FACTOR, weight

    def _risk_factor_component(
        self,
        reported: list[str],
        record: ConditionRecord
    ) -> tuple[float, float, list[str]]:
        weight = self._settings.RISK_FACTOR_WEIGHT
        if not record.risk_factors:
            return 0.0, weight, []

        matched = [
            risk for risk in record.risk_factors
            if any(text_overlaps(risk, patient_risk) for patient_risk in reported)
        ]
        return weight * len(matched) / len(record.risk_factors), weight, matched

    def _prevalence_component(self, prevalence: Prevalence) -> tuple[float, float]:
        weight = self._settings.PREVALENCE_WEIGHT
        return weight * PREVALENCE_FACTORS[prevalence], weight
