"""
MediGrid Symptom Analyzer Service

Ranks catalog conditions against reported symptoms, flags emergency risk,
estimates confidence and assembles recommendations.
"""

import threading
from typing import Optional, Sequence, Union

from medigrid.config import Settings, get_settings
from medigrid.core.logging import get_logger
from medigrid.schemas.analysis import AnalysisResult, HealthAssessment, SymptomQuery
from medigrid.schemas.condition import Region
from medigrid.services.confidence_engine import ConfidenceEngine
from medigrid.services.knowledge_base import KnowledgeBase, KnowledgeBaseRegistry
from medigrid.services.recommendation_builder import RecommendationBuilder
from medigrid.services.risk_stratifier import RiskStratifier
from medigrid.services.scoring import ScoringEngine

logger = get_logger(__name__)


class SymptomAnalyzer:
    """
    Symptom-to-condition matching engine.

    Features:
    - Weighted multi-factor scoring against the knowledge base
    - Emergency indicator detection
    - Urgency and risk stratification
    - Confidence estimation
    - Prioritized recommendations with regional and cultural notes

    The analyzer holds no per-request state; one instance can serve
    concurrent callers. When given a KnowledgeBaseRegistry each analysis
    uses the snapshot published when it started.
    """

    def __init__(
        self,
        knowledge_base: Union[KnowledgeBase, KnowledgeBaseRegistry],
        settings: Optional[Settings] = None
    ):
        self._source = knowledge_base
        self._settings = settings or get_settings()
        self._scoring = ScoringEngine(self._settings)
        self._risk = RiskStratifier(self._settings)
        self._confidence = ConfidenceEngine(self._settings)
        self._recommendations = RecommendationBuilder(self._settings)

    @property
    def knowledge_base(self) -> KnowledgeBase:
        if isinstance(self._source, KnowledgeBaseRegistry):
            return self._source.snapshot
        return self._source

    def analyze(self, query: SymptomQuery) -> AnalysisResult:
        """
        Rank conditions for a query.

        Args:
            query: Reported symptoms and patient context.

        Returns:
            Ranked matches, emergency flag, confidence and recommendations.
        """
        knowledge_base = self.knowledge_base

        all_matches = self._scoring.rank(query, knowledge_base.all())
        top_matches = all_matches[:self._settings.TOP_MATCHES]

        emergency_risk = self._risk.detect_emergency(all_matches, query.symptoms)
        confidence = self._confidence.calculate_confidence(all_matches)

        regional_notes = self._recommendations.regional_notes(query.region)
        cultural_notes = self._recommendations.cultural_notes(top_matches)
        recommendations = self._recommendations.build(
            top_matches,
            emergency_risk,
            regional_notes,
            cultural_notes
        )

        logger.info(
            f"Analyzed {len(query.symptoms)} symptoms",
            extra={
                "matches": len(all_matches),
                "top_condition": top_matches[0].condition.id if top_matches else None,
                "emergency_risk": emergency_risk,
                "confidence": round(confidence, 4),
                "catalog_version": knowledge_base.version,
            }
        )

        return AnalysisResult(
            top_matches=top_matches,
            all_matches=all_matches,
            emergency_risk=emergency_risk,
            confidence=confidence,
            recommendations=recommendations,
            regional_notes=regional_notes,
            cultural_notes=cultural_notes,
        )

    def analyze_symptoms(
        self,
        symptoms: Sequence[str],
        age: Optional[int] = None,
        sex: Optional[str] = None,
        region: Union[Region, str, None] = Region.NATIONAL,
        risk_factors: Sequence[str] = ()
    ) -> AnalysisResult:
        """Build a query from keyword arguments and analyze it."""
        query = SymptomQuery(
            symptoms=list(symptoms),
            age=age,
            sex=sex,
            region=region,
            risk_factors=list(risk_factors),
        )
        return self.analyze(query)

    def assess(self, query: SymptomQuery) -> HealthAssessment:
        """
        Triage-oriented assessment built on top of ``analyze``.

        Args:
            query: Reported symptoms and patient context.

        Returns:
            Risk and urgency levels, concerns, red flags and follow-up.
        """
        analysis = self.analyze(query)
        top_matches = analysis.top_matches

        urgency = self._risk.urgency_level(analysis.all_matches, analysis.emergency_risk)
        risk = self._risk.risk_level(top_matches, analysis.emergency_risk)

        primary_concerns = [
            f"{m.condition.name}: {', '.join(m.condition.complications[:2])}"
            for m in top_matches
        ]
        diagnostic_suggestions = list(dict.fromkeys(
            item
            for m in top_matches[:2]
            for item in m.condition.diagnostic_approach[:3]
        ))

        return HealthAssessment(
            risk_level=risk,
            urgency_level=urgency,
            primary_concerns=primary_concerns,
            recommendations=analysis.recommendations,
            diagnostic_suggestions=diagnostic_suggestions,
            red_flags=self._risk.red_flags(top_matches),
            confidence=analysis.confidence,
            confidence_level=self._confidence.get_confidence_breakdown(analysis.confidence)["level"],
            disease_matches=top_matches,
            follow_up_days=self._risk.follow_up_days(urgency),
            referral_needed=self._risk.referral_needed(urgency),
            cultural_considerations=analysis.cultural_notes,
            regional_considerations=analysis.regional_notes,
        )


def analyze(
    query: SymptomQuery,
    knowledge_base: KnowledgeBase,
    settings: Optional[Settings] = None
) -> AnalysisResult:
    """Analyze one query against an explicit knowledge base."""
    return SymptomAnalyzer(knowledge_base, settings).analyze(query)


# Singleton instance
_analyzer_instance: Optional[SymptomAnalyzer] = None
_analyzer_lock = threading.Lock()


def get_symptom_analyzer() -> SymptomAnalyzer:
    """Get or create a SymptomAnalyzer over the configured catalog."""
    global _analyzer_instance
    if _analyzer_instance is None:
        with _analyzer_lock:
            if _analyzer_instance is None:
                settings = get_settings()
                registry = KnowledgeBaseRegistry.from_path(settings.KNOWLEDGE_BASE_PATH)
                _analyzer_instance = SymptomAnalyzer(registry, settings)
    return _analyzer_instance
