"""Services for the MediGrid symptom engine."""

from medigrid.services.confidence_engine import ConfidenceEngine
from medigrid.services.knowledge_base import (
    KnowledgeBase,
    KnowledgeBaseError,
    KnowledgeBaseRegistry,
    load_knowledge_base,
)
from medigrid.services.recommendation_builder import RecommendationBuilder
from medigrid.services.risk_stratifier import RiskStratifier
from medigrid.services.scoring import ScoringEngine
from medigrid.services.symptom_analyzer import SymptomAnalyzer, analyze, get_symptom_analyzer

__all__ = [
    "ConfidenceEngine",
    "KnowledgeBase",
    "KnowledgeBaseError",
    "KnowledgeBaseRegistry",
    "load_knowledge_base",
    "RecommendationBuilder",
    "RiskStratifier",
    "ScoringEngine",
    "SymptomAnalyzer",
    "analyze",
    "get_symptom_analyzer",
]
