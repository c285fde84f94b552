"""
Pytest fixtures for MediGrid symptom engine tests.
"""

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from medigrid.config import Settings
from medigrid.schemas.analysis import DiseaseMatch
from medigrid.schemas.condition import ConditionRecord
from medigrid.services.knowledge_base import KnowledgeBase, load_knowledge_base
from medigrid.services.symptom_analyzer import SymptomAnalyzer


def _record_data(**overrides: Any) -> dict[str, Any]:
    data = {
        "id": "test_condition",
        "name": "Test Condition",
        "category": "infectious_common",
        "prevalence": "very_high",
        "region": "national",
        "symptoms": [
            {
                "name": "Cough",
                "severity": "critical",
                "frequency": "universal",
                "differential_importance": 1.0,
            }
        ],
        "risk_factors": ["Smoking"],
        "complications": ["Chronic bronchitis"],
        "diagnostic_approach": ["Chest X-ray", "Sputum culture", "Spirometry", "CT scan"],
        "treatment_approach": ["Rest", "Fluids", "Antibiotics if indicated"],
        "prevention_measures": ["Hand hygiene", "Vaccination", "Avoid smoke"],
        "emergency_indicators": ["Coughing blood"],
        "resource_level": "primary",
        "cultural_considerations": ["Home remedies common"],
    }
    data.update(overrides)
    return data


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the process-wide cache."""
    return Settings()


@pytest.fixture
def make_record() -> Callable[..., ConditionRecord]:
    """Build a condition record, overriding any field."""
    def _make(**overrides: Any) -> ConditionRecord:
        return ConditionRecord.model_validate(_record_data(**overrides))
    return _make


@pytest.fixture
def make_match(make_record) -> Callable[..., DiseaseMatch]:
    """Build a scored match around a fixture record."""
    def _make(score: float, **overrides: Any) -> DiseaseMatch:
        return DiseaseMatch(condition=make_record(**overrides), match_score=score)
    return _make


@pytest.fixture
def write_catalog(tmp_path: Path) -> Callable[..., Path]:
    """Write a catalog file from record overrides and return its path."""
    def _write(*records: dict[str, Any], version: str = "test", name: str = "catalog.json") -> Path:
        path = tmp_path / name
        payload = {
            "version": version,
            "conditions": [_record_data(**r) for r in records],
        }
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path
    return _write


@pytest.fixture(scope="session")
def knowledge_base() -> KnowledgeBase:
    """The packaged catalog."""
    return load_knowledge_base()


@pytest.fixture
def analyzer(knowledge_base: KnowledgeBase, settings: Settings) -> SymptomAnalyzer:
    """Analyzer over the packaged catalog."""
    return SymptomAnalyzer(knowledge_base, settings)
