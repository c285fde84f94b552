"""
Tests for the condition catalog and its registry.
"""

import pytest
from pydantic import ValidationError

from medigrid.schemas.condition import DiseaseCategory, Prevalence, Region, ResourceLevel
from medigrid.services.knowledge_base import (
    KnowledgeBase,
    KnowledgeBaseError,
    KnowledgeBaseRegistry,
    load_knowledge_base,
)


def test_packaged_catalog_loads(knowledge_base: KnowledgeBase):
    """Test the packaged catalog is complete and uniquely keyed."""
    ids = [record.id for record in knowledge_base]

    assert len(knowledge_base) == 11
    assert len(set(ids)) == len(ids)
    assert knowledge_base.version == "2024.1"
    assert all(record.symptoms for record in knowledge_base)


def test_symptom_importance_in_range(knowledge_base: KnowledgeBase):
    """Test every symptom importance lies in [0, 1]."""
    for record in knowledge_base:
        for symptom in record.symptoms:
            assert 0.0 <= symptom.differential_importance <= 1.0


def test_get(knowledge_base: KnowledgeBase):
    """Test lookup by id."""
    assert knowledge_base.get("asthma").name == "Bronchial Asthma"
    assert knowledge_base.get("unknown") is None


def test_by_region_includes_national_records(knowledge_base: KnowledgeBase):
    """Test national records are relevant to every region."""
    national = [r for r in knowledge_base if r.region == Region.NATIONAL]

    for region in Region:
        relevant = knowledge_base.by_region(region)
        for record in national:
            assert record in relevant


def test_by_region_filters_other_regions(knowledge_base: KnowledgeBase):
    """Test region-specific records only appear for their region."""
    mining_ids = [r.id for r in knowledge_base.by_region(Region.MINING)]
    coastal_ids = [r.id for r in knowledge_base.by_region(Region.COASTAL)]

    assert "pneumoconiosis_silicosis" in mining_ids
    assert "pneumoconiosis_silicosis" not in coastal_ids
    assert "malaria_falciparum" not in coastal_ids


def test_by_category(knowledge_base: KnowledgeBase):
    """Test category filtering."""
    records = knowledge_base.by_category(DiseaseCategory.MENTAL_HEALTH)

    assert [r.id for r in records] == ["depression_major"]


@pytest.mark.parametrize("text, expected", [
    ("isifuba", ["asthma"]),
    ("WHEEZ", ["asthma"]),
    ("weight loss", ["tuberculosis_pulmonary", "hiv_aids", "pneumoconiosis_silicosis"]),
    ("isifo", ["tuberculosis_pulmonary", "diabetes_type2", "pneumoconiosis_silicosis"]),
])
def test_search(knowledge_base: KnowledgeBase, text: str, expected: list[str]):
    """Test search over names, localized names and symptoms."""
    assert [r.id for r in knowledge_base.search(text)] == expected


def test_filter_by_prevalence(knowledge_base: KnowledgeBase):
    """Test filtering at or above a prevalence tier."""
    ids = [r.id for r in knowledge_base.filter_by_prevalence(Prevalence.VERY_HIGH)]

    assert ids == ["tuberculosis_pulmonary", "hiv_aids", "hypertension", "gastroenteritis_infectious"]
    assert len(knowledge_base.filter_by_prevalence(Prevalence.RARE)) == len(knowledge_base)


def test_filter_by_resource_level(knowledge_base: KnowledgeBase):
    """Test filtering by maximum level of care."""
    primary = knowledge_base.filter_by_resource_level(ResourceLevel.PRIMARY)
    ids = {r.id for r in primary}

    assert len(primary) == 8
    assert "kwashiorkor" not in ids
    assert "preeclampsia" not in ids


@pytest.mark.parametrize("language, expected", [
    ("zu", "Isifo sephapha"),
    ("Zulu", "Isifo sephapha"),
    ("af", "Longtuberkulose"),
    ("fr", "Pulmonary Tuberculosis"),
])
def test_localized_name(knowledge_base: KnowledgeBase, language: str, expected: str):
    """Test localized names fall back to English."""
    record = knowledge_base.get("tuberculosis_pulmonary")

    assert record.localized_name(language) == expected


def test_records_are_immutable(knowledge_base: KnowledgeBase):
    """Test catalog records cannot be modified."""
    record = knowledge_base.get("asthma")

    with pytest.raises(ValidationError):
        record.name = "Changed"


def test_display_names_are_read_only(knowledge_base: KnowledgeBase):
    """Test localized names cannot be changed through a shared record."""
    record = knowledge_base.get("tuberculosis_pulmonary")

    with pytest.raises(TypeError):
        record.display_names["zu"] = "tampered"

    assert knowledge_base.get("tuberculosis_pulmonary").localized_name("zu") == "Isifo sephapha"


def test_display_names_copied_from_input(make_record):
    """Test later changes to the source mapping do not reach the record."""
    names = {"zu": "Igama"}
    record = make_record(display_names=names)

    names["zu"] = "changed"

    assert record.localized_name("zu") == "Igama"
    assert record.model_dump()["display_names"] == {"zu": "Igama"}


def test_default_display_names_read_only(make_record):
    """Test records without localized names also get a read-only mapping."""
    record = make_record()

    with pytest.raises(TypeError):
        record.display_names["af"] = "Toets"


def test_duplicate_ids_rejected(make_record):
    """Test duplicate ids fail construction."""
    with pytest.raises(KnowledgeBaseError, match="Duplicate"):
        KnowledgeBase([make_record(), make_record()])


def test_load_missing_file(tmp_path):
    """Test a missing catalog is reported."""
    with pytest.raises(KnowledgeBaseError, match="not found"):
        load_knowledge_base(tmp_path / "missing.json")


def test_load_invalid_json(tmp_path):
    """Test unparseable catalogs are reported."""
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(KnowledgeBaseError):
        load_knowledge_base(path)


def test_load_without_conditions(tmp_path):
    """Test a catalog without a conditions list is rejected."""
    path = tmp_path / "empty.json"
    path.write_text('{"version": "1"}', encoding="utf-8")

    with pytest.raises(KnowledgeBaseError, match="conditions"):
        load_knowledge_base(path)


def test_load_invalid_record(write_catalog):
    """Test schema violations are reported."""
    path = write_catalog({"severity_typo": True})

    with pytest.raises(KnowledgeBaseError, match="Invalid condition record"):
        load_knowledge_base(path)


def test_load_empty_catalog(write_catalog):
    """Test an empty condition list is rejected."""
    path = write_catalog()

    with pytest.raises(KnowledgeBaseError, match="empty"):
        load_knowledge_base(path)


def test_load_custom_catalog(write_catalog):
    """Test loading a catalog from an explicit path."""
    path = write_catalog({"id": "a"}, {"id": "b"}, version="custom")

    knowledge_base = load_knowledge_base(path)

    assert len(knowledge_base) == 2
    assert knowledge_base.version == "custom"


def test_registry_reload(write_catalog, knowledge_base: KnowledgeBase):
    """Test reload publishes a new snapshot."""
    registry = KnowledgeBaseRegistry(knowledge_base)
    path = write_catalog({"id": "a"}, version="next")

    fresh = registry.reload(path)

    assert registry.snapshot is fresh
    assert registry.get_status()["version"] == "next"
    assert registry.get_status()["conditions"] == 1


def test_registry_failed_reload_keeps_snapshot(tmp_path, knowledge_base: KnowledgeBase):
    """Test a failed reload leaves the current snapshot published."""
    registry = KnowledgeBaseRegistry(knowledge_base)
    loaded_at = registry.loaded_at

    with pytest.raises(KnowledgeBaseError):
        registry.reload(tmp_path / "missing.json")

    assert registry.snapshot is knowledge_base
    assert registry.loaded_at == loaded_at
