"""
Knowledge base of curated conditions.

A KnowledgeBase is an immutable snapshot; KnowledgeBaseRegistry publishes
snapshots and swaps them atomically on reload so in-flight analyses keep
the catalog they started with.
"""

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

from pydantic import ValidationError

from medigrid.core.logging import get_logger
from medigrid.schemas.condition import (
    ConditionRecord,
    DiseaseCategory,
    Prevalence,
    Region,
    ResourceLevel,
)
from medigrid.services.string_similarity import normalize

logger = get_logger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "conditions.json"


class KnowledgeBaseError(Exception):
    """Raised when the condition catalog is missing or malformed."""


class KnowledgeBase:
    """Read-only catalog of condition records."""

    def __init__(self, records: Sequence[ConditionRecord], version: str = "unversioned"):
        ids = [record.id for record in records]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise KnowledgeBaseError(f"Duplicate condition ids: {', '.join(duplicates)}")

        self._records: tuple[ConditionRecord, ...] = tuple(records)
        self._by_id = {record.id: record for record in self._records}
        self.version = version

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ConditionRecord]:
        return iter(self._records)

    def all(self) -> tuple[ConditionRecord, ...]:
        """Every record in catalog order."""
        return self._records

    def get(self, condition_id: str) -> Optional[ConditionRecord]:
        return self._by_id.get(condition_id)

    def by_category(self, category: DiseaseCategory) -> list[ConditionRecord]:
        return [r for r in self._records if r.category == category]

    def by_region(self, region: Region) -> list[ConditionRecord]:
        """Records relevant to a region; national records match every region."""
        return [
            r for r in self._records
            if r.region == region or r.region == Region.NATIONAL
        ]

    def search(self, text: str) -> list[ConditionRecord]:
        """
        Records whose name, any localized name, or any symptom name
        contains the text (case-insensitive).
        """
        needle = normalize(text)
        return [
            r for r in self._records
            if any(needle in normalize(name) for name in r.all_names)
            or any(needle in normalize(s.name) for s in r.symptoms)
        ]

    def filter_by_prevalence(self, min_prevalence: Prevalence) -> list[ConditionRecord]:
        """Records at or above the given prevalence tier."""
        return [r for r in self._records if r.prevalence.rank >= min_prevalence.rank]

    def filter_by_resource_level(self, max_level: ResourceLevel) -> list[ConditionRecord]:
        """Records manageable at or below the given level of care."""
        return [r for r in self._records if r.resource_level.rank <= max_level.rank]


def load_knowledge_base(path: Union[str, Path, None] = None) -> KnowledgeBase:
    """
    Load and validate a catalog file.

    Args:
        path: Catalog JSON file; defaults to the packaged catalog.

    Returns:
        Immutable knowledge base snapshot.

    Raises:
        KnowledgeBaseError: If the file is missing, unreadable or invalid.
    """
    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH

    try:
        with catalog_path.open(encoding="utf-8") as fh:
            payload = json.load(fh)
    except FileNotFoundError as e:
        raise KnowledgeBaseError(f"Knowledge base not found: {catalog_path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise KnowledgeBaseError(f"Cannot read knowledge base {catalog_path}: {e}") from e

    if not isinstance(payload, dict) or not isinstance(payload.get("conditions"), list):
        raise KnowledgeBaseError(f"Knowledge base {catalog_path} has no 'conditions' list")

    try:
        records = [ConditionRecord.model_validate(item) for item in payload["conditions"]]
    except ValidationError as e:
        raise KnowledgeBaseError(f"Invalid condition record in {catalog_path}: {e}") from e

    if not records:
        raise KnowledgeBaseError(f"Knowledge base {catalog_path} is empty")

    knowledge_base = KnowledgeBase(records, version=str(payload.get("version", "unversioned")))

    logger.info(
        f"Knowledge base loaded: {len(knowledge_base)} conditions",
        extra={"path": str(catalog_path), "version": knowledge_base.version}
    )
    return knowledge_base


class KnowledgeBaseRegistry:
    """
    Publishes the current knowledge base snapshot.

    Readers take ``snapshot`` without locking; reloads are serialised and
    replace the reference in a single assignment.
    """

    def __init__(self, knowledge_base: KnowledgeBase):
        self._snapshot = knowledge_base
        self._loaded_at = datetime.now(timezone.utc)
        self._lock = threading.Lock()

    @classmethod
    def from_path(cls, path: Union[str, Path, None] = None) -> "KnowledgeBaseRegistry":
        return cls(load_knowledge_base(path))

    @property
    def snapshot(self) -> KnowledgeBase:
        return self._snapshot

    @property
    def loaded_at(self) -> datetime:
        return self._loaded_at

    def reload(self, path: Union[str, Path, None] = None) -> KnowledgeBase:
        """
        Load a new catalog and publish it.

        On failure the previous snapshot stays published and the error
        propagates.
        """
        with self._lock:
            try:
                fresh = load_knowledge_base(path)
            except KnowledgeBaseError:
                logger.error(
                    "Knowledge base reload failed, keeping current snapshot",
                    extra={"version": self._snapshot.version},
                    exc_info=True
                )
                raise

            self._snapshot = fresh
            self._loaded_at = datetime.now(timezone.utc)

        logger.info(
            f"Knowledge base reloaded: {len(fresh)} conditions",
            extra={"version": fresh.version}
        )
        return fresh

    def get_status(self) -> dict:
        return {
            "version": self._snapshot.version,
            "conditions": len(self._snapshot),
            "loaded_at": self._loaded_at.isoformat(),
        }
