#!/usr/bin/env python3
"""
Load and verify a condition catalog.

Usage:
    python scripts/validate_knowledge_base.py
    python scripts/validate_knowledge_base.py --path my_catalog.json
    python scripts/validate_knowledge_base.py --sample "persistent cough,weight loss"

Exits non-zero if the catalog is missing or malformed.
"""

import argparse
import sys
from collections import Counter

from medigrid.config import get_settings
from medigrid.core.logging import get_logger, setup_logging
from medigrid.schemas.analysis import SymptomQuery
from medigrid.schemas.condition import Region
from medigrid.services.knowledge_base import KnowledgeBase, KnowledgeBaseError, load_knowledge_base
from medigrid.services.symptom_analyzer import SymptomAnalyzer

setup_logging()
logger = get_logger(__name__)


def summarize(knowledge_base: KnowledgeBase) -> None:
    """Log catalog composition."""
    logger.info(f"Catalog version {knowledge_base.version}: {len(knowledge_base)} conditions")

    categories = Counter(r.category.value for r in knowledge_base)
    for category, count in sorted(categories.items()):
        logger.info(f"  {category}: {count}")

    for region in Region:
        logger.info(f"  relevant in {region.value}: {len(knowledge_base.by_region(region))}")


def run_sample(knowledge_base: KnowledgeBase, symptoms: list[str], region: str) -> None:
    """Analyze a sample query and log the ranking."""
    analyzer = SymptomAnalyzer(knowledge_base)
    result = analyzer.analyze(SymptomQuery(symptoms=symptoms, region=region))

    logger.info(f"Sample query: {symptoms} (region={region})")
    for match in result.all_matches:
        logger.info(f"  {match.condition.name}: {match.match_score:.3f}")
    logger.info(f"  emergency_risk={result.emergency_risk} confidence={result.confidence:.3f}")


def main():
    parser = argparse.ArgumentParser(
        description="Load and verify a condition catalog"
    )
    parser.add_argument(
        "--path",
        type=str,
        default=get_settings().KNOWLEDGE_BASE_PATH,
        help="Catalog JSON file (defaults to the packaged catalog)"
    )
    parser.add_argument(
        "--sample",
        type=str,
        default=None,
        help="Comma-separated symptoms to analyze against the catalog"
    )
    parser.add_argument(
        "--region",
        type=str,
        default=Region.NATIONAL.value,
        help="Region for the sample query"
    )

    args = parser.parse_args()

    try:
        knowledge_base = load_knowledge_base(args.path)
    except KnowledgeBaseError as e:
        logger.error(f"Catalog invalid: {e}")
        sys.exit(1)

    summarize(knowledge_base)

    if args.sample:
        symptoms = [s.strip() for s in args.sample.split(",") if s.strip()]
        run_sample(knowledge_base, symptoms, args.region)

    sys.exit(0)


if __name__ == "__main__":
    main()
