"""
Confidence scoring for ranked condition matches.
"""

from typing import Optional, Sequence

from medigrid.config import Settings, get_settings
from medigrid.core.logging import get_logger
from medigrid.schemas.analysis import DiseaseMatch

logger = get_logger(__name__)


class ConfidenceEngine:
    """
    Engine for estimating how trustworthy the top match is.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def calculate_confidence(self, matches: Sequence[DiseaseMatch]) -> float:
        """
        Combine the top score with its separation from the runner-up.

        confidence = min(top + spread_factor * (top - second), 1.0)

        With a single match the runner-up is taken to equal the top score,
        so only the top score counts.

        Args:
            matches: Matches sorted by score, highest first.

        Returns:
            Confidence score between 0 and 1; 0.0 when there are no matches.
        """
        if not matches:
            return 0.0

        top_score = matches[0].match_score
        second_score = matches[1].match_score if len(matches) > 1 else top_score
        spread = top_score - second_score

        confidence = top_score + self._settings.CONFIDENCE_SPREAD_FACTOR * spread
        return float(min(max(confidence, 0.0), 1.0))

    def get_confidence_breakdown(
        self,
        confidence: float
    ) -> dict[str, str]:
        """
        Get human-readable confidence breakdown.

        Args:
            confidence: Confidence score (0-1).

        Returns:
            Dictionary with level and description.
        """
        if confidence >= 0.8:
            return {
                "level": "very_high",
                "description": "Strong symptom match clearly ahead of other conditions"
            }
        elif confidence >= 0.65:
            return {
                "level": "high",
                "description": "Good symptom match with a distinct leading condition"
            }
        elif confidence >= 0.5:
            return {
                "level": "moderate",
                "description": "Mixed signals - several conditions fit similarly"
            }
        elif confidence >= 0.35:
            return {
                "level": "low",
                "description": "Weak symptom match - consider further history"
            }
        else:
            return {
                "level": "very_low",
                "description": "No clear pattern - interpret with caution"
            }
