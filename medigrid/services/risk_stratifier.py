"""
Risk stratification - emergency flag, urgency and risk level.

Stateless classification over ranked matches and the raw reported symptoms.
"""

from typing import Optional, Sequence

from medigrid.config import Settings, get_settings
from medigrid.core.logging import get_logger
from medigrid.schemas.analysis import DiseaseMatch, RiskLevel, UrgencyLevel
from medigrid.services.string_similarity import text_overlaps

logger = get_logger(__name__)

# Complication wording that escalates risk to HIGH
LIFE_THREATENING_TERMS = ("death", "failure")

FOLLOW_UP_DAYS = {
    UrgencyLevel.EMERGENCY: 0,
    UrgencyLevel.URGENT: 1,
    UrgencyLevel.SAME_DAY: 3,
    UrgencyLevel.ROUTINE: 14,
}


class RiskStratifier:
    """Derives triage classifications from scored matches."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def detect_emergency(
        self,
        matches: Sequence[DiseaseMatch],
        symptoms: Sequence[str]
    ) -> bool:
        """
        True if any matched condition has an emergency indicator that
        overlaps a reported symptom.
        """
        for match in matches:
            for indicator in match.condition.emergency_indicators:
                if any(text_overlaps(indicator, symptom) for symptom in symptoms):
                    logger.info(
                        "Emergency indicator reported",
                        extra={"condition": match.condition.id, "indicator": indicator}
                    )
                    return True
        return False

    def urgency_level(
        self,
        matches: Sequence[DiseaseMatch],
        emergency_risk: bool
    ) -> UrgencyLevel:
        if emergency_risk:
            return UrgencyLevel.EMERGENCY

        top_score = matches[0].match_score if matches else 0.0
        if top_score > self._settings.URGENT_SCORE_THRESHOLD:
            return UrgencyLevel.URGENT
        if top_score > self._settings.SAME_DAY_SCORE_THRESHOLD:
            return UrgencyLevel.SAME_DAY
        return UrgencyLevel.ROUTINE

    def risk_level(
        self,
        top_matches: Sequence[DiseaseMatch],
        emergency_risk: bool
    ) -> RiskLevel:
        if emergency_risk:
            return RiskLevel.CRITICAL

        if any(self._has_life_threatening_complication(m) for m in top_matches):
            return RiskLevel.HIGH

        top_score = top_matches[0].match_score if top_matches else 0.0
        if top_score > self._settings.MODERATE_RISK_SCORE_THRESHOLD:
            return RiskLevel.MODERATE
        return RiskLevel.LOW

    def red_flags(self, top_matches: Sequence[DiseaseMatch]) -> list[str]:
        """Emergency indicators of the top matches, first occurrence kept."""
        flags = (
            indicator
            for match in top_matches
            for indicator in match.condition.emergency_indicators
        )
        return list(dict.fromkeys(flags))

    @staticmethod
    def follow_up_days(urgency: UrgencyLevel) -> int:
        return FOLLOW_UP_DAYS[urgency]

    @staticmethod
    def referral_needed(urgency: UrgencyLevel) -> bool:
        return urgency != UrgencyLevel.ROUTINE

    @staticmethod
    def _has_life_threatening_complication(match: DiseaseMatch) -> bool:
        return any(
            term in complication.lower()
            for complication in match.condition.complications
            for term in LIFE_THREATENING_TERMS
        )
