"""
Recommendation builder - ordered, human-readable action list.
"""

from typing import Iterable, Optional, Sequence

from medigrid.config import Settings, get_settings
from medigrid.core.logging import get_logger
from medigrid.schemas.analysis import DiseaseMatch
from medigrid.schemas.condition import Region

logger = get_logger(__name__)


REGIONAL_CONSIDERATIONS = {
    Region.COASTAL: [
        "Consider coastal endemic diseases",
        "Higher malaria risk in KZN coastal areas",
        "Shark bite protocol if relevant",
    ],
    Region.NORTHERN: [
        "Higher malaria transmission risk",
        "Consider tick-borne diseases",
        "Traditional medicine use more common",
    ],
    Region.MINING: [
        "Consider occupational lung diseases",
        "Higher TB and silicosis prevalence",
        "Noise-induced hearing loss screening",
    ],
    Region.RURAL: [
        "Limited diagnostic resources available",
        "Consider transport challenges for referral",
        "Traditional healers often first contact",
    ],
    Region.URBAN: [
        "Higher HIV/TB prevalence",
        "Air pollution related conditions",
        "Lifestyle disease prevalence higher",
    ],
}

DEFAULT_REGIONAL_CONSIDERATIONS = ["Standard South African disease patterns apply"]

GENERIC_CULTURAL_CONSIDERATIONS = [
    "Consider patient's cultural background and beliefs",
    "Assess traditional medicine use",
    "Ensure culturally sensitive communication",
]

NO_MATCH_RECOMMENDATIONS = [
    "No specific disease patterns identified",
    "Consider general symptom management",
    "Follow up if symptoms persist or worsen",
]


def _unique(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


class RecommendationBuilder:
    """Assembles recommendations, regional notes and cultural notes."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def regional_notes(self, region: Region) -> list[str]:
        return list(REGIONAL_CONSIDERATIONS.get(region, DEFAULT_REGIONAL_CONSIDERATIONS))

    def cultural_notes(self, top_matches: Sequence[DiseaseMatch]) -> list[str]:
        """Cultural considerations of the top matches, or generic prompts."""
        notes = _unique(
            note
            for match in top_matches
            for note in match.condition.cultural_considerations
        )
        return notes or list(GENERIC_CULTURAL_CONSIDERATIONS)

    def build(
        self,
        top_matches: Sequence[DiseaseMatch],
        emergency_risk: bool,
        regional_notes: Sequence[str],
        cultural_notes: Sequence[str]
    ) -> list[str]:
        """
        Build the recommendation list.

        Order: emergency directives, a diagnostic block per top match,
        management and prevention for the leading match, then regional and
        cultural notes.
        """
        if not top_matches:
            return list(NO_MATCH_RECOMMENDATIONS)

        settings = self._settings
        recommendations = []

        if emergency_risk:
            recommendations.append("SEEK IMMEDIATE EMERGENCY MEDICAL ATTENTION")
            recommendations.append(
                f"Call {settings.EMERGENCY_CONTACT_NUMBER} (emergency services) "
                f"or go to the nearest emergency department"
            )

        for index, match in enumerate(top_matches):
            condition = match.condition
            recommendations.append(f"Consider diagnostic workup for {condition.name}:")
            recommendations.extend(condition.diagnostic_approach[:settings.DIAGNOSTIC_ITEMS_PER_MATCH])

            if index > 0:
                continue

            treatment = condition.treatment_approach[:settings.TREATMENT_ITEMS]
            if treatment:
                recommendations.append("Initial management approach:")
                recommendations.extend(treatment)

            prevention = condition.prevention_measures[:settings.PREVENTION_ITEMS]
            if prevention:
                recommendations.append("Prevention measures:")
                recommendations.extend(prevention)

        recommendations.extend(f"Regional note: {note}" for note in _unique(regional_notes))
        recommendations.extend(f"Cultural note: {note}" for note in _unique(cultural_notes))

        return recommendations
