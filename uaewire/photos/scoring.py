"""Photo quality scoring, relevance gate and negative keyword penalty."""

from typing import Iterable, Sequence

from ..config.models import ProviderScoring, ScoringConfig, Tier
from ..models import CandidatePhoto, PhotoProvider


def _tier_bonus(value: int, tiers: Sequence[Tier]) -> float:
    """Largest bonus among the tiers whose threshold is reached."""
    return max((t.bonus for t in tiers if value >= t.threshold), default=0.0)


def clamp_score(score: float) -> float:
    return max(0.0, min(100.0, score))


class PhotoScorer:
    """Additive scoring from a provider-specific base value."""

    def __init__(self, config: ScoringConfig = None) -> None:
        self.config = config or ScoringConfig()

    def rules_for(self, provider: PhotoProvider) -> ProviderScoring:
        if provider == PhotoProvider.GOOGLE_PLACES:
            return self.config.google_places
        return self.config.unsplash

    def score(self, photo: CandidatePhoto) -> float:
        """Base + resolution tier + popularity tier + landscape bonus, clamped."""
        rules = self.rules_for(photo.provider)
        score = rules.base
        score += _tier_bonus(photo.width, rules.resolution_tiers)
        score += _tier_bonus(photo.likes, rules.popularity_tiers)
        if photo.height > 0 and photo.aspect_ratio >= rules.landscape_ratio:
            score += rules.landscape_bonus
        return clamp_score(score)

    def negative_penalty(self, photo: CandidatePhoto, negative_keywords: Iterable[str]) -> float:
        """Penalty for off-topic descriptions; verified photos are exempt."""
        if photo.verified:
            return 0.0
        text = photo.searchable_text
        hits = sum(1 for keyword in negative_keywords if keyword in text)
        return min(hits * self.config.negative_penalty, self.config.max_negative_penalty)


def keyword_matches(photo: CandidatePhoto, keywords: Iterable[str]) -> int:
    text = photo.searchable_text
    return sum(1 for keyword in keywords if keyword.lower() in text)


def passes_relevance_gate(photo: CandidatePhoto, must_include: Sequence[str]) -> bool:
    """
    Stock photos must mention the place.

    Verified-location photos always pass, as do photos for places without
    must-include keywords.
    """
    if photo.verified or not must_include:
        return True
    return keyword_matches(photo, must_include) > 0
