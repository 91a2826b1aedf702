"""Place photo curation."""

from .base import PhotoSource
from .curation import BatchResult, CurationResult, PhotoCurator, rank_candidates
from .google_places import GooglePlacesSource
from .scoring import PhotoScorer, passes_relevance_gate
from .unsplash import UnsplashSource

__all__ = [
    "BatchResult",
    "CurationResult",
    "GooglePlacesSource",
    "PhotoCurator",
    "PhotoScorer",
    "PhotoSource",
    "UnsplashSource",
    "passes_relevance_gate",
    "rank_candidates",
]
