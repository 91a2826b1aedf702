"""Google Places (New) photo provider.

The API key travels only in request URLs built here; stored references
are key-free and must be resolved with ``photo_url`` before fetching.
"""

import logging
from typing import Dict, List, Optional, Sequence

import httpx

from ..config.places import GOOGLE_PLACE_IDS
from ..models import CandidatePhoto, PhotoProvider
from .base import PhotoSource, check_response

logger = logging.getLogger(__name__)

PLACES_API_BASE = "https://places.googleapis.com/v1"


def photo_ref(photo_name: str, max_width: int = 1200) -> str:
    """Key-free photo reference, safe to store."""
    return f"{PLACES_API_BASE}/{photo_name}/media?maxWidthPx={max_width}"


def photo_url(photo_name: str, api_key: str, max_width: int = 1200) -> str:
    """Fetchable photo URL with the key injected. Never persist this."""
    return f"{photo_ref(photo_name, max_width)}&key={api_key}"


class GooglePlacesSource(PhotoSource):
    """Photos attached to a verified Google place."""

    provider = PhotoProvider.GOOGLE_PLACES

    def __init__(
        self,
        api_key: Optional[str],
        place_ids: Optional[Dict[str, str]] = None,
        max_photos: int = 10,
    ) -> None:
        self.api_key = api_key
        self.place_ids = place_ids if place_ids is not None else GOOGLE_PLACE_IDS
        self.max_photos = max_photos

    def precheck(self) -> Optional[str]:
        if not self.api_key:
            return "GOOGLE_PLACES_API_KEY not configured"
        return None

    async def candidates(
        self,
        client: httpx.AsyncClient,
        slug: str,
        queries: Sequence[str],
    ) -> List[CandidatePhoto]:
        place_id = self.place_ids.get(slug)
        if not place_id:
            logger.debug("No Google place id for %s", slug)
            return []

        response = await client.get(
            f"{PLACES_API_BASE}/places/{place_id}",
            params={"key": self.api_key},
            headers={"X-Goog-FieldMask": "photos"},
        )
        check_response(self.provider.value, response)

        photos = (response.json().get("photos") or [])[: self.max_photos]
        return [self._to_candidate(photo, place_id) for photo in photos if photo.get("name")]

    def _to_candidate(self, photo: dict, place_id: str) -> CandidatePhoto:
        attributions = photo.get("authorAttributions") or [{}]
        author = attributions[0] if attributions else {}
        name = author.get("displayName")
        return CandidatePhoto(
            provider=self.provider,
            provider_ref=photo["name"],
            image_url=photo_ref(photo["name"]),
            width=int(photo.get("widthPx") or 0),
            height=int(photo.get("heightPx") or 0),
            verified=True,
            photographer=name,
            photographer_url=author.get("uri"),
            source_url=f"https://www.google.com/maps/place/?q=place_id:{place_id}",
            attribution_text=f"Photo by {name} on Google Maps" if name else "Google Maps",
        )
