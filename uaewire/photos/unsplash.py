"""Unsplash stock photo provider."""

import logging
from typing import List, Optional, Sequence, Set

import httpx

from ..errors import ProviderError, ProviderExhaustedError
from ..models import CandidatePhoto, PhotoProvider
from .base import PhotoSource, check_response

logger = logging.getLogger(__name__)

UNSPLASH_API_BASE = "https://api.unsplash.com"


class UnsplashSource(PhotoSource):
    """Keyword search over Unsplash, landscape orientation."""

    provider = PhotoProvider.UNSPLASH

    def __init__(self, access_key: Optional[str], per_query: int = 8) -> None:
        self.access_key = access_key
        self.per_query = min(per_query, 30)

    def precheck(self) -> Optional[str]:
        if not self.access_key:
            return "UNSPLASH_ACCESS_KEY not configured"
        return None

    @property
    def _auth(self) -> dict:
        return {"Authorization": f"Client-ID {self.access_key}"}

    async def search(self, client: httpx.AsyncClient, query: str) -> List[dict]:
        response = await client.get(
            f"{UNSPLASH_API_BASE}/search/photos",
            params={"query": query, "per_page": str(self.per_query), "orientation": "landscape"},
            headers=self._auth,
        )
        check_response(self.provider.value, response)
        return response.json().get("results") or []

    async def candidates(
        self,
        client: httpx.AsyncClient,
        slug: str,
        queries: Sequence[str],
    ) -> List[CandidatePhoto]:
        seen: Set[str] = set()
        found: List[CandidatePhoto] = []
        failures = []

        for query in queries:
            try:
                results = await self.search(client, query)
            except ProviderExhaustedError:
                raise
            except (ProviderError, httpx.HTTPError) as e:
                logger.warning("Unsplash query %r failed: %s", query, e)
                failures.append(str(e))
                continue

            for raw in results:
                photo_id = raw.get("id")
                if not photo_id or photo_id in seen:
                    continue
                seen.add(photo_id)
                found.append(self._to_candidate(raw))

        if not found and failures and len(failures) == len(queries):
            raise ProviderError(self.provider.value, failures[-1])
        return found

    def _to_candidate(self, raw: dict) -> CandidatePhoto:
        user = raw.get("user") or {}
        urls = raw.get("urls") or {}
        links = raw.get("links") or {}
        name = user.get("name")
        return CandidatePhoto(
            provider=self.provider,
            provider_ref=raw["id"],
            image_url=urls.get("regular") or urls.get("full") or urls.get("raw", ""),
            width=int(raw.get("width") or 0),
            height=int(raw.get("height") or 0),
            likes=int(raw.get("likes") or 0),
            description=raw.get("alt_description") or raw.get("description"),
            provider_tags=[t.get("title", "") for t in raw.get("tags") or [] if t.get("title")],
            photographer=name,
            photographer_url=(user.get("links") or {}).get("html"),
            source_url=links.get("html"),
            attribution_text=f"Photo by {name} on Unsplash" if name else "Unsplash",
            download_location=links.get("download_location"),
        )

    async def track_selection(self, client: httpx.AsyncClient, photo: CandidatePhoto) -> None:
        """Download tracking required by the Unsplash API guidelines. Best effort."""
        if not photo.download_location:
            return
        try:
            await client.get(photo.download_location, headers=self._auth)
        except httpx.HTTPError as e:
            logger.debug("Unsplash download tracking failed for %s: %s", photo.provider_ref, e)
