"""Photo provider interface."""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import httpx

from ..errors import ProviderError, ProviderExhaustedError
from ..models import CandidatePhoto, PhotoProvider

logger = logging.getLogger(__name__)


def check_response(provider: str, response: httpx.Response) -> None:
    """Raise the matching error for a non-2xx provider response."""
    if response.status_code < 400:
        return
    if response.status_code == 429 or response.headers.get("X-Ratelimit-Remaining") == "0":
        raise ProviderExhaustedError(provider, "rate limit reached", status=response.status_code)
    raise ProviderError(provider, f"HTTP {response.status_code}", status=response.status_code)


class PhotoSource(ABC):
    """A remote photo provider queried per place."""

    provider: PhotoProvider

    def precheck(self) -> Optional[str]:
        """Configuration problem that prevents any request."""
        return None

    @abstractmethod
    async def candidates(
        self,
        client: httpx.AsyncClient,
        slug: str,
        queries: Sequence[str],
    ) -> List[CandidatePhoto]:
        """Unscored candidates for a place. Raises ProviderError on failure."""

    async def track_selection(self, client: httpx.AsyncClient, photo: CandidatePhoto) -> None:
        """Provider-side bookkeeping for a selected photo."""
        return None
