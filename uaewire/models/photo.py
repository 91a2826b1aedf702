"""Photo curation models."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class PhotoProvider(str, Enum):
    GOOGLE_PLACES = "google_places"
    UNSPLASH = "unsplash"


class CandidatePhoto(BaseModel):
    """A photo returned by a provider for a place, before selection."""

    provider: PhotoProvider = Field(..., description="Provider identity")
    provider_ref: str = Field(..., description="Provider-side photo reference")
    image_url: str = Field(..., description="Key-free image reference")
    width: int = Field(0, description="Pixel width", ge=0)
    height: int = Field(0, description="Pixel height", ge=0)
    likes: int = Field(0, description="Popularity signal", ge=0)
    verified: bool = Field(False, description="Photo is tied to the actual location")
    description: Optional[str] = Field(None, description="Provider description or alt text")
    provider_tags: List[str] = Field(default_factory=list, description="Provider tag titles")
    score: float = Field(0.0, description="Quality score", ge=0.0, le=100.0)
    photographer: Optional[str] = Field(None, description="Author name")
    photographer_url: Optional[str] = Field(None, description="Author profile URL")
    source_url: Optional[str] = Field(None, description="Provider page for the photo")
    attribution_text: Optional[str] = Field(None, description="Display attribution")
    download_location: Optional[str] = Field(None, description="Download tracking endpoint")
    is_active: bool = Field(False, description="Selected as hero image")

    @property
    def aspect_ratio(self) -> float:
        if self.height <= 0:
            return 0.0
        return self.width / self.height

    @property
    def searchable_text(self) -> str:
        """Lowercased description and tags for keyword checks."""
        parts = [self.description or ""] + list(self.provider_tags)
        return " ".join(parts).lower()


class ActiveImage(BaseModel):
    """Currently active hero image for a place."""

    place_slug: str = Field(..., description="Place identifier")
    image_url: str = Field(..., description="Image reference")
    score: float = Field(0.0, description="Quality score at selection time")
    source: Dict[str, Any] = Field(default_factory=dict, description="Provider and attribution")
    updated_at: Optional[datetime] = Field(None, description="When the selection was made")
