"""
Review models.

``PlaceReview`` and ``PlaceDetails`` describe the Google Places payload and
are used to validate it; ``ReviewRecord`` and ``ReviewsSummary`` are the
compact shapes returned to the website.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


class PlaceReview(BaseModel):
    model_config = ConfigDict(extra="ignore")

    time: int
    author_name: str
    rating: int = Field(..., ge=1, le=5)
    text: str = ""
    relative_time_description: str = ""


class PlaceDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    reviews: Optional[List[PlaceReview]] = None


class ReviewRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    author: str
    rating: int
    text: str
    relative_date: str = Field(..., alias="date")

    @classmethod
    def from_place_review(cls, review: PlaceReview) -> "ReviewRecord":
        return cls(
            id=review.time,
            author=review.author_name,
            rating=review.rating,
            text=review.text,
            relative_date=review.relative_time_description,
        )


class ReviewsSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reviews: List[ReviewRecord] = []
    total_rating: Optional[float] = Field(None, alias="totalRating")
    total_reviews: int = Field(0, alias="totalReviews")
    name: Optional[str] = None
