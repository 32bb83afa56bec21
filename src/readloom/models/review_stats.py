"""Review statistics, the one payload the service only returns as JSON.

These models are validated straight from the JSON body rather than going
through the XML parsing framework.
"""

from pydantic import BaseModel, ConfigDict, Field


class ReviewStats(BaseModel):
    """Rating and review counts for one edition and its work."""

    id: int = 0
    isbn: str | None = None
    isbn13: str | None = None
    ratings_count: int = 0
    reviews_count: int = 0
    text_reviews_count: int = 0
    work_ratings_count: int = 0
    work_reviews_count: int = 0
    work_text_reviews_count: int = 0
    average_rating: float = 0.0

    model_config = ConfigDict(extra="allow")


class ReviewStatsContainer(BaseModel):
    books: list[ReviewStats] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")
