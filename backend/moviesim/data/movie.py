"""Movie records consumed by the scoring engine."""

from typing import List, Optional, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator

class Movie(BaseModel):
    """Immutable movie record.

    Ratings are expected on a 0-10 scale. Values outside that range are not
    rejected here; rating similarity is simply undefined for them.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique movie identifier")
    title: str = Field(..., min_length=1, description="Movie title")
    year: Optional[int] = Field(default=None, description="Release year")
    rating: float = Field(default=0.0, description="Rating on a 0-10 scale")
    genres: List[str] = Field(default_factory=list, description="Genre labels")
    description: str = Field(default="", description="Plot description")
    director: Optional[str] = Field(default=None, description="Director name")

    # Passthrough fields, never used for scoring
    runtime: Optional[str] = None
    actors: Optional[str] = None
    awards: Optional[str] = None
    poster: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> str:
        # Numeric and string ids compare by exact string equality
        if isinstance(value, bool) or value is None:
            raise ValueError("movie id must be a string or a number")
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return str(value).strip()

    @field_validator("genres", mode="before")
    @classmethod
    def _default_genres(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("description", mode="before")
    @classmethod
    def _default_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def comparison_text(self) -> str:
        """Description twice plus genre labels, used when this movie is scored."""
        return f"{self.description} {self.description} {' '.join(self.genres)}"

    @property
    def reference_text(self) -> str:
        """Description plus genre labels, used when this movie is the query."""
        return f"{self.description} {' '.join(self.genres)}"

class ScoredMovie(Movie):
    """A movie plus the scores derived for one query."""

    similarity_score: Optional[float] = None
    search_score: Optional[float] = None
    title_score: Optional[float] = None
    content_score: Optional[float] = None

    @classmethod
    def from_movie(cls, movie: Movie, **scores: float) -> "ScoredMovie":
        """Copy a movie and attach scores."""
        return cls(**movie.model_dump(), **scores)
