"""Pydantic schemas for API requests and responses."""

from typing import List, Optional, Union
from pydantic import BaseModel, Field, model_validator
from datetime import datetime

from ..data.movie import Movie, ScoredMovie
from ..models.scoring import Algorithm
from .config import config

class RecommendationRequest(BaseModel):
    """Request for recommendations similar to one movie."""
    movie_id: Optional[Union[str, int]] = Field(None, description="Catalog id of the selected movie")
    title: Optional[str] = Field(None, min_length=1, description="Title to resolve when no id is given")
    algorithm: Algorithm = Field(default=Algorithm.COMBINED, description="Text similarity algorithm")
    top_n: int = Field(default=config.DEFAULT_TOP_N, ge=1, le=config.MAX_TOP_N, description="Number of recommendations")

    @model_validator(mode="after")
    def _require_movie(self) -> "RecommendationRequest":
        if self.movie_id is None and not self.title:
            raise ValueError("either movie_id or title is required")
        return self

class SearchRequest(BaseModel):
    """Free-text search over titles and descriptions."""
    query: str = Field(..., min_length=1, description="Search text")
    max_results: int = Field(default=config.DEFAULT_MAX_RESULTS, ge=1, le=config.MAX_TOP_N, description="Maximum results")

class RecommendationResponse(BaseModel):
    """Response for recommendations."""
    selected: Movie = Field(..., description="Movie the recommendations are based on")
    match_confidence: Optional[float] = Field(None, description="Title match confidence when resolved by title")
    algorithm: Algorithm = Field(..., description="Algorithm used")
    recommendations: List[ScoredMovie] = Field(..., description="Recommended movies, best first")
    latency_ms: float = Field(..., description="Request latency in milliseconds")

class SearchResponse(BaseModel):
    """Response for search."""
    query: str = Field(..., description="Search text")
    results: List[ScoredMovie] = Field(..., description="Matching movies, best first")
    latency_ms: float = Field(..., description="Request latency in milliseconds")

class MatchResponse(BaseModel):
    """Closest title match."""
    query: str = Field(..., description="Title as typed")
    movie: Movie = Field(..., description="Best matching movie")
    confidence: float = Field(..., description="Match confidence in [0, 1]")

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="Service version")
    catalog_size: int = Field(..., description="Movies in the loaded catalog")
