"""FastAPI service exposing recommendations, search and title matching."""

import time
from datetime import datetime
from typing import List
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
import structlog
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from .schemas import (
    RecommendationRequest, RecommendationResponse, SearchRequest, SearchResponse,
    MatchResponse, HealthResponse
)
from .config import config
from ..data.loaders import CatalogError, catalog_loader, find_by_id
from ..data.movie import Movie
from ..pipeline.rank import RecommendationRanker
from ..pipeline.resolve import find_closest_match, search_movies

VERSION = "1.0.0"

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)

# Prometheus metrics
REQUEST_COUNT = Counter('moviesim_requests_total', 'Total requests', ['endpoint'])
REQUEST_LATENCY = Histogram('moviesim_request_duration_seconds', 'Request latency', ['endpoint'])
ERROR_COUNT = Counter('moviesim_errors_total', 'Total errors', ['endpoint', 'error_type'])

# Loaded on startup
catalog: List[Movie] = []

ranker = RecommendationRanker()

app = FastAPI(
    title="Movie Similarity Service",
    description="Content-based movie recommendations with typo-tolerant title search",
    version=VERSION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

def load_catalog(path: str = None) -> List[Movie]:
    """Load the catalog into the module-level slot used by the endpoints."""
    global catalog
    path = path or config.CATALOG_PATH
    try:
        catalog = catalog_loader.load(path)
    except CatalogError as e:
        logger.warning("Catalog unavailable, serving an empty catalog", path=path, error=str(e))
        ERROR_COUNT.labels(endpoint='load_catalog', error_type='catalog_error').inc()
        catalog = []
    return catalog

def get_catalog() -> List[Movie]:
    """Dependency returning the loaded catalog."""
    return catalog

@app.on_event("startup")
async def startup_event():
    """Initialize the application on startup."""
    logger.info("Starting movie similarity service")
    load_catalog()
    logger.info("Movie similarity service started", catalog_size=len(catalog))

@app.get("/healthz", response_model=HealthResponse)
async def health_check(movies: List[Movie] = Depends(get_catalog)):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        version=VERSION,
        catalog_size=len(movies)
    )

@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

@app.post("/recommend", response_model=RecommendationResponse)
def recommend(request: RecommendationRequest, movies: List[Movie] = Depends(get_catalog)):
    """Recommend movies similar to the one named by id or title."""
    start_time = time.time()
    REQUEST_COUNT.labels(endpoint='recommend').inc()

    confidence = None
    if request.movie_id is not None:
        selected = find_by_id(movies, request.movie_id)
        if selected is None:
            ERROR_COUNT.labels(endpoint='recommend', error_type='not_found').inc()
            raise HTTPException(status_code=404, detail="Movie not found")
    else:
        match = find_closest_match(movies, request.title)
        if match.movie is None or match.confidence < config.MIN_MATCH_CONFIDENCE:
            ERROR_COUNT.labels(endpoint='recommend', error_type='not_found').inc()
            raise HTTPException(status_code=404, detail="Movie title not found")
        selected, confidence = match.movie, match.confidence

    try:
        recommendations = ranker.rank(movies, selected, request.algorithm, request.top_n)
    except Exception as e:
        ERROR_COUNT.labels(endpoint='recommend', error_type='exception').inc()
        logger.error("Error getting recommendations", movie_id=selected.id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")

    latency = (time.time() - start_time) * 1000
    REQUEST_LATENCY.labels(endpoint='recommend').observe(latency / 1000)

    return RecommendationResponse(
        selected=selected,
        match_confidence=confidence,
        algorithm=request.algorithm,
        recommendations=recommendations,
        latency_ms=latency
    )

@app.post("/search", response_model=SearchResponse)
def search(request: SearchRequest, movies: List[Movie] = Depends(get_catalog)):
    """Search titles and descriptions."""
    start_time = time.time()
    REQUEST_COUNT.labels(endpoint='search').inc()

    try:
        results = search_movies(movies, request.query, request.max_results)
    except Exception as e:
        ERROR_COUNT.labels(endpoint='search', error_type='exception').inc()
        logger.error("Error searching movies", query=request.query, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")

    latency = (time.time() - start_time) * 1000
    REQUEST_LATENCY.labels(endpoint='search').observe(latency / 1000)

    return SearchResponse(query=request.query, results=results, latency_ms=latency)

@app.get("/match", response_model=MatchResponse)
def match_title(title: str = Query(..., min_length=1), movies: List[Movie] = Depends(get_catalog)):
    """Resolve a possibly misspelled title to one catalog movie."""
    REQUEST_COUNT.labels(endpoint='match').inc()

    match = find_closest_match(movies, title)
    if match.movie is None or match.confidence < config.MIN_MATCH_CONFIDENCE:
        ERROR_COUNT.labels(endpoint='match', error_type='not_found').inc()
        raise HTTPException(status_code=404, detail="Movie title not found")

    return MatchResponse(query=title, movie=match.movie, confidence=match.confidence)
