"""Typo-tolerant title matching and title/content search."""

from typing import List, NamedTuple, Optional, Sequence
import structlog

from ..data.movie import Movie, ScoredMovie
from ..models.similarity import combined_similarity, levenshtein_similarity
from ..models.text import TextNormalizer
from ..service.config import config

logger = structlog.get_logger(__name__)

TITLE_WEIGHT = 0.8
CONTENT_WEIGHT = 0.2
MIN_SEARCH_SCORE = 0.1

class MatchResult(NamedTuple):
    """Best title match; ``movie`` is None when nothing matched."""
    movie: Optional[Movie]
    confidence: float

def _title_words(text: str) -> set:
    return {w for w in text.split() if len(w) > 2}

def title_match_score(title: str, search_term: str) -> float:
    """
    Score how well ``search_term`` names ``title``.

    Strategies are tried in order: exact match, title containing the term,
    term containing the title, then word overlap blended with Levenshtein
    similarity (or Levenshtein alone when either side has no words longer
    than two characters).
    """
    search_term = search_term.strip()
    title_lower = title.lower()
    search_lower = search_term.lower()

    if title_lower == search_lower:
        return 1.0
    if search_lower in title_lower:
        return 0.85 + (len(search_lower) / len(title_lower)) * 0.15
    if title_lower in search_lower:
        return 0.80

    search_words = _title_words(search_lower)
    title_words = _title_words(title_lower)
    levenshtein = levenshtein_similarity(title, search_term)
    if not search_words or not title_words:
        return levenshtein

    matching = len(search_words & title_words)
    word_overlap = matching / max(len(search_words), len(title_words))
    return word_overlap * 0.7 + levenshtein * 0.3

def find_closest_match(movies: Sequence[Movie], search_term: str) -> MatchResult:
    """
    Find the movie whose title best matches ``search_term``.

    Ties keep the movie that appears first. Returns ``MatchResult(None, 0.0)``
    for a blank term, an empty catalog or when no title scores above zero.
    """
    if not search_term or not search_term.strip():
        return MatchResult(None, 0.0)

    best_match = None
    highest = 0.0
    for movie in movies:
        score = title_match_score(movie.title, search_term)
        if score > highest:
            highest = score
            best_match = movie

    logger.debug("Closest match",
                 search_term=search_term,
                 match_id=best_match.id if best_match else None,
                 confidence=highest)
    return MatchResult(best_match, highest)

def resolve_title(movies: Sequence[Movie],
                  search_term: str,
                  min_confidence: Optional[float] = None) -> Optional[Movie]:
    """Closest match, or None when its confidence is below the threshold."""
    if min_confidence is None:
        min_confidence = config.MIN_MATCH_CONFIDENCE
    match = find_closest_match(movies, search_term)
    if match.movie is None or match.confidence < min_confidence:
        return None
    return match.movie

def search_movies(movies: Sequence[Movie],
                  search_term: str,
                  max_results: Optional[int] = None,
                  normalizer: Optional[TextNormalizer] = None) -> List[ScoredMovie]:
    """
    Rank movies by title match (80%) and description/genre match (20%).

    Results scoring 0.1 or less are dropped.
    """
    if max_results is None:
        max_results = config.DEFAULT_MAX_RESULTS
    if not search_term or not search_term.strip() or max_results <= 0:
        return []

    results = []
    for movie in movies:
        title_score = title_match_score(movie.title, search_term)
        content_score = combined_similarity(movie.reference_text, search_term, normalizer)
        search_score = title_score * TITLE_WEIGHT + content_score * CONTENT_WEIGHT
        if search_score > MIN_SEARCH_SCORE:
            results.append(ScoredMovie.from_movie(
                movie,
                search_score=search_score,
                title_score=title_score,
                content_score=content_score,
            ))

    results.sort(key=lambda m: m.search_score, reverse=True)
    logger.debug("Search completed",
                 search_term=search_term,
                 catalog_size=len(movies),
                 matches=len(results))
    return results[:max_results]
