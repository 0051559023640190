"""Ranking pipeline for movie-to-movie recommendations."""

import re
import time
from typing import List, Optional, Sequence
import structlog

from ..data.movie import Movie, ScoredMovie
from ..models.scoring import Algorithm, movie_similarity
from ..models.text import TextNormalizer
from ..service.config import config

logger = structlog.get_logger(__name__)

FRANCHISE_BONUS = 0.25
FRANCHISE_EXCLUDED_WORDS = frozenset(['the', 'and', 'part', 'vol', 'volume'])

_TITLE_SPLIT = re.compile(r'[\s:]+')

def franchise_tokens(title: str) -> List[str]:
    """Title words that hint at a shared franchise ("star", "wars", ...)."""
    return [
        word for word in _TITLE_SPLIT.split(title.lower())
        if len(word) >= 3
        and not word.isdigit()
        and word not in FRANCHISE_EXCLUDED_WORDS
    ]

def franchise_bonus(reference_tokens: Sequence[str], title: str) -> float:
    """Up to 0.25 for candidates whose title contains the reference title words."""
    if not reference_tokens:
        return 0.0
    title_lower = title.lower()
    matching = sum(1 for word in reference_tokens if word in title_lower)
    return (matching / len(reference_tokens)) * FRANCHISE_BONUS

def shares_genre(movie: Movie, reference: Movie) -> bool:
    return any(genre in reference.genres for genre in movie.genres)

class RecommendationRanker:
    """Scores a catalog against a selected movie and keeps the top N."""

    def __init__(self, normalizer: Optional[TextNormalizer] = None):
        """Initialize ranker."""
        self.normalizer = normalizer

    def _candidate_pool(self, movies: Sequence[Movie], selected: Movie, top_n: int) -> List[Movie]:
        """Prefer same-genre movies when there are enough of them."""
        others = [m for m in movies if m.id != selected.id]
        same_genre = [m for m in others if shares_genre(m, selected)]
        use_genre_pool = len(same_genre) >= top_n * 2
        logger.debug("Candidate pool",
                     selected_id=selected.id,
                     pool="genre" if use_genre_pool else "full",
                     same_genre=len(same_genre),
                     others=len(others))
        return same_genre if use_genre_pool else others

    def rank(self,
             movies: Sequence[Movie],
             selected: Movie,
             algorithm: Algorithm = Algorithm.COMBINED,
             top_n: Optional[int] = None) -> List[ScoredMovie]:
        """Return up to ``top_n`` movies most similar to ``selected``, best first."""
        if top_n is None:
            top_n = config.DEFAULT_TOP_N
        if top_n <= 0:
            return []

        start_time = time.time()
        algorithm = Algorithm(algorithm)

        reference_text = selected.reference_text
        reference_tokens = franchise_tokens(selected.title)
        candidates = self._candidate_pool(movies, selected, top_n)

        scored = []
        for movie in candidates:
            base_score = movie_similarity(movie, reference_text, algorithm, selected, self.normalizer)
            bonus = franchise_bonus(reference_tokens, movie.title)
            scored.append(ScoredMovie.from_movie(movie, similarity_score=base_score + bonus))

        # Stable sort keeps catalog order for equal scores
        scored.sort(key=lambda m: m.similarity_score, reverse=True)
        recommendations = scored[:top_n]

        latency = (time.time() - start_time) * 1000
        logger.info("Ranking completed",
                    selected_id=selected.id,
                    algorithm=algorithm.value,
                    catalog_size=len(movies),
                    candidates=len(candidates),
                    recommendations=len(recommendations),
                    latency_ms=latency)

        return recommendations

def get_recommendations(movies: Sequence[Movie],
                        selected: Movie,
                        algorithm: Algorithm = Algorithm.COMBINED,
                        top_n: Optional[int] = None,
                        normalizer: Optional[TextNormalizer] = None) -> List[ScoredMovie]:
    """Convenience wrapper around :class:`RecommendationRanker`."""
    return RecommendationRanker(normalizer).rank(movies, selected, algorithm, top_n)
